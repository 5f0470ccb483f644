"""Check ordering: authentication, then validation, then existence, then ownership."""
import pytest

from conftest import API, assert_error, bearer

PROTECTED_ROUTES = [
    ("get", "/users", None),
    ("get", "/users/me", None),
    ("get", "/users/some-id", None),
    ("patch", "/users/some-id", {"email": "not-an-email"}),
    ("delete", "/users/some-id", None),
    ("delete", "/sessions", None),
    ("post", "/events", {"duration": "not-a-number"}),
    ("get", "/events", None),
    ("get", "/events/some-id", None),
    ("patch", "/events/some-id", {"color": "red"}),
    ("delete", "/events/some-id", None),
    ("post", "/schedules", {"availability": "nope"}),
    ("get", "/schedules", None),
    ("patch", "/schedules/some-id", {}),
    ("delete", "/schedules/some-id", None),
    ("post", "/appointments", {}),
    ("get", "/appointments", None),
    ("get", "/appointments/some-id", None),
    ("patch", "/appointments/some-id", {}),
    ("delete", "/appointments/some-id", None),
]


def _call(client, method, path, payload, headers=None):
    kwargs = {"headers": headers or {}}
    if payload is not None:
        kwargs["json"] = payload
    return client.request(method.upper(), f"{API}{path}", **kwargs)


@pytest.mark.parametrize("method, path, payload", PROTECTED_ROUTES)
def test_missing_token_is_rejected_before_anything_else(client, method, path, payload):
    body = assert_error(_call(client, method, path, payload), 401, "UNAUTHENTICATED")
    assert body["message"] == "Unauthorized: No token provided"


@pytest.mark.parametrize("method, path, payload", PROTECTED_ROUTES)
def test_unknown_token_is_rejected_before_anything_else(client, method, path, payload):
    body = assert_error(_call(client, method, path, payload, bearer("f" * 64)), 401, "UNAUTHENTICATED")
    assert body["message"] == "Unauthorized: Invalid token"


@pytest.mark.parametrize(
    "header",
    ["Basic dXNlcjpwYXNz", "Bearer", "Bearer ", "bearer abc", "Token abc"],
)
def test_malformed_authorization_header(client, header):
    response = client.get(f"{API}/users/me", headers={"authorization": header})
    assert_error(response, 401, "UNAUTHENTICATED")


def test_wrong_field_type_is_invalid_argument(client, alice):
    response = client.post(f"{API}/events", json={"name": "X", "duration": "abc"}, headers=alice.headers)
    body = assert_error(response, 400, "INVALID_ARGUMENT")
    assert "duration" in body["message"]


@pytest.mark.parametrize(
    "method, path, payload",
    [
        ("patch", "/users/missing", {"email": "not-an-email"}),
        ("patch", "/events/missing", {"color": "red"}),
        ("patch", "/schedules/missing", {}),
        ("patch", "/appointments/missing", {"invitee_email": "nope"}),
    ],
)
def test_validation_precedes_existence(client, alice, method, path, payload):
    assert_error(_call(client, method, path, payload, alice.headers), 400, "INVALID_ARGUMENT")


@pytest.mark.parametrize(
    "method, path, payload",
    [
        ("patch", "/users/missing", {"name": "Ghost"}),
        ("delete", "/users/missing", None),
        ("patch", "/events/missing", {"name": "Ghost"}),
        ("delete", "/events/missing", None),
        ("patch", "/schedules/missing", {"availability": {"days": []}}),
        ("delete", "/schedules/missing", None),
        ("patch", "/appointments/missing", {"status": "cancelled"}),
        ("delete", "/appointments/missing", None),
    ],
)
def test_existence_precedes_ownership(client, alice, method, path, payload):
    assert_error(_call(client, method, path, payload, alice.headers), 404, "NOT_FOUND")


def test_validation_precedes_ownership(client, alice, bob):
    event = client.post(f"{API}/events", json={"name": "Intro", "duration": 30}, headers=alice.headers).json()
    response = client.patch(f"{API}/events/{event['id']}", json={"duration": -1}, headers=bob.headers)
    assert_error(response, 400, "INVALID_ARGUMENT")


JSON_HEADERS = {"content-type": "application/json"}


@pytest.mark.parametrize(
    "method, path",
    [
        ("post", "/events"),
        ("patch", "/users/some-id"),
        ("post", "/appointments"),
        ("post", "/schedules"),
    ],
)
def test_unreadable_body_without_token_is_unauthenticated(client, method, path):
    response = client.request(method.upper(), f"{API}{path}", content=b"{not json", headers=JSON_HEADERS)
    body = assert_error(response, 401, "UNAUTHENTICATED")
    assert body["message"] == "Unauthorized: No token provided"


def test_unreadable_body_with_unknown_token_is_unauthenticated(client):
    response = client.post(
        f"{API}/events",
        content=b"{not json",
        headers={**JSON_HEADERS, **bearer("f" * 64)},
    )
    body = assert_error(response, 401, "UNAUTHENTICATED")
    assert body["message"] == "Unauthorized: Invalid token"


def test_unreadable_body_with_valid_token_is_invalid_argument(client, alice):
    response = client.post(f"{API}/events", content=b"{not json", headers={**JSON_HEADERS, **alice.headers})
    body = assert_error(response, 400, "INVALID_ARGUMENT")
    assert body["message"] == "Invalid JSON body"


@pytest.mark.parametrize("path", ["/users", "/sessions"])
def test_unreadable_body_on_public_route_is_invalid_argument(client, path):
    response = client.post(f"{API}{path}", content=b"{not json", headers=JSON_HEADERS)
    body = assert_error(response, 400, "INVALID_ARGUMENT")
    assert body["message"] == "Invalid JSON body"
