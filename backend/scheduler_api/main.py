import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from scheduler_api.api.deps import get_current_user
from scheduler_api.api.router import api_router
from scheduler_api.core.config import settings
from scheduler_api.core.errors import HTTP_STATUS, ErrorKind, ServiceError
from scheduler_api.core.logging_config import setup_logging
from scheduler_api.db import engine, init_db
from scheduler_api.services.store import RecordStore

logger = logging.getLogger(__name__)


# Routes that take a JSON body without a bearer token.
PUBLIC_BODY_ROUTES = {
    ("POST", f"{settings.API_V1_STR}/users"),
    ("POST", f"{settings.API_V1_STR}/sessions"),
}


def _error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_STATUS[kind],
        content={"code": kind.value, "message": message},
    )


def _kind_for_status(status_code: int) -> ErrorKind:
    for kind, code in HTTP_STATUS.items():
        if code == status_code:
            return kind
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return ErrorKind.NOT_FOUND
    if status_code < 500:
        return ErrorKind.INVALID_ARGUMENT
    return ErrorKind.INTERNAL


def _authenticate(authorization: str | None) -> None:
    """Run the bearer check outside the dependency graph.

    FastAPI decodes the JSON body before resolving dependencies, so an
    unreadable body on a protected route would otherwise be reported ahead
    of a missing or unknown token.
    """
    with Session(engine) as session:
        get_current_user(RecordStore(session), authorization)


def _is_json_decode_failure(exc: RequestValidationError) -> bool:
    return any(error.get("type") == "json_invalid" for error in exc.errors())


def create_application() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return _error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        if _is_json_decode_failure(exc):
            if (request.method, request.url.path.rstrip("/")) not in PUBLIC_BODY_ROUTES:
                try:
                    await run_in_threadpool(_authenticate, request.headers.get("authorization"))
                except ServiceError as auth_error:
                    return _error_response(auth_error.kind, auth_error.message)
            return _error_response(ErrorKind.INVALID_ARGUMENT, "Invalid JSON body")

        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid value for {field}: {first.get('msg')}" if field else str(first.get("msg"))
        else:
            message = "Invalid request"
        return _error_response(ErrorKind.INVALID_ARGUMENT, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(_kind_for_status(exc.status_code), str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error_response(ErrorKind.INTERNAL, "Internal server error")

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.on_event("startup")
    def _startup() -> None:
        init_db()

    return app


app = create_application()
