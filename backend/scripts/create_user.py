#!/usr/bin/env python3
"""Create an account from the command line.

Usage: create_user.py "User Name" email@example.com password [timezone]
"""

import json
import sys
from pathlib import Path

# Make the backend directory importable when run from a checkout.
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session

from scheduler_api.api.v1.users import create_account
from scheduler_api.core.errors import ServiceError
from scheduler_api.db import engine, init_db
from scheduler_api.schemas import UserCreate, UserRead
from scheduler_api.services.store import RecordStore

DEFAULT_TIMEZONE = "Europe/Tallinn"


def main(argv: list[str]) -> int:
    if len(argv) < 3:
        print('Usage: create_user.py "User Name" "email@example.com" "password" ["timezone"]', file=sys.stderr)
        return 1

    name, email, password = argv[:3]
    timezone = argv[3] if len(argv) > 3 else DEFAULT_TIMEZONE

    init_db()
    with Session(engine) as session:
        try:
            user = create_account(
                RecordStore(session),
                UserCreate(name=name, email=email, password=password, timezone=timezone),
            )
        except ServiceError as exc:
            print(f"Error creating user: {exc.kind.value}: {exc.message}", file=sys.stderr)
            return 1
        print("User created successfully:")
        print(json.dumps(UserRead.from_user(user).model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
