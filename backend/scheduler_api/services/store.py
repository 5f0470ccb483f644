"""Table-per-resource record store over a SQLModel session.

Each method issues a single statement and commits it; there are no
multi-statement transactions.  ``update`` and ``delete`` are plain
``UPDATE``/``DELETE ... WHERE`` statements built from the caller's values,
so concurrent writers simply overwrite each other.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, Any, Optional, TypeVar

from fastapi import Depends
from sqlalchemy import delete as sa_delete
from sqlalchemy import update as sa_update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from scheduler_api.core.errors import ErrorKind, classify_store_error
from scheduler_api.db import SessionDep

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class RecordStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _statement(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            error = classify_store_error(exc)
            if error.kind is ErrorKind.INTERNAL:
                logger.exception("Store failure while %s", action)
            else:
                logger.info("Store rejected %s: %s", action, error.message)
            raise error from exc

    def get(self, model: type[ModelT], key: Any) -> Optional[ModelT]:
        with self._statement(f"reading {model.__tablename__}"):
            return self.session.get(model, key)

    def first(self, model: type[ModelT], *where: Any, order_by: Any = None) -> Optional[ModelT]:
        statement = select(model).where(*where)
        if order_by is not None:
            statement = statement.order_by(order_by)
        with self._statement(f"reading {model.__tablename__}"):
            return self.session.exec(statement.limit(1)).first()

    def scan(
        self,
        model: type[ModelT],
        *where: Any,
        order_by: Any = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[ModelT]:
        statement = select(model).where(*where)
        if order_by is not None:
            statement = statement.order_by(order_by)
        if limit is not None:
            statement = statement.limit(limit)
        if offset:
            statement = statement.offset(offset)
        with self._statement(f"scanning {model.__tablename__}"):
            return list(self.session.exec(statement).all())

    def insert(self, row: ModelT) -> ModelT:
        with self._statement(f"inserting into {row.__tablename__}"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        return row

    def update(self, model: type[ModelT], *where: Any, values: dict[str, Any]) -> int:
        """Apply ``values`` to every matching row; returns the affected row count."""
        statement = sa_update(model).where(*where).values(**values)
        with self._statement(f"updating {model.__tablename__}"):
            rowcount = self.session.connection().execute(statement).rowcount
            self.session.commit()
        return rowcount

    def delete(self, model: type[ModelT], *where: Any) -> int:
        statement = sa_delete(model).where(*where)
        with self._statement(f"deleting from {model.__tablename__}"):
            rowcount = self.session.connection().execute(statement).rowcount
            self.session.commit()
        return rowcount


def get_store(session: SessionDep) -> RecordStore:
    return RecordStore(session)


StoreDep = Annotated[RecordStore, Depends(get_store)]
