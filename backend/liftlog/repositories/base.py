from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.errors import StoreFailure

T = TypeVar("T")  # SQLAlchemy model type

log = logging.getLogger(__name__)

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int

class BaseRepository(Generic[T]):
    """
    Single-table record store over SQLAlchemy 2.0.

    Every write commits on its own: there is no transaction spanning two
    calls, let alone two tables. Any database error is rolled back for that
    call only and re-raised as StoreFailure naming the step.
    """
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    @property
    def table(self) -> str:
        return self.model.__tablename__

    @property
    def pk(self) -> str:
        return self.model.__mapper__.primary_key[0].key

    @contextmanager
    def step(self, name: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error("store step failed step=%r error=%s", name, e)
            raise StoreFailure(name, e) from e

    def _where(self, stmt, filters: dict[str, Any]):
        for col, value in filters.items():
            stmt = stmt.where(getattr(self.model, col) == value)
        return stmt

    # READS
    def get(self, ident: Any) -> Optional[T]:
        with self.step(f"select {self.table}"):
            return self.db.get(self.model, ident)

    def find(self, *, order_by: Optional[str] = None, **filters: Any) -> list[T]:
        stmt = self._where(select(self.model), filters)
        if order_by:
            stmt = stmt.order_by(getattr(self.model, order_by).asc())
        with self.step(f"select {self.table}"):
            return list(self.db.execute(stmt).scalars().all())

    def page(self, stmt, *, limit: int = 20, offset: int = 0) -> Page[T]:
        """One query for the slice, one for the total."""
        count = select(func.count()).select_from(stmt.order_by(None).subquery())
        with self.step(f"select {self.table}"):
            items = list(self.db.execute(stmt.limit(limit).offset(offset)).scalars().all())
            total = self.db.execute(count).scalar_one()
        return Page(items=items, total=total, limit=limit, offset=offset)

    def find_in(self, column: str, values: Iterable[Any], *, order_by: Optional[str] = None) -> list[T]:
        values = list(values)
        if not values:
            return []
        stmt = select(self.model).where(getattr(self.model, column).in_(values))
        if order_by:
            stmt = stmt.order_by(getattr(self.model, order_by).asc())
        with self.step(f"select {self.table}"):
            return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def insert_many(self, rows: list[dict[str, Any]]) -> list[T]:
        if not rows:
            return []
        entities = [self.model(**row) for row in rows]
        with self.step(f"insert {self.table}"):
            self.db.add_all(entities)
            self.db.commit()
            for entity in entities:
                self.db.refresh(entity)
        return entities

    def insert(self, row: dict[str, Any]) -> T:
        return self.insert_many([row])[0]

    def upsert(self, ident: Any, values: dict[str, Any], *, preserve: tuple[str, ...] = ()) -> T:
        """
        Insert-if-absent-else-update keyed by primary key. Columns named in
        `preserve` keep their stored value on update.
        """
        with self.step(f"upsert {self.table}"):
            entity = self.db.get(self.model, ident)
            if entity is None:
                entity = self.model(**{self.pk: ident, **values})
                self.db.add(entity)
            else:
                for col, value in values.items():
                    if col not in preserve:
                        setattr(entity, col, value)
            self.db.commit()
            self.db.refresh(entity)
        return entity

    def delete_where(self, **filters: Any) -> int:
        """Deleting zero rows is not an error."""
        if not filters:
            raise ValueError("refusing to delete without a filter")
        stmt = self._where(delete(self.model), filters)
        with self.step(f"delete {self.table}"):
            result = self.db.execute(stmt)
            self.db.commit()
        return result.rowcount or 0

    def replace_where(self, rows: list[dict[str, Any]], **filters: Any) -> list[T]:
        """
        Delete the rows matching `filters` and insert `rows` in one commit.

        Only ever one table. A concurrent writer's rows that landed under the
        same parent are cleared with ours, so the last replace wins outright.
        """
        if not filters:
            raise ValueError("refusing to replace without a filter")
        entities = [self.model(**row) for row in rows]
        with self.step(f"insert {self.table}"):
            self.db.execute(self._where(delete(self.model), filters))
            self.db.add_all(entities)
            self.db.commit()
            for entity in entities:
                self.db.refresh(entity)
        return entities
