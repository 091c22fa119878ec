"""
Mutable query builder around a SQLAlchemy ``Select``.

Adapters and event listeners share one builder while a search query is being
assembled, so every method mutates the wrapped statement in place and
returns the builder for chaining.
"""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


class QueryBuilder:
    def __init__(self, entity_class, alias=None):
        self.entity_class = entity_class
        self.root = alias if alias is not None else entity_class
        self.statement: Select = select(self.root)
        self._max_results: Optional[int] = None
        self._first_result: Optional[int] = None
        self._joined: set[str] = set()

    def where(self, *clauses) -> "QueryBuilder":
        self.statement = self.statement.where(*clauses)
        return self

    def join(self, target, onclause=None, *, isouter: bool = False, name: str | None = None) -> "QueryBuilder":
        """Join ``target`` once; repeated joins registered under ``name`` are skipped."""
        if name is not None:
            if name in self._joined:
                return self
            self._joined.add(name)
        self.statement = self.statement.join(target, onclause, isouter=isouter)
        return self

    def order_by(self, *clauses) -> "QueryBuilder":
        self.statement = self.statement.order_by(*clauses)
        return self

    def set_max_results(self, max_results: Optional[int]) -> "QueryBuilder":
        self._max_results = max_results
        return self

    def get_max_results(self) -> Optional[int]:
        return self._max_results

    def set_first_result(self, first_result: Optional[int]) -> "QueryBuilder":
        self._first_result = first_result
        return self

    def get_first_result(self) -> Optional[int]:
        return self._first_result

    def get_statement(self) -> Select:
        """Return the statement with limit/offset applied."""
        stmt = self.statement
        if self._max_results is not None:
            stmt = stmt.limit(self._max_results)
        if self._first_result is not None:
            stmt = stmt.offset(self._first_result)
        return stmt

    def count(self, session: Session) -> int:
        """Count matching rows, ignoring ordering and pagination."""
        sub = self.statement.order_by(None).subquery()
        return session.execute(select(func.count()).select_from(sub)).scalar_one()

    def fetch_all(self, session: Session) -> list[Any]:
        return list(session.scalars(self.get_statement()).unique().all())
