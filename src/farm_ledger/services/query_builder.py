"""Composable, parameterized filters for record listings and reports."""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, true

from farm_ledger.core.errors import InvalidFilterError
from farm_ledger.schemas.validators import normalize_iso_date, sanitize_text

ALL_PROJECTS = "All Projects"

Operator = Callable[[Any, Any], ColumnElement[bool]]


@dataclass(frozen=True)
class ReportFilter:
    """Optional project and inclusive date-range criteria.

    Dates are ``YYYY-MM-DD`` strings; stored dates use the same format, so
    lexicographic comparison in SQL equals chronological comparison.
    """

    project: str | None = None
    from_date: str | None = None
    to_date: str | None = None

    @classmethod
    def from_query(
        cls,
        project: str | None = None,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> ReportFilter:
        """Build a filter from raw query-string values.

        Blank values are treated as absent. The project is escaped like
        stored names so both compare equal, and dates are normalized.

        Raises:
            InvalidFilterError: If a date is not ISO-8601.
        """
        return cls(
            project=sanitize_text(project) if project and project.strip() else None,
            from_date=_normalize_bound("fromDate", from_date),
            to_date=_normalize_bound("toDate", to_date),
        )

    @property
    def restricts_project(self) -> bool:
        """Return True unless the project is absent or the 'All Projects' sentinel."""
        return bool(self.project) and self.project != ALL_PROJECTS


def _normalize_bound(field: str, value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    try:
        return normalize_iso_date(value)
    except ValueError as err:
        raise InvalidFilterError(field, f"{field} must be a valid ISO-8601 date") from err


class PredicateBuilder:
    """Accumulate ``(column, operator, value)`` predicates.

    Values never reach SQL text: each becomes a bound parameter when the
    predicate is rendered.
    """

    def __init__(self) -> None:
        self._predicates: list[tuple[Any, Operator, Any]] = []

    def __len__(self) -> int:
        return len(self._predicates)

    def add(self, column: Any, op: Operator, value: Any) -> PredicateBuilder:
        """Append a predicate and return the builder for chaining."""
        self._predicates.append((column, op, value))
        return self

    def equals(self, column: Any, value: Any) -> PredicateBuilder:
        return self.add(column, operator.eq, value)

    def at_least(self, column: Any, value: Any) -> PredicateBuilder:
        return self.add(column, operator.ge, value)

    def at_most(self, column: Any, value: Any) -> PredicateBuilder:
        return self.add(column, operator.le, value)

    @property
    def parameters(self) -> list[Any]:
        """Return the bound values in the order they were added."""
        return [value for _, _, value in self._predicates]

    def clause(self) -> ColumnElement[bool]:
        """Return the conjunction of all predicates (``TRUE`` when empty)."""
        if not self._predicates:
            return true()
        return and_(*(op(column, value) for column, op, value in self._predicates))

    def apply(self, stmt: Select[Any]) -> Select[Any]:
        """Attach the accumulated predicates to ``stmt`` as a WHERE clause."""
        if not self._predicates:
            return stmt
        return stmt.where(self.clause())


def build_filter_predicates(
    report_filter: ReportFilter,
    *,
    project_column: Any,
    date_column: Any,
) -> PredicateBuilder:
    """Translate a :class:`ReportFilter` into predicates over the given columns."""
    builder = PredicateBuilder()
    if report_filter.restricts_project:
        builder.equals(project_column, report_filter.project)
    if report_filter.from_date:
        builder.at_least(date_column, report_filter.from_date)
    if report_filter.to_date:
        builder.at_most(date_column, report_filter.to_date)
    return builder
