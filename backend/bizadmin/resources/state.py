"""Immutable values passed between the list pipeline stages."""

import math
from dataclasses import dataclass, field, replace
from typing import Any

from sqlalchemy import Select


@dataclass(frozen=True)
class Notification:
    """A non-fatal advisory attached to a successful response."""

    type: str
    message: str
    field: str | None = None

    def to_dict(self) -> dict:
        return {"type": self.type, "message": self.message, "field": self.field}


@dataclass(frozen=True)
class AppliedFilter:
    field: str
    value: Any

    def to_dict(self) -> dict:
        return {"field": self.field, "value": self.value}


@dataclass(frozen=True)
class SortState:
    field: str
    direction: str

    def to_dict(self) -> dict:
        return {"field": self.field, "direction": self.direction}


@dataclass(frozen=True)
class QueryError:
    """A user-correctable problem with the list parameters."""

    message: str
    details: dict = field(default_factory=dict)


@dataclass(frozen=True)
class StageOutcome:
    """What one stage contributes: the refined query plus its deltas."""

    query: Select
    applied_filters: tuple[AppliedFilter, ...] = ()
    notifications: tuple[Notification, ...] = ()
    sort: SortState | None = None
    error: QueryError | None = None

    @classmethod
    def failed(cls, query: Select, message: str, **details: Any) -> "StageOutcome":
        return cls(query=query, error=QueryError(message, details))


@dataclass(frozen=True)
class AppliedQueryState:
    """Accumulated response metadata, folded from each stage's outcome."""

    applied_filters: tuple[AppliedFilter, ...] = ()
    sort: SortState | None = None
    notifications: tuple[Notification, ...] = ()

    def fold(self, outcome: StageOutcome) -> "AppliedQueryState":
        return AppliedQueryState(
            applied_filters=self.applied_filters + outcome.applied_filters,
            sort=outcome.sort or self.sort,
            notifications=self.notifications + outcome.notifications,
        )

    def notify(self, *notifications: Notification) -> "AppliedQueryState":
        return replace(self, notifications=self.notifications + notifications)


@dataclass(frozen=True)
class PaginatedResult:
    rows: list
    total_items: int
    current_page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        """Never below 1, so an empty result still reports page 1 of 1."""
        return max(1, math.ceil(self.total_items / self.per_page))
