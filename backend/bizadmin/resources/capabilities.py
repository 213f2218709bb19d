"""Capability mixins a model implements to take part in generic listing.

A model opts into a capability by inheriting the mixin and overriding its
classmethod. The list pipeline checks ``issubclass(model, Capability)``
rather than probing for methods, and every declaration is static data the
pipeline only ever reads.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select

FilterHandler = Callable[[Select, Any], Select]


@dataclass(frozen=True)
class IndexColumn:
    """One column of the generic list view."""

    field: str
    label: str
    sortable: bool = False
    searchable: bool = False
    clickable: bool = False
    format: str | None = None
    align: str | None = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "field": self.field,
            "label": self.label,
            "sortable": self.sortable,
            "search": self.searchable,
        }
        if self.clickable:
            data["clickable"] = True
        if self.format:
            data["format"] = self.format
        if self.align:
            data["align"] = self.align
        return data


@dataclass(frozen=True)
class FilterSpec:
    """A declared filterable field.

    ``values`` restricts the field to an enumerated set. ``handler`` builds
    the predicate explicitly; without one the pipeline applies column
    equality.
    """

    values: tuple[str, ...] | None = None
    label: str | None = None
    handler: FilterHandler | None = None


class IndexColumnsResource:
    @classmethod
    def index_columns(cls) -> Sequence[IndexColumn]:
        raise NotImplementedError


class SearchableResource:
    @classmethod
    def searchable_fields(cls) -> Sequence[str]:
        raise NotImplementedError


class FilterableResource:
    @classmethod
    def api_filters(cls) -> Mapping[str, FilterSpec]:
        raise NotImplementedError


class SchemaResource:
    @classmethod
    def api_schema(cls) -> list[dict]:
        raise NotImplementedError
