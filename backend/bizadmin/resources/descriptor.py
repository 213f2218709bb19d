"""Static capability metadata for each resource model.

The descriptor is computed once per model class and cached for the life of
the process. Every list request reads it; nothing ever writes to it.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from sqlalchemy import Boolean, Integer, String, inspect
from sqlalchemy.orm import InstrumentedAttribute

from bizadmin.resources.capabilities import (
    FilterableResource,
    FilterSpec,
    IndexColumn,
    IndexColumnsResource,
    SearchableResource,
)

BASE_SORTABLE_FIELDS = ("id", "created_at", "updated_at")
TIMESTAMP_FIELDS = ("created_at", "updated_at")
SEARCH_NAME_HINTS = ("name", "title", "description", "email", "username", "slug")
COMMON_INDEX_FIELDS = ("email", "username", "title", "status", "brand", "sku", "price")


@dataclass(frozen=True)
class EntityDescriptor:
    model: type
    fillable_fields: tuple[str, ...]
    searchable_fields: tuple[str, ...]
    filterable_fields: Mapping[str, FilterSpec]
    sortable_fields: tuple[str, ...]
    index_columns: tuple[IndexColumn, ...]

    @property
    def name(self) -> str:
        return self.model.__name__

    @property
    def has_active_field(self) -> bool:
        return "active" in self.fillable_fields

    def column(self, field: str) -> InstrumentedAttribute:
        return getattr(self.model, field)

    def column_type(self, field: str):
        columns = inspect(self.model).columns
        return columns[field].type if field in columns else None

    def is_boolean(self, field: str) -> bool:
        return isinstance(self.column_type(field), Boolean)

    def is_integer(self, field: str) -> bool:
        return isinstance(self.column_type(field), Integer)

    def is_text(self, field: str) -> bool:
        return isinstance(self.column_type(field), String)


def _column_names(model: type) -> list[str]:
    return [column.key for column in inspect(model).columns]


def _fillable_fields(model: type) -> tuple[str, ...]:
    declared = getattr(model, "__fillable__", ())
    if declared:
        return tuple(declared)
    primary_keys = {column.key for column in inspect(model).primary_key}
    return tuple(
        name for name in _column_names(model)
        if name not in primary_keys and name not in TIMESTAMP_FIELDS
    )


def auto_index_columns(fillable: tuple[str, ...]) -> tuple[IndexColumn, ...]:
    """Columns for a model that declares none: id, name, common fields, created_at."""
    columns = [IndexColumn("id", "ID", sortable=True)]
    if "name" in fillable:
        columns.append(IndexColumn("name", "Name", sortable=True, searchable=True,
                                   clickable=True))
    for field in COMMON_INDEX_FIELDS:
        if field in fillable:
            columns.append(IndexColumn(field, field.replace("_", " ").title(),
                                       sortable=True, searchable=True))
    columns.append(IndexColumn("created_at", "Created At", format="datetime"))
    return tuple(columns)


def _heuristic_searchable(fillable: tuple[str, ...], model: type) -> tuple[str, ...]:
    columns = inspect(model).columns
    found = []
    for field in fillable:
        lowered = field.lower()
        if "password" in lowered or field not in columns:
            continue
        if not isinstance(columns[field].type, String):
            continue
        if any(hint in lowered for hint in SEARCH_NAME_HINTS):
            found.append(field)
    return tuple(found)


@lru_cache(maxsize=None)
def describe(model: type) -> EntityDescriptor:
    """Build the descriptor for ``model``.

    Raises ValueError when the model declares a searchable or sortable
    field that is not one of its mapped columns.
    """
    columns = set(_column_names(model))
    fillable = _fillable_fields(model)

    declared_columns: tuple[IndexColumn, ...] = ()
    if issubclass(model, IndexColumnsResource):
        declared_columns = tuple(model.index_columns())
    index_columns = declared_columns or auto_index_columns(fillable)

    if issubclass(model, SearchableResource):
        searchable = tuple(model.searchable_fields())
    elif any(column.searchable for column in declared_columns):
        searchable = tuple(column.field for column in declared_columns if column.searchable)
    else:
        searchable = _heuristic_searchable(fillable, model)

    filterable: dict[str, FilterSpec] = {}
    if issubclass(model, FilterableResource):
        filterable = dict(model.api_filters())

    sortable = list(BASE_SORTABLE_FIELDS)
    for column in declared_columns:
        if column.sortable and column.field not in sortable:
            sortable.append(column.field)

    unknown = [f for f in (*searchable, *sortable) if f not in columns]
    unknown += [
        f for f, spec in filterable.items() if spec.handler is None and f not in columns
    ]
    if unknown:
        raise ValueError(
            f"{model.__name__} declares fields that are not columns: {', '.join(unknown)}"
        )

    return EntityDescriptor(
        model=model,
        fillable_fields=fillable,
        searchable_fields=searchable,
        filterable_fields=MappingProxyType(filterable),
        sortable_fields=tuple(sortable),
        index_columns=index_columns,
    )
