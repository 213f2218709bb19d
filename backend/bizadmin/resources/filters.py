"""Declared-field filtering.

Three channels feed the filter stage:

* ``filter=field:value``, always validated and able to fail the request;
* one query parameter per declared filter field, repeated values becoming
  an ``IN`` match;
* the ``active`` fallback, used only by resources that declare no filters.
"""

import logging
from typing import Any

from sqlalchemy import Select

from bizadmin.resources.capabilities import FilterSpec
from bizadmin.resources.descriptor import EntityDescriptor
from bizadmin.resources.params import ParamValue, QueryRequest, is_blank
from bizadmin.resources.state import AppliedFilter, Notification, StageOutcome

logger = logging.getLogger(__name__)

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class FilterValueError(ValueError):
    def __init__(self, field: str, value: Any, expected: str) -> None:
        super().__init__(f"Filter '{field}' expects {expected}, got '{value}'.")
        self.field = field
        self.value = value
        self.expected = expected


def parse_bool(value: Any) -> bool | None:
    """Permissive boolean parsing. Returns None when the value is not recognised."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None


def parse_combined_filter(raw: str) -> tuple[str, str] | None:
    """Split ``field:value`` on the first colon; None when malformed."""
    field, sep, value = raw.partition(":")
    field, value = field.strip(), value.strip()
    if not sep or not field or not value:
        return None
    return field, value


def _coerce(descriptor: EntityDescriptor, field: str, value: str) -> Any:
    if descriptor.is_boolean(field):
        parsed = parse_bool(value)
        if parsed is None:
            raise FilterValueError(field, value, "a boolean")
        return parsed
    if descriptor.is_integer(field):
        try:
            return int(value.strip())
        except ValueError:
            raise FilterValueError(field, value, "an integer") from None
    return value


def _apply(
    query: Select,
    descriptor: EntityDescriptor,
    field: str,
    spec: FilterSpec,
    value: ParamValue,
) -> tuple[Select, Any]:
    """Apply one accepted filter; returns the refined query and the recorded value."""
    if spec.handler is not None:
        return spec.handler(query, value), value

    column = descriptor.column(field)
    if isinstance(value, list):
        coerced = [_coerce(descriptor, field, v) for v in value if not is_blank(v)]
        return query.where(column.in_(coerced)), coerced
    coerced = _coerce(descriptor, field, value)
    return query.where(column == coerced), coerced


def _invalid_value(query: Select, exc: FilterValueError) -> StageOutcome:
    return StageOutcome.failed(
        query, str(exc), field=exc.field, value=exc.value, expected=exc.expected
    )


def apply_filters(query: Select, request: QueryRequest, descriptor: EntityDescriptor) -> StageOutcome:
    filters = descriptor.filterable_fields
    # Keyed by field; a later filter on the same field replaces the earlier one.
    applied: dict[str, AppliedFilter] = {}
    notifications: list[Notification] = []

    combined = request.filter
    combined_used = not is_blank(combined)
    if combined_used:
        parsed = parse_combined_filter(combined)
        if parsed is None:
            return StageOutcome.failed(
                query,
                "Invalid filter format. Expected 'field:value'.",
                filter=combined,
                expected_format="field:value",
            )
        field, value = parsed
        if not filters:
            return StageOutcome.failed(
                query, "Filtering is not supported for this resource.", filter=combined
            )
        spec = filters.get(field)
        if spec is None:
            return StageOutcome.failed(
                query,
                f"Invalid filter field '{field}'.",
                field=field,
                available_fields=list(filters),
            )
        if spec.values is not None and value not in spec.values:
            return StageOutcome.failed(
                query,
                f"Invalid value '{value}' for filter '{field}'.",
                field=field,
                value=value,
                allowed_values=list(spec.values),
            )
        try:
            query, recorded = _apply(query, descriptor, field, spec, value)
        except FilterValueError as exc:
            return _invalid_value(query, exc)
        applied[field] = AppliedFilter(field, recorded)

    for field, spec in filters.items():
        raw = request.params.get(field)
        if is_blank(raw):
            continue
        if isinstance(raw, list):
            raw = [v for v in raw if not is_blank(v)]
        if spec.values is not None:
            candidates = raw if isinstance(raw, list) else [raw]
            rejected = [v for v in candidates if v not in spec.values]
            if rejected:
                logger.info("Ignoring %s filter values %s on %s", field, rejected, descriptor.name)
                notifications.append(Notification(
                    "warning",
                    f"Ignored filter '{field}': '{', '.join(rejected)}' is not an allowed value.",
                    field,
                ))
                continue
        try:
            query, recorded = _apply(query, descriptor, field, spec, raw)
        except FilterValueError as exc:
            return _invalid_value(query, exc)
        applied[field] = AppliedFilter(field, recorded)

    if not filters and not combined_used and descriptor.has_active_field:
        raw = request.params.get("active")
        if isinstance(raw, list):
            raw = raw[-1] if raw else None
        active = None if is_blank(raw) else parse_bool(raw)
        if active is not None:
            query = query.where(descriptor.column("active") == active)
            applied["active"] = AppliedFilter("active", active)

    return StageOutcome(
        query,
        applied_filters=tuple(applied.values()),
        notifications=tuple(notifications),
    )
