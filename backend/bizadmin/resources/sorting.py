"""Single-column ordering from the ``sort`` and ``dir`` parameters."""

from sqlalchemy import Select

from bizadmin.resources.descriptor import EntityDescriptor
from bizadmin.resources.params import QueryRequest
from bizadmin.resources.state import SortState, StageOutcome

SORT_DIRECTIONS = ("asc", "desc")


def apply_sort(query: Select, request: QueryRequest, descriptor: EntityDescriptor) -> StageOutcome:
    field = (request.sort or "").strip()
    if not field:
        return StageOutcome(query)

    raw_direction = request.direction
    direction = (raw_direction or "").strip().lower() or "asc"
    if direction not in SORT_DIRECTIONS:
        return StageOutcome.failed(
            query,
            f"Invalid sort direction '{raw_direction}'.",
            direction=raw_direction,
            allowed_directions=list(SORT_DIRECTIONS),
        )

    if field not in descriptor.sortable_fields:
        return StageOutcome.failed(
            query,
            f"Invalid sort column '{field}'.",
            sort=field,
            allowed_columns=list(descriptor.sortable_fields),
        )

    column = descriptor.column(field)
    ordered = query.order_by(column.desc() if direction == "desc" else column.asc())
    return StageOutcome(ordered, sort=SortState(field, direction))
