"""Assemble the list response envelope."""

from bizadmin.resources.descriptor import EntityDescriptor
from bizadmin.resources.forms import form_schema, index_columns
from bizadmin.resources.params import QueryRequest
from bizadmin.resources.state import AppliedQueryState, PaginatedResult


def _pagination_meta(result: PaginatedResult) -> dict:
    count = len(result.rows)
    first = (result.current_page - 1) * result.per_page + 1 if count else None
    return {
        "total": result.total_items,
        "current_page": result.current_page,
        "per_page": result.per_page,
        "total_pages": result.total_pages,
        "from": first,
        "to": first + count - 1 if count else None,
        "has_more_pages": result.current_page < result.total_pages,
    }


def _available_filters(descriptor: EntityDescriptor) -> list[dict] | None:
    if not descriptor.filterable_fields:
        return None
    return [
        {
            "field": field,
            "label": spec.label or field.replace("_", " ").title(),
            "values": list(spec.values) if spec.values is not None else None,
        }
        for field, spec in descriptor.filterable_fields.items()
    ]


def build_list_envelope(
    descriptor: EntityDescriptor,
    request: QueryRequest,
    state: AppliedQueryState,
    result: PaginatedResult,
    data: list[dict],
) -> dict:
    """Merge serialized rows and the accumulated query state into one response."""
    return {
        "success": True,
        "data": data,
        "pagination": _pagination_meta(result),
        "filters": {
            "applied": [f.to_dict() for f in state.applied_filters],
            "available": _available_filters(descriptor),
        },
        "search": request.search or None,
        "sort": state.sort.to_dict() if state.sort else None,
        "columns": index_columns(descriptor),
        "schema": form_schema(descriptor),
        "notifications": [n.to_dict() for n in state.notifications] or None,
    }
