"""Free-text search over a resource's searchable columns."""

import logging

from sqlalchemy import Select, String, cast, or_

from bizadmin.config import settings
from bizadmin.resources.descriptor import EntityDescriptor
from bizadmin.resources.params import QueryRequest
from bizadmin.resources.state import StageOutcome

logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so the term matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_search(
    query: Select,
    request: QueryRequest,
    descriptor: EntityDescriptor,
    min_length: int | None = None,
) -> StageOutcome:
    term = request.search
    if term is None or term == "":
        return StageOutcome(query)

    if min_length is None:
        min_length = settings.SEARCH_MIN_LENGTH
    current_length = len(term.strip())
    if current_length < min_length:
        return StageOutcome.failed(
            query,
            f"Search term must be at least {min_length} characters long.",
            search=term,
            current_length=current_length,
            minimum_length=min_length,
        )

    if not descriptor.searchable_fields:
        logger.debug("%s has no searchable fields, ignoring search", descriptor.name)
        return StageOutcome(query)

    pattern = f"%{escape_like(term)}%"
    clauses = []
    for field in descriptor.searchable_fields:
        column = descriptor.column(field)
        if not descriptor.is_text(field):
            column = cast(column, String)
        clauses.append(column.like(pattern, escape="\\"))
    return StageOutcome(query.where(or_(*clauses)))
