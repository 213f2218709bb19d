"""Page validation, page clamping and the count + bounded fetch."""

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.config import settings
from bizadmin.resources.params import QueryRequest, is_blank
from bizadmin.resources.state import Notification, PaginatedResult, QueryError

logger = logging.getLogger(__name__)

# Plain decimal notation only: no exponents, digit separators or infinities.
NUMBER_PATTERN = re.compile(r"[+-]?\d+(?:\.\d+)?")


@dataclass(frozen=True)
class PageRequest:
    page: int
    per_page: int


def _parse_positive_int(raw: str | None, default: int) -> tuple[int | None, str | None]:
    if is_blank(raw):
        return default, None
    text = raw.strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return None, "must be a number"
    decimal = Decimal(text)
    if decimal != decimal.to_integral_value():
        return None, "must be a whole number"
    number = int(decimal)
    if number < 1:
        return None, "must be greater than 0"
    return number, None


def parse_page_request(
    request: QueryRequest,
    default_per_page: int | None = None,
    max_per_page: int | None = None,
) -> PageRequest | QueryError:
    """Validate ``page`` and ``per_page``.

    All problems are reported together as a field to message mapping.
    """
    if default_per_page is None:
        default_per_page = settings.DEFAULT_PER_PAGE
    if max_per_page is None:
        max_per_page = settings.MAX_PER_PAGE

    errors: dict[str, str] = {}
    page, page_error = _parse_positive_int(request.page, 1)
    if page_error:
        errors["page"] = page_error
    per_page, per_page_error = _parse_positive_int(request.per_page, default_per_page)
    if per_page_error:
        errors["per_page"] = per_page_error
    elif per_page > max_per_page:
        errors["per_page"] = f"must not be greater than {max_per_page}"

    if errors:
        return QueryError("Invalid pagination parameters.", {"errors": errors})
    return PageRequest(page=page, per_page=per_page)


def resolve_current_page(
    requested: int, per_page: int, total: int
) -> tuple[int, Notification | None]:
    max_pages = max(1, math.ceil(total / per_page))
    if requested <= max_pages:
        return requested, None
    logger.info("Clamping page %d to %d (total=%d, per_page=%d)",
                requested, max_pages, total, per_page)
    return max_pages, Notification(
        "warning",
        f"Requested page {requested} exceeds available pages. "
        f"Showing page {max_pages} instead.",
        "page",
    )


async def paginate(
    db: AsyncSession, query: Select, page_request: PageRequest
) -> tuple[PaginatedResult, tuple[Notification, ...]]:
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar_one()

    current_page, notification = resolve_current_page(
        page_request.page, page_request.per_page, total
    )
    offset = (current_page - 1) * page_request.per_page
    result = await db.execute(query.offset(offset).limit(page_request.per_page))
    rows = list(result.scalars().all())

    notifications = (notification,) if notification else ()
    return PaginatedResult(
        rows=rows,
        total_items=total,
        current_page=current_page,
        per_page=page_request.per_page,
    ), notifications
