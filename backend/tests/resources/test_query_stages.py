# tests/resources/test_query_stages.py
"""
Unit tests for the list pipeline stages and the orchestrator.
Stages are pure functions over select() objects; the orchestrator tests
use a session stub so no database is needed.
"""
import pytest
from sqlalchemy import Boolean, Integer, String, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from bizadmin.core.errors import InvalidParametersError, PipelineError
from bizadmin.models import Estimate, Product, User
from bizadmin.models.base import IntegerPrimaryKeyMixin, TimestampMixin
from bizadmin.resources.capabilities import FilterableResource, FilterSpec
from bizadmin.resources.catalog import registry
from bizadmin.resources.descriptor import describe
from bizadmin.resources.filters import apply_filters, parse_bool, parse_combined_filter
from bizadmin.resources.metadata import build_list_envelope
from bizadmin.resources.pagination import PageRequest, parse_page_request, resolve_current_page
from bizadmin.resources.params import QueryRequest, is_blank
from bizadmin.resources.pipeline import ResourceQueryPipeline
from bizadmin.resources.registry import ResourceDefinition
from bizadmin.resources.search import apply_search, escape_like
from bizadmin.resources.sorting import apply_sort
from bizadmin.resources.state import (
    AppliedFilter,
    AppliedQueryState,
    Notification,
    PaginatedResult,
    QueryError,
    SortState,
    StageOutcome,
)
from bizadmin.schemas.product import ProductCreate, ProductRead, ProductUpdate


def request(**params) -> QueryRequest:
    return QueryRequest.from_mapping(params)


# ===== PARAMS =====

def test_from_mapping_reads_named_parameters():
    req = request(search="ab", dir="desc", page=["1", "2"])

    assert req.search == "ab"
    assert req.direction == "desc"
    assert req.page == "2"
    assert req.params["page"] == ["1", "2"]


@pytest.mark.parametrize("value, blank", [
    (None, True), ("", True), ("  ", True), ([], True), (["", " "], True),
    ("x", False), (["", "x"], False),
])
def test_is_blank(value, blank):
    assert is_blank(value) is blank


# ===== SEARCH =====

def test_search_absent_is_noop():
    query = select(Product)
    outcome = apply_search(query, request(), describe(Product))

    assert outcome.error is None
    assert outcome.query is query


def test_search_minimum_length_uses_trimmed_term():
    outcome = apply_search(select(Product), request(search=" a "), describe(Product))

    assert outcome.error.details == {"search": " a ", "current_length": 1, "minimum_length": 2}


def test_search_adds_or_group():
    outcome = apply_search(select(Product), request(search="ab"), describe(Product))

    sql = str(outcome.query)
    assert outcome.error is None
    assert sql.count("LIKE") == 4
    assert " OR " in sql


def test_search_minimum_length_is_configurable():
    outcome = apply_search(select(Product), request(search="abc"), describe(Product), min_length=4)

    assert outcome.error.details["minimum_length"] == 4


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


# ===== FILTERS =====

@pytest.mark.parametrize("raw, expected", [
    ("status:DRAFT", ("status", "DRAFT")),
    ("note:a:b", ("note", "a:b")),
    (" status : SENT ", ("status", "SENT")),
    ("status", None),
    (":DRAFT", None),
    ("status:", None),
])
def test_parse_combined_filter(raw, expected):
    assert parse_combined_filter(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("true", True), ("1", True), ("YES", True), ("on", True),
    ("false", False), ("0", False), ("No", False), ("off", False),
    ("maybe", None), ("", None), (None, None),
])
def test_parse_bool(raw, expected):
    assert parse_bool(raw) is expected


def test_filter_stage_records_applied_filters():
    outcome = apply_filters(
        select(Estimate), request(filter="status:SENT", channel="Online"), describe(Estimate)
    )

    assert outcome.error is None
    assert outcome.applied_filters == (
        AppliedFilter("status", "SENT"), AppliedFilter("channel", "Online"),
    )


def test_filter_stage_without_declared_filters_ignores_field_params():
    outcome = apply_filters(select(User), request(role="admin"), describe(User))

    assert outcome.error is None
    assert outcome.applied_filters == ()


def test_active_fallback_coerces_boolean():
    outcome = apply_filters(select(Product), request(active="1"), describe(Product))

    assert outcome.applied_filters == (AppliedFilter("active", True),)


def test_active_fallback_skipped_when_filter_param_used():
    outcome = apply_filters(
        select(Product), request(filter="active:1", active="1"), describe(Product)
    )

    assert outcome.error.message == "Filtering is not supported for this resource."


def test_filter_and_parameter_on_same_field_recorded_once():
    outcome = apply_filters(
        select(Estimate), request(filter="status:DRAFT", status="SENT"), describe(Estimate)
    )

    assert outcome.applied_filters == (AppliedFilter("status", "SENT"),)


# ===== FILTER COERCION =====

class LocalBase(DeclarativeBase):
    """Kept apart from the app metadata so no table is created for it."""


class Ticket(IntegerPrimaryKeyMixin, TimestampMixin, FilterableResource, LocalBase):
    __tablename__ = "tickets"

    title: Mapped[str] = mapped_column(String(100))
    urgent: Mapped[bool] = mapped_column(Boolean, default=False)
    priority: Mapped[int] = mapped_column(Integer, default=0)

    @classmethod
    def api_filters(cls) -> dict[str, FilterSpec]:
        return {
            "urgent": FilterSpec(label="Urgent"),
            "priority": FilterSpec(label="Priority"),
        }


@pytest.mark.parametrize("params, expected", [
    ({"urgent": "yes"}, (AppliedFilter("urgent", True),)),
    ({"filter": "urgent:0"}, (AppliedFilter("urgent", False),)),
    ({"priority": " 3 "}, (AppliedFilter("priority", 3),)),
    ({"priority": ["1", "2"]}, (AppliedFilter("priority", [1, 2]),)),
])
def test_filter_values_are_coerced_to_column_type(params, expected):
    outcome = apply_filters(select(Ticket), request(**params), describe(Ticket))

    assert outcome.error is None
    assert outcome.applied_filters == expected


@pytest.mark.parametrize("params, field, expected", [
    ({"urgent": "maybe"}, "urgent", "a boolean"),
    ({"filter": "priority:high"}, "priority", "an integer"),
    ({"priority": ["1", "x"]}, "priority", "an integer"),
])
def test_uncoercible_filter_value_is_rejected(params, field, expected):
    outcome = apply_filters(select(Ticket), request(**params), describe(Ticket))

    assert outcome.error.details["field"] == field
    assert outcome.error.details["expected"] == expected


@pytest.mark.asyncio
async def test_uncoercible_filter_value_is_invalid_parameters():
    session = FailingSession()
    definition = ResourceDefinition("tickets", Ticket, ProductRead, ProductCreate, ProductUpdate)

    with pytest.raises(InvalidParametersError) as exc_info:
        await ResourceQueryPipeline(session, definition).run(request(priority="high"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.details["expected"] == "an integer"
    assert exc_info.value.message == "Filter 'priority' expects an integer, got 'high'."
    assert session.calls == 0


# ===== SORT =====

def test_sort_absent_is_noop():
    outcome = apply_sort(select(User), request(dir="bogus"), describe(User))

    assert outcome.error is None
    assert outcome.sort is None


def test_sort_direction_checked_before_column():
    outcome = apply_sort(select(User), request(sort="password", dir="up"), describe(User))

    assert "allowed_directions" in outcome.error.details


def test_sort_field_is_trimmed_and_direction_defaults_to_asc():
    outcome = apply_sort(select(User), request(sort=" name "), describe(User))

    assert outcome.sort == SortState("name", "asc")
    assert "ORDER BY users.name ASC" in str(outcome.query)


# ===== PAGINATION =====

def test_page_request_defaults():
    assert parse_page_request(request()) == PageRequest(page=1, per_page=20)


def test_page_request_blank_values_use_defaults():
    assert parse_page_request(request(page="", per_page=" ")) == PageRequest(1, 20)


def test_page_request_rejects_fractions():
    error = parse_page_request(request(page="1.5"))

    assert isinstance(error, QueryError)
    assert error.details == {"errors": {"page": "must be a whole number"}}


@pytest.mark.parametrize("raw, expected", [
    ("2", 2),
    (" 3 ", 3),
    ("2.0", 2),
    ("+4", 4),
    ("99999999999999999999", 99999999999999999999),
])
def test_page_request_parses_whole_numbers_exactly(raw, expected):
    assert parse_page_request(request(page=raw)).page == expected


@pytest.mark.parametrize("raw", ["1_000", "1e3", "inf", "nan", "0x10", "2."])
def test_page_request_rejects_non_decimal_notation(raw):
    error = parse_page_request(request(page=raw))

    assert error.details == {"errors": {"page": "must be a number"}}


def test_clamp_notice_keeps_requested_number():
    _, notification = resolve_current_page(99999999999999999999, 20, 45)

    assert notification.message.startswith("Requested page 99999999999999999999 exceeds")


@pytest.mark.parametrize("page, per_page, total, expected", [
    (1, 20, 0, 1),
    (5, 20, 0, 1),
    (2, 20, 45, 2),
    (3, 20, 45, 3),
    (4, 20, 45, 3),
    (999, 100, 100, 1),
])
def test_current_page_is_clamped(page, per_page, total, expected):
    current, notification = resolve_current_page(page, per_page, total)

    assert current == expected
    assert (notification is not None) == (page != expected)


def test_clamp_notification_text():
    _, notification = resolve_current_page(999, 20, 45)

    assert notification == Notification(
        "warning",
        "Requested page 999 exceeds available pages. Showing page 3 instead.",
        "page",
    )


# ===== STATE / METADATA =====

def test_state_fold_accumulates_in_order():
    query = select(Product)
    state = AppliedQueryState().fold(StageOutcome(
        query, applied_filters=(AppliedFilter("status", "DRAFT"),),
        notifications=(Notification("warning", "first"),),
    ))
    state = state.fold(StageOutcome(query, sort=SortState("name", "desc")))
    state = state.notify(Notification("warning", "second"))

    assert [n.message for n in state.notifications] == ["first", "second"]
    assert state.sort == SortState("name", "desc")
    assert state.applied_filters == (AppliedFilter("status", "DRAFT"),)


def test_envelope_for_empty_result():
    result = PaginatedResult(rows=[], total_items=0, current_page=1, per_page=20)

    envelope = build_list_envelope(
        describe(Product), request(), AppliedQueryState(), result, []
    )

    assert envelope["pagination"] == {
        "total": 0, "current_page": 1, "per_page": 20, "total_pages": 1,
        "from": None, "to": None, "has_more_pages": False,
    }
    assert envelope["filters"] == {"applied": [], "available": None}
    assert envelope["notifications"] is None


# ===== ORCHESTRATOR =====

class FailingSession:
    """Session stub whose queries always fail."""

    def __init__(self):
        self.calls = 0

    async def execute(self, *args, **kwargs):
        self.calls += 1
        raise RuntimeError("connection refused")


@pytest.mark.asyncio
async def test_invalid_parameters_stop_before_any_query():
    session = FailingSession()
    pipeline = ResourceQueryPipeline(session, registry.resolve("estimates"))

    with pytest.raises(InvalidParametersError) as exc_info:
        await pipeline.run(request(filter="status:BOGUS"))

    assert exc_info.value.code == "INVALID_PARAMETERS"
    assert session.calls == 0


@pytest.mark.asyncio
async def test_pagination_errors_stop_before_any_query():
    session = FailingSession()
    pipeline = ResourceQueryPipeline(session, registry.resolve("products"))

    with pytest.raises(InvalidParametersError):
        await pipeline.run(request(per_page="500"))

    assert session.calls == 0


@pytest.mark.asyncio
async def test_unexpected_failure_becomes_pipeline_error(caplog):
    pipeline = ResourceQueryPipeline(FailingSession(), registry.resolve("products"))

    with caplog.at_level("ERROR"):
        with pytest.raises(PipelineError) as exc_info:
            await pipeline.run(request(search="kettle"))

    assert exc_info.value.status_code == 500
    assert "connection refused" not in exc_info.value.message
    assert "kettle" in caplog.text
