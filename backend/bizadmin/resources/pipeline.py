"""Run a list request through search, filter, sort and pagination."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.core.errors import ApiError, InvalidParametersError, PipelineError
from bizadmin.resources.filters import apply_filters
from bizadmin.resources.metadata import build_list_envelope
from bizadmin.resources.pagination import paginate, parse_page_request
from bizadmin.resources.params import QueryRequest
from bizadmin.resources.registry import ResourceDefinition
from bizadmin.resources.search import apply_search
from bizadmin.resources.sorting import apply_sort
from bizadmin.resources.state import AppliedQueryState, QueryError

logger = logging.getLogger(__name__)

QUERY_STAGES = (apply_search, apply_filters, apply_sort)


class ResourceQueryPipeline:
    """Build, validate and execute the list query for one resource.

    Stages run in a fixed order and the first invalid parameter stops the
    request before anything is sent to the database.
    """

    def __init__(self, db: AsyncSession, definition: ResourceDefinition):
        self.db = db
        self.definition = definition

    async def run(self, request: QueryRequest) -> dict:
        try:
            return await self._run(request)
        except ApiError:
            raise
        except Exception as exc:
            logger.error(
                "Listing %s failed with parameters %s",
                self.definition.name, dict(request.params), exc_info=True,
            )
            raise PipelineError("An error occurred while fetching the resources.") from exc

    def _reject(self, error: QueryError) -> InvalidParametersError:
        logger.info("Rejected %s list parameters: %s %s",
                    self.definition.name, error.message, error.details)
        return InvalidParametersError(error.message, error.details)

    async def _run(self, request: QueryRequest) -> dict:
        descriptor = self.definition.descriptor
        query = select(descriptor.model)
        state = AppliedQueryState()

        for stage in QUERY_STAGES:
            outcome = stage(query, request, descriptor)
            if outcome.error is not None:
                raise self._reject(outcome.error)
            query = outcome.query
            state = state.fold(outcome)

        page_request = parse_page_request(request)
        if isinstance(page_request, QueryError):
            raise self._reject(page_request)

        result, notifications = await paginate(self.db, query, page_request)
        state = state.notify(*notifications)

        data = [self.definition.serialize(row) for row in result.rows]
        return build_list_envelope(descriptor, request, state, result, data)
