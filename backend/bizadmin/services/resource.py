"""Generic CRUD and listing for any registered resource."""

import logging
import re
from typing import Any

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.core.errors import ResourceNotFoundError, ValidationFailedError
from bizadmin.resources.forms import form_schema, index_columns
from bizadmin.resources.params import QueryRequest
from bizadmin.resources.pipeline import ResourceQueryPipeline
from bizadmin.resources.registry import ResourceDefinition

logger = logging.getLogger(__name__)

# Largest value a signed 64-bit integer column can hold.
MAX_PRIMARY_KEY = 2**63 - 1

_CONSTRAINT_PATTERNS = (
    # sqlite: "UNIQUE constraint failed: users.email"
    (re.compile(r"UNIQUE constraint failed: \w+\.(\w+)"), "duplicate_value"),
    (re.compile(r"NOT NULL constraint failed: \w+\.(\w+)"), "required_field_missing"),
    # postgres: "Key (email)=(a@b.c) already exists."
    (re.compile(r"Key \((\w+)\)=\(.*\) already exists"), "duplicate_value"),
    (re.compile(r'null value in column "(\w+)"'), "required_field_missing"),
)


def describe_integrity_error(exc: IntegrityError) -> dict[str, Any]:
    """Extract the offending field from a driver error message, when possible."""
    message = str(exc.orig)
    for pattern, error_type in _CONSTRAINT_PATTERNS:
        match = pattern.search(message)
        if match:
            return {"error_type": error_type, "field": match.group(1)}
    return {"error_type": "integrity_error"}


def _integrity_message(details: dict[str, Any]) -> str:
    field = details.get("field")
    if details["error_type"] == "duplicate_value":
        return f"The {field} has already been taken."
    if details["error_type"] == "required_field_missing":
        return f"The {field} field is required."
    return "The data violates a database constraint."


class ResourceService:
    def __init__(self, db: AsyncSession, definition: ResourceDefinition):
        self.db = db
        self.definition = definition

    @property
    def model(self) -> type:
        return self.definition.model

    async def list_resources(self, request: QueryRequest) -> dict:
        return await ResourceQueryPipeline(self.db, self.definition).run(request)

    async def get(self, resource_id: str | int) -> Any:
        """Load one record or raise ResourceNotFoundError."""
        try:
            pk = int(resource_id)
        except (TypeError, ValueError):
            pk = None
        if pk is not None and not 0 < pk <= MAX_PRIMARY_KEY:
            pk = None
        obj = None
        if pk is not None:
            result = await self.db.execute(select(self.model).where(self.model.id == pk))
            obj = result.scalar_one_or_none()
        if obj is None:
            raise ResourceNotFoundError(
                f"Resource with ID '{resource_id}' not found.",
                details={"resource": self.definition.name, "id": str(resource_id)},
            )
        return obj

    def _values(self, schema: type[BaseModel], payload: dict) -> dict[str, Any]:
        values = schema.model_validate(payload).model_dump(exclude_unset=True)
        if self.definition.prepare_write is not None:
            values = self.definition.prepare_write(values)
        return values

    async def _flush(self, obj: Any) -> None:
        try:
            await self.db.flush()
        except IntegrityError as exc:
            await self.db.rollback()
            details = describe_integrity_error(exc)
            logger.info("Integrity error writing %s: %s", self.definition.name, details)
            raise ValidationFailedError(_integrity_message(details), details) from exc
        # Load server-generated columns.
        await self.db.refresh(obj)

    async def create(self, payload: dict) -> Any:
        obj = self.model(**self._values(self.definition.create_schema, payload))
        self.db.add(obj)
        await self._flush(obj)
        logger.info("Created %s id=%s", self.definition.name, obj.id)
        return obj

    async def update(self, resource_id: str | int, payload: dict) -> Any:
        obj = await self.get(resource_id)
        values = self._values(self.definition.update_schema, payload)
        for field, value in values.items():
            setattr(obj, field, value)
        await self._flush(obj)
        logger.info("Updated %s id=%s fields=%s", self.definition.name, obj.id, sorted(values))
        return obj

    async def delete(self, resource_id: str | int) -> None:
        obj = await self.get(resource_id)
        await self.db.delete(obj)
        await self.db.flush()
        logger.info("Deleted %s id=%s", self.definition.name, resource_id)

    def schema(self) -> list | dict:
        return form_schema(self.definition.descriptor)

    def columns(self) -> list[dict]:
        return index_columns(self.definition.descriptor)
