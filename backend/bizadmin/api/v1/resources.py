"""Generic resource endpoints.

Every registered resource is served by the same routes; ``{resource}`` is
its plural name or singular alias. The static ``schema`` and ``columns``
paths are declared before ``{resource_id}`` so they win the match.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.core.deps import CurrentUser, Resource
from bizadmin.database import get_db
from bizadmin.resources.params import QueryRequest
from bizadmin.services.resource import ResourceService

router = APIRouter(tags=["resources"])

Payload = Annotated[dict[str, Any], Body()]


@router.get("/{resource}", response_model=dict)
async def list_resources(
    request: Request,
    current_user: CurrentUser,
    definition: Resource,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List with search, filter, sort and pagination from the query string."""
    svc = ResourceService(db, definition)
    return await svc.list_resources(QueryRequest.from_query_params(request.query_params))


@router.get("/{resource}/schema", response_model=dict)
async def resource_schema(
    current_user: CurrentUser,
    definition: Resource,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return {"success": True, "data": ResourceService(db, definition).schema()}


@router.get("/{resource}/columns", response_model=dict)
async def resource_columns(
    current_user: CurrentUser,
    definition: Resource,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return {"success": True, "data": ResourceService(db, definition).columns()}


@router.post("/{resource}", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_resource(
    payload: Payload,
    current_user: CurrentUser,
    definition: Resource,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    obj = await ResourceService(db, definition).create(payload)
    return {
        "success": True,
        "message": "Resource created successfully.",
        "data": definition.serialize(obj),
    }


@router.get("/{resource}/{resource_id}", response_model=dict)
async def get_resource(
    resource_id: str,
    current_user: CurrentUser,
    definition: Resource,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    obj = await ResourceService(db, definition).get(resource_id)
    return {"success": True, "data": definition.serialize(obj)}


@router.put("/{resource}/{resource_id}", response_model=dict)
@router.patch("/{resource}/{resource_id}", response_model=dict)
async def update_resource(
    resource_id: str,
    payload: Payload,
    current_user: CurrentUser,
    definition: Resource,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update the given fields; omitted fields keep their values."""
    obj = await ResourceService(db, definition).update(resource_id, payload)
    return {
        "success": True,
        "message": "Resource updated successfully.",
        "data": definition.serialize(obj),
    }


@router.delete("/{resource}/{resource_id}", response_model=dict)
async def delete_resource(
    resource_id: str,
    current_user: CurrentUser,
    definition: Resource,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await ResourceService(db, definition).delete(resource_id)
    return {"success": True, "data": {"message": "Resource deleted successfully."}}
