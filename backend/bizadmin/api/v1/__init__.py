"""API v1 router that aggregates all sub-routers."""

from fastapi import APIRouter

from bizadmin.api.v1.auth import router as auth_router
from bizadmin.api.v1.resources import router as resources_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router)
# Catch-all /{resource} routes go last.
api_router.include_router(resources_router)
