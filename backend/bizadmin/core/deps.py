"""FastAPI dependencies for auth and resource resolution."""

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.core.security import decode_access_token
from bizadmin.database import get_db
from bizadmin.models.user import User
from bizadmin.resources.catalog import registry
from bizadmin.resources.registry import ResourceDefinition

security_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Extract and validate JWT, return the authenticated active user."""
    if credentials is None:
        raise _unauthorized("Authentication required.")

    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Session expired. Please log in again.")
    except jwt.PyJWTError:
        raise _unauthorized("Invalid authentication token.")

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid authentication token.")

    result = await db.execute(
        select(User).where(User.id == user_id, User.active == True)  # noqa: E712
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise _unauthorized("Account not found or deactivated.")

    request.state.user_id = user.id
    return user


def get_resource_definition(resource: str) -> ResourceDefinition:
    """Resolve the ``{resource}`` path segment; unknown names are a 404."""
    return registry.resolve(resource)


CurrentUser = Annotated[User, Depends(get_current_user)]
Resource = Annotated[ResourceDefinition, Depends(get_resource_definition)]
