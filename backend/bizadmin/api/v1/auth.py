"""Authentication endpoints: login and current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.core.deps import CurrentUser
from bizadmin.database import get_db
from bizadmin.schemas.auth import LoginRequest, LoginResponse
from bizadmin.schemas.user import UserRead
from bizadmin.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=dict)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Authenticate by username or email and return a JWT."""
    result = await AuthService(db).login(data.login, data.password)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials.",
        )
    token, expires_in = result
    return {
        "success": True,
        "data": LoginResponse(access_token=token, expires_in=expires_in).model_dump(),
    }


@router.get("/me", response_model=dict)
async def me(current_user: CurrentUser):
    """Return the authenticated user."""
    return {
        "success": True,
        "data": UserRead.model_validate(current_user).model_dump(mode="json"),
    }
