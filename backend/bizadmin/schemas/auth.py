"""Authentication request/response schemas."""

import re

from pydantic import BaseModel, Field


def validate_password_complexity(v: str) -> str:
    """Enforce password complexity: 1 uppercase, 1 lowercase, 1 digit."""
    if not re.search(r"[A-Z]", v):
        raise ValueError("Password must contain at least one uppercase letter.")
    if not re.search(r"[a-z]", v):
        raise ValueError("Password must contain at least one lowercase letter.")
    if not re.search(r"\d", v):
        raise ValueError("Password must contain at least one digit.")
    return v


class LoginRequest(BaseModel):
    # Username or email address.
    login: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
