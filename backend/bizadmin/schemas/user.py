"""User request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from bizadmin.models.enums import UserRole
from bizadmin.schemas.auth import validate_password_complexity

WHATSAPP_PATTERN = r"^[0-9]{10,15}$"


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=255)
    email: EmailStr
    whatsapp: str | None = Field(None, pattern=WHATSAPP_PATTERN)
    active: bool = True
    role: UserRole = UserRole.USER
    password: str | None = Field(None, min_length=8)

    model_config = {"extra": "forbid", "use_enum_values": True}

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str | None) -> str | None:
        return v if v is None else validate_password_complexity(v)


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    username: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    whatsapp: str | None = Field(None, pattern=WHATSAPP_PATTERN)
    active: bool | None = None
    role: UserRole | None = None
    # Empty keeps the current password.
    password: str | None = None

    model_config = {"extra": "forbid", "use_enum_values": True}

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str | None) -> str | None:
        if not v:
            return None
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return validate_password_complexity(v)


class UserRead(BaseModel):
    id: int
    name: str
    username: str
    email: str
    whatsapp: str | None
    active: bool
    role: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
