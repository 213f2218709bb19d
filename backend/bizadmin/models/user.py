"""User model."""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from bizadmin.models.base import ResourceModel
from bizadmin.models.enums import UserRole
from bizadmin.resources.capabilities import (
    IndexColumn,
    IndexColumnsResource,
    SchemaResource,
)


class User(IndexColumnsResource, SchemaResource, ResourceModel):
    __tablename__ = "users"
    __fillable__ = ("name", "username", "email", "whatsapp", "active", "role")

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    whatsapp: Mapped[str | None] = mapped_column(String(20), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, server_default="1")
    role: Mapped[str] = mapped_column(
        String(20), default=UserRole.USER.value, server_default=UserRole.USER.value
    )
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index("ix_users_role", "role"),
    )

    @classmethod
    def index_columns(cls) -> list[IndexColumn]:
        return [
            IndexColumn("name", "Name", sortable=True, searchable=True, clickable=True),
            IndexColumn("username", "Username", sortable=True, searchable=True),
            IndexColumn("email", "Email", sortable=True, searchable=True),
            IndexColumn("whatsapp", "WhatsApp", sortable=True, searchable=True),
            IndexColumn("role", "Role", sortable=True, searchable=True),
            IndexColumn("active", "Status", format="boolean", align="center"),
        ]

    @classmethod
    def api_schema(cls) -> list[dict]:
        return [
            {
                "group": "Basic Information",
                "fields": [
                    {"field": "active", "label": "Status", "type": "checkbox",
                     "required": False, "default": True},
                    {"field": "name", "label": "Name", "type": "string",
                     "placeholder": "Enter your full name", "required": True, "maxLength": 255},
                    {"field": "username", "label": "Username", "type": "string",
                     "placeholder": "Enter your username", "required": True,
                     "maxLength": 255, "unique": True},
                    {"field": "email", "label": "Email", "type": "string",
                     "placeholder": "Enter your email address", "required": True,
                     "maxLength": 255, "unique": True},
                ],
            },
            {
                "group": "Contact Information",
                "fields": [
                    {"field": "whatsapp", "label": "WhatsApp Number", "type": "string",
                     "placeholder": "Enter your WhatsApp number", "required": False,
                     "pattern": "^[0-9]{10,15}$"},
                ],
            },
            {
                "group": "Account Settings",
                "fields": [
                    {"field": "role", "label": "Role", "type": "select", "required": True,
                     "options": [
                         {"value": UserRole.ADMIN.value, "label": "Admin"},
                         {"value": UserRole.USER.value, "label": "User"},
                     ],
                     "default": UserRole.USER.value},
                    # Optional on update; an empty value keeps the current password.
                    {"field": "password", "label": "Password", "type": "string",
                     "placeholder": "Enter your password", "required": False, "minLength": 8},
                ],
            },
        ]
