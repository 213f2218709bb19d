"""Base model mixins: integer primary key and timestamps."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from bizadmin.database import Base


class TimestampMixin:
    """Adds created_at and updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class IntegerPrimaryKeyMixin:
    """Adds an auto-incrementing integer primary key."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class ResourceModel(IntegerPrimaryKeyMixin, TimestampMixin, Base):
    """Base for every model exposed through the generic resource API.

    ``__fillable__`` lists the mass-assignable columns. When a subclass
    leaves it empty, every mapped column except the primary key and the
    timestamps is fillable.
    """

    __abstract__ = True
    __fillable__: tuple[str, ...] = ()


__all__ = ["Base", "IntegerPrimaryKeyMixin", "ResourceModel", "TimestampMixin"]
