"""Enum types for the bizadmin data model.

Columns store the plain string values; the enums drive pydantic validation
and the enumerated filter values.
"""

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


# --- Product Enums ---

class ProductType(str, enum.Enum):
    SIMPLE = "simple"
    VARIABLE = "variable"
    GROUPED = "grouped"
    EXTERNAL = "external"


class PublicationStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    DISCONTINUED = "discontinued"
    PRIVATE = "private"


class ProductUnit(str, enum.Enum):
    NOS = "nos"
    PIECE = "piece"
    KG = "kg"
    GRAM = "gram"
    LITER = "liter"
    METER = "meter"


# --- Estimate Enums ---

class EstimateStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    INVOICED = "INVOICED"


class EstimateChannel(str, enum.Enum):
    ONLINE = "Online"
    OFFLINE = "Offline"


def enum_values(enum_cls: type[enum.Enum]) -> tuple[str, ...]:
    return tuple(member.value for member in enum_cls)
