"""The resources exposed through the generic API."""

from typing import Any

from bizadmin.core.security import hash_password
from bizadmin.models import Estimate, Product, User
from bizadmin.resources.registry import ResourceDefinition, ResourceRegistry
from bizadmin.schemas.estimate import EstimateCreate, EstimateRead, EstimateUpdate
from bizadmin.schemas.product import ProductCreate, ProductRead, ProductUpdate
from bizadmin.schemas.user import UserCreate, UserRead, UserUpdate


def hash_user_password(values: dict[str, Any]) -> dict[str, Any]:
    """Replace a plain ``password`` with its bcrypt hash."""
    password = values.pop("password", None)
    if password:
        values["password_hash"] = hash_password(password)
    return values


registry = ResourceRegistry()

registry.register(ResourceDefinition(
    name="users",
    model=User,
    read_schema=UserRead,
    create_schema=UserCreate,
    update_schema=UserUpdate,
    prepare_write=hash_user_password,
))
registry.register(ResourceDefinition(
    name="products",
    model=Product,
    read_schema=ProductRead,
    create_schema=ProductCreate,
    update_schema=ProductUpdate,
))
registry.register(ResourceDefinition(
    name="estimates",
    model=Estimate,
    read_schema=EstimateRead,
    create_schema=EstimateCreate,
    update_schema=EstimateUpdate,
))
