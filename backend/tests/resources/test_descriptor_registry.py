# tests/resources/test_descriptor_registry.py
"""
Tests for entity introspection, the resource registry and form generation.
"""
import pytest

from bizadmin.core.errors import ResourceNotFoundError
from bizadmin.models import Estimate, Product, User
from bizadmin.resources.catalog import registry
from bizadmin.resources.descriptor import auto_index_columns, describe
from bizadmin.resources.forms import detect_field_type, form_schema, generate_auto_schema
from bizadmin.resources.registry import ResourceDefinition, ResourceRegistry
from bizadmin.schemas.product import ProductCreate, ProductRead, ProductUpdate

# ===== DESCRIPTOR =====

def test_descriptor_is_cached_per_model():
    assert describe(User) is describe(User)


def test_sortable_fields_start_with_base_columns():
    assert describe(User).sortable_fields == (
        "id", "created_at", "updated_at", "name", "username", "email", "whatsapp", "role",
    )


def test_declared_searchable_fields_take_precedence():
    assert describe(Estimate).searchable_fields == ("number", "reference", "salesperson", "status")


def test_searchable_fields_from_flagged_index_columns():
    assert describe(User).searchable_fields == ("name", "username", "email", "whatsapp", "role")


def test_searchable_fields_by_name_heuristic():
    assert describe(Product).searchable_fields == (
        "name", "slug", "description", "short_description",
    )


def test_filterable_fields():
    assert list(describe(Estimate).filterable_fields) == ["status", "channel", "salesperson"]
    assert dict(describe(Product).filterable_fields) == {}


def test_active_field_detection():
    assert describe(Product).has_active_field
    assert describe(User).has_active_field


def test_auto_index_columns():
    columns = auto_index_columns(describe(Product).fillable_fields)

    assert [c.field for c in columns] == ["id", "name", "brand", "sku", "price", "created_at"]


# ===== REGISTRY =====

@pytest.mark.parametrize("name", ["products", "Products", "product", "PRODUCT", " products "])
def test_registry_resolves_plural_and_singular(name):
    assert registry.resolve(name).model is Product


def test_registry_unknown_name():
    with pytest.raises(ResourceNotFoundError) as exc_info:
        registry.resolve("invoices")

    assert exc_info.value.status_code == 404
    assert exc_info.value.details == {"resource": "invoices"}


def test_registry_rejects_conflicting_names():
    local = ResourceRegistry()
    definition = ResourceDefinition("products", Product, ProductRead, ProductCreate, ProductUpdate)
    local.register(definition)

    with pytest.raises(ValueError):
        local.register(ResourceDefinition(
            "product", Estimate, ProductRead, ProductCreate, ProductUpdate,
        ))
    assert len(local) == 1
    assert "products" in local


# ===== FORMS =====

def test_detect_field_type_by_name():
    assert detect_field_type("contact_email") == "email"
    assert detect_field_type("whatsapp") == "tel"
    assert detect_field_type("unit_price") == "decimal"
    assert detect_field_type("nickname") == "text"


def test_auto_schema_uses_column_types():
    schema = generate_auto_schema(describe(Product))

    assert schema["active"]["type"] == "checkbox"
    assert schema["price"]["type"] == "decimal"
    assert schema["price"]["step"] == "0.01"
    assert schema["stock_quantity"]["type"] == "number"
    assert schema["description"]["type"] == "textarea"
    assert schema["name"]["placeholder"] == "Enter your Name"


def test_form_schema_returns_declared_groups():
    schema = form_schema(describe(Estimate))

    assert schema[0]["group"] == "Estimate Details"
