"""Form schemas and list columns for the generic UI.

Models that implement :class:`SchemaResource` describe their own form. For
the rest a schema is generated from the fillable columns, with the input
type picked from the column type and then from the field name.
"""

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, Numeric, Text, inspect

from bizadmin.resources.capabilities import SchemaResource
from bizadmin.resources.descriptor import EntityDescriptor

_NAME_TYPES = (
    (("email",), "email"),
    (("password",), "password"),
    (("price", "cost", "amount"), "decimal"),
    (("percentage", "percent", "rate"), "percentage"),
    (("quantity", "count", "number"), "number"),
    (("description", "content", "notes"), "textarea"),
    (("image", "photo", "avatar"), "file"),
)
_TEL_FIELDS = ("phone", "mobile", "whatsapp", "tel")
_URL_FIELDS = ("url", "website", "link")


def field_label(field: str) -> str:
    return field.replace("_", " ").replace("-", " ").title()


def detect_field_type(field: str, column_type=None) -> str:
    if isinstance(column_type, Boolean):
        return "checkbox"
    if isinstance(column_type, Integer):
        return "number"
    # Float subclasses Numeric.
    if isinstance(column_type, Float):
        return "number"
    if isinstance(column_type, Numeric):
        return "decimal"
    if isinstance(column_type, DateTime):
        return "datetime-local"
    if isinstance(column_type, Date):
        return "date"
    if isinstance(column_type, (JSON, Text)):
        return "textarea"

    lowered = field.lower()
    if lowered in _TEL_FIELDS:
        return "tel"
    if lowered in _URL_FIELDS:
        return "url"
    for hints, input_type in _NAME_TYPES:
        if any(hint in lowered for hint in hints):
            return input_type
    return "text"


def _placeholder(field: str) -> str:
    lowered = field.lower()
    if "email" in lowered:
        return "Enter your email address"
    if "password" in lowered:
        return "Enter your password"
    if "phone" in lowered or "mobile" in lowered:
        return "Enter your phone number"
    if "name" in lowered:
        return f"Enter your {field_label(field)}"
    return f"Enter {field_label(field)}"


def _extra_properties(field: str, input_type: str) -> dict:
    lowered = field.lower()
    props: dict = {}
    if "email" in lowered or "username" in lowered:
        props.update(unique=True, maxLength=255)
    if "password" in lowered:
        props["minLength"] = 8
    if any(hint in lowered for hint in ("phone", "mobile", "whatsapp")):
        props.update(pattern="^[0-9]{10,15}$", unique=True)
    if input_type == "decimal":
        props.update(step="0.01", min="0")
    elif input_type == "number":
        props.update(step="1", min="0")
    if input_type == "percentage":
        props.update(min="0", max="100", step="0.01", suffix="%")
    return props


def generate_auto_schema(descriptor: EntityDescriptor) -> dict[str, dict]:
    """Build ``{field: properties}`` for every fillable column of the model."""
    columns = inspect(descriptor.model).columns
    fields: dict[str, dict] = {}
    for field in descriptor.fillable_fields:
        column_type = columns[field].type if field in columns else None
        input_type = detect_field_type(field, column_type)
        fields[field] = {
            "type": input_type,
            "label": field_label(field),
            "placeholder": _placeholder(field),
            "required": False,
            **_extra_properties(field, input_type),
        }
    return fields


def _is_grouped(schema: list | dict) -> bool:
    return (
        isinstance(schema, list)
        and bool(schema)
        and isinstance(schema[0], dict)
        and "group" in schema[0]
        and "fields" in schema[0]
    )


def form_schema(descriptor: EntityDescriptor) -> list | dict:
    """The declared grouped schema as-is, otherwise ``{"properties": {...}}``."""
    model = descriptor.model
    if issubclass(model, SchemaResource):
        declared = model.api_schema()
        if _is_grouped(declared):
            return declared
        if declared:
            return {"properties": declared}
    return {"properties": generate_auto_schema(descriptor)}


def index_columns(descriptor: EntityDescriptor) -> list[dict]:
    return [column.to_dict() for column in descriptor.index_columns]
