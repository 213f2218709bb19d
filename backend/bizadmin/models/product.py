"""Product catalogue model."""

from decimal import Decimal

from sqlalchemy import JSON, Boolean, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizadmin.models.base import ResourceModel
from bizadmin.models.enums import ProductType, ProductUnit, PublicationStatus, enum_values
from bizadmin.resources.capabilities import (
    IndexColumn,
    IndexColumnsResource,
    SchemaResource,
)


def _options(values: tuple[str, ...]) -> list[dict]:
    return [{"value": v, "label": v.replace("_", " ").title()} for v in values]


def _money(label: str, required: bool = False) -> dict:
    return {
        "label": label,
        "placeholder": "0.00",
        "required": required,
        "default": "0.00",
        "min": "0",
        "step": "0.01",
    }


class Product(IndexColumnsResource, SchemaResource, ResourceModel):
    __tablename__ = "products"
    __fillable__ = (
        "name", "slug", "type", "publication_status", "active",
        "description", "short_description", "sku", "barcode", "brand",
        "cost", "mrp", "price", "sale_price",
        "taxable", "tax_hsn_code", "tax_rate", "tax_inclusive",
        "stock_track", "stock_quantity", "stock_low_threshold",
        "unit", "image", "external_url", "categories", "tags",
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    type: Mapped[str] = mapped_column(
        String(20), default=ProductType.SIMPLE.value, server_default=ProductType.SIMPLE.value
    )
    publication_status: Mapped[str] = mapped_column(
        String(20), default=PublicationStatus.DRAFT.value,
        server_default=PublicationStatus.DRAFT.value,
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, server_default="1")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sku: Mapped[str | None] = mapped_column(String(100), nullable=True)
    barcode: Mapped[str | None] = mapped_column(String(100), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Pricing
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"))
    mrp: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"))
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"))
    sale_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"))

    # Tax
    taxable: Mapped[bool] = mapped_column(Boolean, default=True)
    tax_hsn_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("18.00"))
    tax_inclusive: Mapped[bool] = mapped_column(Boolean, default=True)

    # Stock
    stock_track: Mapped[bool] = mapped_column(Boolean, default=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, default=0)
    stock_low_threshold: Mapped[int] = mapped_column(Integer, default=0)

    unit: Mapped[str] = mapped_column(String(20), default=ProductUnit.NOS.value)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    external_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    categories: Mapped[list | None] = mapped_column(JSON, nullable=True)
    tags: Mapped[list | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        Index("ix_products_sku", "sku"),
        Index("ix_products_active", "active"),
    )

    @classmethod
    def index_columns(cls) -> list[IndexColumn]:
        return [
            IndexColumn("name", "Product Name", sortable=True, clickable=True),
            IndexColumn("sku", "SKU"),
            IndexColumn("cost", "Cost", format="currency", align="right"),
            IndexColumn("price", "Price", sortable=True, format="currency", align="right"),
            IndexColumn("mrp", "MRP", format="currency", align="right"),
            IndexColumn("stock_quantity", "Stock", sortable=True, format="number"),
        ]

    @classmethod
    def api_schema(cls) -> list[dict]:
        return [
            {
                "group": "General Information",
                "fields": {
                    "active": {"type": "checkbox", "label": "Active", "required": False,
                               "default": True},
                    "name": {"label": "Product Name", "placeholder": "Enter product name",
                             "required": True, "maxLength": 255},
                    "slug": {"label": "URL Slug", "placeholder": "auto-generated-from-name",
                             "required": True, "maxLength": 255},
                    "type": {"type": "select", "label": "Product Type",
                             "options": _options(enum_values(ProductType)),
                             "required": True, "default": ProductType.SIMPLE.value},
                    "publication_status": {"type": "select", "label": "Publication Status",
                                           "options": _options(enum_values(PublicationStatus)),
                                           "required": True,
                                           "default": PublicationStatus.DRAFT.value},
                    "sku": {"label": "SKU", "placeholder": "Enter SKU code", "required": False,
                            "maxLength": 100},
                    "barcode": {"label": "Barcode", "placeholder": "Enter barcode",
                                "required": False, "maxLength": 100},
                    "brand": {"label": "Brand", "placeholder": "Enter brand name",
                              "required": False},
                    "unit": {"type": "select", "label": "Unit",
                             "options": _options(enum_values(ProductUnit)),
                             "required": False, "default": ProductUnit.NOS.value},
                    "external_url": {"label": "External URL", "required": False,
                                     "maxLength": 500},
                },
            },
            {
                "group": "Price & Inventory",
                "fields": {
                    "cost": _money("Cost Price"),
                    "mrp": _money("MRP"),
                    "price": _money("Regular Price", required=True),
                    "sale_price": _money("Sale Price"),
                    "stock_track": {"type": "checkbox", "label": "Track Stock",
                                    "required": False, "default": False},
                    "stock_quantity": {"type": "number", "label": "Stock Quantity",
                                       "default": "0", "min": "0", "step": "1",
                                       "required": False},
                    "stock_low_threshold": {"type": "number", "label": "Low Stock Threshold",
                                            "default": "0", "min": "0", "step": "1",
                                            "required": False},
                },
            },
            {
                "group": "TAX",
                "fields": {
                    "taxable": {"type": "checkbox", "label": "Taxable", "required": False,
                                "default": True},
                    "tax_hsn_code": {"label": "HSN Code", "placeholder": "Enter HSN code",
                                     "required": False, "maxLength": 20},
                    "tax_rate": {"type": "number", "label": "Tax Rate (%)", "default": "18.00",
                                 "min": "0", "max": "100", "step": "0.01", "suffix": "%",
                                 "required": False},
                    "tax_inclusive": {"type": "checkbox", "label": "Tax Inclusive",
                                      "required": False, "default": True},
                },
            },
        ]
