"""Product request/response schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bizadmin.models.enums import ProductType, ProductUnit, PublicationStatus


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    type: ProductType = ProductType.SIMPLE
    publication_status: PublicationStatus = PublicationStatus.DRAFT
    active: bool = True
    description: str | None = None
    short_description: str | None = None
    sku: str | None = Field(None, max_length=100)
    barcode: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=255)
    cost: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2)
    mrp: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2)
    price: Decimal = Field(ge=0, decimal_places=2)
    sale_price: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2)
    taxable: bool = True
    tax_hsn_code: str | None = Field(None, max_length=20)
    tax_rate: Decimal = Field(Decimal("18.00"), ge=0, le=100, decimal_places=2)
    tax_inclusive: bool = True
    stock_track: bool = False
    stock_quantity: int = Field(0, ge=0)
    stock_low_threshold: int = Field(0, ge=0)
    unit: ProductUnit = ProductUnit.NOS
    image: str | None = Field(None, max_length=500)
    external_url: str | None = Field(None, max_length=500)
    categories: list[str] | None = None
    tags: list[str] | None = None

    model_config = {"extra": "forbid", "use_enum_values": True}


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255,
                             pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    type: ProductType | None = None
    publication_status: PublicationStatus | None = None
    active: bool | None = None
    description: str | None = None
    short_description: str | None = None
    sku: str | None = Field(None, max_length=100)
    barcode: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=255)
    cost: Decimal | None = Field(None, ge=0, decimal_places=2)
    mrp: Decimal | None = Field(None, ge=0, decimal_places=2)
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    sale_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    taxable: bool | None = None
    tax_hsn_code: str | None = Field(None, max_length=20)
    tax_rate: Decimal | None = Field(None, ge=0, le=100, decimal_places=2)
    tax_inclusive: bool | None = None
    stock_track: bool | None = None
    stock_quantity: int | None = Field(None, ge=0)
    stock_low_threshold: int | None = Field(None, ge=0)
    unit: ProductUnit | None = None
    image: str | None = Field(None, max_length=500)
    external_url: str | None = Field(None, max_length=500)
    categories: list[str] | None = None
    tags: list[str] | None = None

    model_config = {"extra": "forbid", "use_enum_values": True}


class ProductRead(BaseModel):
    id: int
    name: str
    slug: str
    type: str
    publication_status: str
    active: bool
    description: str | None
    short_description: str | None
    sku: str | None
    barcode: str | None
    brand: str | None
    cost: Decimal
    mrp: Decimal
    price: Decimal
    sale_price: Decimal
    taxable: bool
    tax_hsn_code: str | None
    tax_rate: Decimal
    tax_inclusive: bool
    stock_track: bool
    stock_quantity: int
    stock_low_threshold: int
    unit: str
    image: str | None
    external_url: str | None
    categories: list | None
    tags: list | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
