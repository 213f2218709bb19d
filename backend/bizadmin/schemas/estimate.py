"""Estimate request/response schemas."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from bizadmin.models.enums import EstimateChannel, EstimateStatus


class EstimateCreate(BaseModel):
    number: str = Field(min_length=1, max_length=50)
    date: dt.date
    validity: int = Field(30, ge=0)
    status: EstimateStatus = EstimateStatus.DRAFT
    active: bool = True
    reference: str | None = Field(None, max_length=100)
    customer_id: int | None = None
    salesperson: str | None = Field(None, max_length=100)
    branch_id: int | None = None
    channel: EstimateChannel = EstimateChannel.OFFLINE
    tax_inclusive: bool = False
    customer_billing: dict | None = None
    customer_shipping: dict | None = None
    items: list[dict] | None = None
    subtotal: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2)
    total_tax: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2)
    shipping_charges: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2)
    adjustment: Decimal = Field(Decimal("0.00"), decimal_places=2)
    grand_total: Decimal = Field(Decimal("0.00"), ge=0, decimal_places=2)
    terms: str | None = None
    notes: str | None = None

    model_config = {"extra": "forbid", "use_enum_values": True}


class EstimateUpdate(BaseModel):
    number: str | None = Field(None, min_length=1, max_length=50)
    date: dt.date | None = None
    validity: int | None = Field(None, ge=0)
    status: EstimateStatus | None = None
    active: bool | None = None
    reference: str | None = Field(None, max_length=100)
    customer_id: int | None = None
    salesperson: str | None = Field(None, max_length=100)
    branch_id: int | None = None
    channel: EstimateChannel | None = None
    tax_inclusive: bool | None = None
    customer_billing: dict | None = None
    customer_shipping: dict | None = None
    items: list[dict] | None = None
    subtotal: Decimal | None = Field(None, ge=0, decimal_places=2)
    total_tax: Decimal | None = Field(None, ge=0, decimal_places=2)
    shipping_charges: Decimal | None = Field(None, ge=0, decimal_places=2)
    adjustment: Decimal | None = Field(None, decimal_places=2)
    grand_total: Decimal | None = Field(None, ge=0, decimal_places=2)
    terms: str | None = None
    notes: str | None = None

    model_config = {"extra": "forbid", "use_enum_values": True}


class EstimateRead(BaseModel):
    id: int
    type: str
    number: str
    date: dt.date
    validity: int
    status: str
    active: bool
    reference: str | None
    customer_id: int | None
    salesperson: str | None
    branch_id: int | None
    channel: str
    tax_inclusive: bool
    customer_billing: dict | None
    customer_shipping: dict | None
    items: list | None
    subtotal: Decimal
    total_tax: Decimal
    shipping_charges: Decimal
    adjustment: Decimal
    grand_total: Decimal
    terms: str | None
    notes: str | None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}
