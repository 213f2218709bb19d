"""Sales estimate model."""

import datetime as dt
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Date, Index, Integer, Numeric, Select, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bizadmin.models.base import ResourceModel
from bizadmin.models.enums import EstimateChannel, EstimateStatus, enum_values
from bizadmin.resources.capabilities import (
    FilterableResource,
    FilterSpec,
    IndexColumn,
    IndexColumnsResource,
    SchemaResource,
    SearchableResource,
)


def _salesperson_scope(query: Select, value: str | list[str]) -> Select:
    """Salesperson names are typed by hand, so match them case-insensitively."""
    column = func.lower(Estimate.salesperson)
    if isinstance(value, list):
        return query.where(column.in_([v.lower() for v in value]))
    return query.where(column == value.lower())


class Estimate(
    FilterableResource,
    SearchableResource,
    IndexColumnsResource,
    SchemaResource,
    ResourceModel,
):
    __tablename__ = "estimates"
    __fillable__ = (
        "type", "number", "date", "validity", "status", "active", "reference",
        "customer_id", "salesperson", "branch_id", "channel", "tax_inclusive",
        "customer_billing", "customer_shipping", "items",
        "subtotal", "total_tax", "shipping_charges", "adjustment", "grand_total",
        "terms", "notes",
    )

    type: Mapped[str] = mapped_column(String(20), default="estimate")
    number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    validity: Mapped[int] = mapped_column(Integer, default=30)
    status: Mapped[str] = mapped_column(
        String(20), default=EstimateStatus.DRAFT.value,
        server_default=EstimateStatus.DRAFT.value, nullable=False,
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, server_default="1")
    reference: Mapped[str | None] = mapped_column(String(100), nullable=True)
    customer_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    salesperson: Mapped[str | None] = mapped_column(String(100), nullable=True)
    branch_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    channel: Mapped[str] = mapped_column(
        String(20), default=EstimateChannel.OFFLINE.value, nullable=False
    )
    tax_inclusive: Mapped[bool] = mapped_column(Boolean, default=False)

    customer_billing: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    customer_shipping: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    items: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # Totals
    subtotal: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))
    total_tax: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))
    shipping_charges: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))
    adjustment: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))
    grand_total: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"))

    terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_estimates_status", "status"),
        Index("ix_estimates_date", "date"),
    )

    @classmethod
    def api_filters(cls) -> dict[str, FilterSpec]:
        return {
            "status": FilterSpec(values=enum_values(EstimateStatus), label="Status"),
            "channel": FilterSpec(values=enum_values(EstimateChannel), label="Channel"),
            "salesperson": FilterSpec(label="Salesperson", handler=_salesperson_scope),
        }

    @classmethod
    def searchable_fields(cls) -> list[str]:
        return ["number", "reference", "salesperson", "status"]

    @classmethod
    def index_columns(cls) -> list[IndexColumn]:
        return [
            IndexColumn("number", "Estimate Number", sortable=True, clickable=True),
            IndexColumn("date", "Date", sortable=True, format="date"),
            IndexColumn("customer_id", "Customer", sortable=True),
            IndexColumn("status", "Status", sortable=True),
            IndexColumn("salesperson", "Salesperson", sortable=True),
            IndexColumn("grand_total", "Total Amount", sortable=True, format="currency",
                        align="right"),
            IndexColumn("validity", "Validity (Days)", sortable=True, format="number",
                        align="center"),
            IndexColumn("active", "Active", sortable=True, format="boolean", align="center"),
        ]

    @classmethod
    def api_schema(cls) -> list[dict]:
        return [
            {
                "group": "Estimate Details",
                "fields": [
                    {"field": "number", "label": "Estimate Number", "type": "string",
                     "required": True, "maxLength": 50},
                    {"field": "date", "label": "Date", "type": "date", "required": True},
                    {"field": "validity", "label": "Validity (Days)", "type": "number",
                     "required": False, "default": 30, "min": 0},
                    {"field": "status", "label": "Status", "type": "select", "required": True,
                     "options": [{"value": v, "label": v.title()}
                                 for v in enum_values(EstimateStatus)],
                     "default": EstimateStatus.DRAFT.value},
                    {"field": "channel", "label": "Channel", "type": "select", "required": True,
                     "options": [{"value": v, "label": v} for v in enum_values(EstimateChannel)],
                     "default": EstimateChannel.OFFLINE.value},
                    {"field": "salesperson", "label": "Salesperson", "type": "string",
                     "required": False},
                    {"field": "reference", "label": "Reference", "type": "string",
                     "required": False},
                ],
            },
            {
                "group": "Customer",
                "fields": [
                    {"field": "customer_id", "label": "Customer", "type": "number",
                     "required": False},
                    {"field": "customer_billing", "label": "Billing Address", "type": "object",
                     "required": False},
                    {"field": "customer_shipping", "label": "Shipping Address", "type": "object",
                     "required": False},
                ],
            },
            {
                "group": "Items & Totals",
                "fields": [
                    {"field": "items", "label": "Line Items", "type": "array", "required": False},
                    {"field": "tax_inclusive", "label": "Tax Inclusive", "type": "checkbox",
                     "required": False, "default": False},
                    {"field": "grand_total", "label": "Grand Total", "type": "decimal",
                     "required": False, "min": 0},
                ],
            },
            {
                "group": "Notes",
                "fields": [
                    {"field": "terms", "label": "Terms & Conditions", "type": "textarea",
                     "required": False},
                    {"field": "notes", "label": "Notes", "type": "textarea", "required": False},
                ],
            },
        ]
