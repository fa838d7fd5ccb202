"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Request payload validation. JSON bodies are turned into typed submissions
before any business logic runs; failures become field-level error maps.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional

import pydantic
from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email

from errors import ValidationError

FulfillmentType = Literal["pickup", "delivery", "reservation"]
OrderStatus = Literal["pending", "confirmed", "preparing", "ready", "completed", "cancelled"]

OPTIONAL_FIELDS = (
    "customer_phone",
    "delivery_address",
    "delivery_city",
    "delivery_state",
    "delivery_postal_code",
    "scheduled_date_time",
    "notes",
)


def _checked_email(value):
    # Validate only; the address is kept exactly as typed (minus outer spaces)
    validate_email(value)
    return value


TypedEmail = Annotated[str, AfterValidator(_checked_email)]


class CartItem(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    size: str = Field(..., min_length=1, max_length=120)
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(
        ...,
        ge=0,
        max_digits=10,
        decimal_places=2,
        validation_alias=AliasChoices("unitPrice", "unit_price"),
    )


class ContactDetails(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None


class OrderSubmission(BaseModel):
    # Client-side subtotal/tax/total fields are dropped here on purpose
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    items: List[CartItem] = Field(..., min_length=1)
    type: FulfillmentType
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: TypedEmail = Field(..., max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=20)

    delivery_address: Optional[str] = Field(None, max_length=500)
    delivery_city: Optional[str] = Field(None, max_length=100)
    delivery_state: Optional[str] = Field(None, max_length=100)
    delivery_postal_code: Optional[str] = Field(None, max_length=20)

    scheduled_date_time: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator(*OPTIONAL_FIELDS, mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # The checkout form posts untouched optional inputs as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def contact(self):
        return ContactDetails(
            name=self.customer_name,
            email=self.customer_email,
            phone=self.customer_phone or None,
        )


class OrderUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    status: Optional[OrderStatus] = None
    admin_notes: Optional[str] = Field(None, max_length=5000)


def field_errors(exc):
    errors = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "general"
        errors.setdefault(field, []).append(err["msg"])
    return errors


def _validate(model, payload):
    if not isinstance(payload, dict):
        raise ValidationError.single("general", "Request body must be a JSON object.")
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(field_errors(exc)) from exc


def parse_submission(payload):
    errors = {}
    submission = None
    try:
        submission = _validate(OrderSubmission, payload)
    except ValidationError as exc:
        errors.update(exc.errors)

    # The delivery address is only required for delivery orders
    if isinstance(payload, dict) and payload.get("type") == "delivery":
        address = payload.get("delivery_address")
        if not isinstance(address, str) or not address.strip():
            errors.setdefault("delivery_address", []).append(
                "The delivery address is required for delivery orders."
            )
    if errors:
        raise ValidationError(errors)
    return submission


def parse_update(payload):
    return _validate(OrderUpdate, payload)
