"""Checkout request and response schemas."""

from __future__ import annotations

import re
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from storefront.models.order import OrderStatus, ShippingMethod

_NAME_PATTERN = re.compile(r"^(?:[^\W\d_]|[\s'\-])+$")
_PHONE_PATTERN = r"^[\+]?[0-9\s\-\(\)]{10,20}$"


class ShippingInfo(BaseModel):
    """Shipping and contact details captured at checkout."""

    full_name: str = Field(alias="fullName", min_length=2, max_length=100)
    phone: str = Field(pattern=_PHONE_PATTERN)
    email: EmailStr
    address: Optional[str] = Field(default=None, max_length=500)
    method: ShippingMethod

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, populate_by_name=True)

    @field_validator("full_name")
    @classmethod
    def _letters_only(cls, value: str) -> str:
        if not _NAME_PATTERN.match(value):
            raise ValueError("Name can only contain letters, spaces, hyphens, and apostrophes")
        return value

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str) -> str:
        if len(value) > 255:
            raise ValueError("Email must be less than 255 characters")
        return value

    @field_validator("address")
    @classmethod
    def _blank_address_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        if len(value) < 10:
            raise ValueError("Address must be at least 10 characters")
        return value

    @model_validator(mode="after")
    def _delivery_needs_address(self) -> "ShippingInfo":
        if self.method is ShippingMethod.DELIVERY and not self.address:
            raise ValueError("Delivery address is required (min 10 characters)")
        return self


class CheckoutItem(BaseModel):
    product_id: Optional[str] = Field(default=None, alias="productId", max_length=64)
    product_name: str = Field(alias="productName", min_length=1, max_length=255)
    product_price: Decimal = Field(alias="productPrice", ge=0, max_digits=12, decimal_places=2)
    quantity: int = Field(ge=1, le=1000)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, populate_by_name=True)


class CheckoutRequest(BaseModel):
    """Order submission from the storefront checkout."""

    shipping: ShippingInfo
    items: list[CheckoutItem] = Field(min_length=1, max_length=100)
    idempotency_key: Optional[str] = Field(
        default=None,
        alias="idempotencyKey",
        min_length=8,
        max_length=128,
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CheckoutResponse(BaseModel):
    """Returned once to the purchaser; the tracking token is never shown again."""

    order_id: uuid.UUID = Field(serialization_alias="orderId")
    tracking_number: str = Field(serialization_alias="trackingNumber")
    tracking_token: str = Field(serialization_alias="trackingToken")
    status: OrderStatus
    total: Decimal

    model_config = ConfigDict(frozen=True)


__all__ = [
    "CheckoutItem",
    "CheckoutRequest",
    "CheckoutResponse",
    "ShippingInfo",
]
