"""Full order views for owners and administrators."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.models.order import OrderStatus, ShippingMethod


class OrderItemRead(BaseModel):
    id: uuid.UUID
    product_id: Optional[str] = Field(default=None, serialization_alias="productId")
    product_name: str = Field(serialization_alias="productName")
    product_price: Decimal = Field(serialization_alias="productPrice")
    quantity: int

    model_config = ConfigDict(from_attributes=True, frozen=True)


class OrderRead(BaseModel):
    """Authenticated view of an order; never carries the token hash."""

    id: uuid.UUID
    tracking_number: str = Field(serialization_alias="trackingNumber")
    status: OrderStatus
    shipping_method: ShippingMethod = Field(serialization_alias="shippingMethod")
    shipping_full_name: str = Field(serialization_alias="shippingFullName")
    shipping_phone: str = Field(serialization_alias="shippingPhone")
    shipping_email: Optional[str] = Field(default=None, serialization_alias="shippingEmail")
    shipping_address: Optional[str] = Field(default=None, serialization_alias="shippingAddress")
    total: Decimal
    user_id: Optional[str] = Field(default=None, serialization_alias="userId")
    created_at: datetime = Field(serialization_alias="createdAt")
    items: list[OrderItemRead] = []

    model_config = ConfigDict(from_attributes=True, frozen=True)


class OrderListResponse(BaseModel):
    orders: list[OrderRead]

    model_config = ConfigDict(frozen=True)


__all__ = ["OrderItemRead", "OrderListResponse", "OrderRead"]
