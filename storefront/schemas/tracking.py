"""Guest order tracking request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from storefront.models.order import OrderStatus, ShippingMethod


class TrackOrderRequest(BaseModel):
    """Only the plaintext tracking token is accepted, never the display number."""

    tracking_token: Optional[StrictStr] = Field(default=None, alias="trackingToken")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GuestOrderRead(BaseModel):
    status: OrderStatus
    shipping_method: ShippingMethod = Field(serialization_alias="shippingMethod")
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True, frozen=True)


__all__ = ["GuestOrderRead", "TrackOrderRequest"]
