"""Application schema exports."""

from .admin import (
    AdminActionResponse,
    CodeListResponse,
    CodeRead,
    CreateCodeRequest,
    UpdateCodeRequest,
    UpdateOrderStatusRequest,
)
from .checkout import CheckoutItem, CheckoutRequest, CheckoutResponse, ShippingInfo
from .orders import OrderItemRead, OrderListResponse, OrderRead
from .tracking import GuestOrderRead, TrackOrderRequest
from .verification import VerifyCodeRequest, VerifyCodeResponse

__all__ = [
    "AdminActionResponse",
    "CheckoutItem",
    "CheckoutRequest",
    "CheckoutResponse",
    "CodeListResponse",
    "CodeRead",
    "CreateCodeRequest",
    "GuestOrderRead",
    "OrderItemRead",
    "OrderListResponse",
    "OrderRead",
    "ShippingInfo",
    "TrackOrderRequest",
    "UpdateCodeRequest",
    "UpdateOrderStatusRequest",
    "VerifyCodeRequest",
    "VerifyCodeResponse",
]
