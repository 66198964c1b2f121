"""Public API package exports."""

from .dependencies import require_user_id
from storefront.api.routes.admin import router as admin_router
from storefront.api.routes.checkout import router as checkout_router
from storefront.api.routes.orders import router as orders_router
from storefront.api.routes.tracking import router as tracking_router
from storefront.api.routes.verification import router as verification_router

__all__ = [
    "admin_router",
    "checkout_router",
    "orders_router",
    "require_user_id",
    "tracking_router",
    "verification_router",
]
