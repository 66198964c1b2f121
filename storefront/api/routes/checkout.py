"""Checkout route issuing the order's tracking token."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.api.dependencies import get_checkout_service, get_optional_user_id
from storefront.api.limiter import limiter
from storefront.core.config import settings
from storefront.schemas.checkout import CheckoutRequest, CheckoutResponse
from storefront.services.checkout import CheckoutService, DuplicateCheckoutError

router = APIRouter(tags=["checkout"])
logger = logging.getLogger(__name__)


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.checkout_rate_limit)
def place_order(
    request: Request,
    payload: CheckoutRequest,
    checkout: Annotated[CheckoutService, Depends(get_checkout_service)],
    user_id: Annotated[Optional[str], Depends(get_optional_user_id)],
):
    """Create an order and hand the purchaser its tracking token, once."""

    try:
        issued = checkout.place_order(payload, owner_user_id=user_id)
    except DuplicateCheckoutError as exc:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "trackingNumber": exc.tracking_number},
        )
    except SQLAlchemyError as exc:
        logger.exception("Checkout failed during persistence")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        ) from exc

    return CheckoutResponse(
        order_id=issued.order.id,
        tracking_number=issued.tracking_number,
        tracking_token=issued.tracking_token,
        status=issued.order.status,
        total=issued.order.total,
    )


__all__ = ["router"]
