"""Anonymous guest order tracking route."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.api.dependencies import get_client_address, get_tracking_service
from storefront.api.parsing import ParseOk, ParseResult, json_body
from storefront.schemas.tracking import GuestOrderRead, TrackOrderRequest
from storefront.services.tracking import LookupStatus, TrackingService

router = APIRouter(tags=["tracking"])
logger = logging.getLogger(__name__)

_FAILURES: dict[LookupStatus, tuple[int, str]] = {
    LookupStatus.MISSING: (status.HTTP_400_BAD_REQUEST, "Tracking token is required"),
    LookupStatus.INVALID: (status.HTTP_400_BAD_REQUEST, "Invalid tracking token"),
    LookupStatus.RATE_LIMITED: (status.HTTP_429_TOO_MANY_REQUESTS, "Too many attempts"),
    LookupStatus.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Order not found"),
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "order": None})


@router.post("/track-order")
def track_order(
    parsed: Annotated[ParseResult[TrackOrderRequest], Depends(json_body(TrackOrderRequest))],
    client_address: Annotated[str, Depends(get_client_address)],
    tracking: Annotated[TrackingService, Depends(get_tracking_service)],
) -> JSONResponse:
    """Look up a guest order by its plaintext tracking token."""

    raw_token = parsed.payload.tracking_token if isinstance(parsed, ParseOk) else None
    try:
        result = tracking.lookup(client_address, raw_token)
    except SQLAlchemyError:
        logger.exception("Tracking lookup failed during persistence")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
    except Exception:
        logger.exception("Tracking lookup failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")

    if result.status is LookupStatus.FOUND and result.order is not None:
        order = GuestOrderRead.model_validate(result.order)
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"order": order.model_dump(mode="json", by_alias=True)},
        )

    status_code, message = _FAILURES[result.status]
    return _error(status_code, message)


__all__ = ["router"]
