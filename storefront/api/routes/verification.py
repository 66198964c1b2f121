"""Product authenticity verification route."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.api.dependencies import (
    get_client_address,
    get_rate_limiter,
    get_verification_service,
)
from storefront.api.parsing import ParseOk, ParseResult, json_body
from storefront.core.config import settings
from storefront.schemas.verification import VerifyCodeRequest, VerifyCodeResponse
from storefront.services.rate_limiter import RateLimiter
from storefront.services.verification import (
    RedemptionOutcome,
    VerificationError,
    VerificationService,
)
from storefront.stores.attempts import VERIFY_CODE_SCOPE

router = APIRouter(tags=["verification"])
logger = logging.getLogger(__name__)


def _respond(status_code: int, body: VerifyCodeResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@router.post("/verify-code")
def verify_code(
    parsed: Annotated[ParseResult[VerifyCodeRequest], Depends(json_body(VerifyCodeRequest))],
    client_address: Annotated[str, Depends(get_client_address)],
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    verifier: Annotated[VerificationService, Depends(get_verification_service)],
) -> JSONResponse:
    """Redeem a product verification code once."""

    try:
        allowed = limiter.record_and_check(
            VERIFY_CODE_SCOPE,
            client_address,
            settings.verify_code_window_seconds,
            settings.verify_code_max_attempts,
        )
        if not allowed:
            return _respond(
                status.HTTP_429_TOO_MANY_REQUESTS,
                VerifyCodeResponse(valid=False, reason="rate_limit_exceeded"),
            )

        if not isinstance(parsed, ParseOk):
            logger.debug("Rejected verify-code body: %s", parsed.reason)
            return _respond(
                status.HTTP_400_BAD_REQUEST,
                VerifyCodeResponse(valid=False, reason="invalid_input"),
            )

        result = verifier.redeem(parsed.payload.code)
    except VerificationError:
        logger.error("Verification aborted on inconsistent code state", exc_info=True)
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            VerifyCodeResponse(valid=False, reason="server_error"),
        )
    except SQLAlchemyError:
        logger.exception("Verification failed during persistence")
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            VerifyCodeResponse(valid=False, reason="server_error"),
        )
    except Exception:
        logger.exception("Verification failed")
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            VerifyCodeResponse(valid=False, reason="server_error"),
        )

    if result.outcome is RedemptionOutcome.SUCCESS:
        return _respond(status.HTTP_200_OK, VerifyCodeResponse(valid=True, code=result.code))
    return _respond(
        status.HTTP_200_OK,
        VerifyCodeResponse(valid=False, reason=result.outcome.value, used_at=result.used_at),
    )


__all__ = ["router"]
