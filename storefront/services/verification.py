"""Product authenticity code redemption."""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from storefront.core.config import settings
from storefront.services.rate_limiter import utc_now
from storefront.stores.codes import CodeStore

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"\d+")


class VerificationError(Exception):
    """Base class for verification failures."""


class VerificationCodeStateError(VerificationError):
    """Raised when a stored code breaks the used/used_at invariant."""


class RedemptionOutcome(str, enum.Enum):
    SUCCESS = "success"
    INVALID_FORMAT = "invalid_format"
    NOT_FOUND = "not_found"
    ALREADY_USED = "already_used"


@dataclass(frozen=True)
class RedemptionResult:
    outcome: RedemptionOutcome
    code: Optional[str] = None
    used_at: Optional[datetime] = None

    @property
    def valid(self) -> bool:
        return self.outcome is RedemptionOutcome.SUCCESS


def normalize_code(raw_code: str, prefix: str | None = None) -> str:
    """Canonicalize user input into the ``PREFIX-###`` form.

    ``"7"``, ``"007"`` and ``"drx-egy-007"`` all become ``"DRX-EGY-007"``.
    Input without a digit run is returned trimmed and upper-cased so the
    format check rejects it.
    """

    prefix = prefix or settings.verification_code_prefix
    clean_code = raw_code.strip().upper()
    if not clean_code.startswith(prefix):
        digits = _DIGITS.search(clean_code)
        if digits:
            clean_code = f"{prefix}{digits.group(0).zfill(3)}"
    return clean_code


class VerificationService:
    """Redeems verification codes at most once each."""

    def __init__(
        self,
        codes: CodeStore,
        prefix: str | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._codes = codes
        self._prefix = prefix or settings.verification_code_prefix
        self._pattern = re.compile(rf"^{re.escape(self._prefix)}\d{{3}}$")
        self._clock = clock

    def normalize(self, raw_code: str) -> str:
        return normalize_code(raw_code, self._prefix)

    def is_well_formed(self, code: str) -> bool:
        return bool(self._pattern.match(code))

    def redeem(self, raw_code: str) -> RedemptionResult:
        """Normalize, validate and redeem a code.

        The conditional update in ``CodeStore.mark_used`` is the only write;
        the follow-up read merely explains why it matched nothing.
        """

        code = self.normalize(raw_code)
        if not self.is_well_formed(code):
            return RedemptionResult(RedemptionOutcome.INVALID_FORMAT)

        try:
            redeemed = self._codes.mark_used(code, self._clock())
            if redeemed:
                self._codes.commit()
                logger.info("Verification code %s redeemed", code)
                return RedemptionResult(RedemptionOutcome.SUCCESS, code=code)

            record = self._codes.get(code)
        except Exception:
            self._codes.rollback()
            raise

        if record is None:
            return RedemptionResult(RedemptionOutcome.NOT_FOUND)
        if not record.used or record.used_at is None:
            logger.error(
                "Verification code %s in inconsistent state (used=%s, used_at set=%s)",
                code,
                record.used,
                record.used_at is not None,
            )
            raise VerificationCodeStateError(f"Code {code} is in an inconsistent state.")
        return RedemptionResult(RedemptionOutcome.ALREADY_USED, code=code, used_at=record.used_at)


__all__ = [
    "RedemptionOutcome",
    "RedemptionResult",
    "VerificationCodeStateError",
    "VerificationError",
    "VerificationService",
    "normalize_code",
]
