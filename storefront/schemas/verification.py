"""Verification code request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class VerifyCodeRequest(BaseModel):
    code: StrictStr = Field(min_length=1, max_length=64)

    model_config = ConfigDict(frozen=True)


class VerifyCodeResponse(BaseModel):
    """Wire shape of the verify-code endpoint; unset fields are omitted."""

    valid: bool
    code: Optional[str] = None
    reason: Optional[str] = None
    used_at: Optional[datetime] = Field(default=None, serialization_alias="usedAt")

    model_config = ConfigDict(frozen=True)


__all__ = ["VerifyCodeRequest", "VerifyCodeResponse"]
