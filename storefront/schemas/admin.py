"""Admin panel request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.models.order import OrderStatus


class CreateCodeRequest(BaseModel):
    code_id: str = Field(alias="codeId", min_length=1, max_length=32)
    used: bool = False

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, populate_by_name=True)


class UpdateCodeRequest(BaseModel):
    used: bool

    model_config = ConfigDict(frozen=True)


class CodeRead(BaseModel):
    id: str
    used: bool
    used_at: Optional[datetime] = Field(default=None, serialization_alias="usedAt")
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True, frozen=True)


class CodeListResponse(BaseModel):
    codes: list[CodeRead]

    model_config = ConfigDict(frozen=True)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus

    model_config = ConfigDict(frozen=True)


class AdminActionResponse(BaseModel):
    success: bool = True

    model_config = ConfigDict(frozen=True)


__all__ = [
    "AdminActionResponse",
    "CodeListResponse",
    "CodeRead",
    "CreateCodeRequest",
    "UpdateCodeRequest",
    "UpdateOrderStatusRequest",
]
