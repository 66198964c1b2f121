"""Admin API routes for verification codes and orders."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.api.dependencies import get_db, require_admin_user_id
from storefront.schemas.admin import (
    AdminActionResponse,
    CodeListResponse,
    CodeRead,
    CreateCodeRequest,
    UpdateCodeRequest,
    UpdateOrderStatusRequest,
)
from storefront.schemas.orders import OrderListResponse, OrderRead
from storefront.services.admin_codes import (
    InvalidVerificationCodeError,
    VerificationCodeExistsError,
    VerificationCodeNotFoundError,
    VerificationCodeResetError,
    create_code,
    delete_code,
    list_codes,
    set_code_used,
)
from storefront.services.admin_orders import (
    OrderNotFoundError,
    list_orders,
    update_order_status,
)


router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin_user_id)],
)


@router.get("/codes", response_model=CodeListResponse)
def get_all_codes(db: Session = Depends(get_db)):
    """List every verification code ordered by id (admin only)."""
    return CodeListResponse(codes=[CodeRead.model_validate(code) for code in list_codes(db)])


@router.post("/codes", response_model=AdminActionResponse)
def create_code_endpoint(
    request: CreateCodeRequest,
    db: Session = Depends(get_db),
    admin_user_id: str = Depends(require_admin_user_id),
):
    """Provision a new verification code (admin only)."""
    try:
        create_code(db, admin_user_id, request.code_id, used=request.used)
    except VerificationCodeExistsError:
        raise HTTPException(status_code=400, detail="Code already exists")
    except InvalidVerificationCodeError:
        raise HTTPException(status_code=400, detail="Invalid code format")
    return AdminActionResponse()


@router.put("/codes/{code_id}", response_model=AdminActionResponse)
def update_code_endpoint(
    code_id: str,
    request: UpdateCodeRequest,
    db: Session = Depends(get_db),
    admin_user_id: str = Depends(require_admin_user_id),
):
    """Mark a code as redeemed by hand (admin only)."""
    try:
        set_code_used(db, admin_user_id, code_id, request.used)
    except VerificationCodeNotFoundError:
        raise HTTPException(status_code=404, detail="Code not found")
    except VerificationCodeResetError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Redeemed codes cannot be reset",
        )
    return AdminActionResponse()


@router.delete("/codes/{code_id}", response_model=AdminActionResponse)
def delete_code_endpoint(
    code_id: str,
    db: Session = Depends(get_db),
    admin_user_id: str = Depends(require_admin_user_id),
):
    try:
        delete_code(db, admin_user_id, code_id)
    except VerificationCodeNotFoundError:
        raise HTTPException(status_code=404, detail="Code not found")
    return AdminActionResponse()


@router.get("/orders", response_model=OrderListResponse)
def get_all_orders(db: Session = Depends(get_db)):
    """List all orders with their items, newest first (admin only)."""
    return OrderListResponse(orders=[OrderRead.model_validate(order) for order in list_orders(db)])


@router.put("/orders/{order_id}/status", response_model=AdminActionResponse)
def update_order_status_endpoint(
    order_id: uuid.UUID,
    request: UpdateOrderStatusRequest,
    db: Session = Depends(get_db),
    admin_user_id: str = Depends(require_admin_user_id),
):
    """Set an order's status without enforcing any sequence (admin only)."""
    try:
        update_order_status(db, admin_user_id, order_id, request.status)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    return AdminActionResponse()


__all__ = ["router"]
