"""ORM model exports."""

from .admin_audit_log import AdminAuditLog
from .lookup_attempt import LookupAttempt
from .order import Order, OrderItem, OrderStatus, ShippingMethod
from .user_role import UserRole
from .verification_code import VerificationCode

__all__ = [
	"AdminAuditLog",
	"LookupAttempt",
	"Order",
	"OrderItem",
	"OrderStatus",
	"ShippingMethod",
	"UserRole",
	"VerificationCode",
]
