"""Persistence ports wrapping a SQLAlchemy session."""

from .attempts import TRACK_ORDER_SCOPE, VERIFY_CODE_SCOPE, AttemptStore
from .codes import CodeStore
from .orders import OrderStore

__all__ = [
    "AttemptStore",
    "CodeStore",
    "OrderStore",
    "TRACK_ORDER_SCOPE",
    "VERIFY_CODE_SCOPE",
]
