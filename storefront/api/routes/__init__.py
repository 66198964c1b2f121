"""API route modules."""

from . import admin
from . import checkout
from . import orders
from . import tracking
from . import verification

__all__ = ["admin", "checkout", "orders", "tracking", "verification"]
