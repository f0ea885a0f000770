"""API routes package"""

from . import health, pizza

__all__ = ["health", "pizza"]
