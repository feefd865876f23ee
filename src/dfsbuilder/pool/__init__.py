"""Player pool display utilities."""

from .view import PoolCriteria, PoolRow, PoolView, view_pool

__all__ = ["PoolCriteria", "PoolRow", "PoolView", "view_pool"]
