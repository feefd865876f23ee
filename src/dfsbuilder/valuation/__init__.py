"""Player valuation engine."""

from .engine import top_value_threshold, valuate_player, valuate_pool

__all__ = ["top_value_threshold", "valuate_player", "valuate_pool"]
