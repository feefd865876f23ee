"""Configuration helpers for contests and tuning thresholds."""

from .contest import CAPTAIN_SLOT, FLEX_SLOT, ContestConfig, get_contest, iter_contests
from .settings import AutofillSettings, ValuationSettings

__all__ = [
    "AutofillSettings",
    "CAPTAIN_SLOT",
    "ContestConfig",
    "FLEX_SLOT",
    "ValuationSettings",
    "get_contest",
    "iter_contests",
]
