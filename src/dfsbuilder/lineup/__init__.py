"""Lineup state and auto-fill policies."""

from .autofill import (
    AutofillResult,
    BestAvailableStrategy,
    CashFloorStrategy,
    FillStrategy,
    SlotSwap,
    autofill,
    get_strategy,
    strategy_names,
)
from .state import LineupChange, LineupState, Occupant, SalaryTotals

__all__ = [
    "AutofillResult",
    "BestAvailableStrategy",
    "CashFloorStrategy",
    "FillStrategy",
    "LineupChange",
    "LineupState",
    "Occupant",
    "SalaryTotals",
    "SlotSwap",
    "autofill",
    "get_strategy",
    "strategy_names",
]
