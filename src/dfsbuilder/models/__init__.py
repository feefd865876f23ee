"""Player models."""

from .player import (
    PASS_CATCHERS,
    PASS_GAME,
    POSITIONS,
    SKILL_POSITIONS,
    PlayerRecord,
    ValuatedPlayer,
)

__all__ = [
    "PASS_CATCHERS",
    "PASS_GAME",
    "POSITIONS",
    "SKILL_POSITIONS",
    "PlayerRecord",
    "ValuatedPlayer",
]
