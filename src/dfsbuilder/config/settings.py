"""Tunable thresholds for valuation and lineup assignment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable

from dfsbuilder.models import PlayerRecord


logger = logging.getLogger(__name__)

_TOP_VALUE_FRACTION_ENV = "DFSBUILDER_TOP_VALUE_FRACTION"
_SLOT_RESERVE_ENV = "DFSBUILDER_SLOT_RESERVE"
_LOW_TOTAL_ENV = "DFSBUILDER_LOW_GAME_TOTAL"

_TOP_VALUE_FRACTION_DEFAULT = 0.10
_CONSISTENCY_DEFAULT = 50.0


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def constant_consistency(_player: PlayerRecord) -> float:
    """Placeholder consistency term until game-log variance data is wired in."""

    return _CONSISTENCY_DEFAULT


@dataclass(frozen=True)
class ValuationSettings:
    top_value_fraction: float = _TOP_VALUE_FRACTION_DEFAULT
    consistency: Callable[[PlayerRecord], float] = constant_consistency

    @classmethod
    def from_env(cls) -> "ValuationSettings":
        fraction = _env_float(
            _TOP_VALUE_FRACTION_ENV,
            _TOP_VALUE_FRACTION_DEFAULT,
            clamp_min=0.01,
            clamp_max=1.0,
        )
        logger.info("Top-value flag uses the top %.0f%% of each position", fraction * 100)
        return cls(top_value_fraction=fraction)


@dataclass(frozen=True)
class AutofillSettings:
    slot_reserve: int = 3000
    low_game_total: float = 42.0
    high_game_total: float = 48.0
    max_per_game: int = 3
    stack_boost: float = 1.15
    high_total_boost: float = 1.08
    bad_weather_factor: float = 0.85
    indoor_boost: float = 1.03
    flex_rb_boost: float = 1.02

    @classmethod
    def from_env(cls) -> "AutofillSettings":
        return cls(
            slot_reserve=_env_int(_SLOT_RESERVE_ENV, 3000, min_value=0),
            low_game_total=_env_float(_LOW_TOTAL_ENV, 42.0, clamp_min=0.0),
        )
