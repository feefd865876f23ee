"""Enrichment feeds consumed by valuation and analysis."""

from .feeds import (
    DefenseRank,
    EnrichmentSnapshot,
    GameOdds,
    GameWeather,
    PlayerTrend,
    classify_trend,
)
from .keys import GameKey, defense_key, game_code, normalize_game_code, parse_game

__all__ = [
    "DefenseRank",
    "EnrichmentSnapshot",
    "GameKey",
    "GameOdds",
    "GameWeather",
    "PlayerTrend",
    "classify_trend",
    "defense_key",
    "game_code",
    "normalize_game_code",
    "parse_game",
]
