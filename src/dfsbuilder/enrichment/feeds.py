"""Enrichment payloads (defense ranks, odds, weather, trends) and their snapshot."""

from __future__ import annotations

import logging
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from .keys import GameKey, defense_key, normalize_game_code, split_defense_key


logger = logging.getLogger(__name__)

HOT_VALUE_THRESHOLD = 2.5
COLD_VALUE_THRESHOLD = 1.5


class DefenseRank(BaseModel):
    rank: int = Field(..., ge=1)
    total: Optional[int] = Field(default=None, ge=1)
    value: Optional[float] = Field(default=None, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)


class GameOdds(BaseModel):
    """Market line for one game; ``spread`` is quoted for the home team."""

    spread: Optional[float] = Field(default=None, allow_inf_nan=False)
    total: Optional[float] = Field(default=None, ge=0.0, allow_inf_nan=False)
    implied_home: Optional[float] = Field(default=None, allow_inf_nan=False)
    implied_away: Optional[float] = Field(default=None, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    def team_spread(self, key: GameKey, team: str) -> Optional[float]:
        side = key.side(team)
        if side is None or self.spread is None:
            return None
        return self.spread if side == "home" else -self.spread

    def implied_total(self, key: GameKey, team: str) -> Optional[float]:
        side = key.side(team)
        if side is None:
            return None
        explicit = self.implied_home if side == "home" else self.implied_away
        if explicit is not None:
            return explicit
        if self.total is None:
            return None
        spread = self.team_spread(key, team) or 0.0
        return self.total / 2.0 - spread / 2.0


class GameWeather(BaseModel):
    conditions: str = ""
    indoor: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def is_wet(self) -> bool:
        text = self.conditions.lower()
        return not self.indoor and ("rain" in text or "snow" in text)


class PlayerTrend(BaseModel):
    trend: Literal["hot", "cold", "neutral"] = "neutral"
    volume: Optional[float] = None

    model_config = ConfigDict(frozen=True)


def classify_trend(value: float) -> Literal["hot", "cold", "neutral"]:
    """Trend bucket for a base value, as published by the trend feed."""

    if value > HOT_VALUE_THRESHOLD:
        return "hot"
    if value < COLD_VALUE_THRESHOLD:
        return "cold"
    return "neutral"


class EnrichmentSnapshot(BaseModel):
    """Point-in-time view of every enrichment source; each map may be empty."""

    defense: Dict[str, DefenseRank] = Field(default_factory=dict)
    odds: Dict[str, GameOdds] = Field(default_factory=dict)
    weather: Dict[str, GameWeather] = Field(default_factory=dict)
    trends: Dict[str, PlayerTrend] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("odds", "weather", mode="before")
    @classmethod
    def _normalize_game_keys(cls, value):
        if not isinstance(value, dict):
            return value
        return {normalize_game_code(str(key)): item for key, item in value.items()}

    @field_validator("defense", mode="before")
    @classmethod
    def _normalize_defense_keys(cls, value):
        if not isinstance(value, dict):
            return value
        normalized = {}
        for key, item in value.items():
            try:
                team, position = split_defense_key(str(key))
            except ValueError:
                logger.debug("Ignoring malformed defense key %r", key)
                continue
            normalized[defense_key(team, position)] = item
        return normalized

    def defense_for(self, team: str, position: str) -> Optional[DefenseRank]:
        return self.defense.get(defense_key(team, position))

    def ranked_count(self, position: str) -> int:
        suffix = f"_{position.upper()}"
        return sum(1 for key in self.defense if key.endswith(suffix))

    def odds_for(self, key: GameKey | None) -> Optional[GameOdds]:
        return self.odds.get(key.code) if key else None

    def weather_for(self, key: GameKey | None) -> Optional[GameWeather]:
        return self.weather.get(key.code) if key else None

    def trend_for(self, player_id: str) -> Optional[PlayerTrend]:
        return self.trends.get(player_id)

    def replace(self, **maps) -> "EnrichmentSnapshot":
        """Return a snapshot with the given maps swapped in wholesale."""

        payload = {
            "defense": self.defense,
            "odds": self.odds,
            "weather": self.weather,
            "trends": self.trends,
        }
        for name, value in maps.items():
            if name not in payload:
                raise KeyError(f"Unknown enrichment source {name!r}")
            if value is not None:
                payload[name] = value
        return EnrichmentSnapshot(**payload)
