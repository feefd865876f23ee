"""Canonical player models shared across ingestion, valuation and lineup layers."""

from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


POSITIONS: tuple[str, ...] = ("QB", "RB", "WR", "TE", "DST")
PASS_CATCHERS = frozenset({"WR", "TE"})
PASS_GAME = frozenset({"QB", "WR", "TE"})
SKILL_POSITIONS = frozenset({"RB", "WR", "TE"})

Trend = Literal["hot", "cold", "neutral"]


class PlayerRecord(BaseModel):
    """Normalized player payload produced by ingestion."""

    player_id: str = Field(..., min_length=1)
    name: str
    team: str
    position: str
    salary: int = Field(..., ge=0)
    avg_points: float = Field(default=0.0, ge=0.0)
    game: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("team", "position")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def is_defense(self) -> bool:
        return self.position == "DST"


class ValuatedPlayer(PlayerRecord):
    """Player record with the metrics written by the valuation engine."""

    value: float = 0.0
    is_top_value: bool = False
    matchup_multiplier: float = 1.0
    adj_value: float = 0.0
    game_code: str | None = None
    opponent: str | None = None
    implied_team_total: float | None = None
    team_spread: float | None = None
    game_total: float | None = None
    composite_score: float = 50.0
    floor_score: float = 0.0
    trend: Trend = "neutral"
