"""Pydantic models for API I/O."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from dfsbuilder.enrichment import DefenseRank, GameOdds, GameWeather, PlayerTrend


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    team: str
    position: str
    salary: int
    avg_points: float
    game_code: Optional[str]
    value: float
    adj_value: float
    is_top_value: bool
    implied_team_total: Optional[float]
    composite_score: float
    floor_score: float
    excluded: bool = False


class PlayerListResponse(BaseModel):
    available: int
    shown: int
    players: List[PlayerResponse]


class LoadResponse(BaseModel):
    players: int


class EnrichmentRequest(BaseModel):
    defense: Optional[Dict[str, DefenseRank]] = None
    odds: Optional[Dict[str, GameOdds]] = None
    weather: Optional[Dict[str, GameWeather]] = None
    trends: Optional[Dict[str, PlayerTrend]] = None


class ContestRequest(BaseModel):
    name: str


class AddPlayerRequest(BaseModel):
    player_id: str
    slot_index: Optional[int] = Field(default=None, ge=0)


class ExclusionRequest(BaseModel):
    player_ids: List[str] = Field(default_factory=list)


class AutofillRequest(BaseModel):
    strategy: Literal["cash", "best_score", "best_value"] = "cash"
    upgrade: Optional[bool] = None


class SlotResponse(BaseModel):
    index: int
    slot: str
    player_id: Optional[str] = None
    name: Optional[str] = None
    team: Optional[str] = None
    position: Optional[str] = None
    salary: Optional[int] = None
    is_captain: bool = False


class LineupResponse(BaseModel):
    contest: str
    salary_cap: int
    salary_used: int
    salary_remaining: int
    filled: int
    open: int
    slots: List[SlotResponse]


class AutofillResponse(BaseModel):
    filled: int
    unfilled: int
    swap: Optional[Dict[str, str | int]] = None
    lineup: LineupResponse


class FindingResponse(BaseModel):
    category: str
    weight: float
    title: str
    detail: str


class AnalysisResponse(BaseModel):
    score: float
    findings: List[FindingResponse]
    by_category: Dict[str, List[FindingResponse]]
