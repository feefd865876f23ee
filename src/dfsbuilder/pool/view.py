"""Helpers for slicing the valuated player pool into a displayed ordering."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean
from typing import Literal, Sequence

from dfsbuilder.config import CAPTAIN_SLOT, FLEX_SLOT, ContestConfig
from dfsbuilder.models import ValuatedPlayer


SortKey = Literal["score", "value", "adj_value", "floor", "salary", "points", "name"]


@dataclass(frozen=True)
class PoolCriteria:
    """Filtering configuration for the player list."""

    tab: str = "ALL"
    search: str = ""
    sort_by: SortKey = "score"
    sort_direction: Literal["asc", "desc"] = "desc"
    hide_excluded: bool = False
    excluded_ids: tuple[str, ...] = ()
    top_value_only: bool = False
    limit: int | None = None


@dataclass(frozen=True)
class PoolRow:
    player: ValuatedPlayer
    rank: int
    excluded: bool


@dataclass(frozen=True)
class PoolView:
    rows: list[PoolRow]
    available: int
    shown: int
    average_score: float | None


def _matches_tab(player: ValuatedPlayer, tab: str, contest: ContestConfig | None) -> bool:
    tab = tab.upper()
    if tab in {"ALL", CAPTAIN_SLOT}:
        return True
    if tab == FLEX_SLOT:
        flex = contest.flex_positions if contest is not None else frozenset({"RB", "WR", "TE"})
        return player.position in flex
    return player.position == tab


def _passes_criteria(player: ValuatedPlayer, criteria: PoolCriteria, contest: ContestConfig | None) -> bool:
    if not _matches_tab(player, criteria.tab, contest):
        return False
    if criteria.hide_excluded and player.player_id in criteria.excluded_ids:
        return False
    if criteria.top_value_only and not player.is_top_value:
        return False
    needle = criteria.search.strip().lower()
    if needle and needle not in player.name.lower() and needle != player.team.lower():
        return False
    return True


def _sort_key(player: ValuatedPlayer, criteria: PoolCriteria) -> float | str:
    if criteria.sort_by == "value":
        return player.value
    if criteria.sort_by == "adj_value":
        return player.adj_value
    if criteria.sort_by == "floor":
        return player.floor_score
    if criteria.sort_by == "salary":
        return float(player.salary)
    if criteria.sort_by == "points":
        return player.avg_points
    if criteria.sort_by == "name":
        return player.name.lower()
    # Default to composite score
    return player.composite_score


def view_pool(
    players: Sequence[ValuatedPlayer],
    criteria: PoolCriteria | None = None,
    contest: ContestConfig | None = None,
) -> PoolView:
    """Filter and order players for display."""

    criteria = criteria or PoolCriteria()
    filtered = [player for player in players if _passes_criteria(player, criteria, contest)]

    reverse = criteria.sort_direction != "asc"
    filtered.sort(key=lambda p: p.player_id, reverse=reverse)
    filtered.sort(key=lambda p: _sort_key(p, criteria), reverse=reverse)

    limit = criteria.limit if criteria.limit is not None and criteria.limit > 0 else None
    selected = filtered[:limit] if limit is not None else filtered

    excluded = set(criteria.excluded_ids)
    rows = [
        PoolRow(player=player, rank=index, excluded=player.player_id in excluded)
        for index, player in enumerate(selected, start=1)
    ]
    average = fmean(player.composite_score for player in selected) if selected else None
    return PoolView(rows=rows, available=len(filtered), shown=len(rows), average_score=average)
