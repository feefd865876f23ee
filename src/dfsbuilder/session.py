"""Draft session: the explicit context every core operation runs against."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Sequence

from dfsbuilder.analysis import AnalysisReport, analyze_lineup
from dfsbuilder.config import AutofillSettings, ContestConfig, ValuationSettings, get_contest
from dfsbuilder.config.contest import DEFAULT_CONTEST
from dfsbuilder.enrichment import EnrichmentSnapshot
from dfsbuilder.lineup import AutofillResult, FillStrategy, LineupChange, LineupState, SalaryTotals, autofill
from dfsbuilder.models import PlayerRecord, ValuatedPlayer
from dfsbuilder.pool import PoolCriteria, PoolView, view_pool
from dfsbuilder.valuation import valuate_pool


logger = logging.getLogger(__name__)


@dataclass
class DraftSession:
    """Owns the pool, enrichment, contest, lineup and exclusions for one user."""

    contest: ContestConfig = field(default_factory=lambda: get_contest(DEFAULT_CONTEST))
    players: List[PlayerRecord] = field(default_factory=list)
    enrichment: EnrichmentSnapshot = field(default_factory=EnrichmentSnapshot)
    excluded: set[str] = field(default_factory=set)
    valuation_settings: ValuationSettings = field(default_factory=ValuationSettings)
    autofill_settings: AutofillSettings = field(default_factory=AutofillSettings)
    valuated: List[ValuatedPlayer] = field(default_factory=list, init=False)
    lineup: LineupState = field(init=False)

    def __post_init__(self) -> None:
        self.lineup = LineupState.empty(self.contest)
        self.recompute()

    def recompute(self) -> List[ValuatedPlayer]:
        self.valuated = valuate_pool(self.players, self.enrichment, self.valuation_settings)
        return self.valuated

    def load_players(self, players: Sequence[PlayerRecord]) -> List[ValuatedPlayer]:
        """Replace the pool with a new ingestion batch."""

        self.players = list(players)
        logger.info("Session pool replaced with %d players", len(self.players))
        return self.recompute()

    def update_enrichment(
        self,
        *,
        defense=None,
        odds=None,
        weather=None,
        trends=None,
    ) -> List[ValuatedPlayer]:
        """Swap in whichever sources arrived (last write wins) and recompute."""

        self.enrichment = self.enrichment.replace(defense=defense, odds=odds, weather=weather, trends=trends)
        return self.recompute()

    def select_contest(self, name: str) -> ContestConfig:
        self.contest = get_contest(name)
        self.lineup = LineupState.empty(self.contest)
        return self.contest

    def set_excluded(self, player_ids: Iterable[str]) -> None:
        self.excluded = set(player_ids)

    def player(self, player_id: str) -> Optional[ValuatedPlayer]:
        return next((p for p in self.valuated if p.player_id == player_id), None)

    def add_player(self, player_id: str, slot_index: int | None = None) -> LineupChange:
        player = self.player(player_id)
        if player is None:
            return LineupChange(ok=False, lineup=self.lineup, slot_index=slot_index, reason=f"Unknown player {player_id!r}")
        change = self.lineup.add_player(player, slot_index)
        self.lineup = change.lineup
        return change

    def remove_slot(self, slot_index: int) -> LineupChange:
        change = self.lineup.remove_slot(slot_index)
        self.lineup = change.lineup
        return change

    def clear_lineup(self) -> None:
        self.lineup = LineupState.empty(self.contest)

    def autofill(self, strategy: str | FillStrategy = "cash", *, upgrade: bool | None = None) -> AutofillResult:
        result = autofill(
            self.lineup,
            self.valuated,
            strategy,
            excluded=self.excluded,
            enrichment=self.enrichment,
            settings=self.autofill_settings,
            upgrade=upgrade,
        )
        self.lineup = result.lineup
        return result

    def analyze(self) -> AnalysisReport:
        return analyze_lineup(self.lineup, self.valuated, self.enrichment)

    def totals(self) -> SalaryTotals:
        return self.lineup.totals()

    def view(self, criteria: PoolCriteria | None = None) -> PoolView:
        criteria = criteria or PoolCriteria()
        if not criteria.excluded_ids and self.excluded:
            criteria = replace(criteria, excluded_ids=tuple(sorted(self.excluded)))
        return view_pool(self.valuated, criteria, self.contest)
