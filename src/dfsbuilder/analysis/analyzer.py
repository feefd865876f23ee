"""Run the rule set over a completed lineup."""

from __future__ import annotations

import logging
from typing import List, Sequence

from dfsbuilder.enrichment import EnrichmentSnapshot
from dfsbuilder.lineup import LineupState
from dfsbuilder.models import ValuatedPlayer

from .findings import CATEGORIES, AnalysisReport, Finding, quality_score
from .rules import DEFAULT_RULES, AnalysisContext, LineupRule


logger = logging.getLogger(__name__)


def _lineup_players(lineup: LineupState, pool: Sequence[ValuatedPlayer]) -> tuple[List[ValuatedPlayer], List[str]]:
    by_id = {player.player_id: player for player in pool}
    players: List[ValuatedPlayer] = []
    missing: List[str] = []
    for _, occupant in lineup:
        player = by_id.get(occupant.player_id)
        if player is None:
            missing.append(occupant.name)
            continue
        if player.salary != occupant.salary:
            player = player.model_copy(update={"salary": occupant.salary})
        players.append(player)
    return players, missing


def analyze_lineup(
    lineup: LineupState,
    pool: Sequence[ValuatedPlayer],
    enrichment: EnrichmentSnapshot | None = None,
    rules: Sequence[LineupRule] = DEFAULT_RULES,
) -> AnalysisReport:
    """Evaluate every rule against a fully occupied lineup."""

    if not lineup.is_complete:
        open_slots = len(lineup.empty_slots)
        return AnalysisReport(ok=False, reason=f"Fill all slots before analyzing ({open_slots} still empty)")

    players, missing = _lineup_players(lineup, pool)
    if missing:
        return AnalysisReport(ok=False, reason=f"Lineup players missing from the pool: {', '.join(missing)}")

    ctx = AnalysisContext(
        lineup=lineup,
        players=tuple(players),
        pool=tuple(pool),
        enrichment=enrichment or EnrichmentSnapshot(),
    )
    findings: List[Finding] = []
    for rule in rules:
        finding = rule.evaluate(ctx)
        if finding is not None:
            findings.append(finding)

    findings.sort(key=lambda f: (CATEGORIES.index(f.category) if f.category in CATEGORIES else len(CATEGORIES), -abs(f.weight)))
    score = quality_score(findings)
    logger.debug("Lineup analysis produced %d findings, score %.1f", len(findings), score)
    return AnalysisReport(ok=True, score=score, findings=tuple(findings))
