"""Turn a raw player pool plus enrichment into comparable per-player metrics."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Sequence

from dfsbuilder.config import ValuationSettings
from dfsbuilder.enrichment import EnrichmentSnapshot, parse_game
from dfsbuilder.models import PlayerRecord, ValuatedPlayer

from . import scores


logger = logging.getLogger(__name__)


def top_value_threshold(values: Sequence[float], top_fraction: float) -> float:
    """Value at the ``1 - top_fraction`` percentile cut of ``values``."""

    if not values:
        return math.inf
    ordered = sorted(values)
    index = math.floor(len(ordered) * (1.0 - top_fraction))
    index = min(max(index, 0), len(ordered) - 1)
    return ordered[index]


def _position_thresholds(
    players: Iterable[PlayerRecord],
    values: Mapping[int, float],
    top_fraction: float,
) -> Dict[str, float]:
    by_position: Dict[str, List[float]] = defaultdict(list)
    for index, player in enumerate(players):
        by_position[player.position].append(values[index])
    return {
        position: top_value_threshold(position_values, top_fraction)
        for position, position_values in by_position.items()
    }


def _matchup_multiplier(player: PlayerRecord, opponent: str | None, enrichment: EnrichmentSnapshot) -> float:
    if player.is_defense or opponent is None:
        return 1.0
    ranking = enrichment.defense_for(opponent, player.position)
    if ranking is None:
        return 1.0
    total = ranking.total or enrichment.ranked_count(player.position)
    return scores.matchup_multiplier(ranking.rank, total)


def valuate_player(
    player: PlayerRecord,
    *,
    value: float,
    threshold: float,
    enrichment: EnrichmentSnapshot,
    settings: ValuationSettings,
) -> ValuatedPlayer:
    key = parse_game(player.game)
    opponent = key.opponent(player.team) if key else None
    multiplier = _matchup_multiplier(player, opponent, enrichment)
    adj_value = value * multiplier

    odds = enrichment.odds_for(key)
    implied_total = team_spread = game_total = None
    if odds is not None and key is not None:
        team_spread = odds.team_spread(key, player.team)
        game_total = odds.total
        if not player.is_defense:
            implied_total = odds.implied_total(key, player.team)

    trend_record = enrichment.trend_for(player.player_id)
    trend = trend_record.trend if trend_record else "neutral"

    composite = scores.composite_score(
        position=player.position,
        avg_points=player.avg_points,
        adj_value=adj_value,
        implied_total=implied_total,
        game_total=game_total,
        team_spread=team_spread,
        trend=trend,
    )
    floor = scores.floor_score(player.position, player.avg_points, settings.consistency(player))

    return ValuatedPlayer(
        **player.model_dump(include=set(PlayerRecord.model_fields)),
        value=value,
        is_top_value=value > 0 and value >= threshold,
        matchup_multiplier=multiplier,
        adj_value=adj_value,
        game_code=key.code if key else None,
        opponent=opponent,
        implied_team_total=implied_total,
        team_spread=team_spread,
        game_total=game_total,
        composite_score=composite,
        floor_score=floor,
        trend=trend,
    )


def valuate_pool(
    players: Sequence[PlayerRecord],
    enrichment: EnrichmentSnapshot | None = None,
    settings: ValuationSettings | None = None,
) -> List[ValuatedPlayer]:
    """Recompute every derived metric for ``players``.

    Returns new records; inputs are left untouched so repeated calls with the
    same snapshot produce identical output. Missing enrichment sources degrade
    the affected components to neutral.
    """

    enrichment = enrichment or EnrichmentSnapshot()
    settings = settings or ValuationSettings()

    players = list(players)
    values = {index: scores.base_value(player.avg_points, player.salary) for index, player in enumerate(players)}
    thresholds = _position_thresholds(players, values, settings.top_value_fraction)

    valuated = [
        valuate_player(
            player,
            value=values[index],
            threshold=thresholds[player.position],
            enrichment=enrichment,
            settings=settings,
        )
        for index, player in enumerate(players)
    ]
    logger.debug(
        "Valuated %d players (odds=%d, defense=%d, weather=%d, trends=%d)",
        len(valuated),
        len(enrichment.odds),
        len(enrichment.defense),
        len(enrichment.weather),
        len(enrichment.trends),
    )
    return valuated
