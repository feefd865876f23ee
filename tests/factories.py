"""Shared builders for test pools and lineups."""

from __future__ import annotations

from typing import Sequence

from dfsbuilder.config import ContestConfig, get_contest
from dfsbuilder.enrichment import parse_game
from dfsbuilder.lineup import LineupState
from dfsbuilder.models import PlayerRecord, ValuatedPlayer


GAMES = {
    "KC": "KC@BUF 10/20/2024 01:00PM ET",
    "BUF": "KC@BUF 10/20/2024 01:00PM ET",
    "DAL": "DAL@PHI 10/20/2024 04:25PM ET",
    "PHI": "DAL@PHI 10/20/2024 04:25PM ET",
    "SF": "SF@SEA 10/20/2024 04:05PM ET",
    "SEA": "SF@SEA 10/20/2024 04:05PM ET",
    "MIA": "MIA@NYJ 10/20/2024 01:00PM ET",
    "NYJ": "MIA@NYJ 10/20/2024 01:00PM ET",
    "DET": "DET@GB 10/20/2024 01:00PM ET",
    "GB": "DET@GB 10/20/2024 01:00PM ET",
}


def player(player_id: str, position: str, team: str, salary: int, avg_points: float) -> PlayerRecord:
    return PlayerRecord(
        player_id=player_id,
        name=player_id.replace("_", " ").title(),
        team=team,
        position=position,
        salary=salary,
        avg_points=avg_points,
        game=GAMES.get(team, ""),
    )


def valuated(
    player_id: str,
    position: str,
    team: str,
    salary: int,
    *,
    avg_points: float = 12.0,
    composite_score: float = 60.0,
    floor_score: float = 50.0,
    adj_value: float = 2.0,
    game_total: float | None = None,
    team_spread: float | None = None,
    implied_team_total: float | None = None,
) -> ValuatedPlayer:
    """Valuated player with hand-picked metrics, bypassing the engine."""

    game = GAMES.get(team, "")
    key = parse_game(game)
    return ValuatedPlayer(
        player_id=player_id,
        name=player_id.replace("_", " ").title(),
        team=team,
        position=position,
        salary=salary,
        avg_points=avg_points,
        game=game,
        value=adj_value,
        adj_value=adj_value,
        game_code=key.code if key else None,
        opponent=key.opponent(team) if key else None,
        composite_score=composite_score,
        floor_score=floor_score,
        game_total=game_total,
        team_spread=team_spread,
        implied_team_total=implied_team_total,
    )


def classic_pool() -> list[PlayerRecord]:
    return [
        player("qb_kc", "QB", "KC", 8000, 24.0),
        player("wr_kc", "WR", "KC", 8200, 19.0),
        player("te_kc", "TE", "KC", 6400, 13.5),
        player("rb_buf", "RB", "BUF", 8800, 20.0),
        player("wr_buf", "WR", "BUF", 6100, 13.0),
        player("dst_buf", "DST", "BUF", 3100, 8.0),
        player("qb_dal", "QB", "DAL", 6600, 18.5),
        player("rb_dal", "RB", "DAL", 4300, 9.5),
        player("rb_phi", "RB", "PHI", 7200, 16.5),
        player("wr_phi", "WR", "PHI", 7400, 16.0),
        player("te_phi", "TE", "PHI", 3900, 8.5),
        player("dst_phi", "DST", "PHI", 2900, 7.0),
        player("qb_sf", "QB", "SF", 5600, 16.0),
        player("wr_sf", "WR", "SF", 3600, 8.0),
        player("te_sf", "TE", "SF", 3100, 6.5),
        player("rb_sea", "RB", "SEA", 5300, 12.5),
        player("wr_sea", "WR", "SEA", 4600, 10.5),
        player("dst_sea", "DST", "SEA", 2500, 6.0),
        player("rb_mia", "RB", "MIA", 6200, 14.0),
        player("wr_mia", "WR", "MIA", 5400, 12.0),
        player("wr_nyj", "WR", "NYJ", 4000, 9.0),
        player("dst_nyj", "DST", "NYJ", 2700, 7.5),
        player("rb_det", "RB", "DET", 5800, 13.0),
        player("te_det", "TE", "DET", 4400, 9.5),
        player("wr_gb", "WR", "GB", 4800, 11.0),
        player("qb_gb", "QB", "GB", 5200, 15.0),
    ]


def build_lineup(players: Sequence[PlayerRecord], contest: ContestConfig | None = None) -> LineupState:
    """Seat ``players`` in slot order."""

    lineup = LineupState.empty(contest or get_contest("classic"))
    for index, item in enumerate(players):
        lineup = lineup.place(index, item)
    return lineup
