"""Per-player score components used by the valuation engine."""

from __future__ import annotations

from typing import Optional


SCORE_BASE = 50.0

VALUE_CENTER = 2.0
VALUE_SLOPE = 12.5
VALUE_BAND = 25.0

PRODUCTION_CENTER = 12.5
PRODUCTION_SLOPE = 1.6
PRODUCTION_BAND = 20.0

IMPLIED_CENTER = 22.5
IMPLIED_SCALE = 7.5
IMPLIED_BAND = 10.0

TREND_POINTS = 5.0

FLOOR_WEIGHTS = (0.40, 0.30, 0.20, 0.10)

# (minimum avg points, volume proxy) per position, checked top-down.
_VOLUME_TIERS: dict[str, tuple[tuple[float, float], ...]] = {
    "QB": ((22.0, 90.0), (18.0, 75.0), (14.0, 60.0), (0.0, 40.0)),
    "RB": ((18.0, 90.0), (14.0, 75.0), (10.0, 60.0), (6.0, 45.0), (0.0, 25.0)),
    "WR": ((17.0, 85.0), (13.0, 70.0), (9.0, 55.0), (0.0, 35.0)),
    "TE": ((13.0, 80.0), (9.0, 60.0), (6.0, 45.0), (0.0, 30.0)),
    "DST": ((9.0, 60.0), (6.0, 50.0), (0.0, 40.0)),
}

# (milestone, lower tier) average points for the bonus proximity term.
_BONUS_THRESHOLDS: dict[str, tuple[float, float]] = {
    "QB": (20.0, 16.0),
    "RB": (13.0, 10.0),
    "WR": (13.0, 10.0),
    "TE": (13.0, 10.0),
}


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def base_value(avg_points: float, salary: int) -> float:
    """Projected points per $1000 of salary."""

    if avg_points <= 0:
        return 0.0
    return avg_points / max(salary, 1) * 1000.0


def matchup_multiplier(rank: int, total: int) -> float:
    """Multiplier from the opponent's rank at the position (rank 1 = best defense)."""

    if total <= 0:
        return 1.0
    percentile = rank / total
    if percentile > 2.0 / 3.0:
        return 1.20
    if percentile <= 1.0 / 3.0:
        return 0.85
    return 1.00


def value_points(adj_value: float) -> float:
    return clamp((adj_value - VALUE_CENTER) * VALUE_SLOPE, -VALUE_BAND, VALUE_BAND)


def production_points(avg_points: float) -> float:
    if avg_points <= 0:
        return -PRODUCTION_BAND
    return clamp((avg_points - PRODUCTION_CENTER) * PRODUCTION_SLOPE, -PRODUCTION_BAND, PRODUCTION_BAND)


def implied_total_points(implied_total: float) -> float:
    return clamp((implied_total - IMPLIED_CENTER) / IMPLIED_SCALE * IMPLIED_BAND, -IMPLIED_BAND, IMPLIED_BAND)


def game_total_points(total: float) -> float:
    if total >= 50:
        return 5.0
    if total >= 46:
        return 2.0
    if total <= 38:
        return -5.0
    if total <= 42:
        return -2.0
    return 0.0


def game_script_points(position: str, team_spread: float) -> float:
    """Game-script adjustment; negative spreads mean the player's team is favored."""

    if position in {"QB", "WR", "TE"}:
        if team_spread > 7:
            return 10.0
        if team_spread > 3:
            return 5.0
        if team_spread < -10:
            return -10.0
        if team_spread < -6:
            return -5.0
        return 0.0
    if position == "RB":
        if team_spread < -7:
            return 10.0
        if team_spread < -3:
            return 5.0
        if team_spread > 10:
            return -10.0
        if team_spread > 6:
            return -5.0
    return 0.0


def trend_points(trend: str) -> float:
    if trend == "hot":
        return TREND_POINTS
    if trend == "cold":
        return -TREND_POINTS
    return 0.0


def composite_score(
    *,
    position: str,
    avg_points: float,
    adj_value: float,
    implied_total: Optional[float],
    game_total: Optional[float],
    team_spread: Optional[float],
    trend: str,
) -> float:
    score = SCORE_BASE
    score += value_points(adj_value)
    score += production_points(avg_points)
    if position != "DST":
        if implied_total is not None:
            score += implied_total_points(implied_total)
        if game_total is not None:
            score += game_total_points(game_total)
        if team_spread is not None:
            score += game_script_points(position, team_spread)
    score += trend_points(trend)
    return clamp(score, 0.0, 100.0)


def volume_proxy(position: str, avg_points: float) -> float:
    for minimum, proxy in _VOLUME_TIERS.get(position, ((0.0, 30.0),)):
        if avg_points >= minimum:
            return proxy
    return 0.0


def bonus_proximity(position: str, avg_points: float) -> float:
    thresholds = _BONUS_THRESHOLDS.get(position)
    if thresholds is None:
        return 0.0
    milestone, lower = thresholds
    if avg_points >= milestone:
        return 100.0
    if avg_points >= lower:
        return 50.0
    return 0.0


def floor_score(position: str, avg_points: float, consistency: float) -> float:
    production = clamp(avg_points * 4.0, 0.0, 100.0)
    w_prod, w_volume, w_consistency, w_bonus = FLOOR_WEIGHTS
    score = (
        w_prod * production
        + w_volume * volume_proxy(position, avg_points)
        + w_consistency * max(consistency, 0.0)
        + w_bonus * bonus_proximity(position, avg_points)
    )
    return max(score, 0.0)
