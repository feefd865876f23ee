import pytest
from pydantic import ValidationError

from dfsbuilder.enrichment import (
    EnrichmentSnapshot,
    GameOdds,
    GameWeather,
    classify_trend,
    defense_key,
    game_code,
    parse_game,
)


def test_parse_game_at_separator_reads_away_then_home():
    key = parse_game("KC@BUF 10/20/2024 01:00PM ET")
    assert key is not None
    assert key.away == "KC"
    assert key.home == "BUF"
    assert key.code == "KC@BUF"


def test_vs_separator_normalizes_to_same_code():
    assert game_code("BUF vs KC") == "KC@BUF"
    assert game_code("buf vs. kc") == "KC@BUF"
    assert game_code("KC @ BUF") == "KC@BUF"


def test_parse_game_rejects_garbage():
    assert parse_game("") is None
    assert parse_game(None) is None
    assert parse_game("Postponed") is None


def test_opponent_and_side():
    key = parse_game("DAL@PHI")
    assert key.opponent("DAL") == "PHI"
    assert key.opponent("phi") == "DAL"
    assert key.side("NYG") is None


def test_odds_team_spread_and_implied_totals():
    key = parse_game("KC@BUF")
    odds = GameOdds(spread=-3.0, total=48.0)

    assert odds.team_spread(key, "BUF") == pytest.approx(-3.0)
    assert odds.team_spread(key, "KC") == pytest.approx(3.0)
    assert odds.implied_total(key, "BUF") == pytest.approx(25.5)
    assert odds.implied_total(key, "KC") == pytest.approx(22.5)


def test_explicit_implied_totals_win():
    key = parse_game("KC@BUF")
    odds = GameOdds(spread=-3.0, total=48.0, implied_home=27.0, implied_away=21.0)
    assert odds.implied_total(key, "BUF") == pytest.approx(27.0)
    assert odds.implied_total(key, "KC") == pytest.approx(21.0)


def test_snapshot_normalizes_keys():
    snapshot = EnrichmentSnapshot(
        odds={"BUF vs KC": {"spread": -3.0, "total": 48.0}},
        weather={"kc@buf": {"conditions": "Light Rain", "indoor": False}},
        defense={"buf_wr": {"rank": 30, "total": 32}},
    )

    assert "KC@BUF" in snapshot.odds
    assert snapshot.weather["KC@BUF"].is_wet
    assert snapshot.defense_for("BUF", "WR").rank == 30
    assert defense_key("buf", "wr") == "BUF_WR"


def test_indoor_weather_is_never_wet():
    assert not GameWeather(conditions="Rain", indoor=True).is_wet


def test_replace_swaps_only_given_maps():
    snapshot = EnrichmentSnapshot(odds={"KC@BUF": {"spread": -3.0, "total": 48.0}})
    updated = snapshot.replace(weather={"KC@BUF": {"conditions": "Snow"}})

    assert "KC@BUF" in updated.odds
    assert "KC@BUF" in updated.weather
    assert not snapshot.weather

    with pytest.raises(KeyError):
        snapshot.replace(injuries={})


@pytest.mark.parametrize(
    ("value", "expected"),
    [(3.0, "hot"), (2.5, "neutral"), (1.5, "neutral"), (1.0, "cold")],
)
def test_classify_trend(value, expected):
    assert classify_trend(value) == expected


@pytest.mark.parametrize("field", ["spread", "total", "implied_home", "implied_away"])
def test_odds_reject_non_finite_numbers(field):
    with pytest.raises(ValidationError):
        GameOdds(**{field: float("nan")})
    with pytest.raises(ValidationError):
        GameOdds(**{field: float("inf")})


def test_snapshot_rejects_nan_spread():
    with pytest.raises(ValidationError):
        EnrichmentSnapshot(odds={"KC@BUF": {"spread": float("nan"), "total": 47.5}})
