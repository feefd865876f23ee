import pytest

from dfsbuilder.config import ValuationSettings
from dfsbuilder.enrichment import EnrichmentSnapshot
from dfsbuilder.valuation import scores, top_value_threshold, valuate_pool

from .factories import classic_pool, player


def test_base_value_per_thousand():
    assert scores.base_value(15.0, 5000) == pytest.approx(3.0)
    assert scores.base_value(0.0, 5000) == 0.0
    assert scores.base_value(5.0, 0) == pytest.approx(5000.0)


@pytest.mark.parametrize(
    ("rank", "expected"),
    [(30, 1.20), (5, 0.85), (16, 1.00), (32, 1.20), (1, 0.85)],
)
def test_matchup_multiplier_buckets(rank, expected):
    assert scores.matchup_multiplier(rank, 32) == pytest.approx(expected)


def test_composite_is_clamped():
    high = scores.composite_score(
        position="QB",
        avg_points=40.0,
        adj_value=8.0,
        implied_total=35.0,
        game_total=55.0,
        team_spread=10.0,
        trend="hot",
    )
    low = scores.composite_score(
        position="RB",
        avg_points=0.0,
        adj_value=0.0,
        implied_total=12.0,
        game_total=35.0,
        team_spread=14.0,
        trend="cold",
    )
    assert high == 100.0
    assert low == 0.0


def test_game_script_favors_opposite_roles():
    assert scores.game_script_points("WR", 8.0) == 10.0
    assert scores.game_script_points("RB", 8.0) == -5.0
    assert scores.game_script_points("RB", -8.0) == 10.0
    assert scores.game_script_points("QB", -8.0) == -5.0
    assert scores.game_script_points("DST", -8.0) == 0.0


def test_floor_score_for_high_volume_back():
    assert scores.floor_score("RB", 20.0, 50.0) == pytest.approx(79.0)


def test_top_value_threshold_flags_the_top_fraction():
    values = [float(v) for v in range(1, 11)]
    assert top_value_threshold(values, 0.10) == 10.0
    assert top_value_threshold(values, 0.25) == 8.0
    assert top_value_threshold([], 0.10) == float("inf")


def test_valuate_pool_blends_odds_into_composite():
    pool = [player("wr_kc", "WR", "KC", 5000, 15.0)]
    enrichment = EnrichmentSnapshot(odds={"KC@BUF": {"spread": -3.0, "total": 48.0}})

    (wr,) = valuate_pool(pool, enrichment)

    assert wr.value == pytest.approx(3.0)
    assert wr.game_code == "KC@BUF"
    assert wr.opponent == "BUF"
    assert wr.team_spread == pytest.approx(3.0)
    assert wr.implied_team_total == pytest.approx(22.5)
    assert wr.game_total == pytest.approx(48.0)
    assert wr.composite_score == pytest.approx(68.5)


def test_defense_rank_adjusts_value_but_not_for_dst():
    pool = [
        player("wr_kc", "WR", "KC", 5000, 15.0),
        player("dst_kc", "DST", "KC", 3000, 9.0),
    ]
    enrichment = EnrichmentSnapshot(
        defense={"BUF_WR": {"rank": 30, "total": 32}, "BUF_DST": {"rank": 1, "total": 32}},
    )

    wr, dst = valuate_pool(pool, enrichment)

    assert wr.matchup_multiplier == pytest.approx(1.2)
    assert wr.adj_value == pytest.approx(3.6)
    assert dst.matchup_multiplier == 1.0
    assert dst.adj_value == pytest.approx(dst.value)


def test_ranked_count_fills_in_missing_total():
    pool = [player("rb_kc", "RB", "KC", 5000, 15.0)]
    defense = {f"T{i:02d}_RB": {"rank": i} for i in range(1, 4)}
    defense["BUF_RB"] = {"rank": 4}
    (rb,) = valuate_pool(pool, EnrichmentSnapshot(defense=defense))

    # rank 4 of 4 ranked defenses is the softest matchup
    assert rb.matchup_multiplier == pytest.approx(1.2)


def test_dst_has_no_implied_total():
    pool = [player("dst_buf", "DST", "BUF", 3100, 8.0)]
    enrichment = EnrichmentSnapshot(odds={"KC@BUF": {"spread": -3.0, "total": 48.0}})
    (dst,) = valuate_pool(pool, enrichment)

    assert dst.implied_team_total is None
    assert dst.team_spread == pytest.approx(-3.0)


def test_missing_enrichment_is_neutral():
    pool = [player("wr_kc", "WR", "KC", 5000, 15.0)]
    (wr,) = valuate_pool(pool)

    assert wr.matchup_multiplier == 1.0
    assert wr.implied_team_total is None
    assert wr.composite_score == pytest.approx(50.0 + 12.5 + 4.0)


def test_trend_feed_moves_composite():
    pool = [player("wr_kc", "WR", "KC", 5000, 15.0)]
    hot = EnrichmentSnapshot(trends={"wr_kc": {"trend": "hot"}})
    cold = EnrichmentSnapshot(trends={"wr_kc": {"trend": "cold"}})

    (neutral,) = valuate_pool(pool)
    (warm,) = valuate_pool(pool, hot)
    (chilly,) = valuate_pool(pool, cold)

    assert warm.composite_score - neutral.composite_score == pytest.approx(5.0)
    assert neutral.composite_score - chilly.composite_score == pytest.approx(5.0)
    assert warm.trend == "hot"


def test_valuate_pool_is_repeatable_and_leaves_inputs_alone():
    pool = classic_pool()
    enrichment = EnrichmentSnapshot(odds={"KC@BUF": {"spread": -3.0, "total": 48.0}})

    first = valuate_pool(pool, enrichment)
    second = valuate_pool(first, enrichment)

    assert [p.model_dump() for p in first] == [p.model_dump() for p in second]
    assert pool == classic_pool()


def test_top_value_flag_is_per_position():
    pool = classic_pool()
    valuated = valuate_pool(pool, settings=ValuationSettings(top_value_fraction=0.10))

    flagged_positions = {p.position for p in valuated if p.is_top_value}
    assert flagged_positions == {"QB", "RB", "WR", "TE", "DST"}
    for position in flagged_positions:
        group = [p for p in valuated if p.position == position]
        best = max(group, key=lambda p: p.value)
        assert best.is_top_value


def test_custom_consistency_feeds_floor():
    pool = [player("rb_buf", "RB", "BUF", 8800, 20.0)]
    settings = ValuationSettings(consistency=lambda _player: 100.0)
    (rb,) = valuate_pool(pool, settings=settings)

    assert rb.floor_score == pytest.approx(89.0)
