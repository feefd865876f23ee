import pytest

from dfsbuilder.pool import PoolCriteria
from dfsbuilder.session import DraftSession

from .factories import classic_pool


@pytest.fixture
def session() -> DraftSession:
    draft = DraftSession()
    draft.load_players(classic_pool())
    return draft


def test_load_players_valuates_pool(session: DraftSession):
    assert len(session.valuated) == len(classic_pool())
    assert session.player("qb_kc").value == pytest.approx(3.0)
    assert session.player("nobody") is None


def test_update_enrichment_recomputes_without_dropping_other_sources(session: DraftSession):
    before = session.player("wr_kc").composite_score

    session.update_enrichment(odds={"KC@BUF": {"spread": -3.0, "total": 52.0}})
    session.update_enrichment(weather={"KC@BUF": {"conditions": "Clear"}})

    after = session.player("wr_kc")
    assert "KC@BUF" in session.enrichment.odds
    assert after.game_total == pytest.approx(52.0)
    assert after.composite_score != before


def test_add_unknown_player(session: DraftSession):
    change = session.add_player("ghost")

    assert not change.ok
    assert change.reason == "Unknown player 'ghost'"


def test_manual_edits_update_lineup(session: DraftSession):
    added = session.add_player("qb_kc")
    assert added.ok
    assert session.totals().used == 8000

    removed = session.remove_slot(added.slot_index)
    assert removed.ok
    assert session.totals().used == 0


def test_select_contest_resets_lineup(session: DraftSession):
    session.add_player("qb_kc")

    contest = session.select_contest("showdown")

    assert contest.name == "showdown"
    assert session.lineup.contest is contest
    assert session.totals().filled == 0
    with pytest.raises(KeyError):
        session.select_contest("tiers")


def test_autofill_honors_exclusions_and_analysis_follows(session: DraftSession):
    session.set_excluded({"qb_kc", "rb_buf"})

    result = session.autofill("best_score")
    report = session.analyze()

    assert result.ok
    assert session.lineup.is_complete
    assert not session.lineup.contains("qb_kc")
    assert not session.lineup.contains("rb_buf")
    assert report.ok
    assert 0.0 <= report.score <= 10.0


def test_view_marks_session_exclusions(session: DraftSession):
    session.set_excluded({"qb_kc"})

    view = session.view(PoolCriteria(tab="QB"))

    flagged = [row.player.player_id for row in view.rows if row.excluded]
    assert flagged == ["qb_kc"]


def test_clear_lineup(session: DraftSession):
    session.autofill("best_score")
    session.clear_lineup()

    assert session.totals().open == 9
