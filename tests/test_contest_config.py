import pytest

from dfsbuilder.config import get_contest, iter_contests


def test_get_contest_is_case_insensitive():
    contest = get_contest("Classic")
    assert contest.salary_cap == 50_000
    assert contest.slots == ("QB", "RB", "RB", "WR", "WR", "WR", "TE", "FLEX", "DST")


def test_get_contest_missing_raises():
    with pytest.raises(KeyError):
        get_contest("tiers")


def test_classic_flex_accepts_only_skill_positions():
    contest = get_contest("classic")
    flex = contest.slots.index("FLEX")
    assert contest.slot_accepts(flex, "TE")
    assert not contest.slot_accepts(flex, "QB")
    assert not contest.slot_accepts(flex, "DST")
    assert contest.slot_accepts(0, "QB")
    assert not contest.slot_accepts(0, "RB")


def test_showdown_captain_accepts_anyone():
    contest = get_contest("showdown")
    assert len(contest.slots) == 6
    for position in ("QB", "RB", "WR", "TE", "DST"):
        assert contest.slot_accepts(0, position)
        assert contest.slot_accepts(1, position)


def test_iter_contests_lists_both_formats():
    assert {contest.name for contest in iter_contests()} == {"classic", "showdown"}
