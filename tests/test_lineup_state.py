from dfsbuilder.config import get_contest
from dfsbuilder.lineup import LineupState

from .factories import build_lineup, player


def test_add_player_takes_first_eligible_slot():
    lineup = LineupState.empty(get_contest("classic"))
    first = lineup.add_player(player("rb_a", "RB", "BUF", 6000, 14.0))
    second = first.lineup.add_player(player("rb_b", "RB", "DAL", 5000, 11.0))
    third = second.lineup.add_player(player("rb_c", "RB", "SEA", 4000, 9.0))

    assert first.ok and first.slot_index == 1
    assert second.slot_index == 2
    # both RB slots are taken so the third back lands in FLEX
    assert third.slot_index == 7
    assert third.lineup.occupants[7].player_id == "rb_c"


def test_add_player_rejects_duplicates():
    rb = player("rb_a", "RB", "BUF", 6000, 14.0)
    lineup = LineupState.empty(get_contest("classic")).add_player(rb).lineup

    change = lineup.add_player(rb)

    assert not change.ok
    assert change.reason == "Rb A is already in the lineup"
    assert change.lineup is lineup


def test_add_player_without_open_slot_is_rejected():
    lineup = LineupState.empty(get_contest("classic"))
    lineup = lineup.add_player(player("qb_a", "QB", "KC", 8000, 22.0)).lineup

    change = lineup.add_player(player("qb_b", "QB", "SF", 6000, 17.0))

    assert not change.ok
    assert change.reason == "No available slot for this player"


def test_explicit_slot_must_accept_position():
    lineup = LineupState.empty(get_contest("classic"))

    change = lineup.add_player(player("qb_a", "QB", "KC", 8000, 22.0), slot_index=7)

    assert not change.ok
    assert change.slot_index == 7
    assert lineup.is_complete is False
    assert all(occupant is None for occupant in change.lineup.occupants)


def test_explicit_slot_seats_player():
    lineup = LineupState.empty(get_contest("classic"))

    change = lineup.add_player(player("wr_a", "WR", "KC", 6000, 14.0), slot_index=7)

    assert change.ok
    assert change.lineup.occupants[7].position == "WR"
    assert change.lineup.occupants[7].game_code == "KC@BUF"


def test_remove_slot():
    lineup = build_lineup([player("qb_a", "QB", "KC", 8000, 22.0)])

    removed = lineup.remove_slot(0)
    again = removed.lineup.remove_slot(0)
    out_of_range = lineup.remove_slot(42)

    assert removed.ok
    assert removed.lineup.salary_used == 0
    assert not again.ok
    assert not out_of_range.ok


def test_totals_follow_occupants():
    lineup = build_lineup(
        [
            player("qb_a", "QB", "KC", 8000, 22.0),
            player("rb_a", "RB", "BUF", 6000, 14.0),
        ]
    )

    totals = lineup.totals()

    assert totals.used == 14_000
    assert totals.remaining == 36_000
    assert totals.filled == 2
    assert totals.open == 7


def test_manual_adds_may_exceed_cap():
    lineup = LineupState.empty(get_contest("showdown"))
    for index in range(6):
        lineup = lineup.add_player(player(f"star_{index}", "WR", "KC", 9800, 20.0)).lineup

    assert lineup.is_complete
    assert lineup.remaining_budget == 50_000 - 6 * 9800
    assert lineup.totals().remaining < 0


def test_showdown_first_slot_is_captain():
    lineup = LineupState.empty(get_contest("showdown"))
    lineup = lineup.add_player(player("dst_buf", "DST", "BUF", 4000, 8.0)).lineup
    lineup = lineup.add_player(player("qb_kc", "QB", "KC", 11000, 24.0)).lineup

    captain = lineup.occupants[0]
    assert captain.player_id == "dst_buf"
    assert captain.is_captain
    assert not lineup.occupants[1].is_captain
