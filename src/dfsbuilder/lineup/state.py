"""Lineup slots, occupants and manual edit operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple

from dfsbuilder.config import CAPTAIN_SLOT, ContestConfig
from dfsbuilder.enrichment import game_code
from dfsbuilder.models import PlayerRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Occupant:
    """Player seated in a slot, with salary and position locked at add time."""

    player_id: str
    name: str
    team: str
    position: str
    salary: int
    game_code: Optional[str] = None
    is_captain: bool = False

    @classmethod
    def from_player(cls, player: PlayerRecord, *, is_captain: bool = False) -> "Occupant":
        return cls(
            player_id=player.player_id,
            name=player.name,
            team=player.team,
            position=player.position,
            salary=player.salary,
            game_code=game_code(player.game),
            is_captain=is_captain,
        )


@dataclass(frozen=True)
class SalaryTotals:
    used: int
    remaining: int
    cap: int
    filled: int
    open: int


@dataclass(frozen=True)
class LineupChange:
    """Outcome of a manual add/remove; ``lineup`` is unchanged when ``ok`` is False."""

    ok: bool
    lineup: "LineupState"
    slot_index: Optional[int] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class LineupState:
    contest: ContestConfig
    occupants: Tuple[Optional[Occupant], ...]

    @classmethod
    def empty(cls, contest: ContestConfig) -> "LineupState":
        return cls(contest=contest, occupants=(None,) * len(contest.slots))

    def __iter__(self) -> Iterator[Tuple[int, Occupant]]:
        for index, occupant in enumerate(self.occupants):
            if occupant is not None:
                yield index, occupant

    @property
    def player_ids(self) -> frozenset[str]:
        return frozenset(occupant.player_id for _, occupant in self)

    @property
    def empty_slots(self) -> list[int]:
        return [index for index, occupant in enumerate(self.occupants) if occupant is None]

    @property
    def is_complete(self) -> bool:
        return all(occupant is not None for occupant in self.occupants)

    @property
    def salary_used(self) -> int:
        return sum(occupant.salary for _, occupant in self)

    @property
    def remaining_budget(self) -> int:
        return self.contest.salary_cap - self.salary_used

    def totals(self) -> SalaryTotals:
        used = self.salary_used
        empty = len(self.empty_slots)
        return SalaryTotals(
            used=used,
            remaining=self.contest.salary_cap - used,
            cap=self.contest.salary_cap,
            filled=len(self.occupants) - empty,
            open=empty,
        )

    def contains(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def can_place(self, player: PlayerRecord, slot_index: int) -> bool:
        return (
            0 <= slot_index < len(self.occupants)
            and self.occupants[slot_index] is None
            and self.contest.slot_accepts(slot_index, player.position)
        )

    def place(self, slot_index: int, player: PlayerRecord) -> "LineupState":
        """Seat ``player`` without validation; callers check :meth:`can_place` first."""

        occupant = Occupant.from_player(
            player, is_captain=self.contest.slots[slot_index] == CAPTAIN_SLOT
        )
        occupants = list(self.occupants)
        occupants[slot_index] = occupant
        return replace(self, occupants=tuple(occupants))

    def vacate(self, slot_index: int) -> "LineupState":
        occupants = list(self.occupants)
        occupants[slot_index] = None
        return replace(self, occupants=tuple(occupants))

    def add_player(self, player: PlayerRecord, slot_index: int | None = None) -> LineupChange:
        """Seat ``player`` in ``slot_index`` or the first open slot that accepts them."""

        if self.contains(player.player_id):
            return LineupChange(ok=False, lineup=self, reason=f"{player.name} is already in the lineup")

        if slot_index is None:
            slot_index = next(
                (index for index in self.empty_slots if self.can_place(player, index)),
                None,
            )
            if slot_index is None:
                return LineupChange(ok=False, lineup=self, reason="No available slot for this player")
        elif not self.can_place(player, slot_index):
            return LineupChange(
                ok=False,
                lineup=self,
                slot_index=slot_index,
                reason=f"Slot {slot_index} cannot take {player.name} ({player.position})",
            )

        updated = self.place(slot_index, player)
        logger.debug("Added %s to slot %d (%s)", player.player_id, slot_index, self.contest.slots[slot_index])
        return LineupChange(ok=True, lineup=updated, slot_index=slot_index)

    def remove_slot(self, slot_index: int) -> LineupChange:
        if not 0 <= slot_index < len(self.occupants):
            return LineupChange(ok=False, lineup=self, slot_index=slot_index, reason=f"No slot {slot_index}")
        if self.occupants[slot_index] is None:
            return LineupChange(ok=False, lineup=self, slot_index=slot_index, reason=f"Slot {slot_index} is already empty")
        return LineupChange(ok=True, lineup=self.vacate(slot_index), slot_index=slot_index)
