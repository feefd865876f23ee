"""Contest configurations for supported lineup formats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Tuple


CAPTAIN_SLOT = "CPT"
FLEX_SLOT = "FLEX"


@dataclass(frozen=True)
class ContestConfig:
    name: str
    slots: Tuple[str, ...]
    salary_cap: int
    flex_positions: FrozenSet[str]
    tabs: Tuple[str, ...]

    def slot_accepts(self, slot_index: int, position: str) -> bool:
        """Whether ``position`` may occupy the slot at ``slot_index``."""

        label = self.slots[slot_index]
        if label == CAPTAIN_SLOT:
            return True
        if label == FLEX_SLOT:
            return position in self.flex_positions
        return label == position


_CONTESTS: Dict[str, ContestConfig] = {
    "classic": ContestConfig(
        name="classic",
        slots=("QB", "RB", "RB", "WR", "WR", "WR", "TE", "FLEX", "DST"),
        salary_cap=50_000,
        flex_positions=frozenset({"RB", "WR", "TE"}),
        tabs=("QB", "RB", "WR", "TE", "FLEX", "DST"),
    ),
    "showdown": ContestConfig(
        name="showdown",
        slots=("CPT", "FLEX", "FLEX", "FLEX", "FLEX", "FLEX"),
        salary_cap=50_000,
        flex_positions=frozenset({"QB", "RB", "WR", "TE", "DST"}),
        tabs=("ALL", "QB", "RB", "WR", "TE", "DST"),
    ),
}

DEFAULT_CONTEST = "classic"


def iter_contests() -> Iterable[ContestConfig]:
    """Return an iterator of all configured contests."""

    return _CONTESTS.values()


def get_contest(name: str) -> ContestConfig:
    """Fetch a contest by name, raising KeyError if missing."""

    key = name.strip().lower()
    if key not in _CONTESTS:
        raise KeyError(f"No contest configured for name={name!r}")
    return _CONTESTS[key]
