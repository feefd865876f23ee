"""Composite keys for enrichment lookups.

Every lookup into the enrichment maps goes through this module so that game
codes and defense keys are built one way only:

* games are ``AWAY@HOME``. ``A@B`` reads as away A at home B; ``A vs B`` reads
  from the home team's side, so ``BUF vs KC`` is ``KC@BUF``. Anything after the
  two team codes (kickoff date/time) is ignored.
* defense rankings are ``TEAM_POS`` where ``TEAM`` is the defending team and
  ``POS`` the position it defends.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional


_GAME_PATTERN = re.compile(
    r"^\s*(?P<first>[A-Z]{2,4})\s*(?P<sep>@|VS\.?|V\.?)\s*(?P<second>[A-Z]{2,4})\b",
    re.IGNORECASE,
)

Side = Literal["home", "away"]


@dataclass(frozen=True)
class GameKey:
    away: str
    home: str

    @property
    def code(self) -> str:
        return f"{self.away}@{self.home}"

    def side(self, team: str) -> Optional[Side]:
        team = team.upper()
        if team == self.home:
            return "home"
        if team == self.away:
            return "away"
        return None

    def opponent(self, team: str) -> Optional[str]:
        side = self.side(team)
        if side == "home":
            return self.away
        if side == "away":
            return self.home
        return None

    def __str__(self) -> str:
        return self.code


def parse_game(descriptor: str | None) -> Optional[GameKey]:
    """Parse a free-text game descriptor into a :class:`GameKey`."""

    if not descriptor:
        return None
    match = _GAME_PATTERN.match(descriptor)
    if match is None:
        return None
    first = match.group("first").upper()
    second = match.group("second").upper()
    if match.group("sep") == "@":
        return GameKey(away=first, home=second)
    return GameKey(away=second, home=first)


def game_code(descriptor: str | None) -> Optional[str]:
    key = parse_game(descriptor)
    return key.code if key else None


def normalize_game_code(raw: str) -> str:
    """Canonical form of an enrichment map key; unparsable keys pass through upper-cased."""

    key = parse_game(raw)
    return key.code if key else raw.strip().upper()


def defense_key(team: str, position: str) -> str:
    return f"{team.strip().upper()}_{position.strip().upper()}"


def split_defense_key(key: str) -> tuple[str, str]:
    team, _, position = key.rpartition("_")
    if not team:
        raise ValueError(f"defense key must look like 'TEAM_POS', got {key!r}")
    return team.upper(), position.upper()
