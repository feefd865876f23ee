"""Helpers to load site salary exports and emit canonical player records."""

from __future__ import annotations

import csv
import logging
import re
from io import StringIO
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from dfsbuilder.models import POSITIONS, PlayerRecord


logger = logging.getLogger(__name__)

DEFAULT_SALARY_MAPPING = {
    "player_id": "ID",
    "name": "Name",
    "team": "TeamAbbrev",
    "position": "Position",
    "salary": "Salary",
    "avg_points": "AvgPointsPerGame",
    "game": "Game Info",
    "roster_position": "Roster Position",
}

_DEFENSE_TOKENS = {"DST", "D/ST", "DEF", "D", "DEFENSE"}


class SalaryRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str = ""
    raw_team: str = ""
    raw_position: str = ""
    raw_salary: str = ""
    raw_avg_points: str = ""
    raw_game: str = ""
    raw_roster_position: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "SalaryRow":
        def extract(key: str) -> str:
            column = mapping.get(key)
            if column is None:
                return ""
            value = row.get(column)
            return value.strip() if value is not None else ""

        return cls(
            raw_id=extract("player_id") or None,
            raw_name=extract("name"),
            raw_team=extract("team"),
            raw_position=extract("position"),
            raw_salary=extract("salary"),
            raw_avg_points=extract("avg_points"),
            raw_game=extract("game"),
            raw_roster_position=extract("roster_position"),
        )


def _canonical_position(raw: str) -> str:
    text = raw.strip().upper()
    if text in _DEFENSE_TOKENS:
        return "DST"
    token = text.split("/")[0].strip()
    if token in _DEFENSE_TOKENS:
        return "DST"
    return token


def _parse_salary(raw_salary: str) -> Optional[int]:
    digits = re.sub(r"[^0-9]", "", raw_salary.split(".")[0])
    if not digits:
        return None
    return int(digits)


def _parse_points(raw_points: str) -> float:
    text = raw_points.strip()
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        logger.debug("Non-numeric average points %r treated as 0", raw_points)
        return 0.0
    return max(0.0, value)


def rows_to_records(rows: Sequence[SalaryRow]) -> List[PlayerRecord]:
    """Convert raw rows, dropping rows without a name, position or salary."""

    records: List[PlayerRecord] = []
    seen: set[str] = set()
    for row in rows:
        if row.raw_roster_position.upper() == "CPT":
            # Showdown exports list every player twice; the captain row is a priced copy.
            continue
        position = _canonical_position(row.raw_position) if row.raw_position else ""
        salary = _parse_salary(row.raw_salary)
        if not row.raw_name or not position or salary is None:
            logger.debug("Skipping incomplete salary row: %s", row.raw_name or "<unnamed>")
            continue
        if position not in POSITIONS:
            logger.debug("Skipping %s with unsupported position %s", row.raw_name, position)
            continue
        player_id = row.raw_id or f"{row.raw_name}::{row.raw_team.upper()}"
        if player_id in seen:
            continue
        seen.add(player_id)
        records.append(
            PlayerRecord(
                player_id=player_id,
                name=row.raw_name,
                team=row.raw_team,
                position=position,
                salary=salary,
                avg_points=_parse_points(row.raw_avg_points),
                game=row.raw_game,
                metadata={"raw_position": row.raw_position},
            )
        )
    return records


def _read_rows(lines: Iterable[str], mapping: Mapping[str, str]) -> List[SalaryRow]:
    reader = csv.DictReader(lines)
    return [SalaryRow.from_mapping(row, mapping) for row in reader]


def load_salary_text(text: str, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    rows = _read_rows(StringIO(text), mapping or DEFAULT_SALARY_MAPPING)
    records = rows_to_records(rows)
    logger.info("Loaded %d of %d salary rows", len(records), len(rows))
    return records


def load_salary_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRecord]:
    with path.open(newline="", encoding="utf-8-sig") as f:
        rows = _read_rows(f, mapping or DEFAULT_SALARY_MAPPING)
    records = rows_to_records(rows)
    logger.info("Loaded %d of %d salary rows from %s", len(records), len(rows), path)
    return records
