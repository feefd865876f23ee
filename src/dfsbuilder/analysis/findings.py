"""Finding and report types produced by the lineup analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


CONSTRUCTION = "Construction"
CORRELATION = "Correlation"
GAME_ENVIRONMENT = "Game Environment"
WEATHER = "Weather"
QUALITY = "Quality"

CATEGORIES: Tuple[str, ...] = (CONSTRUCTION, CORRELATION, GAME_ENVIRONMENT, WEATHER, QUALITY)

SCORE_BASE = 5.0
SCORE_MIN = 0.0
SCORE_MAX = 10.0


@dataclass(frozen=True)
class Finding:
    """One strength (positive weight) or issue (negative weight) in a lineup."""

    category: str
    weight: float
    title: str
    detail: str

    @property
    def is_strength(self) -> bool:
        return self.weight > 0


@dataclass(frozen=True)
class AnalysisReport:
    ok: bool
    score: float = SCORE_BASE
    findings: Tuple[Finding, ...] = field(default_factory=tuple)
    reason: Optional[str] = None

    @property
    def strengths(self) -> List[Finding]:
        return [finding for finding in self.findings if finding.is_strength]

    @property
    def issues(self) -> List[Finding]:
        return [finding for finding in self.findings if finding.weight < 0]

    def by_category(self) -> Dict[str, List[Finding]]:
        grouped: Dict[str, List[Finding]] = {category: [] for category in CATEGORIES}
        for finding in self.findings:
            grouped.setdefault(finding.category, []).append(finding)
        return {category: items for category, items in grouped.items() if items}


def quality_score(findings: Tuple[Finding, ...] | List[Finding]) -> float:
    total = SCORE_BASE + sum(finding.weight for finding in findings)
    return max(SCORE_MIN, min(SCORE_MAX, total))
