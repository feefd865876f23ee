"""Lineup quality analysis."""

from .analyzer import analyze_lineup
from .findings import (
    CATEGORIES,
    CONSTRUCTION,
    CORRELATION,
    GAME_ENVIRONMENT,
    QUALITY,
    WEATHER,
    AnalysisReport,
    Finding,
    quality_score,
)
from .rules import DEFAULT_RULES, AnalysisContext, LineupRule

__all__ = [
    "AnalysisContext",
    "AnalysisReport",
    "CATEGORIES",
    "CONSTRUCTION",
    "CORRELATION",
    "DEFAULT_RULES",
    "Finding",
    "GAME_ENVIRONMENT",
    "LineupRule",
    "QUALITY",
    "WEATHER",
    "analyze_lineup",
    "quality_score",
]
