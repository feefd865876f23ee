"""Declarative lineup rules.

Each :class:`LineupRule` pairs a category, a signed weight and a title with a
check. A check returns the explanation text when the rule fires and ``None``
otherwise, so every rule contributes at most one finding.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from dfsbuilder.enrichment import EnrichmentSnapshot, GameWeather
from dfsbuilder.lineup import LineupState
from dfsbuilder.models import PASS_CATCHERS, PASS_GAME, SKILL_POSITIONS, ValuatedPlayer

from .findings import CONSTRUCTION, CORRELATION, GAME_ENVIRONMENT, QUALITY, WEATHER, Finding


@dataclass(frozen=True)
class AnalysisContext:
    lineup: LineupState
    players: Tuple[ValuatedPlayer, ...]
    pool: Tuple[ValuatedPlayer, ...]
    enrichment: EnrichmentSnapshot

    @property
    def salary_left(self) -> int:
        return self.lineup.remaining_budget

    @cached_property
    def quarterback(self) -> Optional[ValuatedPlayer]:
        return next((p for p in self.players if p.position == "QB"), None)

    @cached_property
    def qb_teams(self) -> set[str]:
        return {p.team for p in self.players if p.position == "QB"}

    @cached_property
    def qb_pass_catchers(self) -> List[ValuatedPlayer]:
        qb = self.quarterback
        if qb is None:
            return []
        return [p for p in self.players if p.team == qb.team and p.position in PASS_CATCHERS]

    @cached_property
    def game_counts(self) -> Counter:
        return Counter(p.game_code for p in self.players if p.game_code)

    def weather(self, player: ValuatedPlayer) -> Optional[GameWeather]:
        if not player.game_code:
            return None
        return self.enrichment.weather.get(player.game_code)


Check = Callable[[AnalysisContext], Optional[str]]


@dataclass(frozen=True)
class LineupRule:
    category: str
    weight: float
    title: str
    check: Check

    def evaluate(self, ctx: AnalysisContext) -> Optional[Finding]:
        detail = self.check(ctx)
        if detail is None:
            return None
        return Finding(category=self.category, weight=self.weight, title=self.title, detail=detail)


def _names(players: Iterable[ValuatedPlayer]) -> str:
    return ", ".join(player.name for player in players)


def _money(amount: int) -> str:
    return f"${amount:,}"


# -----------------------------
# Construction
# -----------------------------
def _over_cap(ctx: AnalysisContext) -> Optional[str]:
    if ctx.salary_left < 0:
        return f"Lineup is {_money(-ctx.salary_left)} over the {_money(ctx.lineup.contest.salary_cap)} cap."
    return None


def _salary_left_on_table(ctx: AnalysisContext) -> Optional[str]:
    if ctx.salary_left > 1000:
        return f"{_money(ctx.salary_left)} unused; there is room to upgrade a slot."
    return None


def _excellent_salary_usage(ctx: AnalysisContext) -> Optional[str]:
    if 0 <= ctx.salary_left < 500:
        return f"Only {_money(ctx.salary_left)} left unused."
    return None


def _punt_overload(ctx: AnalysisContext) -> Optional[str]:
    punts = [p for p in ctx.players if not p.is_defense and p.salary < 4000]
    if len(punts) >= 3:
        return f"{len(punts)} players under $4,000: {_names(punts)}."
    return None


def _thin_backfield(ctx: AnalysisContext) -> Optional[str]:
    backs = [p for p in ctx.players if p.position == "RB"]
    if len(backs) == 1:
        return f"{backs[0].name} is the only running back."
    return None


def _no_stud(ctx: AnalysisContext) -> Optional[str]:
    if not any(p.salary >= 8500 for p in ctx.players):
        return "No player priced at $8,500 or more anchors the lineup."
    return None


def _balanced_build(ctx: AnalysisContext) -> Optional[str]:
    studs = [p for p in ctx.players if p.salary >= 8000]
    values = [p for p in ctx.players if p.salary <= 4500]
    if len(studs) >= 2 and len(values) >= 2:
        return f"Studs ({_names(studs)}) paired with value plays ({_names(values)})."
    return None


def _pricey_defense(ctx: AnalysisContext) -> Optional[str]:
    defenses = [p for p in ctx.players if p.is_defense and p.salary > 3500]
    if defenses:
        return f"{_names(defenses)} costs {_money(defenses[0].salary)}; defense salary rarely pays off."
    return None


# -----------------------------
# Correlation
# -----------------------------
def _qb_vs_own_defense(ctx: AnalysisContext) -> Optional[str]:
    qb = ctx.quarterback
    if qb is None:
        return None
    defenses = [p for p in ctx.players if p.is_defense and p.team == qb.team]
    if defenses:
        return f"{qb.name} and {_names(defenses)} both play for {qb.team}; their outcomes work against each other."
    return None


def _naked_qb(ctx: AnalysisContext) -> Optional[str]:
    qb = ctx.quarterback
    if qb is not None and not ctx.qb_pass_catchers:
        return f"{qb.name} has no pass-catchers from {qb.team} stacked with him."
    return None


def _double_stack(ctx: AnalysisContext) -> Optional[str]:
    if len(ctx.qb_pass_catchers) >= 2:
        qb = ctx.quarterback
        return f"{qb.name} stacked with {_names(ctx.qb_pass_catchers)}."
    return None


def _opponents_of_qb(ctx: AnalysisContext) -> List[ValuatedPlayer]:
    qb = ctx.quarterback
    if qb is None or qb.opponent is None:
        return []
    return [p for p in ctx.players if p.team == qb.opponent]


def _bring_back(ctx: AnalysisContext) -> Optional[str]:
    if len(ctx.qb_pass_catchers) < 2:
        return None
    opponents = _opponents_of_qb(ctx)
    if opponents:
        return f"{_names(opponents)} brings the {ctx.quarterback.team} stack back from {opponents[0].team}."
    return None


def _missing_bring_back(ctx: AnalysisContext) -> Optional[str]:
    if len(ctx.qb_pass_catchers) >= 2 and not _opponents_of_qb(ctx):
        return f"No player from {ctx.quarterback.team}'s opponent offsets the stack."
    return None


def _single_stack(ctx: AnalysisContext) -> Optional[str]:
    if len(ctx.qb_pass_catchers) == 1:
        return f"{ctx.quarterback.name} paired with {ctx.qb_pass_catchers[0].name}."
    return None


def _cannibalization(ctx: AnalysisContext) -> Optional[str]:
    grouped: Dict[Tuple[str, str], List[ValuatedPlayer]] = defaultdict(list)
    for player in ctx.players:
        if player.position in SKILL_POSITIONS:
            grouped[(player.team, player.position)].append(player)
    clashes = [
        f"{team} {position}s {_names(players)}"
        for (team, position), players in sorted(grouped.items())
        if len(players) >= 2 and team not in ctx.qb_teams
    ]
    if clashes:
        return "Same-team players competing for touches without their quarterback: " + "; ".join(clashes) + "."
    return None


def _unstacked_pass_catchers(ctx: AnalysisContext) -> Optional[str]:
    grouped: Dict[str, List[ValuatedPlayer]] = defaultdict(list)
    for player in ctx.players:
        if player.position in PASS_CATCHERS:
            grouped[player.team].append(player)
    teams = sorted(team for team, players in grouped.items() if len(players) >= 2 and team not in ctx.qb_teams)
    if teams:
        return f"Multiple pass-catchers from {', '.join(teams)} without the quarterback throwing to them."
    return None


# -----------------------------
# Game environment
# -----------------------------
def _few_games(ctx: AnalysisContext) -> Optional[str]:
    if len(ctx.game_counts) < 3:
        return f"Players come from only {len(ctx.game_counts)} game(s)."
    return None


def _game_diversity(ctx: AnalysisContext) -> Optional[str]:
    if len(ctx.game_counts) >= 3:
        return f"Exposure spread across {len(ctx.game_counts)} games."
    return None


def _game_concentration(ctx: AnalysisContext) -> Optional[str]:
    heavy = [(code, count) for code, count in ctx.game_counts.most_common() if count >= 4]
    if heavy:
        code, count = heavy[0]
        return f"{count} players from {code}; one bad game sinks the lineup."
    return None


def _low_total_exposure(ctx: AnalysisContext) -> Optional[str]:
    exposed = [p for p in ctx.players if p.game_total is not None and p.game_total < 42]
    if exposed:
        return f"{_names(exposed)} in games totaling under 42 points."
    return None


def _high_total_exposure(ctx: AnalysisContext) -> Optional[str]:
    exposed = [p for p in ctx.players if p.game_total is not None and p.game_total >= 48]
    if len(exposed) >= 4:
        return f"{len(exposed)} players in games totaling 48 or more."
    return None


def _missed_shootout(ctx: AnalysisContext) -> Optional[str]:
    shootouts = sorted(
        {p.game_code for p in ctx.pool if p.game_code and p.game_total is not None and p.game_total >= 50}
    )
    missed = [code for code in shootouts if code not in ctx.game_counts]
    if shootouts and len(missed) == len(shootouts):
        return f"No exposure to the slate's shootout(s): {', '.join(missed)}."
    return None


def _underdog_qb(ctx: AnalysisContext) -> Optional[str]:
    qb = ctx.quarterback
    if qb is not None and qb.team_spread is not None and qb.team_spread > 6:
        return f"{qb.name} is a {qb.team_spread:+.1f} underdog and should be throwing late."
    return None


def _favored_backs(ctx: AnalysisContext) -> Optional[str]:
    backs = [p for p in ctx.players if p.position == "RB" and p.team_spread is not None and p.team_spread < -3]
    if len(backs) >= 2:
        return f"{_names(backs)} are on teams favored by more than 3."
    return None


def _low_implied_totals(ctx: AnalysisContext) -> Optional[str]:
    low = [p for p in ctx.players if p.implied_team_total is not None and p.implied_team_total < 20]
    if len(low) >= 3:
        return f"{_names(low)} play for teams implied under 20 points."
    return None


# -----------------------------
# Weather
# -----------------------------
def _bad_weather(ctx: AnalysisContext) -> Optional[str]:
    exposed = [
        p for p in ctx.players if p.position in PASS_GAME and (weather := ctx.weather(p)) is not None and weather.is_wet
    ]
    if exposed:
        return f"{_names(exposed)} face rain or snow."
    return None


def _indoor_stack(ctx: AnalysisContext) -> Optional[str]:
    qb = ctx.quarterback
    if qb is None:
        return None
    teammates = [p for p in ctx.players if p.team == qb.team and p is not qb and not p.is_defense]
    if len(teammates) < 2:
        return None
    stack = [qb, *teammates]
    if all((weather := ctx.weather(p)) is not None and weather.indoor for p in stack):
        return f"{qb.name}'s stack plays indoors."
    return None


# -----------------------------
# Quality
# -----------------------------
def _low_average_score(ctx: AnalysisContext) -> Optional[str]:
    average = sum(p.composite_score for p in ctx.players) / len(ctx.players)
    if average < 55:
        return f"Average composite score is {average:.1f}."
    return None


def _elite_concentration(ctx: AnalysisContext) -> Optional[str]:
    elite = [p for p in ctx.players if p.composite_score >= 75]
    if len(elite) >= 3:
        return f"{len(elite)} players score 75+: {_names(elite)}."
    return None


def _leverage(ctx: AnalysisContext) -> Optional[str]:
    plays = [p for p in ctx.players if p.adj_value > 4.0 and p.salary > 5000]
    if plays:
        return f"{_names(plays)} deliver over 4x matchup-adjusted value above $5,000."
    return None


DEFAULT_RULES: Sequence[LineupRule] = (
    LineupRule(CONSTRUCTION, -2.0, "Over the salary cap", _over_cap),
    LineupRule(CONSTRUCTION, -1.0, "Salary left on the table", _salary_left_on_table),
    LineupRule(CONSTRUCTION, 0.5, "Excellent salary usage", _excellent_salary_usage),
    LineupRule(CONSTRUCTION, -1.0, "Punt overload", _punt_overload),
    LineupRule(CONSTRUCTION, -0.5, "Thin at running back", _thin_backfield),
    LineupRule(CONSTRUCTION, -0.5, "No true stud", _no_stud),
    LineupRule(CONSTRUCTION, 0.5, "Balanced build", _balanced_build),
    LineupRule(CONSTRUCTION, -0.3, "Pricey defense", _pricey_defense),
    LineupRule(CORRELATION, -2.0, "Quarterback and defense on the same team", _qb_vs_own_defense),
    LineupRule(CORRELATION, -1.0, "Naked quarterback", _naked_qb),
    LineupRule(CORRELATION, 1.0, "Quarterback stack", _double_stack),
    LineupRule(CORRELATION, 0.5, "Bring-back", _bring_back),
    LineupRule(CORRELATION, -0.3, "Missing bring-back", _missing_bring_back),
    LineupRule(CORRELATION, 0.5, "Single stack", _single_stack),
    LineupRule(CORRELATION, -0.7, "Cannibalization", _cannibalization),
    LineupRule(CORRELATION, -0.5, "Pass-catchers without their quarterback", _unstacked_pass_catchers),
    LineupRule(GAME_ENVIRONMENT, -0.5, "Limited game exposure", _few_games),
    LineupRule(GAME_ENVIRONMENT, 0.5, "Game diversity", _game_diversity),
    LineupRule(GAME_ENVIRONMENT, -1.0, "Over-concentrated game", _game_concentration),
    LineupRule(GAME_ENVIRONMENT, -0.7, "Low-total game exposure", _low_total_exposure),
    LineupRule(GAME_ENVIRONMENT, 1.0, "High-total game exposure", _high_total_exposure),
    LineupRule(GAME_ENVIRONMENT, -0.5, "Missed shootout", _missed_shootout),
    LineupRule(GAME_ENVIRONMENT, 0.3, "Underdog quarterback", _underdog_qb),
    LineupRule(GAME_ENVIRONMENT, 0.3, "Favored running backs", _favored_backs),
    LineupRule(GAME_ENVIRONMENT, -0.7, "Low implied team totals", _low_implied_totals),
    LineupRule(WEATHER, -0.8, "Bad-weather passing game", _bad_weather),
    LineupRule(WEATHER, 0.3, "Indoor stack", _indoor_stack),
    LineupRule(QUALITY, -1.0, "Low average score", _low_average_score),
    LineupRule(QUALITY, 1.0, "Elite score concentration", _elite_concentration),
    LineupRule(QUALITY, 0.5, "Leverage play", _leverage),
)
