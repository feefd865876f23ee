"""Greedy lineup auto-fill policies.

Two interchangeable policies fill the open slots of a lineup:

* :class:`BestAvailableStrategy` walks slots in contest order and takes the
  best-ranked player that still leaves room for the other open slots.
* :class:`CashFloorStrategy` walks slots in a fixed position priority, ranks by
  floor score and layers correlation, concentration and game-environment
  heuristics on top.

Neither is an optimizer; both guarantee the cap is respected and every seat is
position-eligible, and both keep enough budget back to complete the lineup
whenever the pool allows it. Slots without any affordable candidate stay empty.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Literal, Optional, Protocol, Sequence

from dfsbuilder.config import AutofillSettings
from dfsbuilder.enrichment import EnrichmentSnapshot
from dfsbuilder.models import PASS_CATCHERS, PASS_GAME, ValuatedPlayer

from .state import LineupState


logger = logging.getLogger(__name__)

_CASH_PRIORITY = ("CPT", "RB", "QB", "WR", "TE", "FLEX", "DST")


@dataclass(frozen=True)
class SlotSwap:
    slot_index: int
    removed_id: str
    added_id: str


@dataclass(frozen=True)
class AutofillResult:
    """Outcome of an auto-fill call; ``lineup`` is the input lineup when ``ok`` is False."""

    ok: bool
    lineup: LineupState
    filled: int = 0
    unfilled: int = 0
    swap: Optional[SlotSwap] = None
    reason: Optional[str] = None


@dataclass
class FillContext:
    lineup: LineupState
    available: List[ValuatedPlayer]
    enrichment: EnrichmentSnapshot
    settings: AutofillSettings
    used: set[str] = field(default_factory=set)

    def candidates_for(self, slot_index: int) -> List[ValuatedPlayer]:
        contest = self.lineup.contest
        return [
            player
            for player in self.available
            if player.player_id not in self.used and contest.slot_accepts(slot_index, player.position)
        ]

    def seat(self, slot_index: int, player: ValuatedPlayer) -> None:
        self.lineup = self.lineup.place(slot_index, player)
        self.used.add(player.player_id)


class FillStrategy(Protocol):
    name: str
    runs_upgrade_pass: bool

    def fill(self, ctx: FillContext) -> None:
        ...

    def allows_swap(self, lineup: LineupState, slot_index: int, player: ValuatedPlayer, ctx: FillContext) -> bool:
        ...


def _cheapest_reserve(ctx: FillContext, open_slots: Iterable[int]) -> int:
    """Lowest combined salary that keeps ``open_slots`` fillable with distinct players."""

    reserved: set[str] = set()
    total = 0
    for slot_index in open_slots:
        options = [p for p in ctx.candidates_for(slot_index) if p.player_id not in reserved]
        if not options:
            continue
        cheapest = min(options, key=lambda p: (p.salary, p.player_id))
        reserved.add(cheapest.player_id)
        total += cheapest.salary
    return total


def _reserve_after(ctx: FillContext, candidate: ValuatedPlayer, slot_index: int) -> int:
    """Cheapest completion of the other open slots once ``candidate`` takes ``slot_index``."""

    others = [index for index in ctx.lineup.empty_slots if index != slot_index]
    ctx.used.add(candidate.player_id)
    try:
        return _cheapest_reserve(ctx, others)
    finally:
        ctx.used.discard(candidate.player_id)


@dataclass(frozen=True)
class BestAvailableStrategy:
    key: Literal["score", "value"] = "score"
    runs_upgrade_pass: bool = False

    @property
    def name(self) -> str:
        return f"best_{self.key}"

    def _rank(self, player: ValuatedPlayer) -> tuple:
        primary = player.composite_score if self.key == "score" else player.value
        return (-primary, -player.avg_points, player.player_id)

    def fill(self, ctx: FillContext) -> None:
        for slot_index in ctx.lineup.empty_slots:
            candidates = sorted(ctx.candidates_for(slot_index), key=self._rank)
            for candidate in candidates:
                reserve = _reserve_after(ctx, candidate, slot_index)
                if candidate.salary + reserve <= ctx.lineup.remaining_budget:
                    ctx.seat(slot_index, candidate)
                    break
            else:
                logger.debug("No affordable candidate for slot %d (%s)", slot_index, ctx.lineup.contest.slots[slot_index])

    def allows_swap(self, lineup: LineupState, slot_index: int, player: ValuatedPlayer, ctx: FillContext) -> bool:
        return True


@dataclass(frozen=True)
class _LineupShape:
    game_counts: Counter
    qb_teams: set[str]
    catcher_teams: set[str]

    @classmethod
    def of(cls, lineup: LineupState) -> "_LineupShape":
        seated = [occupant for _, occupant in lineup]
        return cls(
            game_counts=Counter(o.game_code for o in seated if o.game_code),
            qb_teams={o.team for o in seated if o.position == "QB"},
            catcher_teams={o.team for o in seated if o.position in PASS_CATCHERS},
        )


@dataclass(frozen=True)
class CashFloorStrategy:
    """Floor-first fill with correlation and game-environment heuristics.

    Slots are visited in position priority. Each pick must leave both the flat
    per-slot reserve and the cheapest real completion of the other open slots.
    A completion pass then revisits slots the heuristics left empty; there the
    flat reserve is dropped, and a slot with no heuristic-approved candidate
    takes the best affordable floor so a feasible lineup is never left short.
    """

    name: str = "cash"
    runs_upgrade_pass: bool = True

    def _slot_order(self, lineup: LineupState) -> List[int]:
        def priority(index: int) -> tuple[int, int]:
            label = lineup.contest.slots[index]
            rank = _CASH_PRIORITY.index(label) if label in _CASH_PRIORITY else len(_CASH_PRIORITY)
            return rank, index

        return sorted(lineup.empty_slots, key=priority)

    def _effective_floor(
        self,
        candidate: ValuatedPlayer,
        *,
        label: str,
        qb_teams: set[str],
        ctx: FillContext,
    ) -> float:
        settings = ctx.settings
        score = candidate.floor_score
        if candidate.position in PASS_CATCHERS and candidate.team in qb_teams:
            score *= settings.stack_boost
        if candidate.game_total is not None and candidate.game_total >= settings.high_game_total:
            score *= settings.high_total_boost
        weather = ctx.enrichment.weather.get(candidate.game_code) if candidate.game_code else None
        if weather is not None:
            if weather.is_wet and candidate.position in PASS_GAME:
                score *= settings.bad_weather_factor
            if weather.indoor:
                score *= settings.indoor_boost
        if label == "FLEX" and candidate.position == "RB":
            score *= settings.flex_rb_boost
        return score

    def _rejects(
        self,
        candidate: ValuatedPlayer,
        *,
        shape: _LineupShape,
        settings: AutofillSettings,
    ) -> Optional[str]:
        if (
            not candidate.is_defense
            and candidate.game_total is not None
            and candidate.game_total < settings.low_game_total
        ):
            return "low total"
        if candidate.game_code and shape.game_counts[candidate.game_code] >= settings.max_per_game:
            return "game concentration"
        if (
            candidate.position in PASS_CATCHERS
            and candidate.team in shape.catcher_teams
            and candidate.team not in shape.qb_teams
        ):
            return "unstacked pass-catchers"
        return None

    def _pick(self, ctx: FillContext, slot_index: int, *, flat_reserve: bool) -> Optional[ValuatedPlayer]:
        settings = ctx.settings
        label = ctx.lineup.contest.slots[slot_index]
        shape = _LineupShape.of(ctx.lineup)
        remaining = ctx.lineup.remaining_budget
        flat = (len(ctx.lineup.empty_slots) - 1) * settings.slot_reserve if flat_reserve else 0

        candidates = sorted(
            ctx.candidates_for(slot_index),
            key=lambda p: (-p.floor_score, p.player_id),
        )
        affordable = [
            candidate
            for candidate in candidates
            if candidate.salary + max(flat, _reserve_after(ctx, candidate, slot_index)) <= remaining
        ]
        approved = [
            candidate for candidate in affordable if self._rejects(candidate, shape=shape, settings=settings) is None
        ]
        best: Optional[ValuatedPlayer] = None
        best_score = float("-inf")
        for candidate in approved:
            score = self._effective_floor(candidate, label=label, qb_teams=shape.qb_teams, ctx=ctx)
            if score > best_score:
                best, best_score = candidate, score
        if best is None and not flat_reserve and affordable:
            best = affordable[0]
            logger.debug("Cash fill relaxed heuristics to complete slot %d (%s)", slot_index, label)
        return best

    def fill(self, ctx: FillContext) -> None:
        for slot_index in self._slot_order(ctx.lineup):
            best = self._pick(ctx, slot_index, flat_reserve=True)
            if best is None:
                logger.debug("Cash fill deferred slot %d (%s)", slot_index, ctx.lineup.contest.slots[slot_index])
                continue
            ctx.seat(slot_index, best)

        for slot_index in self._slot_order(ctx.lineup):
            best = self._pick(ctx, slot_index, flat_reserve=False)
            if best is None:
                logger.debug("Cash fill found no candidate for slot %d (%s)", slot_index, ctx.lineup.contest.slots[slot_index])
                continue
            ctx.seat(slot_index, best)

    def allows_swap(self, lineup: LineupState, slot_index: int, player: ValuatedPlayer, ctx: FillContext) -> bool:
        shape = _LineupShape.of(lineup.vacate(slot_index))
        return self._rejects(player, shape=shape, settings=ctx.settings) is None


_STRATEGIES: Dict[str, Callable[[], FillStrategy]] = {
    "cash": CashFloorStrategy,
    "best_score": lambda: BestAvailableStrategy(key="score"),
    "best_value": lambda: BestAvailableStrategy(key="value"),
}


def get_strategy(name: str) -> FillStrategy:
    """Resolve a fill policy by name, raising KeyError if missing."""

    key = name.strip().lower()
    if key not in _STRATEGIES:
        raise KeyError(f"Unknown auto-fill strategy {name!r}")
    return _STRATEGIES[key]()


def strategy_names() -> List[str]:
    return list(_STRATEGIES)


SwapCheck = Callable[[LineupState, int, ValuatedPlayer], bool]


def upgrade_pass(
    lineup: LineupState,
    slots: Sequence[int],
    available: Sequence[ValuatedPlayer],
    by_id: Dict[str, ValuatedPlayer],
    allows: SwapCheck | None = None,
) -> tuple[LineupState, Optional[SlotSwap]]:
    """Swap the weakest auto-filled seat for a pricier, higher-floor player once.

    ``allows`` lets the fill policy veto replacements its own heuristics would
    have rejected.
    """

    scored = []
    for index in slots:
        occupant = lineup.occupants[index]
        if occupant is not None and occupant.player_id in by_id:
            scored.append((by_id[occupant.player_id].floor_score, index, occupant))
    if not scored:
        return lineup, None
    current_floor, slot_index, current = min(scored, key=lambda item: (item[0], item[1]))
    budget = lineup.remaining_budget + current.salary

    in_lineup = lineup.player_ids
    options = [
        player
        for player in available
        if player.player_id not in in_lineup
        and lineup.contest.slot_accepts(slot_index, player.position)
        and player.floor_score > current_floor
        and current.salary < player.salary <= budget
        and (allows is None or allows(lineup, slot_index, player))
    ]
    if not options:
        return lineup, None
    replacement = max(options, key=lambda p: (p.floor_score, -p.salary, p.player_id))
    swapped = lineup.vacate(slot_index).place(slot_index, replacement)
    logger.info(
        "Upgrade pass swapped %s for %s in slot %d",
        current.player_id,
        replacement.player_id,
        slot_index,
    )
    return swapped, SlotSwap(slot_index=slot_index, removed_id=current.player_id, added_id=replacement.player_id)


def autofill(
    lineup: LineupState,
    pool: Sequence[ValuatedPlayer],
    strategy: str | FillStrategy = "cash",
    *,
    excluded: Iterable[str] = (),
    enrichment: EnrichmentSnapshot | None = None,
    settings: AutofillSettings | None = None,
    upgrade: bool | None = None,
) -> AutofillResult:
    """Fill as many open slots of ``lineup`` as the pool and budget allow."""

    if not pool:
        return AutofillResult(
            ok=False,
            lineup=lineup,
            unfilled=len(lineup.empty_slots),
            reason="Player pool is empty; load players before auto-filling",
        )

    policy = get_strategy(strategy) if isinstance(strategy, str) else strategy
    excluded_ids = set(excluded)
    available = [player for player in pool if player.player_id not in excluded_ids]
    ctx = FillContext(
        lineup=lineup,
        available=available,
        enrichment=enrichment or EnrichmentSnapshot(),
        settings=settings or AutofillSettings(),
        used=set(lineup.player_ids),
    )
    open_before = lineup.empty_slots
    policy.fill(ctx)
    filled_slots = [index for index in open_before if ctx.lineup.occupants[index] is not None]

    result_lineup = ctx.lineup
    swap = None
    run_upgrade = policy.runs_upgrade_pass if upgrade is None else upgrade
    if run_upgrade and filled_slots:
        by_id = {player.player_id: player for player in available}
        result_lineup, swap = upgrade_pass(
            result_lineup,
            filled_slots,
            available,
            by_id,
            allows=lambda current, index, player: policy.allows_swap(current, index, player, ctx),
        )

    unfilled = len(result_lineup.empty_slots)
    logger.info(
        "Auto-fill (%s) filled %d of %d open slots; salary %d/%d",
        policy.name,
        len(filled_slots),
        len(open_before),
        result_lineup.salary_used,
        result_lineup.contest.salary_cap,
    )
    return AutofillResult(
        ok=True,
        lineup=result_lineup,
        filled=len(filled_slots),
        unfilled=unfilled,
        swap=swap,
    )
