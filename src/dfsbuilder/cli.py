"""Command-line interface for building and grading a lineup from a salary file."""

from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path

from dfsbuilder.config import AutofillSettings, ValuationSettings
from dfsbuilder.ingest import load_enrichment, load_salary_csv
from dfsbuilder.lineup import strategy_names
from dfsbuilder.session import DraftSession


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Auto-fill and analyze a DFS lineup from a salary export")
    parser.add_argument("salaries", type=Path, help="Path to the site salary CSV")
    parser.add_argument("--contest", default="classic", help="Contest type (classic, showdown)")
    parser.add_argument("--enrichment", type=Path, default=None, help="Optional enrichment JSON snapshot")
    parser.add_argument(
        "--strategy",
        default="cash",
        choices=strategy_names(),
        help="Auto-fill policy",
    )
    parser.add_argument(
        "--no-upgrade",
        action="store_true",
        help="Skip the single-swap upgrade pass after filling",
    )
    parser.add_argument(
        "--lock",
        nargs="*",
        default=None,
        help="Player IDs to place before auto-filling",
    )
    parser.add_argument(
        "--exclude",
        nargs="*",
        default=None,
        help="Player IDs to keep out of the lineup",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional lineup CSV path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _write_lineup(session: DraftSession, path: Path) -> None:
    lookup = {player.player_id: player for player in session.valuated}
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["slot", "player_id", "name", "team", "position", "salary", "composite_score", "floor_score"])
        for index, label in enumerate(session.contest.slots):
            occupant = session.lineup.occupants[index]
            if occupant is None:
                writer.writerow([label, "", "", "", "", "", "", ""])
                continue
            player = lookup.get(occupant.player_id)
            writer.writerow([
                label,
                occupant.player_id,
                occupant.name,
                occupant.team,
                occupant.position,
                occupant.salary,
                f"{player.composite_score:.1f}" if player else "",
                f"{player.floor_score:.1f}" if player else "",
            ])


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    session = DraftSession(
        valuation_settings=ValuationSettings.from_env(),
        autofill_settings=AutofillSettings.from_env(),
    )
    try:
        session.select_contest(args.contest)
    except KeyError as exc:
        raise SystemExit(str(exc.args[0])) from exc

    if args.enrichment:
        snapshot = load_enrichment(args.enrichment)
        session.update_enrichment(
            defense=snapshot.defense,
            odds=snapshot.odds,
            weather=snapshot.weather,
            trends=snapshot.trends,
        )
    session.load_players(load_salary_csv(args.salaries))
    session.set_excluded(args.exclude or ())

    for player_id in args.lock or ():
        change = session.add_player(player_id)
        if not change.ok:
            print(f"Could not lock {player_id}: {change.reason}")

    result = session.autofill(args.strategy, upgrade=False if args.no_upgrade else None)
    if not result.ok:
        print(f"Auto-fill rejected: {result.reason}")
        return 1

    totals = session.totals()
    print(f"Filled {result.filled} slots, {result.unfilled} left open; salary ${totals.used:,} / ${totals.cap:,}")
    if result.swap is not None:
        print(f"Upgrade pass swapped {result.swap.removed_id} -> {result.swap.added_id} in slot {result.swap.slot_index}")
    for index, label in enumerate(session.contest.slots):
        occupant = session.lineup.occupants[index]
        if occupant is None:
            print(f"  {label:<5} (empty)")
        else:
            print(f"  {label:<5} {occupant.name:<28} {occupant.team:<4} ${occupant.salary:,}")

    if args.output:
        _write_lineup(session, args.output)
        print(f"Wrote lineup to {args.output}")

    report = session.analyze()
    if not report.ok:
        print(f"Analysis skipped: {report.reason}")
        return 0
    print(f"Lineup score: {report.score:.1f} / 10")
    for category, findings in report.by_category().items():
        print(f"[{category}]")
        for finding in findings:
            print(f"  {finding.weight:+.1f} {finding.title}: {finding.detail}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
