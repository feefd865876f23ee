"""Lightweight REST client for the dfsbuilder API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the dfsbuilder REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("salaries", type=Path, nargs="?", help="Salary CSV to upload")
    parser.add_argument("--enrichment", type=Path, help="Enrichment JSON snapshot to push")
    parser.add_argument("--contest", default=None, help="Contest type to select before filling")
    parser.add_argument("--strategy", default="cash", help="Auto-fill strategy")
    parser.add_argument("--show-lineup", action="store_true", help="Print the current lineup and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.show_lineup:
            resp = client.get("/lineup")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.salaries is None:
            raise SystemExit("a salary CSV is required unless using --show-lineup")

        if args.contest:
            resp = client.post("/contest", json={"name": args.contest})
            if resp.status_code == 404:
                raise SystemExit(f"contest {args.contest} not found")
            resp.raise_for_status()

        files = {"players": (args.salaries.name, args.salaries.read_bytes(), "text/csv")}
        resp = client.post("/players", files=files)
        resp.raise_for_status()
        print(f"Loaded {resp.json()['players']} players")

        if args.enrichment:
            payload = json.loads(args.enrichment.read_text(encoding="utf-8"))
            resp = client.put("/enrichment", json=payload)
            resp.raise_for_status()

        resp = client.post("/lineup/autofill", json={"strategy": args.strategy})
        if resp.status_code == 409:
            raise SystemExit(f"auto-fill rejected: {resp.json()['detail']}")
        resp.raise_for_status()
        fill = resp.json()
        print(f"Filled {fill['filled']} slots, {fill['unfilled']} open")
        print(json.dumps(fill["lineup"], indent=2))

        resp = client.get("/lineup/analysis")
        if resp.status_code == 409:
            print(f"Analysis unavailable: {resp.json()['detail']}")
            return
        resp.raise_for_status()
        print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
