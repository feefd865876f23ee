"""Persist and load enrichment snapshots as JSON."""

from __future__ import annotations

import json
from pathlib import Path

from dfsbuilder.enrichment import EnrichmentSnapshot


def load_enrichment(path: Path) -> EnrichmentSnapshot:
    data = json.loads(path.read_text(encoding="utf-8"))
    return EnrichmentSnapshot.model_validate(data)


def save_enrichment(snapshot: EnrichmentSnapshot, path: Path) -> None:
    path.write_text(json.dumps(snapshot.model_dump(), indent=2), encoding="utf-8")
