import csv
import json
from pathlib import Path

from dfsbuilder.cli import main

from .test_api import _sample_salaries


def test_cli_fills_and_writes_lineup(tmp_path: Path, capsys):
    salaries = tmp_path / "DKSalaries.csv"
    salaries.write_text(_sample_salaries(), encoding="utf-8")
    enrichment = tmp_path / "enrichment.json"
    enrichment.write_text(json.dumps({"odds": {"CIN@DEN": {"spread": 4.0, "total": 51.5}}}), encoding="utf-8")
    output = tmp_path / "lineup.csv"

    code = main(
        [
            str(salaries),
            "--strategy",
            "best_score",
            "--enrichment",
            str(enrichment),
            "--lock",
            "10",
            "--exclude",
            "1",
            "--output",
            str(output),
        ]
    )

    assert code == 0
    captured = capsys.readouterr().out
    assert "Lineup score:" in captured
    with output.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["slot"] for row in rows] == ["QB", "RB", "RB", "WR", "WR", "WR", "TE", "FLEX", "DST"]
    assert rows[0]["player_id"] == "10"
    assert all(row["player_id"] != "1" for row in rows)


def test_cli_reports_empty_pool(tmp_path: Path, capsys):
    salaries = tmp_path / "empty.csv"
    salaries.write_text("Name,Salary\n", encoding="utf-8")

    assert main([str(salaries)]) == 1
    assert "Auto-fill rejected" in capsys.readouterr().out
