"""REST API over a single draft session."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import FastAPI, File, HTTPException, Query, UploadFile

from dfsbuilder.analysis import AnalysisReport, Finding
from dfsbuilder.api.schemas import (
    AddPlayerRequest,
    AnalysisResponse,
    AutofillRequest,
    AutofillResponse,
    ContestRequest,
    EnrichmentRequest,
    ExclusionRequest,
    FindingResponse,
    LineupResponse,
    LoadResponse,
    PlayerListResponse,
    PlayerResponse,
    SlotResponse,
)
from dfsbuilder.config import AutofillSettings, ValuationSettings
from dfsbuilder.ingest import load_salary_text
from dfsbuilder.lineup import LineupState
from dfsbuilder.models import ValuatedPlayer
from dfsbuilder.pool import PoolCriteria
from dfsbuilder.session import DraftSession


logger = logging.getLogger(__name__)


def _player_to_response(player: ValuatedPlayer, *, excluded: bool = False) -> PlayerResponse:
    return PlayerResponse(
        player_id=player.player_id,
        name=player.name,
        team=player.team,
        position=player.position,
        salary=player.salary,
        avg_points=player.avg_points,
        game_code=player.game_code,
        value=round(player.value, 3),
        adj_value=round(player.adj_value, 3),
        is_top_value=player.is_top_value,
        implied_team_total=player.implied_team_total,
        composite_score=round(player.composite_score, 2),
        floor_score=round(player.floor_score, 2),
        excluded=excluded,
    )


def _lineup_to_response(lineup: LineupState) -> LineupResponse:
    totals = lineup.totals()
    slots = []
    for index, label in enumerate(lineup.contest.slots):
        occupant = lineup.occupants[index]
        if occupant is None:
            slots.append(SlotResponse(index=index, slot=label))
            continue
        slots.append(
            SlotResponse(
                index=index,
                slot=label,
                player_id=occupant.player_id,
                name=occupant.name,
                team=occupant.team,
                position=occupant.position,
                salary=occupant.salary,
                is_captain=occupant.is_captain,
            )
        )
    return LineupResponse(
        contest=lineup.contest.name,
        salary_cap=totals.cap,
        salary_used=totals.used,
        salary_remaining=totals.remaining,
        filled=totals.filled,
        open=totals.open,
        slots=slots,
    )


def _finding_to_response(finding: Finding) -> FindingResponse:
    return FindingResponse(
        category=finding.category,
        weight=finding.weight,
        title=finding.title,
        detail=finding.detail,
    )


def _report_to_response(report: AnalysisReport) -> AnalysisResponse:
    return AnalysisResponse(
        score=round(report.score, 2),
        findings=[_finding_to_response(f) for f in report.findings],
        by_category={
            category: [_finding_to_response(f) for f in findings]
            for category, findings in report.by_category().items()
        },
    )


def create_app(session: DraftSession | None = None) -> FastAPI:
    app = FastAPI(title="dfsbuilder", version="0.1.0")
    app.state.session = session or DraftSession(
        valuation_settings=ValuationSettings.from_env(),
        autofill_settings=AutofillSettings.from_env(),
    )

    def _session() -> DraftSession:
        return app.state.session

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/players", response_model=LoadResponse)
    async def upload_players(players: UploadFile = File(...)) -> LoadResponse:
        contents = await players.read()
        try:
            text = contents.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=422, detail=f"Salary file is not UTF-8: {exc}") from exc
        records = load_salary_text(text)
        if not records:
            raise HTTPException(status_code=422, detail="No usable player rows found")
        _session().load_players(records)
        logger.info("Loaded %d players from upload %s", len(records), players.filename)
        return LoadResponse(players=len(records))

    @app.get("/players", response_model=PlayerListResponse)
    async def list_players(
        tab: str = "ALL",
        search: str = "",
        sort_by: Literal["score", "value", "adj_value", "floor", "salary", "points", "name"] = "score",
        sort_direction: Literal["asc", "desc"] = "desc",
        hide_excluded: bool = False,
        top_value_only: bool = False,
        limit: int | None = Query(default=None, ge=1, le=1000),
    ) -> PlayerListResponse:
        session = _session()
        view = session.view(
            PoolCriteria(
                tab=tab,
                search=search,
                sort_by=sort_by,
                sort_direction=sort_direction,
                hide_excluded=hide_excluded,
                top_value_only=top_value_only,
                limit=limit,
            )
        )
        return PlayerListResponse(
            available=view.available,
            shown=view.shown,
            players=[_player_to_response(row.player, excluded=row.excluded) for row in view.rows],
        )

    @app.put("/enrichment", response_model=LoadResponse)
    async def update_enrichment(payload: EnrichmentRequest) -> LoadResponse:
        session = _session()
        session.update_enrichment(
            defense=payload.defense,
            odds=payload.odds,
            weather=payload.weather,
            trends=payload.trends,
        )
        return LoadResponse(players=len(session.valuated))

    @app.put("/exclusions")
    async def set_exclusions(payload: ExclusionRequest) -> dict[str, list[str]]:
        session = _session()
        session.set_excluded(payload.player_ids)
        return {"excluded": sorted(session.excluded)}

    @app.post("/contest", response_model=LineupResponse)
    async def select_contest(payload: ContestRequest) -> LineupResponse:
        session = _session()
        try:
            session.select_contest(payload.name)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
        return _lineup_to_response(session.lineup)

    @app.get("/lineup", response_model=LineupResponse)
    async def get_lineup() -> LineupResponse:
        return _lineup_to_response(_session().lineup)

    @app.delete("/lineup", response_model=LineupResponse)
    async def clear_lineup() -> LineupResponse:
        session = _session()
        session.clear_lineup()
        return _lineup_to_response(session.lineup)

    @app.post("/lineup/players", response_model=LineupResponse)
    async def add_player(payload: AddPlayerRequest) -> LineupResponse:
        session = _session()
        if session.player(payload.player_id) is None:
            raise HTTPException(status_code=404, detail=f"player {payload.player_id} not found")
        change = session.add_player(payload.player_id, payload.slot_index)
        if not change.ok:
            raise HTTPException(status_code=409, detail=change.reason)
        return _lineup_to_response(change.lineup)

    @app.delete("/lineup/slots/{slot_index}", response_model=LineupResponse)
    async def remove_slot(slot_index: int) -> LineupResponse:
        change = _session().remove_slot(slot_index)
        if not change.ok:
            raise HTTPException(status_code=409, detail=change.reason)
        return _lineup_to_response(change.lineup)

    @app.post("/lineup/autofill", response_model=AutofillResponse)
    async def run_autofill(payload: AutofillRequest) -> AutofillResponse:
        result = _session().autofill(payload.strategy, upgrade=payload.upgrade)
        if not result.ok:
            raise HTTPException(status_code=409, detail=result.reason)
        swap = None
        if result.swap is not None:
            swap = {
                "slot_index": result.swap.slot_index,
                "removed_id": result.swap.removed_id,
                "added_id": result.swap.added_id,
            }
        return AutofillResponse(
            filled=result.filled,
            unfilled=result.unfilled,
            swap=swap,
            lineup=_lineup_to_response(result.lineup),
        )

    @app.get("/lineup/analysis", response_model=AnalysisResponse)
    async def analyze() -> AnalysisResponse:
        report = _session().analyze()
        if not report.ok:
            raise HTTPException(status_code=409, detail=report.reason)
        return _report_to_response(report)

    return app
