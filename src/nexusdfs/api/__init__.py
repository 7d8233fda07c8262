"""REST API for the lineup valuation engine."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, HTTPException

from nexusdfs.api.schemas import (
    BreakdownResponse,
    FactorScoresResponse,
    FinishDistributionResponse,
    LineupSummaryResponse,
    NexusRequest,
    PoolSelectedLineup,
    PoolSelectRequest,
    PoolSelectResponse,
    SelectionSummaryResponse,
    ValuationRequest,
    ValuationResponse,
)
from nexusdfs.config.valuation import ValuationConfig
from nexusdfs.config_loader import config_from_env
from nexusdfs.pool import player_exposure, score_lineups, select_lineups, team_stack_exposure
from nexusdfs.pool.selection import SelectionSummary
from nexusdfs.valuation import nexus_score, summarize_lineup, value_lineup


logger = logging.getLogger(__name__)


def _summary_response(summary: SelectionSummary) -> SelectionSummaryResponse:
    return SelectionSummaryResponse.model_validate(asdict(summary))


def create_app(config: Optional[ValuationConfig] = None) -> FastAPI:
    app = FastAPI(title="nexusdfs valuation")
    valuation_config = config if config is not None else config_from_env()
    logger.info("Valuation API configured (base strength %.1f)", valuation_config.strength_base)
    app.state.valuation_config = valuation_config

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/valuations", response_model=ValuationResponse)
    async def valuations(request: ValuationRequest) -> ValuationResponse:
        if not request.lineup.all_players():
            raise HTTPException(status_code=400, detail="lineup has no players")
        try:
            contest = request.contest.to_contest()
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        result = value_lineup(request.lineup, contest, request.historical, config=valuation_config)
        return ValuationResponse(
            lineup_id=request.lineup.lineup_id,
            contest_kind=result.contest_kind,
            roi=result.roi,
            expected_value=result.expected_value,
            finish_distribution=FinishDistributionResponse(**result.finish_distribution.as_dict()),
            lineup_strength=result.lineup_strength,
            expected_percentile=result.expected_percentile,
            confidence=result.confidence,
            breakdown=BreakdownResponse(**asdict(result.breakdown)),
            factors=FactorScoresResponse(**asdict(result.factors)),
            nexus_score=nexus_score(request.lineup, valuation_config),
        )

    @app.post("/nexus-score", response_model=LineupSummaryResponse)
    async def nexus(request: NexusRequest) -> LineupSummaryResponse:
        summary = summarize_lineup(request.lineup, valuation_config)
        return LineupSummaryResponse(lineup_id=request.lineup.lineup_id, **asdict(summary))

    @app.post("/pool/select", response_model=PoolSelectResponse)
    async def pool_select(request: PoolSelectRequest) -> PoolSelectResponse:
        try:
            contest = request.contest.to_contest()
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        candidates = score_lineups(
            request.lineups,
            contest,
            request.historical,
            workers=1,
            config=valuation_config,
        )
        result = select_lineups(candidates, request.criteria.to_criteria())
        selected = [item.candidate.lineup for item in result.lineups]

        return PoolSelectResponse(
            contest_kind=contest.kind,
            pool_summary=_summary_response(result.pool_summary),
            summary=_summary_response(result.summary),
            lineups=[
                PoolSelectedLineup(
                    rank=item.rank,
                    lineup_id=item.candidate.lineup.lineup_id,
                    count=item.candidate.count,
                    roi=item.candidate.roi,
                    expected_value=item.candidate.expected_value,
                    lineup_strength=item.candidate.strength,
                    nexus_score=item.candidate.nexus_score,
                    total_projection=item.candidate.projection,
                    player_ids=[player.player_id for player in item.candidate.lineup.all_players()],
                )
                for item in result.lineups
            ],
            player_exposure=player_exposure(selected),
            team_stack_exposure=team_stack_exposure(selected),
        )

    return app


__all__ = ["create_app"]
