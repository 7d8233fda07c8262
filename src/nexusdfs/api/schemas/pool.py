from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from nexusdfs.config.roster import DEFAULT_RULES
from nexusdfs.models import HistoricalData, Lineup
from nexusdfs.pool import SelectionCriteria

from .valuation import ContestRequest


class SelectionCriteriaRequest(BaseModel):
    min_roi: float | None = None
    max_roi: float | None = None
    min_strength: float | None = Field(default=None, ge=0.0, le=100.0)
    min_nexus: float | None = None
    max_nexus: float | None = None
    min_projection: float | None = Field(default=None, ge=0.0)
    include_player_ids: List[str] | None = None
    exclude_player_ids: List[str] | None = None
    include_team_codes: List[str] | None = None
    exclude_team_codes: List[str] | None = None
    min_stack_size: int | None = Field(default=None, ge=1, le=6)
    max_from_one_team: int | None = Field(default=DEFAULT_RULES.team_max_players, ge=1, le=6)
    limit: int | None = Field(default=20, ge=1, le=500)
    sort_by: Literal["roi", "nexus", "strength", "expected_value", "projection"] = "roi"
    sort_direction: Literal["asc", "desc"] = "desc"
    max_player_exposure: float | None = Field(default=None, ge=0.0, le=1.0)
    player_exposure_caps: Dict[str, float] = Field(default_factory=dict)
    team_stack_caps: Dict[str, float] = Field(default_factory=dict)
    stack_exposure_size: int = Field(default=4, ge=2, le=6)

    def to_criteria(self) -> SelectionCriteria:
        return SelectionCriteria(
            min_roi=self.min_roi,
            max_roi=self.max_roi,
            min_strength=self.min_strength,
            min_nexus=self.min_nexus,
            max_nexus=self.max_nexus,
            min_projection=self.min_projection,
            include_player_ids=tuple(self.include_player_ids or ()),
            exclude_player_ids=tuple(self.exclude_player_ids or ()),
            include_team_codes=tuple(self.include_team_codes or ()),
            exclude_team_codes=tuple(self.exclude_team_codes or ()),
            min_stack_size=self.min_stack_size,
            max_from_one_team=self.max_from_one_team,
            limit=self.limit,
            sort_by=self.sort_by,
            sort_direction=self.sort_direction,
            max_player_exposure=self.max_player_exposure,
            player_exposure_caps=tuple(self.player_exposure_caps.items()),
            team_stack_caps=tuple(self.team_stack_caps.items()),
            stack_exposure_size=self.stack_exposure_size,
        )


class PoolSelectRequest(BaseModel):
    lineups: List[Lineup] = Field(..., min_length=1)
    contest: ContestRequest = Field(default_factory=ContestRequest)
    historical: Optional[HistoricalData] = None
    criteria: SelectionCriteriaRequest = Field(default_factory=SelectionCriteriaRequest)


class SelectionSummaryResponse(BaseModel):
    available_lineups: int
    selected_lineups: int
    total_instances: int
    roi_mean: float | None
    roi_median: float | None
    roi_std: float | None
    strength_mean: float | None
    nexus_mean: float | None
    expected_value_mean: float | None


class PoolSelectedLineup(BaseModel):
    rank: int
    lineup_id: str
    count: int
    roi: float
    expected_value: float
    lineup_strength: float
    nexus_score: float
    total_projection: float
    player_ids: List[str]


class PoolSelectResponse(BaseModel):
    contest_kind: str
    pool_summary: SelectionSummaryResponse
    summary: SelectionSummaryResponse
    lineups: List[PoolSelectedLineup]
    player_exposure: Dict[str, float]
    team_stack_exposure: Dict[str, float]
