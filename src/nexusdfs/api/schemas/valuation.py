from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field

from nexusdfs.models import HistoricalData, Lineup, contest_from_entry


class ContestRequest(BaseModel):
    name: Optional[str] = None
    entry_fee: Optional[float] = Field(default=None, gt=0.0)
    field_size: Optional[int] = Field(default=None, gt=0)
    prize_pool: Optional[float] = Field(default=None, gt=0.0)
    max_entries: Optional[int] = Field(default=None, ge=1)

    def to_contest(self):
        return contest_from_entry(
            self.name,
            entry_fee=self.entry_fee,
            field_size=self.field_size,
            prize_pool=self.prize_pool,
            max_entries=self.max_entries,
        )


class ValuationRequest(BaseModel):
    lineup: Lineup
    contest: ContestRequest = Field(default_factory=ContestRequest)
    historical: Optional[HistoricalData] = None


class FinishDistributionResponse(BaseModel):
    top1: float
    top5: float
    top10: float
    top20: float
    cash: float


class BreakdownResponse(BaseModel):
    top_finish_ev: float
    cash_ev: float
    bust_probability: float
    break_even_probability: float
    doubling_probability: float


class FactorScoresResponse(BaseModel):
    projection: float
    leverage: float
    correlation: float
    ceiling: float
    historical: Optional[float] = None


class ValuationResponse(BaseModel):
    lineup_id: str
    contest_kind: str
    roi: float
    expected_value: float
    finish_distribution: FinishDistributionResponse
    lineup_strength: float
    expected_percentile: float
    confidence: float
    breakdown: BreakdownResponse
    factors: FactorScoresResponse
    nexus_score: float


class NexusRequest(BaseModel):
    lineup: Lineup


class LineupSummaryResponse(BaseModel):
    lineup_id: str
    total_salary: int
    total_projection: float
    average_ownership: float
    nexus_score: float
    team_counts: Dict[str, int]
