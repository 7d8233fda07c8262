"""Pydantic models for API I/O."""

from .pool import (
    PoolSelectedLineup,
    PoolSelectRequest,
    PoolSelectResponse,
    SelectionCriteriaRequest,
    SelectionSummaryResponse,
)
from .valuation import (
    BreakdownResponse,
    ContestRequest,
    FactorScoresResponse,
    FinishDistributionResponse,
    LineupSummaryResponse,
    NexusRequest,
    ValuationRequest,
    ValuationResponse,
)

__all__ = [
    "BreakdownResponse",
    "ContestRequest",
    "FactorScoresResponse",
    "FinishDistributionResponse",
    "LineupSummaryResponse",
    "NexusRequest",
    "PoolSelectedLineup",
    "PoolSelectRequest",
    "PoolSelectResponse",
    "SelectionCriteriaRequest",
    "SelectionSummaryResponse",
    "ValuationRequest",
    "ValuationResponse",
]
