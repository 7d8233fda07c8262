"""Lineup valuation engine: strength, finish distribution, EV/ROI and NexusScore."""

from .distribution import FinishDistribution, expected_percentile, finish_probability, project_finish_distribution
from .factors import (
    ceiling_score,
    correlation_score,
    historical_score,
    lineup_projection,
    ownership_leverage,
    projection_score,
)
from .nexus import nexus_score
from .payouts import calculate_roi, expected_value, gpp_structure
from .reporting import ROIBreakdown, calculate_confidence, roi_breakdown
from .service import LineupValuation, value_lineup
from .strength import FactorScores, aggregate_strength, evaluate_lineup_strength, score_factors
from .summary import LineupSummary, summarize_lineup

__all__ = [
    "FactorScores",
    "FinishDistribution",
    "LineupSummary",
    "LineupValuation",
    "ROIBreakdown",
    "aggregate_strength",
    "calculate_confidence",
    "calculate_roi",
    "ceiling_score",
    "correlation_score",
    "evaluate_lineup_strength",
    "expected_percentile",
    "expected_value",
    "finish_probability",
    "gpp_structure",
    "historical_score",
    "lineup_projection",
    "nexus_score",
    "ownership_leverage",
    "project_finish_distribution",
    "projection_score",
    "roi_breakdown",
    "score_factors",
    "summarize_lineup",
    "value_lineup",
]
