"""Single entry point tying the valuation pipeline together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig
from nexusdfs.models import Contest, ContestKind, HistoricalData, Lineup
from nexusdfs.valuation.distribution import (
    FinishDistribution,
    expected_percentile,
    project_finish_distribution,
)
from nexusdfs.valuation.payouts import calculate_roi, expected_value
from nexusdfs.valuation.reporting import ROIBreakdown, calculate_confidence, roi_breakdown
from nexusdfs.valuation.strength import FactorScores, aggregate_strength, score_factors


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineupValuation:
    roi: float
    expected_value: float
    finish_distribution: FinishDistribution
    lineup_strength: float
    confidence: float
    breakdown: ROIBreakdown
    contest_kind: ContestKind
    expected_percentile: float
    factors: FactorScores


def value_lineup(
    lineup: Lineup,
    contest: Contest,
    historical: Optional[HistoricalData] = None,
    *,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> LineupValuation:
    """Score ``lineup`` against ``contest`` and project its ROI."""

    factors = score_factors(lineup, historical, config)
    strength = aggregate_strength(factors, config)
    percentile = expected_percentile(strength, config)
    distribution = project_finish_distribution(strength, contest, config)
    ev = expected_value(distribution, contest, config)

    logger.debug(
        "Valued lineup %s: kind=%s strength=%.2f percentile=%.2f ev=%.4f",
        lineup.lineup_id or "-",
        contest.kind,
        strength,
        percentile,
        ev,
    )

    return LineupValuation(
        roi=calculate_roi(ev, contest.entry_fee),
        expected_value=ev,
        finish_distribution=distribution,
        lineup_strength=strength,
        confidence=calculate_confidence(historical, config),
        breakdown=roi_breakdown(distribution, contest, config),
        contest_kind=contest.kind,
        expected_percentile=percentile,
        factors=factors,
    )
