"""Confidence scalar and named ROI breakdown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig
from nexusdfs.models import Contest, HistoricalData
from nexusdfs.valuation.distribution import FinishDistribution


@dataclass(frozen=True)
class ROIBreakdown:
    top_finish_ev: float
    cash_ev: float
    # The three probabilities below are percentages (0-100), not fractions.
    bust_probability: float
    break_even_probability: float
    doubling_probability: float


def calculate_confidence(
    historical: Optional[HistoricalData],
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    if historical is None:
        return config.confidence_base

    confidence = config.confidence_base
    for threshold, bonus in config.confidence_sample_steps:
        if historical.sample_size > threshold:
            confidence += bonus
            break
    for threshold, bonus in config.confidence_age_steps:
        if historical.days_old < threshold:
            confidence += bonus
            break
    return min(config.confidence_cap, confidence)


def roi_breakdown(
    distribution: FinishDistribution,
    contest: Contest,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> ROIBreakdown:
    entry_fee = contest.entry_fee
    return ROIBreakdown(
        top_finish_ev=round(distribution.top10 * entry_fee * config.top_finish_multiplier, 2),
        cash_ev=round(distribution.cash * entry_fee * config.cash_ev_multiplier, 2),
        bust_probability=(1.0 - distribution.cash) * 100.0,
        break_even_probability=distribution.cash * 100.0,
        doubling_probability=distribution.top10 * 100.0,
    )
