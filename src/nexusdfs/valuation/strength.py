"""Weighted aggregation of the factor scores into a 0-100 strength."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig
from nexusdfs.models import HistoricalData, Lineup
from nexusdfs.valuation.factors import (
    ceiling_score,
    correlation_score,
    historical_score,
    ownership_leverage,
    projection_score,
)


@dataclass(frozen=True)
class FactorScores:
    projection: float
    leverage: float
    correlation: float
    ceiling: float
    # None when no historical sidecar was supplied; the term is then skipped.
    historical: Optional[float] = None


def score_factors(
    lineup: Lineup,
    historical: Optional[HistoricalData] = None,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> FactorScores:
    return FactorScores(
        projection=projection_score(lineup, config),
        leverage=ownership_leverage(lineup, config),
        correlation=correlation_score(lineup, config),
        ceiling=ceiling_score(lineup, config),
        historical=historical_score(lineup, historical, config) if historical is not None else None,
    )


def aggregate_strength(factors: FactorScores, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    """Base offset plus weighted factors, clamped to ``[0, 100]``."""

    projection_weight, leverage_weight, correlation_weight, historical_weight, ceiling_weight = (
        config.strength_weights
    )
    strength = config.strength_base
    strength += factors.projection * projection_weight
    strength += factors.leverage * leverage_weight
    strength += factors.correlation * correlation_weight
    if factors.historical is not None:
        strength += factors.historical * historical_weight
    strength += factors.ceiling * ceiling_weight
    return max(0.0, min(100.0, strength))


def evaluate_lineup_strength(
    lineup: Lineup,
    historical: Optional[HistoricalData] = None,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    return aggregate_strength(score_factors(lineup, historical, config), config)
