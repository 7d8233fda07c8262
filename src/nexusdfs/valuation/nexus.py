"""NexusScore, the display-facing lineup rating."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig
from nexusdfs.models import Lineup
from nexusdfs.valuation.factors import average_ownership, lineup_projection, team_counts


def stack_bonus(counts: Counter[str], config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    return sum(
        (count - 2) * config.nexus_stack_bonus
        for count in counts.values()
        if count >= config.nexus_stack_min
    )


def nexus_from_totals(
    total_projection: float,
    mean_ownership: Optional[float],
    counts: Counter[str],
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    ownership = max(config.nexus_ownership_floor, (mean_ownership or 0.0) / 100.0)
    leverage_low, leverage_high = config.nexus_leverage_bounds
    leverage = max(leverage_low, min(leverage_high, 1.0 / ownership))
    base_score = total_projection / config.nexus_projection_divisor
    low, high = config.nexus_bounds
    return max(low, min(high, base_score * leverage + stack_bonus(counts, config) / 2.0))


def nexus_score(lineup: Lineup, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    return nexus_from_totals(
        lineup_projection(lineup, config),
        average_ownership(lineup),
        team_counts(lineup.all_players()),
        config,
    )
