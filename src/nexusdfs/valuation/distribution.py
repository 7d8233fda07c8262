"""Strength to contest finish distribution.

Strength is first mapped onto an expected finish percentile (lower is
better) through a piecewise-linear curve. Each top-k bucket then gets a
logistic probability around that percentile, capped by a field-size tier
scaled with lineup quality. Buckets are nested monotonically before they
are returned so the EV integration never sees negative differences.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig
from nexusdfs.models import Contest


@dataclass(frozen=True)
class FinishDistribution:
    top1: float
    top5: float
    top10: float
    top20: float
    cash: float

    def as_dict(self) -> dict[str, float]:
        return {
            "top1": self.top1,
            "top5": self.top5,
            "top10": self.top10,
            "top20": self.top20,
            "cash": self.cash,
        }


def expected_percentile(strength: float, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    strength = max(0.0, min(100.0, strength))
    segment = config.percentile_curve[-1]
    for candidate in config.percentile_curve:
        if strength >= candidate[0]:
            segment = candidate
            break
    low, high, pct_low, pct_high = segment
    return pct_low + (strength - low) / (high - low) * (pct_high - pct_low)


def quality_multiplier(expected: float, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    low, high = config.quality_bounds
    return max(low, min(high, (config.quality_center - expected) / config.quality_scale))


def probability_cap(
    target: int,
    expected: float,
    field_size: int,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    if field_size > config.large_field_threshold:
        caps = config.large_field_caps
    elif field_size > config.medium_field_threshold:
        caps = config.medium_field_caps
    else:
        return config.small_field_cap
    if target not in config.finish_targets:
        return config.small_field_cap
    return caps.for_target(target) * quality_multiplier(expected, config)


def finish_probability(
    expected: float,
    target: int,
    field_size: int,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    """Capped probability of finishing inside the top ``target`` percent."""

    z_score = (target - expected) / config.logistic_spread
    probability = 1.0 / (1.0 + math.exp(-z_score * config.logistic_slope))
    return min(probability, probability_cap(target, expected, field_size, config))


def cash_probability(
    expected: float,
    contest: Contest,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    if contest.kind == "cash":
        for bound, probability in config.cash_bands:
            if expected < bound:
                return probability
        return config.cash_floor

    top20 = finish_probability(expected, 20, contest.field_size, config)
    if contest.kind == "gpp" and expected <= config.gpp_cash_floor_percentile:
        return max(config.gpp_cash_floor, top20)
    return top20


def project_finish_distribution(
    strength: float,
    contest: Contest,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> FinishDistribution:
    expected = expected_percentile(strength, config)
    raw = [
        finish_probability(expected, 1, contest.field_size, config),
        finish_probability(expected, 5, contest.field_size, config),
        finish_probability(expected, 10, contest.field_size, config),
        finish_probability(expected, 20, contest.field_size, config),
        cash_probability(expected, contest, config),
    ]
    nested = []
    running = 0.0
    for value in raw:
        running = max(running, min(1.0, value))
        nested.append(running)
    return FinishDistribution(*nested)
