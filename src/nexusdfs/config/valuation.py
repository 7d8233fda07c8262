"""Constant tables driving the lineup valuation engine.

Every heuristic number the engine uses lives on :class:`ValuationConfig` so
tests and profiles can vary them. ``DEFAULT_VALUATION_CONFIG`` is the only
pre-populated instance and is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# (upper bound exclusive, score); values at or above the last bound fall through
# to the band's floor.
Bands = Tuple[Tuple[float, float], ...]

# (strength_low, strength_high, percentile_at_low, percentile_at_high)
CurveSegment = Tuple[float, float, float, float]


@dataclass(frozen=True)
class ProbabilityCaps:
    top1: float
    top5: float
    top10: float
    top20: float

    def for_target(self, target: int) -> float:
        return {1: self.top1, 5: self.top5, 10: self.top10, 20: self.top20}[target]


@dataclass(frozen=True)
class GppPayoutStructure:
    first: float
    top3: float
    top10_percent: float


@dataclass(frozen=True)
class ValuationConfig:
    captain_multiplier: float = 1.5

    # Projection factor
    projection_anchors: Tuple[float, float, float, float] = (320.0, 380.0, 420.0, 450.0)
    projection_scores: Tuple[float, float, float, float] = (0.0, 0.4, 0.7, 1.0)

    # Ownership leverage factor
    leverage_bands: Bands = ((5.0, 1.0), (10.0, 0.8), (20.0, 0.6), (30.0, 0.4))
    leverage_floor: float = 0.2

    # Correlation factor
    correlation_weights: Tuple[float, float, float, float] = (0.4, 0.3, 0.2, 0.1)
    # (largest team count, score)
    stack_scores: Tuple[Tuple[int, float], ...] = ((4, 0.9), (3, 0.7), (2, 0.4), (1, 0.2))
    stack_core_bonus_score: float = 1.0
    # (largest side, minimum smaller side, score); first match wins
    game_stack_scores: Tuple[Tuple[int, int, float], ...] = ((4, 2, 1.0), (3, 2, 0.8))
    game_stack_fallback: float = 0.6
    stack_bring_back_score: float = 0.8
    position_synergies: Tuple[Tuple[Tuple[str, ...], float], ...] = (
        (("MID", "JNG"), 0.3),
        (("ADC", "SUP"), 0.3),
        (("TOP", "JNG"), 0.2),
        (("MID", "JNG", "ADC"), 0.2),
    )
    position_neutral: float = 0.5
    captain_stack_scores: Tuple[Tuple[int, float], ...] = ((3, 1.0), (2, 0.7))
    captain_solo_score: float = 0.3
    carry_positions: Tuple[str, ...] = ("MID", "ADC")
    carry_captain_bonus: float = 0.1

    # Historical factor
    historical_neutral: float = 0.5
    consistency_threshold: float = 0.7
    consistency_credit: float = 0.2
    ceiling_rate_threshold: float = 0.2
    ceiling_rate_credit: float = 0.3
    recent_form_credit: float = 0.3
    matchup_credit: float = 0.2

    # Ceiling/variance factor
    ceiling_weights: Tuple[float, float, float, float, float] = (0.25, 0.25, 0.2, 0.2, 0.1)
    captain_leverage_bands: Bands = ((5.0, 1.0), (10.0, 0.8), (20.0, 0.6), (30.0, 0.4))
    captain_leverage_floor: float = 0.2
    environment_base: float = 0.5
    environment_carry_bonus: float = 0.2
    environment_game_stack_bonus: float = 0.3
    ceiling_ownership_bands: Bands = ((10.0, 1.0), (15.0, 0.8), (20.0, 0.6), (25.0, 0.4))
    ceiling_ownership_floor: float = 0.2
    concentration_bands: Tuple[Tuple[int, float], ...] = ((3, 1.0), (4, 0.8), (5, 0.6))
    concentration_floor: float = 0.4
    significant_game_players: int = 5
    significant_game_bonus: float = 0.2
    volatility_by_position: Tuple[Tuple[str, float], ...] = (
        ("MID", 0.7),
        ("ADC", 0.7),
        ("JNG", 0.6),
        ("TOP", 0.4),
        ("SUP", 0.4),
        ("TEAM", 0.3),
    )
    volatility_default: float = 0.5
    volatility_low_ownership: float = 10.0
    volatility_low_ownership_bonus: float = 0.2

    # Strength aggregator
    strength_base: float = 30.0
    strength_weights: Tuple[float, float, float, float, float] = (40.0, 15.0, 10.0, 5.0, 5.0)

    # Finish distribution
    percentile_curve: Tuple[CurveSegment, ...] = (
        (75.0, 100.0, 20.0, 5.0),
        (50.0, 75.0, 40.0, 20.0),
        (25.0, 50.0, 65.0, 40.0),
        (0.0, 25.0, 90.0, 65.0),
    )
    finish_targets: Tuple[int, ...] = (1, 5, 10, 20)
    logistic_slope: float = 1.7
    logistic_spread: float = 25.0
    quality_center: float = 50.0
    quality_scale: float = 30.0
    quality_bounds: Tuple[float, float] = (0.7, 1.5)
    large_field_threshold: int = 1000
    medium_field_threshold: int = 100
    large_field_caps: ProbabilityCaps = ProbabilityCaps(0.010, 0.035, 0.070, 0.150)
    medium_field_caps: ProbabilityCaps = ProbabilityCaps(0.020, 0.050, 0.100, 0.180)
    small_field_cap: float = 0.5
    cash_bands: Bands = ((30.0, 0.75), (45.0, 0.60), (55.0, 0.45), (65.0, 0.30))
    cash_floor: float = 0.15
    gpp_cash_floor: float = 0.10
    gpp_cash_floor_percentile: float = 50.0

    # Payouts
    gpp_small_field: int = 100
    gpp_large_field: int = 1000
    gpp_small: GppPayoutStructure = GppPayoutStructure(first=0.25, top3=0.45, top10_percent=0.70)
    gpp_medium: GppPayoutStructure = GppPayoutStructure(first=0.20, top3=0.35, top10_percent=0.65)
    gpp_large: GppPayoutStructure = GppPayoutStructure(first=0.15, top3=0.25, top10_percent=0.55)
    top5_pool_share: float = 0.08
    top5_field_share: float = 0.04
    top10_pool_share: float = 0.06
    top10_field_share: float = 0.05
    min_cash_multiplier: float = 1.8
    cash_payout_multiplier: float = 1.8
    satellite_ticket_multiplier: float = 10.0

    # Reporting
    confidence_base: float = 0.5
    confidence_sample_steps: Tuple[Tuple[int, float], ...] = ((1000, 0.2), (100, 0.1))
    confidence_age_steps: Tuple[Tuple[int, float], ...] = ((7, 0.2), (30, 0.1))
    confidence_cap: float = 0.9
    top_finish_multiplier: float = 5.0
    cash_ev_multiplier: float = 0.8

    # NexusScore
    nexus_ownership_floor: float = 0.001
    nexus_leverage_bounds: Tuple[float, float] = (0.6, 1.5)
    nexus_stack_min: int = 3
    nexus_stack_bonus: float = 3.0
    nexus_projection_divisor: float = 10.0
    nexus_bounds: Tuple[float, float] = (25.0, 65.0)


DEFAULT_VALUATION_CONFIG = ValuationConfig()
