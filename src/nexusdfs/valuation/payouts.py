"""Payout structures, expected value and ROI."""

from __future__ import annotations

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, GppPayoutStructure, ValuationConfig
from nexusdfs.models import Contest
from nexusdfs.valuation.distribution import FinishDistribution


def gpp_structure(field_size: int, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> GppPayoutStructure:
    if field_size < config.gpp_small_field:
        return config.gpp_small
    if field_size < config.gpp_large_field:
        return config.gpp_medium
    return config.gpp_large


def _gpp_expected_value(
    distribution: FinishDistribution,
    contest: Contest,
    config: ValuationConfig,
) -> float:
    structure = gpp_structure(contest.field_size, config)
    prize_pool = contest.effective_prize_pool

    top1_prize = prize_pool * structure.first
    avg_top5_prize = prize_pool * config.top5_pool_share / (contest.field_size * config.top5_field_share)
    avg_top10_prize = prize_pool * config.top10_pool_share / (contest.field_size * config.top10_field_share)
    min_cash = contest.entry_fee * config.min_cash_multiplier

    ev = distribution.top1 * top1_prize
    ev += (distribution.top5 - distribution.top1) * avg_top5_prize
    ev += (distribution.top10 - distribution.top5) * avg_top10_prize
    ev += (distribution.cash - distribution.top10) * min_cash
    return ev


def expected_value(
    distribution: FinishDistribution,
    contest: Contest,
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    """Integrate the finish distribution against the contest's payouts."""

    if contest.kind == "cash":
        return distribution.cash * contest.entry_fee * config.cash_payout_multiplier
    if contest.kind == "satellite":
        return distribution.top20 * contest.entry_fee * config.satellite_ticket_multiplier
    return _gpp_expected_value(distribution, contest, config)


def calculate_roi(expected: float, entry_fee: float) -> float:
    """Return on investment as a percentage of the entry fee, two decimals."""

    return round((expected - entry_fee) / entry_fee * 100.0, 2)
