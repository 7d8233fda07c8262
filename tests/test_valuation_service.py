import math

import pytest

from nexusdfs.config import ValuationConfig
from nexusdfs.models import HistoricalData, Lineup, PlayerHistory, contest_from_entry
from nexusdfs.valuation import evaluate_lineup_strength, value_lineup

from tests.factories import balanced_four_stack, chalky_two_stack, contrarian_no_stack, player


BIG_GPP = contest_from_entry("LCK Milly Maker", entry_fee=20, field_size=5000)

BALANCED_CEILING = 0.7 * 0.25 + 0.8 * 0.25 + 0.6 * 0.2 + 1.0 * 0.2 + (3.1 / 6) * 0.1
BALANCED_STRENGTH = 30 + 0.7 * 40 + 0.6 * 15 + 0.87 * 10 + BALANCED_CEILING * 5


def test_balanced_four_stack_in_large_gpp():
    result = value_lineup(balanced_four_stack(), BIG_GPP)

    assert result.contest_kind == "gpp"
    assert result.lineup_strength == pytest.approx(BALANCED_STRENGTH)
    assert result.expected_percentile == pytest.approx(20 - (BALANCED_STRENGTH - 75) / 25 * 15)
    assert result.factors.historical is None
    assert result.confidence == 0.5

    dist = result.finish_distribution
    assert dist.top1 <= 0.010 * 1.5
    assert dist.top1 <= dist.top5 <= dist.top10 <= dist.top20 <= dist.cash
    assert result.expected_value > BIG_GPP.entry_fee
    assert result.roi > 0


def test_chalky_lineup_ranks_below_balanced():
    balanced = value_lineup(balanced_four_stack(), BIG_GPP)
    chalky = value_lineup(chalky_two_stack(), BIG_GPP)

    chalky_ceiling = 0.4 * 0.25 + 0.5 * 0.25 + 0.2 * 0.2 + 0.8 * 0.2 + (3.1 / 6) * 0.1
    assert chalky.lineup_strength == pytest.approx(30 + 16 + 6 + 2.8 + chalky_ceiling * 5)
    assert chalky.finish_distribution.cash >= 0.10
    assert chalky.roi < balanced.roi
    assert chalky.expected_value < balanced.expected_value


def test_contrarian_lineup_sits_between():
    balanced = value_lineup(balanced_four_stack(), BIG_GPP)
    chalky = value_lineup(chalky_two_stack(), BIG_GPP)
    contrarian = value_lineup(contrarian_no_stack(), BIG_GPP)

    assert contrarian.factors.leverage == pytest.approx(0.8)
    assert contrarian.factors.correlation == pytest.approx(0.22)
    assert chalky.lineup_strength < contrarian.lineup_strength < balanced.lineup_strength
    assert contrarian.roi > 0
    assert contrarian.expected_value > BIG_GPP.entry_fee


def test_cash_contest_valuation():
    contest = contest_from_entry("Daily 50/50", entry_fee=10)
    result = value_lineup(chalky_two_stack(), contest)

    # expected percentile ~34.25 falls in the 0.60 cash band
    assert result.contest_kind == "cash"
    assert result.finish_distribution.cash == pytest.approx(0.60)
    assert result.expected_value == pytest.approx(0.60 * 10 * 1.8)
    assert result.roi == pytest.approx(8.0)


def test_small_field_top1_uses_logistic():
    contest = contest_from_entry("Tiny League", entry_fee=5, field_size=50)
    result = value_lineup(balanced_four_stack(), contest)

    expected = result.expected_percentile
    logistic = 1.0 / (1.0 + math.exp(-1.7 * (1 - expected) / 25))
    assert result.finish_distribution.top1 == pytest.approx(logistic)
    assert result.finish_distribution.top1 < 0.5


def test_small_field_buckets_cap_at_half():
    contest = contest_from_entry("Tiny League", entry_fee=5, field_size=50)
    result = value_lineup(balanced_four_stack(), contest)
    distribution = result.finish_distribution

    def bucket(target: float) -> float:
        return min(1.0 / (1.0 + math.exp(-1.7 * (target - result.expected_percentile) / 25)), 0.5)

    assert distribution.top5 == pytest.approx(bucket(5))
    assert distribution.top10 == pytest.approx(bucket(10))
    assert distribution.top20 == pytest.approx(bucket(20))
    # expected percentile ~17.3 puts the top-20 logistic above the cap
    assert distribution.top20 == pytest.approx(0.5)
    assert distribution.top5 > 0.035


def test_satellite_valuation_uses_top20():
    contest = contest_from_entry("Worlds Satellite", entry_fee=10, field_size=500)
    result = value_lineup(balanced_four_stack(), contest)

    assert result.contest_kind == "satellite"
    assert result.expected_value == pytest.approx(result.finish_distribution.top20 * 10 * 10)


def test_empty_lineup_still_values():
    result = value_lineup(Lineup(), BIG_GPP)

    # base 30 + leverage floor 3 + correlation 1.8 + ceiling 2.075
    assert result.lineup_strength == pytest.approx(36.875)
    assert result.expected_value >= 0
    assert result.roi >= -100


def test_valuation_is_deterministic():
    first = value_lineup(balanced_four_stack(), BIG_GPP)
    second = value_lineup(balanced_four_stack(), BIG_GPP)
    assert first == second


def test_historical_data_adds_weighted_term_and_confidence():
    historical = HistoricalData(
        sample_size=1500,
        days_old=3,
        players={"t1-mid": PlayerHistory(consistency=0.9, ceiling_rate=0.4, recent_form=1.0, matchup_score=1.0)},
    )
    without = value_lineup(balanced_four_stack(), BIG_GPP)
    with_history = value_lineup(balanced_four_stack(), BIG_GPP, historical)

    assert with_history.factors.historical == pytest.approx(1.0)
    assert with_history.lineup_strength == pytest.approx(without.lineup_strength + 5.0)
    assert with_history.confidence == pytest.approx(0.9)


def test_higher_projection_never_lowers_strength():
    base = balanced_four_stack()
    boosted = Lineup(
        captain=base.captain,
        players=[player("t1-jng", "JNG", "T1", 100.0, opponent="vs GEN"), *base.players[1:]],
    )
    assert evaluate_lineup_strength(boosted) >= evaluate_lineup_strength(base)
    assert value_lineup(boosted, BIG_GPP).roi >= value_lineup(base, BIG_GPP).roi


def test_custom_config_changes_base_strength():
    config = ValuationConfig(strength_base=20.0)
    default = value_lineup(chalky_two_stack(), BIG_GPP)
    lowered = value_lineup(chalky_two_stack(), BIG_GPP, config=config)
    assert lowered.lineup_strength == pytest.approx(default.lineup_strength - 10.0)
