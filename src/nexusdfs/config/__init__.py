"""Configuration helpers for roster rules and valuation tables."""

from .roster import DEFAULT_RULES, RosterRules, get_rules, get_rules_by_key, iter_rules
from .valuation import (
    DEFAULT_VALUATION_CONFIG,
    GppPayoutStructure,
    ProbabilityCaps,
    ValuationConfig,
)

__all__ = [
    "DEFAULT_RULES",
    "DEFAULT_VALUATION_CONFIG",
    "GppPayoutStructure",
    "ProbabilityCaps",
    "RosterRules",
    "ValuationConfig",
    "get_rules",
    "get_rules_by_key",
    "iter_rules",
]
