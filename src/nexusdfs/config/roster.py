"""Roster configuration for supported site/sport combinations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Set, Tuple, Union


@dataclass(frozen=True)
class RosterRules:
    site: str
    sport: str
    salary_cap: int
    roster_order: Tuple[str, ...]
    slot_positions: Mapping[str, Set[str]]
    team_max_players: int
    stacking_slots: Set[str]
    captain_slot: str


_ROSTER_RULES: Dict[Tuple[str, str], RosterRules] = {
    ("DK_CAPTAIN", "LOL"): RosterRules(
        site="DK_CAPTAIN",
        sport="LOL",
        salary_cap=50_000,
        roster_order=("CPT", "TOP", "JNG", "MID", "ADC", "SUP", "TEAM"),
        slot_positions={
            "CPT": {"TOP", "JNG", "MID", "ADC", "SUP", "CPT"},
            "TOP": {"TOP"},
            "JNG": {"JNG"},
            "MID": {"MID"},
            "ADC": {"ADC"},
            "SUP": {"SUP"},
            "TEAM": {"TEAM"},
        },
        team_max_players=4,
        stacking_slots={"CPT", "TOP", "JNG", "MID", "ADC", "SUP"},
        captain_slot="CPT",
    ),
}


def iter_rules() -> Iterable[RosterRules]:
    """Return an iterator of all configured rule sets."""

    return _ROSTER_RULES.values()


def get_rules(site: str, sport: str) -> RosterRules:
    """Fetch rules for a site/sport pair, raising KeyError if missing."""

    key = (site.upper(), sport.upper())
    if key not in _ROSTER_RULES:
        raise KeyError(f"No roster rules configured for site={site!r}, sport={sport!r}")
    return _ROSTER_RULES[key]


def get_rules_by_key(site_key: Union[str, Tuple[str, str]]) -> RosterRules:
    """Resolve rules using either "SITE_SPORT" or (site, sport)."""

    if isinstance(site_key, tuple):
        site, sport = site_key
        return get_rules(site, sport)

    if not isinstance(site_key, str):
        raise TypeError("site_key must be a str or (site, sport) tuple")

    # Site keys may contain underscores themselves (DK_CAPTAIN), so split on the last one.
    parts = site_key.rsplit("_", 1)
    if len(parts) != 2:
        raise ValueError(f"site_key must look like 'SITE_SPORT', got {site_key!r}")

    site, sport = parts
    return get_rules(site, sport)


DEFAULT_RULES = get_rules("DK_CAPTAIN", "LOL")
