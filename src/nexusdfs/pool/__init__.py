"""Lineup pool utilities (scoring, selection)."""

from .scoring import LineupCandidate, score_lineups
from .selection import (
    SelectedLineup,
    SelectionCriteria,
    SelectionResult,
    SelectionSummary,
    player_exposure,
    select_lineups,
    team_stack_exposure,
)

__all__ = [
    "LineupCandidate",
    "SelectedLineup",
    "SelectionCriteria",
    "SelectionResult",
    "SelectionSummary",
    "player_exposure",
    "score_lineups",
    "select_lineups",
    "team_stack_exposure",
]
