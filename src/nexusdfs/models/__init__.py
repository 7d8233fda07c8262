"""Canonical models shared by the valuation engine, pool and API layers."""

from .contest import (
    CashContest,
    Contest,
    ContestKind,
    GppContest,
    HistoricalData,
    PlayerHistory,
    SatelliteContest,
    classify_contest,
    contest_from_entry,
)
from .player import Lineup, Player, Position

__all__ = [
    "CashContest",
    "Contest",
    "ContestKind",
    "GppContest",
    "HistoricalData",
    "Lineup",
    "Player",
    "PlayerHistory",
    "Position",
    "SatelliteContest",
    "classify_contest",
    "contest_from_entry",
]
