"""Per-lineup totals decorated with the NexusScore."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, ValuationConfig
from nexusdfs.models import Lineup
from nexusdfs.valuation.factors import average_ownership, lineup_projection, team_counts
from nexusdfs.valuation.nexus import nexus_from_totals


@dataclass(frozen=True)
class LineupSummary:
    total_salary: int
    total_projection: float
    average_ownership: float
    nexus_score: float
    team_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def max_stack(self) -> int:
        return max(self.team_counts.values(), default=0)


def summarize_lineup(lineup: Lineup, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> LineupSummary:
    players = lineup.all_players()
    total_projection = lineup_projection(lineup, config)
    mean_ownership = average_ownership(lineup)
    counts = team_counts(players)
    return LineupSummary(
        total_salary=sum(player.salary for player in players),
        total_projection=round(total_projection, 2),
        average_ownership=mean_ownership if mean_ownership is not None else 0.0,
        nexus_score=round(nexus_from_totals(total_projection, mean_ownership, counts, config), 1),
        team_counts=dict(counts),
    )
