"""Helpers for slicing scored lineup pools under exposure and stacking rules."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from statistics import fmean, median, pstdev
from typing import Iterable, Literal, Mapping, Sequence

from nexusdfs.config.roster import DEFAULT_RULES
from nexusdfs.models import Lineup
from nexusdfs.pool.scoring import LineupCandidate
from nexusdfs.valuation.factors import team_counts


logger = logging.getLogger(__name__)

SortKey = Literal["roi", "nexus", "strength", "expected_value", "projection"]


@dataclass(frozen=True)
class SelectionCriteria:
    """Selection configuration for scored lineup pools."""

    min_roi: float | None = None
    max_roi: float | None = None
    min_strength: float | None = None
    min_nexus: float | None = None
    max_nexus: float | None = None
    min_projection: float | None = None
    include_player_ids: tuple[str, ...] = ()
    exclude_player_ids: tuple[str, ...] = ()
    include_team_codes: tuple[str, ...] = ()
    exclude_team_codes: tuple[str, ...] = ()
    min_stack_size: int | None = None
    max_from_one_team: int | None = DEFAULT_RULES.team_max_players
    limit: int | None = None
    sort_by: SortKey = "roi"
    sort_direction: Literal["asc", "desc"] = "desc"
    max_player_exposure: float | None = None
    player_exposure_caps: tuple[tuple[str, float], ...] = ()
    # Max fraction of selected lineups carrying a stack of stack_exposure_size+ from a team.
    team_stack_caps: tuple[tuple[str, float], ...] = ()
    stack_exposure_size: int = 4


@dataclass(frozen=True)
class SelectedLineup:
    """Lineup returned from a selection."""

    candidate: LineupCandidate
    rank: int


@dataclass(frozen=True)
class SelectionSummary:
    """Aggregate stats for a lineup selection."""

    available_lineups: int
    selected_lineups: int
    total_instances: int
    roi_mean: float | None
    roi_median: float | None
    roi_std: float | None
    strength_mean: float | None
    nexus_mean: float | None
    expected_value_mean: float | None


@dataclass(frozen=True)
class SelectionResult:
    """Container for selected lineups and summary statistics."""

    lineups: list[SelectedLineup]
    summary: SelectionSummary
    pool_summary: SelectionSummary


def _stack_teams(lineup: Lineup, min_size: int) -> set[str]:
    counts = team_counts(lineup.all_players())
    return {team for team, count in counts.items() if count >= min_size}


def _passes_criteria(candidate: LineupCandidate, criteria: SelectionCriteria) -> bool:
    if criteria.min_roi is not None and candidate.roi < criteria.min_roi:
        return False
    if criteria.max_roi is not None and candidate.roi > criteria.max_roi:
        return False
    if criteria.min_strength is not None and candidate.strength < criteria.min_strength:
        return False
    if criteria.min_nexus is not None and candidate.nexus_score < criteria.min_nexus:
        return False
    if criteria.max_nexus is not None and candidate.nexus_score > criteria.max_nexus:
        return False
    if criteria.min_projection is not None and candidate.projection < criteria.min_projection:
        return False

    players = candidate.lineup.all_players()
    player_ids = {player.player_id for player in players}
    if criteria.include_player_ids and not set(criteria.include_player_ids).issubset(player_ids):
        return False
    if criteria.exclude_player_ids and player_ids.intersection(criteria.exclude_player_ids):
        return False

    team_codes = {player.team for player in players}
    if criteria.include_team_codes and not set(criteria.include_team_codes).issubset(team_codes):
        return False
    if criteria.exclude_team_codes and team_codes.intersection(criteria.exclude_team_codes):
        return False

    max_stack = candidate.summary.max_stack
    if criteria.min_stack_size is not None and max_stack < criteria.min_stack_size:
        return False
    if criteria.max_from_one_team is not None and max_stack > criteria.max_from_one_team:
        return False

    return True


def _sort_key(candidate: LineupCandidate, criteria: SelectionCriteria) -> float:
    if criteria.sort_by == "nexus":
        return candidate.nexus_score
    if criteria.sort_by == "strength":
        return candidate.strength
    if criteria.sort_by == "expected_value":
        return candidate.expected_value
    if criteria.sort_by == "projection":
        return candidate.projection
    return candidate.roi


def _build_summary(
    *,
    available: Sequence[LineupCandidate],
    selected: Sequence[LineupCandidate],
) -> SelectionSummary:
    def _safe_stats(values: Iterable[float]) -> tuple[float | None, float | None, float | None]:
        values = list(values)
        if not values:
            return None, None, None
        mean = fmean(values)
        med = median(values)
        std = pstdev(values) if len(values) > 1 else 0.0
        return mean, med, std

    roi_mean, roi_median, roi_std = _safe_stats(candidate.roi for candidate in selected)
    strength_mean, _, _ = _safe_stats(candidate.strength for candidate in selected)
    nexus_mean, _, _ = _safe_stats(candidate.nexus_score for candidate in selected)
    ev_mean, _, _ = _safe_stats(candidate.expected_value for candidate in selected)

    return SelectionSummary(
        available_lineups=len(available),
        selected_lineups=len(selected),
        total_instances=sum(candidate.count for candidate in selected),
        roi_mean=roi_mean,
        roi_median=roi_median,
        roi_std=roi_std,
        strength_mean=strength_mean,
        nexus_mean=nexus_mean,
        expected_value_mean=ev_mean,
    )


def select_lineups(
    candidates: Sequence[LineupCandidate],
    criteria: SelectionCriteria,
) -> SelectionResult:
    """Filter scored lineups and return ordered selections with summary statistics."""

    candidate_list = list(candidates)
    filtered_candidates = [
        candidate for candidate in candidate_list if _passes_criteria(candidate, criteria)
    ]

    reverse = criteria.sort_direction != "asc"
    filtered_candidates.sort(
        key=lambda c: (_sort_key(c, criteria), c.signature), reverse=reverse
    )

    selected_candidates = filtered_candidates
    limit = criteria.limit if criteria.limit is not None and criteria.limit > 0 else None

    global_cap = criteria.max_player_exposure
    player_caps = dict(criteria.player_exposure_caps)
    stack_caps = dict(criteria.team_stack_caps)

    if global_cap is not None or player_caps or stack_caps:
        player_counts: Counter[str] = Counter()
        stack_counts: Counter[str] = Counter()
        target_total = limit or len(filtered_candidates) or 0
        target_total = max(target_total, 1)
        selected_candidates = []
        for candidate in filtered_candidates:
            if limit is not None and len(selected_candidates) >= limit:
                break

            stacks = _stack_teams(candidate.lineup, criteria.stack_exposure_size)
            if _violates_cap_limit(
                candidate,
                stacks,
                player_counts,
                stack_counts,
                global_cap,
                player_caps,
                stack_caps,
                target_total,
            ):
                continue

            selected_candidates.append(candidate)
            for player in candidate.lineup.all_players():
                player_counts[player.player_id] += 1
            for team in stacks:
                stack_counts[team] += 1

        selected_candidates = _enforce_final_caps(
            selected_candidates,
            global_cap,
            player_caps,
            stack_caps,
            criteria.stack_exposure_size,
        )
    elif limit is not None:
        selected_candidates = filtered_candidates[:limit]

    logger.info(
        "Selected %s of %s lineups (%s passed filters)",
        len(selected_candidates),
        len(candidate_list),
        len(filtered_candidates),
    )

    ranked: list[SelectedLineup] = [
        SelectedLineup(candidate=candidate, rank=index)
        for index, candidate in enumerate(selected_candidates, start=1)
    ]

    filtered_summary = _build_summary(
        available=filtered_candidates,
        selected=selected_candidates,
    )
    pool_summary = _build_summary(
        available=candidate_list,
        selected=candidate_list,
    )

    return SelectionResult(lineups=ranked, summary=filtered_summary, pool_summary=pool_summary)


def _violates_cap_limit(
    candidate: LineupCandidate,
    stacks: set[str],
    player_counts: Counter[str],
    stack_counts: Counter[str],
    global_cap: float | None,
    player_caps: Mapping[str, float],
    stack_caps: Mapping[str, float],
    target_total: int,
) -> bool:
    if target_total <= 0:
        return False

    for player in candidate.lineup.all_players():
        cap = player_caps.get(player.player_id, global_cap)
        if cap is None:
            continue
        allowed = cap * target_total
        if player_counts[player.player_id] + 1 > allowed + 1e-9:
            return True
    for team in stacks:
        cap = stack_caps.get(team)
        if cap is None:
            continue
        if stack_counts[team] + 1 > cap * target_total + 1e-9:
            return True
    return False


def _usage_counts(selected: Sequence[LineupCandidate], stack_size: int) -> tuple[Counter[str], Counter[str]]:
    players: Counter[str] = Counter()
    stacks: Counter[str] = Counter()
    for candidate in selected:
        for player in candidate.lineup.all_players():
            players[player.player_id] += 1
        for team in _stack_teams(candidate.lineup, stack_size):
            stacks[team] += 1
    return players, stacks


def _enforce_final_caps(
    selected: list[LineupCandidate],
    global_cap: float | None,
    player_caps: Mapping[str, float],
    stack_caps: Mapping[str, float],
    stack_size: int,
) -> list[LineupCandidate]:
    if not selected:
        return selected

    while selected:
        player_counts, stack_counts = _usage_counts(selected, stack_size)
        total = len(selected)

        violation_player: str | None = None
        for player_id, count in player_counts.items():
            cap = player_caps.get(player_id, global_cap)
            if cap is None:
                continue
            if count > cap * total + 1e-9:
                violation_player = player_id
                break

        violation_team: str | None = None
        if violation_player is None:
            for team, count in stack_counts.items():
                cap = stack_caps.get(team)
                if cap is not None and count > cap * total + 1e-9:
                    violation_team = team
                    break

        if violation_player is None and violation_team is None:
            break

        removed = False
        for idx in range(len(selected) - 1, -1, -1):
            lineup = selected[idx].lineup
            if violation_player is not None:
                hit = any(player.player_id == violation_player for player in lineup.all_players())
            else:
                hit = violation_team in _stack_teams(lineup, stack_size)
            if hit:
                selected.pop(idx)
                removed = True
                break

        if not removed:
            break

    return selected


def player_exposure(lineups: Sequence[Lineup]) -> dict[str, float]:
    """Fraction of lineups each player appears in."""

    if not lineups:
        return {}
    counts: Counter[str] = Counter()
    for lineup in lineups:
        counts.update({player.player_id for player in lineup.all_players()})
    return {player_id: count / len(lineups) for player_id, count in counts.most_common()}


def team_stack_exposure(lineups: Sequence[Lineup], min_size: int = 4) -> dict[str, float]:
    """Fraction of lineups carrying a ``min_size``-plus stack of each team."""

    if not lineups:
        return {}
    counts: Counter[str] = Counter()
    for lineup in lineups:
        counts.update(_stack_teams(lineup, min_size))
    return {team: count / len(lineups) for team, count in counts.most_common()}


__all__ = [
    "SelectionCriteria",
    "SelectedLineup",
    "SelectionSummary",
    "SelectionResult",
    "player_exposure",
    "select_lineups",
    "team_stack_exposure",
]
