"""Factor scorers for lineup strength.

Each scorer is a pure function of a lineup (plus the optional historical
sidecar) returning a value in ``[0, 1]``. Empty lineups fall back to the
scorer's neutral value rather than raising.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from statistics import fmean
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from nexusdfs.config.valuation import DEFAULT_VALUATION_CONFIG, Bands, ValuationConfig
from nexusdfs.models import HistoricalData, Lineup, Player


@dataclass(frozen=True)
class GameStack:
    """Two opposing teams both represented in a lineup."""

    teams: Tuple[str, str]
    sizes: Tuple[int, int]

    @property
    def big(self) -> int:
        return max(self.sizes)

    @property
    def small(self) -> int:
        return min(self.sizes)

    @property
    def total_players(self) -> int:
        return sum(self.sizes)


def _band(value: Optional[float], bands: Bands, floor: float) -> float:
    if value is None:
        return floor
    for bound, score in bands:
        if value < bound:
            return score
    return floor


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def lineup_projection(lineup: Lineup, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    """Total projected points with the captain multiplier applied."""

    total = sum(player.projection for player in lineup.regular_players())
    if lineup.captain is not None:
        total += lineup.captain.projection * config.captain_multiplier
    return total


def average_ownership(lineup: Lineup) -> Optional[float]:
    """Mean ownership across present slots, ``None`` for an empty lineup."""

    players = lineup.all_players()
    if not players:
        return None
    return fmean(player.ownership for player in players)


def team_counts(players: Sequence[Player]) -> Counter[str]:
    return Counter(player.team for player in players if player.counts_for_stack)


def team_players(players: Sequence[Player]) -> Dict[str, List[Player]]:
    grouped: Dict[str, List[Player]] = {}
    for player in players:
        if player.counts_for_stack:
            grouped.setdefault(player.team, []).append(player)
    return grouped


def find_game_stacks(grouped: Mapping[str, Sequence[Player]]) -> List[GameStack]:
    """Pair each team with an opponent that also has players in the lineup."""

    stacks: List[GameStack] = []
    processed: set[str] = set()
    for team, members in grouped.items():
        if team in processed:
            continue
        for member in members:
            opponent = member.opponent_team
            if not opponent or opponent == team or opponent in processed:
                continue
            if grouped.get(opponent):
                stacks.append(
                    GameStack(
                        teams=(team, opponent),
                        sizes=(len(members), len(grouped[opponent])),
                    )
                )
                processed.update((team, opponent))
                break
    return stacks


def has_opponent_in_lineup(players: Sequence[Player]) -> bool:
    teams = {player.team for player in players if player.team}
    opponents = {player.opponent_team for player in players if player.opponent_team}
    return bool(teams & opponents)


def has_significant_game(players: Sequence[Player], min_players: int) -> bool:
    games: Counter[Tuple[str, ...]] = Counter()
    for player in players:
        opponent = player.opponent_team
        if opponent:
            games[tuple(sorted((player.team, opponent)))] += 1
    return any(count >= min_players for count in games.values())


def projection_score(lineup: Lineup, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    total = lineup_projection(lineup, config)
    anchors = config.projection_anchors
    scores = config.projection_scores

    if total >= anchors[-1]:
        return scores[-1]
    for index in range(len(anchors) - 2, -1, -1):
        low, high = anchors[index], anchors[index + 1]
        if total >= low:
            return scores[index] + (total - low) / (high - low) * (scores[index + 1] - scores[index])
    return 0.0


def ownership_leverage(lineup: Lineup, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    return _band(average_ownership(lineup), config.leverage_bands, config.leverage_floor)


def _stacking_score(
    counts: Counter[str],
    grouped: Mapping[str, Sequence[Player]],
    game_stacks: Sequence[GameStack],
    config: ValuationConfig,
) -> float:
    max_stack = max(counts.values(), default=0)
    scores = dict(config.stack_scores)
    if max_stack >= 4:
        stack_team = next(team for team, count in counts.items() if count >= 4)
        positions = {player.position for player in grouped[stack_team]}
        if set(config.carry_positions) <= positions:
            return config.stack_core_bonus_score
        return scores[4]
    if max_stack == 3:
        return config.stack_bring_back_score if game_stacks else scores[3]
    if max_stack == 2:
        return scores[2]
    return scores[1]


def _game_stack_score(game_stacks: Sequence[GameStack], config: ValuationConfig) -> float:
    best = 0.0
    for stack in game_stacks:
        score = 0.0
        for big, min_small, value in config.game_stack_scores:
            if stack.big == big and stack.small >= min_small:
                score = value
                break
        else:
            if stack.big >= 2 and stack.small >= 1:
                score = config.game_stack_fallback
        best = max(best, score)
    return best


def _position_correlation(grouped: Mapping[str, Sequence[Player]], config: ValuationConfig) -> float:
    total = 0.0
    contributing = 0
    for members in grouped.values():
        if len(members) < 2:
            continue
        contributing += 1
        positions = {player.position for player in members}
        for combo, credit in config.position_synergies:
            if positions.issuperset(combo):
                total += credit
    if contributing == 0:
        return config.position_neutral
    return _clamp(total / contributing)


def _captain_correlation(lineup: Lineup, counts: Counter[str], config: ValuationConfig) -> float:
    captain = lineup.captain
    if captain is None:
        return 0.0
    captain_count = counts.get(captain.team, 0) if captain.counts_for_stack else 0
    score = config.captain_solo_score
    for min_count, value in config.captain_stack_scores:
        if captain_count >= min_count:
            score = value
            break
    if captain.position in config.carry_positions:
        score += config.carry_captain_bonus
    return min(1.0, score)


def correlation_score(lineup: Lineup, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    players = lineup.all_players()
    counts = team_counts(players)
    grouped = team_players(players)
    game_stacks = find_game_stacks(grouped)

    stacking_weight, game_weight, position_weight, captain_weight = config.correlation_weights
    score = (
        _stacking_score(counts, grouped, game_stacks, config) * stacking_weight
        + _game_stack_score(game_stacks, config) * game_weight
        + _position_correlation(grouped, config) * position_weight
        + _captain_correlation(lineup, counts, config) * captain_weight
    )
    return _clamp(score)


def historical_score(
    lineup: Lineup,
    historical: Optional[HistoricalData],
    config: ValuationConfig = DEFAULT_VALUATION_CONFIG,
) -> float:
    if historical is None:
        return config.historical_neutral

    score = 0.0
    count = 0
    for player in lineup.all_players():
        history = historical.players.get(player.player_id)
        if history is None:
            continue
        if history.consistency > config.consistency_threshold:
            score += config.consistency_credit
        if history.ceiling_rate > config.ceiling_rate_threshold:
            score += config.ceiling_rate_credit
        if history.recent_form > 0:
            score += config.recent_form_credit
        if history.matchup_score > 0:
            score += config.matchup_credit
        count += 1
    if count == 0:
        return config.historical_neutral
    return _clamp(score / count)


def _captain_leverage(lineup: Lineup, config: ValuationConfig) -> float:
    captain = lineup.captain
    if captain is None:
        return 0.0
    score = _band(captain.ownership, config.captain_leverage_bands, config.captain_leverage_floor)
    if captain.position in config.carry_positions:
        score += config.carry_captain_bonus
    return min(1.0, score)


def _game_environment(players: Sequence[Player], config: ValuationConfig) -> float:
    positions = Counter(player.position for player in players)
    score = config.environment_base
    if any(positions[position] >= 2 for position in config.carry_positions):
        score += config.environment_carry_bonus
    if has_opponent_in_lineup(players):
        score += config.environment_game_stack_bonus
    return min(1.0, score)


def _concentration(players: Sequence[Player], config: ValuationConfig) -> float:
    unique_teams = len(team_counts(players))
    score = config.concentration_floor
    for max_teams, value in config.concentration_bands:
        if unique_teams <= max_teams:
            score = value
            break
    if has_significant_game(players, config.significant_game_players):
        score = min(1.0, score + config.significant_game_bonus)
    return score


def player_volatility(players: Sequence[Player], config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    if not players:
        return config.volatility_default
    table = dict(config.volatility_by_position)
    values = []
    for player in players:
        volatility = table.get(player.position, config.volatility_default)
        if player.ownership < config.volatility_low_ownership:
            volatility = min(1.0, volatility + config.volatility_low_ownership_bonus)
        values.append(volatility)
    return fmean(values)


def ceiling_score(lineup: Lineup, config: ValuationConfig = DEFAULT_VALUATION_CONFIG) -> float:
    players = lineup.all_players()
    captain_weight, environment_weight, ownership_weight, concentration_weight, volatility_weight = (
        config.ceiling_weights
    )
    ownership = _band(
        average_ownership(lineup),
        config.ceiling_ownership_bands,
        config.ceiling_ownership_floor,
    )
    score = (
        _captain_leverage(lineup, config) * captain_weight
        + _game_environment(players, config) * environment_weight
        + ownership * ownership_weight
        + _concentration(players, config) * concentration_weight
        + player_volatility(players, config) * volatility_weight
    )
    return _clamp(score)


__all__ = [
    "GameStack",
    "average_ownership",
    "ceiling_score",
    "correlation_score",
    "find_game_stacks",
    "historical_score",
    "lineup_projection",
    "ownership_leverage",
    "player_volatility",
    "projection_score",
    "team_counts",
    "team_players",
]
