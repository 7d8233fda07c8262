"""Player and lineup models consumed read-only by the valuation engine."""

from __future__ import annotations

import re
from typing import List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field
from pydantic.config import ConfigDict


Position = Literal["TOP", "JNG", "MID", "ADC", "SUP", "TEAM", "CPT"]

# Team code reserved for the TEAM pseudo-player; never counted as a stack.
TEAM_PLACEHOLDER = "TEAM"

_OPPONENT_PREFIX = re.compile(r"^vs\s*|^at\s*", re.IGNORECASE)


def strip_opponent(value: str) -> str:
    """Drop a leading ``vs``/``at`` marker from an opponent string."""

    return _OPPONENT_PREFIX.sub("", value.strip())


class Player(BaseModel):
    """Single roster slot candidate."""

    player_id: str = Field(..., min_length=1, validation_alias=AliasChoices("player_id", "id"))
    name: str = ""
    position: Position
    team: str = ""
    opponent: Optional[str] = Field(default=None, validation_alias=AliasChoices("opponent", "opp"))
    projection: float = Field(
        default=0.0,
        ge=0.0,
        validation_alias=AliasChoices("projection", "projectedPoints", "projected_points"),
    )
    ownership: float = Field(default=0.0, ge=0.0, le=100.0)
    salary: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)

    @property
    def opponent_team(self) -> Optional[str]:
        if not self.opponent:
            return None
        return strip_opponent(self.opponent) or None

    @property
    def counts_for_stack(self) -> bool:
        return bool(self.team) and self.team != TEAM_PLACEHOLDER


class Lineup(BaseModel):
    """Captain plus regular slots; absent slots are ``None`` and ignored."""

    lineup_id: str = ""
    captain: Optional[Player] = Field(default=None, validation_alias=AliasChoices("captain", "cpt"))
    players: List[Optional[Player]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def regular_players(self) -> List[Player]:
        return [player for player in self.players if player is not None]

    def all_players(self) -> List[Player]:
        """Captain first (when present), then the regular slots."""

        players = self.regular_players()
        if self.captain is not None:
            return [self.captain, *players]
        return players

    def signature(self) -> Tuple[str, ...]:
        captain_id = self.captain.player_id if self.captain is not None else ""
        return (captain_id, *sorted(player.player_id for player in self.regular_players()))
