"""Contest variants and the optional historical sidecar."""

from __future__ import annotations

from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field
from pydantic.config import ConfigDict


ContestKind = Literal["gpp", "cash", "satellite"]

DEFAULT_CONTEST_NAME = "GPP Tournament"
DEFAULT_ENTRY_FEE = 5.0
DEFAULT_FIELD_SIZE = 1000
RAKE_RETAINED = 0.85


class _ContestBase(BaseModel):
    entry_fee: float = Field(
        default=DEFAULT_ENTRY_FEE,
        gt=0.0,
        validation_alias=AliasChoices("entry_fee", "entryFee"),
    )
    field_size: int = Field(
        default=DEFAULT_FIELD_SIZE,
        gt=0,
        validation_alias=AliasChoices("field_size", "fieldSize"),
    )
    prize_pool: Optional[float] = Field(
        default=None,
        gt=0.0,
        validation_alias=AliasChoices("prize_pool", "prizePool"),
    )
    max_entries: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("max_entries", "maxEntries"),
    )
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)

    @property
    def effective_prize_pool(self) -> float:
        if self.prize_pool is not None:
            return self.prize_pool
        return self.field_size * self.entry_fee * RAKE_RETAINED


class GppContest(_ContestBase):
    """Top-heavy tournament."""

    kind: Literal["gpp"] = "gpp"


class CashContest(_ContestBase):
    """Flat-payout 50/50 or double-up."""

    kind: Literal["cash"] = "cash"


class SatelliteContest(_ContestBase):
    """Contest paying tickets into a larger contest."""

    kind: Literal["satellite"] = "satellite"


Contest = Annotated[
    Union[GppContest, CashContest, SatelliteContest],
    Field(discriminator="kind"),
]

_CONTEST_TYPES = {
    "gpp": GppContest,
    "cash": CashContest,
    "satellite": SatelliteContest,
}


def classify_contest(
    name: Optional[str],
    *,
    entry_fee: float = 0.0,
    max_entries: int = 1,
) -> ContestKind:
    """Infer the contest kind from its display name (first match wins)."""

    lowered = (name or "").lower()
    if "satellite" in lowered or "qualifier" in lowered:
        return "satellite"
    if "double" in lowered or "50/50" in lowered or "cash" in lowered:
        return "cash"
    if max_entries > 1 or entry_fee > 20:
        return "gpp"
    return "gpp"


def contest_from_entry(
    name: Optional[str] = None,
    *,
    entry_fee: Optional[float] = None,
    field_size: Optional[int] = None,
    prize_pool: Optional[float] = None,
    max_entries: Optional[int] = None,
) -> Union[GppContest, CashContest, SatelliteContest]:
    """Build a typed contest from loosely specified entry details."""

    resolved_name = name or DEFAULT_CONTEST_NAME
    resolved_fee = entry_fee if entry_fee else DEFAULT_ENTRY_FEE
    resolved_entries = max_entries if max_entries else 1
    kind = classify_contest(resolved_name, entry_fee=resolved_fee, max_entries=resolved_entries)
    return _CONTEST_TYPES[kind](
        name=resolved_name,
        entry_fee=resolved_fee,
        field_size=field_size if field_size else DEFAULT_FIELD_SIZE,
        prize_pool=prize_pool or None,
        max_entries=resolved_entries,
    )


class PlayerHistory(BaseModel):
    consistency: float = Field(default=0.0, ge=0.0, le=1.0)
    ceiling_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices("ceiling_rate", "ceilingRate"),
    )
    recent_form: float = Field(default=0.0, validation_alias=AliasChoices("recent_form", "recentForm"))
    matchup_score: float = Field(default=0.0, validation_alias=AliasChoices("matchup_score", "matchupScore"))

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)


class HistoricalData(BaseModel):
    sample_size: int = Field(default=0, ge=0, validation_alias=AliasChoices("sample_size", "sampleSize"))
    days_old: int = Field(default=999, validation_alias=AliasChoices("days_old", "daysOld"))
    players: Dict[str, PlayerHistory] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)
