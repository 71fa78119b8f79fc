"""Typed data models for projections, props, picks and lineup valuations."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import constants


class Side(str, Enum):
    """Side of a prop a pick is placed on."""

    OVER = "over"
    UNDER = "under"

    @classmethod
    def coerce(cls, value: "Side | str") -> "Side":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown side {value!r}; expected 'over' or 'under'") from None


class SourceTag(str, Enum):
    """Provenance of a prop."""

    VENDOR = "VENDOR_REAL_DATA"
    ENHANCED = "ENHANCED_PLAYER_DATA"


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


class Projection(BaseModel):
    """A vendor projection record; optional fields default at the point of use."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Vendor projection identifier.")
    player_name: str = Field(..., description="Player full name.")
    team: str = Field("TBD", description="Team abbreviation.")
    position: str = Field("Unknown", description="Player position.")
    sport: str = Field(..., description="League code, e.g. NBA.")
    stat_type: str = Field(..., description="Stat the line is posted on.")
    line: float = Field(..., allow_inf_nan=False, description="Posted line.")

    confidence_score: Optional[float] = None
    recent_form: Optional[list[float]] = Field(
        None, description="Recent performance ratios, oldest first."
    )
    season_average: Optional[float] = None
    vs_opponent_average: Optional[float] = None
    home_away: Optional[str] = None
    rest_days: Optional[int] = None
    back_to_back: Optional[bool] = None
    weather_impact: Optional[float] = None
    injury_status: Optional[str] = None
    sharp_money: Optional[bool] = None
    steam_move: Optional[bool] = None
    reverse_line_movement: Optional[bool] = None
    public_betting: Optional[float] = None
    line_movement: Optional[float] = None
    value_rating: Optional[str] = None
    kelly_optimal: Optional[float] = None
    expected_value: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return _strip(value)

    @field_validator(
        "player_name",
        "team",
        "position",
        "sport",
        "stat_type",
        "home_away",
        "injury_status",
        "value_rating",
        mode="before",
    )
    @classmethod
    def _strip_strings(cls, value: object) -> object:
        return _strip(value)


class PlayerStat(BaseModel):
    """A player's season statistics."""

    model_config = ConfigDict(extra="ignore")

    name: str
    team: str = "TBD"
    position: str = "Unknown"
    sport: str
    stats: dict[str, float] = Field(default_factory=dict)

    @field_validator("name", "team", "position", "sport", mode="before")
    @classmethod
    def _strip_strings(cls, value: object) -> object:
        return _strip(value)


class AIEnhancement(BaseModel):
    """Market and risk annotations attached to a prop."""

    model_config = ConfigDict(frozen=True)

    value_rating: Optional[str] = None
    kelly_optimal: Optional[float] = None
    market_edge: float = 0.0
    risk_score: float = 0.0
    weather_impact: float = 0.0
    injury_impact: float = 0.0
    form_trend: float = 0.0
    sharp_money: Optional[bool] = None
    public_betting: Optional[float] = None
    line_movement: Optional[float] = None
    steam_move: Optional[bool] = None
    reverse_line_movement: Optional[bool] = None


class PatternAnalysis(BaseModel):
    """Situational pattern factors attached to a prop."""

    model_config = ConfigDict(frozen=True)

    overall_strength: float = constants.DEFAULT_BASE_CONFIDENCE
    seasonal_trend: Optional[float] = None
    matchup_advantage: Optional[float] = None
    recent_performance: Optional[tuple[float, ...]] = None
    home_away_factor: Optional[float] = None
    rest_factor: Optional[float] = None
    back_to_back_factor: Optional[float] = None


class Prop(BaseModel):
    """A scored over/under proposition."""

    model_config = ConfigDict(frozen=True)

    id: str
    player_name: str
    team: str
    position: str
    stat_type: str
    line: float
    sport: str
    data_quality: float = Field(..., ge=0.0, le=1.0)
    over_confidence: float = Field(..., ge=50.0, le=98.0)
    under_confidence: float = Field(..., ge=50.0, le=98.0)
    expected_value: float = 0.0
    source: SourceTag
    ai_enhancement: AIEnhancement = Field(default_factory=AIEnhancement)
    pattern_analysis: PatternAnalysis = Field(default_factory=PatternAnalysis)

    @field_validator("line")
    @classmethod
    def _half_point_line(cls, value: float) -> float:
        if not math.isfinite(value) or (value * 2) != round(value * 2):
            raise ValueError(f"Line {value!r} is not a multiple of 0.5")
        return value

    def confidence_for(self, side: Side | str) -> float:
        """Return the confidence for ``side``."""

        if Side.coerce(side) is Side.OVER:
            return self.over_confidence
        return self.under_confidence


class SelectedPick(BaseModel):
    """A user's pick on one side of a prop, snapshotted at selection time."""

    model_config = ConfigDict(frozen=True)

    prop_id: str
    side: Side
    confidence: Optional[float] = None
    expected_value: Optional[float] = None
    source: Optional[str] = None
    prop: Optional[Prop] = None

    @field_validator("side", mode="before")
    @classmethod
    def _coerce_side(cls, value: object) -> Side:
        return Side.coerce(value)  # type: ignore[arg-type]

    @property
    def key(self) -> str:
        return f"{self.prop_id}_{self.side.value}"


class SourceBreakdown(BaseModel):
    """Pick counts per data-source category."""

    model_config = ConfigDict(frozen=True)

    vendor: int = 0
    enhanced: int = 0
    simulation: int = 0


class LineupValuation(BaseModel):
    """Derived metrics for the current selection set."""

    model_config = ConfigDict(frozen=True)

    count: int
    entry_amount: int
    premium_connected: bool
    multiplier: float
    payout: float
    average_confidence: float
    total_expected_value: float
    source_breakdown: SourceBreakdown


class LineupSubmission(BaseModel):
    """A finalized lineup snapshot."""

    model_config = ConfigDict(frozen=True)

    valuation: LineupValuation
    picks: tuple[SelectedPick, ...]
    primary_source: str
