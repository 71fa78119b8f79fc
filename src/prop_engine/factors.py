"""Contextual factors derived from raw projection fields.

These are coarse heuristics, not calibrated models. The seasonal curves in
particular only encode a rough belief about how each league's scoring drifts
over the calendar year and carry no predictive validation.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from . import constants
from .data_models import Projection


def _month_index(today: Optional[date]) -> int:
    # Zero-based month, January = 0.
    return (today or date.today()).month - 1


def seasonal_trend(sport: str, today: Optional[date] = None) -> float:
    """Return the seasonal-cycle trend for ``sport`` on ``today``."""

    month = _month_index(today)
    if sport == "NBA":
        return 0.4 + (month / 12) * 0.4
    if sport == "NFL":
        return 0.6 - (month / 12) * 0.2
    if sport == "MLB":
        return 0.5 + math.sin(month / 2) * 0.1
    return 0.5


def matchup_advantage(projection: Projection) -> float:
    """Signed matchup offset in [-0.3, 0.3].

    A season average of exactly zero returns 0.5, which sits outside the
    clamped scale used otherwise.
    """

    vs_opponent = (
        projection.vs_opponent_average
        if projection.vs_opponent_average is not None
        else projection.line
    )
    season = projection.season_average if projection.season_average is not None else projection.line
    if season == 0:
        return constants.MATCHUP_ZERO_SEASON_DEFAULT
    ratio = min(max(vs_opponent / season, constants.MATCHUP_RATIO_MIN), constants.MATCHUP_RATIO_MAX)
    return ratio - 1


def home_away_factor(home_away: Optional[str]) -> float:
    if home_away is not None and home_away.strip().lower() == "home":
        return constants.HOME_FACTOR
    return constants.AWAY_FACTOR


def rest_factor(rest_days: Optional[int]) -> float:
    if rest_days is not None and rest_days > 1:
        return constants.RESTED_FACTOR
    return constants.TIRED_FACTOR


def back_to_back_factor(back_to_back: Optional[bool]) -> float:
    return constants.BACK_TO_BACK_FACTOR if back_to_back else 1.0


def injury_impact(injury_status: Optional[str]) -> float:
    """Return 0 for a healthy player, a flat penalty for anything else."""

    return 0.0 if injury_status == constants.HEALTHY_STATUS else constants.INJURY_IMPACT


def is_outdoor_sport(sport: str) -> bool:
    return sport in constants.OUTDOOR_SPORTS
