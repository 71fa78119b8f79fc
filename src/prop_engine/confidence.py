"""Blend base confidence with form and line-relative signals."""

from __future__ import annotations

import math

from . import constants
from .data_models import Projection, Side
from .trend import calculate_form_trend


def _clamp_confidence(value: float) -> float:
    if math.isnan(value):
        return constants.MIN_CONFIDENCE
    return min(max(value, constants.MIN_CONFIDENCE), constants.MAX_CONFIDENCE)


def score_confidence(record: Projection, side: Side | str) -> float:
    """Return the confidence percentage in [50, 98] for one side of ``record``.

    Over and under are scored independently and are not complementary.
    """

    chosen = Side.coerce(side)
    line = record.line
    base = (
        record.confidence_score
        if record.confidence_score is not None
        else constants.DEFAULT_BASE_CONFIDENCE
    )
    trend = calculate_form_trend(record.recent_form)
    season = record.season_average if record.season_average is not None else line
    vs_opponent = record.vs_opponent_average if record.vs_opponent_average is not None else line

    confidence = base
    if chosen is Side.OVER:
        confidence += trend * constants.TREND_WEIGHT
        if season > line:
            confidence += constants.SEASON_EDGE_BONUS
        if vs_opponent > line:
            confidence += constants.MATCHUP_EDGE_BONUS
    else:
        confidence -= trend * constants.TREND_WEIGHT
        if season < line:
            confidence += constants.SEASON_EDGE_BONUS
        if vs_opponent < line:
            confidence += constants.MATCHUP_EDGE_BONUS

    return _clamp_confidence(confidence) * 100
