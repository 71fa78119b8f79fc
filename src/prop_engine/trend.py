"""Weighted form-trend estimation over recent performance ratios."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from . import constants


def calculate_form_trend(recent_form: Optional[Sequence[float]]) -> float:
    """Return a trend signal centred at zero, roughly within [-0.5, 0.5].

    Only the last five samples count. Weights come from
    ``constants.FORM_WEIGHTS`` by position within that window, so a short
    window uses the leading (smaller) weights and the result is divided by the
    weights actually used. Fewer than two samples yield ``0.0``.
    """

    if not recent_form or len(recent_form) < 2:
        return 0.0

    recent = np.asarray(list(recent_form)[-constants.FORM_WINDOW :], dtype=float)
    weights = np.array(
        [
            constants.FORM_WEIGHTS[index]
            if index < len(constants.FORM_WEIGHTS)
            else constants.FORM_FALLBACK_WEIGHT
            for index in range(len(recent))
        ]
    )
    return float(np.average(recent, weights=weights)) - 0.5


def classify_form_trend(trend: float) -> str:
    """Label a trend as ``up``, ``down`` or ``flat``."""

    if trend > constants.FORM_TREND_THRESHOLD:
        return "up"
    if trend < -constants.FORM_TREND_THRESHOLD:
        return "down"
    return "flat"
