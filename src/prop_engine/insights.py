"""Display-independent labels derived from a scored prop."""

from __future__ import annotations

from typing import Optional

from .data_models import Prop
from .trend import classify_form_trend


def data_quality_tier(data_quality: float) -> str:
    if data_quality > 0.9:
        return "high"
    if data_quality > 0.7:
        return "medium"
    return "low"


def value_rating_tier(rating: Optional[str]) -> str:
    """Map a letter grade to ``a``/``b``/``c``; anything else is ``d``."""

    if rating:
        letter = rating.strip()[:1].upper()
        if letter in {"A", "B", "C"}:
            return letter.lower()
    return "d"


def confidence_tier(confidence: float) -> str:
    if confidence >= 90:
        return "high"
    if confidence >= 80:
        return "medium"
    return "low"


def form_direction(prop: Prop) -> str:
    return classify_form_trend(prop.ai_enhancement.form_trend)


def key_factors(prop: Prop) -> list[str]:
    """Human-readable situational factors worth surfacing for ``prop``."""

    enhancement = prop.ai_enhancement
    patterns = prop.pattern_analysis
    factors: list[str] = []
    if enhancement.weather_impact > 0:
        factors.append(f"Weather Impact: {enhancement.weather_impact * 100:.0f}%")
    if enhancement.injury_impact > 0:
        factors.append(f"Injury Risk: {enhancement.injury_impact * 100:.0f}%")
    if patterns.home_away_factor is not None and patterns.home_away_factor != 1:
        factors.append("Home Advantage" if patterns.home_away_factor > 1 else "Away Advantage")
    if patterns.back_to_back_factor is not None and patterns.back_to_back_factor < 1:
        factors.append("Back-to-Back Game")
    if enhancement.sharp_money:
        factors.append("Sharp Money")
    if enhancement.steam_move:
        factors.append("Steam Move")
    return factors


def market_intelligence(prop: Prop) -> dict[str, str]:
    """Formatted market signals; empty when the vendor supplied none."""

    enhancement = prop.ai_enhancement
    signals: dict[str, str] = {}
    if enhancement.line_movement:
        signals["line_movement"] = f"{enhancement.line_movement:+.1f}"
    if enhancement.public_betting:
        signals["public_betting"] = f"{enhancement.public_betting * 100:.0f}%"
    if enhancement.reverse_line_movement:
        signals["reverse_line_movement"] = "yes"
    return signals
