"""Top-level package for the prop scoring and lineup valuation toolkit."""

from .config import get_settings
from .confidence import score_confidence
from .insights import (
    confidence_tier,
    data_quality_tier,
    form_direction,
    key_factors,
    market_intelligence,
    value_rating_tier,
)
from .lineup import SelectionSet, compute_lineup_valuation, select_prop, submit_lineup
from .synthesizer import synthesize_from_player, synthesize_from_projection

__all__ = [
    "get_settings",
    "score_confidence",
    "confidence_tier",
    "data_quality_tier",
    "form_direction",
    "key_factors",
    "market_intelligence",
    "value_rating_tier",
    "SelectionSet",
    "compute_lineup_valuation",
    "select_prop",
    "submit_lineup",
    "synthesize_from_player",
    "synthesize_from_projection",
]
