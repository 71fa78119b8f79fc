"""High-level orchestration helpers for building ranked prop boards."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from . import constants
from .config import get_settings
from .data_models import PlayerStat, Projection, Prop
from .insights import (
    confidence_tier,
    data_quality_tier,
    form_direction,
    key_factors,
    market_intelligence,
    value_rating_tier,
)
from .logging_utils import configure_logging
from .random_source import RandomSource, default_random_source
from .synthesizer import generate_player_props, generate_vendor_props

LOGGER = configure_logging(__name__)

PROP_COLUMNS = [
    "id",
    "player_name",
    "team",
    "position",
    "sport",
    "stat_type",
    "line",
    "over_confidence",
    "under_confidence",
    "side",
    "confidence",
    "confidence_tier",
    "expected_value",
    "data_quality",
    "value_rating",
    "kelly_optimal",
    "form_trend",
    "source",
    "quality_tier",
    "value_tier",
    "form_direction",
    "key_factors",
    "market_signals",
]


def build_props(
    projections: Optional[Sequence[Projection]],
    players: Sequence[PlayerStat],
    sport: str = constants.ALL_SPORTS,
    rng: Optional[RandomSource] = None,
    today: Optional[date] = None,
) -> List[Prop]:
    """Return props from the vendor feed when it has data, else from player stats.

    ``projections=None`` or an empty feed means the vendor is disconnected. A
    vendor record that cannot be converted drops the whole refresh to the
    player-derived path.
    """

    settings = get_settings()
    source = rng if rng is not None else default_random_source(settings.RANDOM_SEED)

    if projections:
        try:
            return generate_vendor_props(projections, sport=sport, today=today)
        except (ValueError, TypeError, ArithmeticError) as exc:
            LOGGER.error("Vendor projections could not be converted, using player data: %s", exc)
    else:
        LOGGER.warning("No vendor projections available, generating props from player data")

    return generate_player_props(
        players, sport=sport, rng=source, limit=settings.PLAYER_PROP_LIMIT
    )


def _format_signals(signals: dict[str, str]) -> str:
    return ", ".join(f"{name}={value}" for name, value in signals.items())


def props_to_frame(props: Sequence[Prop]) -> pd.DataFrame:
    """Flatten props into a DataFrame ranked by best-side confidence, then EV."""

    if not props:
        return pd.DataFrame(columns=PROP_COLUMNS)

    rows = []
    for prop in props:
        rows.append(
            {
                "id": prop.id,
                "player_name": prop.player_name,
                "team": prop.team,
                "position": prop.position,
                "sport": prop.sport,
                "stat_type": prop.stat_type,
                "line": prop.line,
                "over_confidence": prop.over_confidence,
                "under_confidence": prop.under_confidence,
                "expected_value": prop.expected_value,
                "data_quality": prop.data_quality,
                "value_rating": prop.ai_enhancement.value_rating,
                "kelly_optimal": prop.ai_enhancement.kelly_optimal,
                "form_trend": prop.ai_enhancement.form_trend,
                "source": prop.source.value,
                "quality_tier": data_quality_tier(prop.data_quality),
                "value_tier": value_rating_tier(prop.ai_enhancement.value_rating),
                "form_direction": form_direction(prop),
                "key_factors": "; ".join(key_factors(prop)),
                "market_signals": _format_signals(market_intelligence(prop)),
            }
        )
    df = pd.DataFrame(rows)
    over_wins = df["over_confidence"] >= df["under_confidence"]
    df["side"] = np.where(over_wins, "over", "under")
    df["confidence"] = np.maximum(df["over_confidence"], df["under_confidence"])
    df["confidence_tier"] = df["confidence"].map(confidence_tier)
    df = df[PROP_COLUMNS]
    df = df.sort_values(by=["confidence", "expected_value"], ascending=False, kind="mergesort")
    return df.reset_index(drop=True)


def build_prop_report(
    projections: Optional[Sequence[Projection]],
    players: Sequence[PlayerStat],
    sport: str = constants.ALL_SPORTS,
    rng: Optional[RandomSource] = None,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """Build props and return them as a ranked DataFrame."""

    props = build_props(projections, players, sport=sport, rng=rng, today=today)
    report = props_to_frame(props)
    LOGGER.info("Ranked %d props", len(report))
    return report
