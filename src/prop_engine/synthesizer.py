"""Build normalized :class:`Prop` objects from vendor projections or player stats."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Iterable, List, Optional

from . import constants
from .confidence import score_confidence
from .data_models import (
    AIEnhancement,
    PatternAnalysis,
    PlayerStat,
    Projection,
    Prop,
    Side,
    SourceTag,
)
from .factors import (
    back_to_back_factor,
    home_away_factor,
    injury_impact,
    is_outdoor_sport,
    matchup_advantage,
    rest_factor,
    seasonal_trend,
)
from .logging_utils import configure_logging
from .random_source import RandomSource, default_random_source
from .trend import calculate_form_trend

LOGGER = configure_logging(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def round_to_half(value: float) -> float:
    """Round ``value`` to the nearest 0.5, with quarter-point ties going up."""

    return math.floor(value * 2 + 0.5) / 2


def stat_types_for_sport(sport: str) -> list[str]:
    return list(constants.STAT_TYPES_BY_SPORT.get(sport, constants.DEFAULT_STAT_TYPES))


def base_stat_value(sport: str, stat_type: str) -> float:
    """Fallback season value for ``stat_type`` when a player has none recorded."""

    sport_values = constants.BASE_STAT_VALUES.get(sport, constants.DEFAULT_SPORT_BASE_VALUES)
    return float(sport_values.get(stat_type, constants.DEFAULT_BASE_STAT_VALUE))


def _recorded_stat(player: PlayerStat, stat_type: str) -> Optional[float]:
    lowered = stat_type.lower()
    for key in (lowered.replace(" ", ""), lowered, stat_type):
        value = player.stats.get(key)
        # A zero season value is treated as unrecorded.
        if value:
            return float(value)
    return None


def synthesize_line(player: PlayerStat, stat_type: str, rng: RandomSource) -> float:
    """Derive a betting line from a player's season value plus up to +/-5% noise."""

    stat = _recorded_stat(player, stat_type)
    if stat is None:
        stat = base_stat_value(player.sport, stat_type)
        LOGGER.debug(
            "No %s value for %s; using base value %.2f", stat_type, player.name, stat
        )
    variance = stat * constants.LINE_VARIANCE
    return round_to_half(stat + (rng.random() - 0.5) * variance)


def player_prop_id(sport: str, player_name: str, stat_type: str) -> str:
    return _WHITESPACE_RE.sub("_", f"{sport}_{player_name}_{stat_type}").lower()


def synthesize_from_projection(projection: Projection, today: Optional[date] = None) -> Prop:
    """Convert a vendor projection into a scored :class:`Prop`."""

    base_confidence = (
        projection.confidence_score
        if projection.confidence_score is not None
        else constants.DEFAULT_BASE_CONFIDENCE
    )
    expected_value = projection.expected_value if projection.expected_value is not None else 0.0
    recent = (
        projection.recent_form
        if projection.recent_form is not None
        else list(constants.DEFAULT_RECENT_FORM)
    )

    enhancement = AIEnhancement(
        value_rating=projection.value_rating,
        kelly_optimal=projection.kelly_optimal,
        market_edge=expected_value / 100,
        risk_score=1 - base_confidence,
        weather_impact=projection.weather_impact or 0.0,
        injury_impact=injury_impact(projection.injury_status),
        form_trend=calculate_form_trend(projection.recent_form),
        sharp_money=projection.sharp_money,
        public_betting=projection.public_betting,
        line_movement=projection.line_movement,
        steam_move=projection.steam_move,
        reverse_line_movement=projection.reverse_line_movement,
    )
    patterns = PatternAnalysis(
        overall_strength=base_confidence,
        seasonal_trend=seasonal_trend(projection.sport, today),
        matchup_advantage=matchup_advantage(projection),
        recent_performance=tuple(recent),
        home_away_factor=home_away_factor(projection.home_away),
        rest_factor=rest_factor(projection.rest_days),
        back_to_back_factor=back_to_back_factor(projection.back_to_back),
    )
    return Prop(
        id=projection.id,
        player_name=projection.player_name,
        team=projection.team,
        position=projection.position,
        stat_type=projection.stat_type,
        line=round_to_half(projection.line),
        sport=projection.sport,
        data_quality=constants.VENDOR_DATA_QUALITY,
        over_confidence=score_confidence(projection, Side.OVER),
        under_confidence=score_confidence(projection, Side.UNDER),
        expected_value=expected_value,
        source=SourceTag.VENDOR,
        ai_enhancement=enhancement,
        pattern_analysis=patterns,
    )


def synthesize_from_player(player: PlayerStat, stat_type: str, rng: RandomSource) -> Prop:
    """Build a placeholder :class:`Prop` from season stats.

    Confidence, expected value and most enhancement fields are drawn from
    ``rng`` within fixed ranges; they are not scored estimates. The
    ``ENHANCED_PLAYER_DATA`` source tag marks them as such downstream.
    """

    line = synthesize_line(player, stat_type, rng)
    over_confidence = 85 + rng.random() * 10
    under_confidence = 85 + rng.random() * 10
    expected_value = (rng.random() - 0.5) * 20

    ratings = constants.VALUE_RATINGS
    rating_index = min(int(rng.random() * len(ratings)), len(ratings) - 1)
    enhancement = AIEnhancement(
        value_rating=ratings[rating_index],
        kelly_optimal=rng.random() * 0.1,
        market_edge=(rng.random() - 0.5) * 0.1,
        risk_score=rng.random() * 0.3,
        weather_impact=rng.random() * 0.1 if is_outdoor_sport(player.sport) else 0.0,
        injury_impact=rng.random() * 0.05,
        form_trend=(rng.random() - 0.5) * 0.2,
    )
    patterns = PatternAnalysis(overall_strength=0.8 + rng.random() * 0.2)

    return Prop(
        id=player_prop_id(player.sport, player.name, stat_type),
        player_name=player.name,
        team=player.team,
        position=player.position,
        stat_type=stat_type,
        line=line,
        sport=player.sport,
        data_quality=constants.PLAYER_DATA_QUALITY,
        over_confidence=over_confidence,
        under_confidence=under_confidence,
        expected_value=expected_value,
        source=SourceTag.ENHANCED,
        ai_enhancement=enhancement,
        pattern_analysis=patterns,
    )


def _matches_sport(sport: str, selected: str) -> bool:
    return selected == constants.ALL_SPORTS or sport == selected


def generate_vendor_props(
    projections: Iterable[Projection],
    sport: str = constants.ALL_SPORTS,
    today: Optional[date] = None,
) -> List[Prop]:
    """Run the vendor path over every projection matching ``sport``."""

    selected = [projection for projection in projections if _matches_sport(projection.sport, sport)]
    props = [synthesize_from_projection(projection, today) for projection in selected]
    LOGGER.info("Converted %d vendor projections into props (sport=%s)", len(props), sport)
    return props


def generate_player_props(
    players: Iterable[PlayerStat],
    sport: str = constants.ALL_SPORTS,
    rng: Optional[RandomSource] = None,
    limit: int = constants.PLAYER_PROP_LIMIT,
) -> List[Prop]:
    """Run the player-derived path for up to ``limit`` players matching ``sport``."""

    source = rng if rng is not None else default_random_source()
    eligible = [player for player in players if _matches_sport(player.sport, sport)][:limit]
    props: List[Prop] = []
    for player in eligible:
        for stat_type in stat_types_for_sport(player.sport):
            props.append(synthesize_from_player(player, stat_type, source))
    LOGGER.info(
        "Generated %d props from %d players (sport=%s)", len(props), len(eligible), sport
    )
    return props
