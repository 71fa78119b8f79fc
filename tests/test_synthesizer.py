"""Tests for the vendor and player-derived prop synthesis paths."""

from __future__ import annotations

import random
from datetime import date

import pytest

from prop_engine import constants
from prop_engine.data_models import PlayerStat, Projection, SourceTag
from prop_engine.random_source import SequenceRandomSource
from prop_engine.synthesizer import (
    base_stat_value,
    generate_player_props,
    generate_vendor_props,
    player_prop_id,
    round_to_half,
    stat_types_for_sport,
    synthesize_from_player,
    synthesize_from_projection,
    synthesize_line,
)


@pytest.fixture()
def vendor_projection() -> Projection:
    return Projection(
        id="pp-77",
        player_name="Luka Doncic",
        team="DAL",
        position="G",
        sport="NBA",
        stat_type="Points",
        line=30.5,
        confidence_score=0.82,
        recent_form=[0.4, 0.5, 0.6],
        season_average=33.1,
        vs_opponent_average=29.0,
        home_away="Home",
        rest_days=2,
        back_to_back=False,
        injury_status="Healthy",
        sharp_money=True,
        public_betting=0.64,
        line_movement=-1.5,
        value_rating="A-",
        kelly_optimal=0.04,
        expected_value=6.2,
    )


@pytest.fixture()
def lebron() -> PlayerStat:
    return PlayerStat(
        name="LeBron James",
        team="LAL",
        position="F",
        sport="NBA",
        stats={"points": 27.3, "rebounds": 7.4, "3-pointersmade": 2.1},
    )


def test_vendor_path_maps_fields(vendor_projection: Projection) -> None:
    prop = synthesize_from_projection(vendor_projection, today=date(2025, 3, 1))

    assert prop.id == "pp-77"
    assert prop.source is SourceTag.VENDOR
    assert prop.data_quality == pytest.approx(0.95)
    assert prop.line == pytest.approx(30.5)
    assert prop.expected_value == pytest.approx(6.2)
    assert 50 <= prop.over_confidence <= 98
    assert 50 <= prop.under_confidence <= 98

    enhancement = prop.ai_enhancement
    assert enhancement.value_rating == "A-"
    assert enhancement.kelly_optimal == pytest.approx(0.04)
    assert enhancement.market_edge == pytest.approx(0.062)
    assert enhancement.risk_score == pytest.approx(0.18)
    assert enhancement.injury_impact == 0.0
    assert enhancement.sharp_money is True
    assert enhancement.line_movement == pytest.approx(-1.5)

    patterns = prop.pattern_analysis
    assert patterns.overall_strength == pytest.approx(0.82)
    assert patterns.seasonal_trend == pytest.approx(0.4 + (2 / 12) * 0.4)
    assert patterns.home_away_factor == pytest.approx(1.05)
    assert patterns.rest_factor == pytest.approx(1.02)
    assert patterns.back_to_back_factor == pytest.approx(1.0)
    assert patterns.recent_performance == (0.4, 0.5, 0.6)


def test_vendor_path_defaults_for_sparse_record() -> None:
    projection = Projection(
        id="pp-1", player_name="Unknown Guy", sport="NHL", stat_type="Shots", line=3.3
    )
    prop = synthesize_from_projection(projection)

    assert prop.team == "TBD"
    assert prop.position == "Unknown"
    assert prop.line == pytest.approx(3.5)
    assert prop.expected_value == 0.0
    assert prop.over_confidence == pytest.approx(80.0)
    assert prop.ai_enhancement.risk_score == pytest.approx(0.2)
    assert prop.ai_enhancement.injury_impact == pytest.approx(0.1)
    assert prop.ai_enhancement.weather_impact == 0.0
    assert prop.ai_enhancement.form_trend == 0.0
    assert prop.pattern_analysis.recent_performance == constants.DEFAULT_RECENT_FORM
    assert prop.pattern_analysis.overall_strength == pytest.approx(0.8)


def test_player_path_with_midpoint_random(lebron: PlayerStat) -> None:
    prop = synthesize_from_player(lebron, "Points", SequenceRandomSource([0.5]))

    assert prop.id == "nba_lebron_james_points"
    assert prop.source is SourceTag.ENHANCED
    assert prop.data_quality == pytest.approx(0.85)
    assert prop.line == pytest.approx(27.5)
    assert prop.over_confidence == pytest.approx(90.0)
    assert prop.under_confidence == pytest.approx(90.0)
    assert prop.expected_value == pytest.approx(0.0)
    assert prop.ai_enhancement.value_rating == "B+"
    assert prop.ai_enhancement.kelly_optimal == pytest.approx(0.05)
    assert prop.ai_enhancement.risk_score == pytest.approx(0.15)
    assert prop.ai_enhancement.weather_impact == 0.0
    assert prop.pattern_analysis.overall_strength == pytest.approx(0.9)


def test_player_path_ranges_at_extremes(lebron: PlayerStat) -> None:
    low = synthesize_from_player(lebron, "Rebounds", SequenceRandomSource([0.0]))
    high = synthesize_from_player(lebron, "Rebounds", SequenceRandomSource([0.999999]))

    assert low.over_confidence == pytest.approx(85.0)
    assert high.over_confidence < 95.0
    assert low.expected_value == pytest.approx(-10.0)
    assert high.expected_value < 10.0
    assert low.ai_enhancement.value_rating == "A+"
    assert high.ai_enhancement.value_rating == "C+"
    assert 0.0 <= high.ai_enhancement.kelly_optimal <= 0.1
    assert 0.0 <= high.ai_enhancement.risk_score <= 0.3


def test_outdoor_sport_gets_weather_impact() -> None:
    player = PlayerStat(name="Saquon Barkley", sport="NFL", stats={"rushingyards": 98.0})
    prop = synthesize_from_player(player, "Rushing Yards", SequenceRandomSource([0.5]))
    assert prop.ai_enhancement.weather_impact == pytest.approx(0.05)
    assert prop.line == pytest.approx(98.0)


def test_line_falls_back_to_base_table(lebron: PlayerStat) -> None:
    line = synthesize_line(lebron, "Assists", SequenceRandomSource([0.5]))
    assert line == pytest.approx(5.0)


def test_zero_stat_value_uses_base_table() -> None:
    player = PlayerStat(name="Bench Guy", sport="NBA", stats={"blocks": 0.0})
    assert synthesize_line(player, "Blocks", SequenceRandomSource([0.5])) == pytest.approx(1.0)


def test_base_values_for_unknown_sport_and_stat() -> None:
    assert base_stat_value("Cricket", "Points") == pytest.approx(10.0)
    assert base_stat_value("Cricket", "Wickets") == pytest.approx(10.0)
    assert base_stat_value("MLB", "Stolen Bases") == pytest.approx(10.0)
    assert base_stat_value("NFL", "Receptions") == pytest.approx(5.0)


def test_line_variance_stays_within_five_percent(lebron: PlayerStat) -> None:
    low = synthesize_line(lebron, "Points", SequenceRandomSource([0.0]))
    high = synthesize_line(lebron, "Points", SequenceRandomSource([0.999999]))
    # 27.3 +/- 1.365, then rounded to the nearest half point
    assert low == pytest.approx(26.0)
    assert high == pytest.approx(28.5)


def test_synthesized_lines_are_half_point_multiples() -> None:
    rng = random.Random(1234)
    for sport, stat_types in constants.STAT_TYPES_BY_SPORT.items():
        for stat_type in stat_types:
            player = PlayerStat(
                name="Any Player", sport=sport, stats={stat_type.lower(): rng.uniform(0.1, 400)}
            )
            for _ in range(20):
                line = synthesize_line(player, stat_type, rng)
                assert (line * 2) == int(line * 2)


def test_stat_types_table() -> None:
    assert stat_types_for_sport("NHL") == ["Goals", "Assists", "Shots", "Points"]
    assert stat_types_for_sport("Curling") == ["Points"]


def test_round_to_half_and_ids() -> None:
    assert round_to_half(24.3) == pytest.approx(24.5)
    assert round_to_half(24.2) == pytest.approx(24.0)
    assert round_to_half(1.25) == pytest.approx(1.5)
    assert round_to_half(3.25) == pytest.approx(3.5)
    assert round_to_half(10.25) == pytest.approx(10.5)
    assert round_to_half(-1.25) == pytest.approx(-1.0)
    assert player_prop_id("NBA", "Shai  Gilgeous-Alexander", "3-Pointers Made") == (
        "nba_shai_gilgeous-alexander_3-pointers_made"
    )


def test_generate_player_props_filters_and_caps() -> None:
    players = [PlayerStat(name=f"Player {index}", sport="NBA") for index in range(25)]
    players.append(PlayerStat(name="Skater", sport="NHL"))

    props = generate_player_props(players, sport="NBA", rng=random.Random(7), limit=20)
    assert len(props) == 20 * len(constants.STAT_TYPES_BY_SPORT["NBA"])
    assert {prop.sport for prop in props} == {"NBA"}

    nhl = generate_player_props(players, sport="NHL", rng=random.Random(7))
    assert len(nhl) == 4


def test_generate_vendor_props_filters_by_sport(vendor_projection: Projection) -> None:
    other = vendor_projection.model_copy(update={"id": "pp-78", "sport": "NFL"})
    assert len(generate_vendor_props([vendor_projection, other])) == 2
    nfl = generate_vendor_props([vendor_projection, other], sport="NFL")
    assert [prop.id for prop in nfl] == ["pp-78"]
