"""Static scoring tables for the prop engine."""

from __future__ import annotations

from typing import Final

# Sports offered by the sport filter; "All" disables filtering.
ALL_SPORTS: Final[str] = "All"
SPORTS: Final[list[str]] = ["NBA", "NFL", "MLB", "NHL", "Soccer", "WNBA", "MMA", "PGA"]

# Stat types offered per sport on the player-derived path.
STAT_TYPES_BY_SPORT: Final[dict[str, list[str]]] = {
    "NBA": ["Points", "Rebounds", "Assists", "3-Pointers Made", "Steals", "Blocks"],
    "NFL": ["Passing Yards", "Rushing Yards", "Receptions", "Receiving Yards", "Touchdowns"],
    "MLB": ["Hits", "RBIs", "Runs", "Home Runs", "Strikeouts"],
    "NHL": ["Goals", "Assists", "Shots", "Points"],
    "Soccer": ["Goals", "Assists", "Shots", "Passes"],
    "WNBA": ["Points", "Rebounds", "Assists", "3-Pointers Made"],
    "MMA": ["Significant Strikes", "Takedowns", "Submission Attempts"],
    "PGA": ["Birdies", "Eagles", "Fairways Hit", "Greens in Regulation"],
}
DEFAULT_STAT_TYPES: Final[list[str]] = ["Points"]

# Fallback season values when a player has no recorded value for a stat.
BASE_STAT_VALUES: Final[dict[str, dict[str, float]]] = {
    "NBA": {
        "Points": 20,
        "Rebounds": 8,
        "Assists": 5,
        "3-Pointers Made": 2.5,
        "Steals": 1.2,
        "Blocks": 0.8,
    },
    "NFL": {
        "Passing Yards": 250,
        "Rushing Yards": 80,
        "Receptions": 5,
        "Receiving Yards": 60,
        "Touchdowns": 1.5,
    },
    "MLB": {"Hits": 1.2, "RBIs": 1, "Runs": 0.8, "Home Runs": 0.3, "Strikeouts": 1.5},
    "NHL": {"Goals": 0.8, "Assists": 1.2, "Shots": 3.5, "Points": 2},
}
DEFAULT_SPORT_BASE_VALUES: Final[dict[str, float]] = {"Points": 10}
DEFAULT_BASE_STAT_VALUE: Final[float] = 10.0

# Sports where weather can move a prop.
OUTDOOR_SPORTS: Final[frozenset[str]] = frozenset({"NFL", "MLB", "Soccer", "PGA"})

# Form trend: weights by position over the most recent window.
FORM_WINDOW: Final[int] = 5
FORM_WEIGHTS: Final[tuple[float, ...]] = (0.1, 0.15, 0.2, 0.25, 0.3)
FORM_FALLBACK_WEIGHT: Final[float] = 0.1
FORM_TREND_THRESHOLD: Final[float] = 0.05
DEFAULT_RECENT_FORM: Final[tuple[float, ...]] = (0.5, 0.6, 0.7, 0.8, 0.9)

# Confidence blending.
DEFAULT_BASE_CONFIDENCE: Final[float] = 0.8
TREND_WEIGHT: Final[float] = 0.1
SEASON_EDGE_BONUS: Final[float] = 0.05
MATCHUP_EDGE_BONUS: Final[float] = 0.03
MIN_CONFIDENCE: Final[float] = 0.5
MAX_CONFIDENCE: Final[float] = 0.98

# Contextual factors.
MATCHUP_RATIO_MIN: Final[float] = 0.7
MATCHUP_RATIO_MAX: Final[float] = 1.3
MATCHUP_ZERO_SEASON_DEFAULT: Final[float] = 0.5
HOME_FACTOR: Final[float] = 1.05
AWAY_FACTOR: Final[float] = 0.95
RESTED_FACTOR: Final[float] = 1.02
TIRED_FACTOR: Final[float] = 0.98
BACK_TO_BACK_FACTOR: Final[float] = 0.95
INJURY_IMPACT: Final[float] = 0.1
HEALTHY_STATUS: Final[str] = "Healthy"

# Data quality per production path.
VENDOR_DATA_QUALITY: Final[float] = 0.95
PLAYER_DATA_QUALITY: Final[float] = 0.85

# Player-derived synthesis.
PLAYER_PROP_LIMIT: Final[int] = 20
LINE_VARIANCE: Final[float] = 0.1
VALUE_RATINGS: Final[tuple[str, ...]] = ("A+", "A", "B+", "B", "C+")

# Lineup payout table: picks -> base multiplier.
BASE_MULTIPLIERS: Final[dict[int, float]] = {2: 3, 3: 5, 4: 10, 5: 20, 6: 40}
PREMIUM_SOURCE_BONUS: Final[float] = 1.25
STANDARD_SOURCE_BONUS: Final[float] = 1.15
ENHANCEMENT_FACTOR: Final[float] = 1.20

MIN_SELECTIONS: Final[int] = 2
MAX_SELECTIONS: Final[int] = 6
MIN_ENTRY_AMOUNT: Final[int] = 5
MAX_ENTRY_AMOUNT: Final[int] = 5000
DEFAULT_PICK_CONFIDENCE: Final[float] = 80.0
DEFAULT_PRIMARY_SOURCE: Final[str] = "Real Player Data"
