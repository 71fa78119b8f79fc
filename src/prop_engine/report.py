"""Text rendering for ranked props and lineup valuations."""

from __future__ import annotations

import math
from typing import Sequence

import pandas as pd

from .data_models import LineupSubmission, LineupValuation
from .lineup import lineup_confidence_tier

_REQUIRED_COLUMNS: tuple[str, ...] = (
    "player_name",
    "stat_type",
    "line",
    "side",
    "confidence",
    "expected_value",
    "source",
)

__all__ = ["format_top_table", "format_valuation", "format_submission"]


def _normalize_string(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)


def _format_numeric(value: object, digits: int = 1) -> str:
    if value is None:
        return "-"
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        text = _normalize_string(value)
        return text or "-"
    if math.isnan(numeric):
        return "-"
    if math.isclose(numeric, round(numeric)):
        return f"{int(round(numeric))}"
    return f"{numeric:.{digits}f}"


def _format_signed(value: object) -> str:
    try:
        numeric = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return "-"
    if math.isnan(numeric):
        return "-"
    return f"{numeric:+.1f}"


def _prepare_top(df: pd.DataFrame, n: int) -> pd.DataFrame:
    if df is None or df.empty:
        return pd.DataFrame(columns=_REQUIRED_COLUMNS)

    missing = [column for column in _REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"DataFrame missing required columns: {', '.join(missing)}")

    ordered = df.sort_values(
        by=["confidence", "expected_value"], ascending=False, na_position="last", kind="mergesort"
    )
    return ordered.head(n).reset_index(drop=True)


def _compute_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[int]:
    widths = [len(header) for header in headers]
    for row in rows:
        for index, value in enumerate(row):
            widths[index] = max(widths[index], len(value))
    return widths


def _format_rows(rows: Sequence[Sequence[str]], widths: Sequence[int]) -> list[str]:
    formatted: list[str] = []
    for row in rows:
        formatted.append(" ".join(value.ljust(width) for value, width in zip(row, widths)))
    return formatted


def _render_table(top: pd.DataFrame) -> str:
    if top.empty:
        return "No props available."

    headers = ["Player", "Stat", "Line", "Side", "Conf%", "EV%", "Source"]
    rows: list[list[str]] = []

    for _, row in top.iterrows():
        rows.append(
            [
                _normalize_string(row["player_name"]),
                _normalize_string(row["stat_type"]),
                _format_numeric(row["line"]),
                _normalize_string(row["side"]).upper(),
                _format_numeric(row["confidence"]),
                _format_signed(row["expected_value"]),
                _normalize_string(row["source"]),
            ]
        )

    widths = _compute_widths(headers, rows)
    header_line = " ".join(header.ljust(width) for header, width in zip(headers, widths))
    separator_line = " ".join("-" * width for width in widths)
    body_lines = _format_rows(rows, widths)

    return "\n".join([header_line, separator_line, *body_lines])


def format_top_table(df: pd.DataFrame, n: int = 20) -> str:
    """Return a compact fixed-width table summarising the top ``n`` props."""

    top = _prepare_top(df, n)
    return _render_table(top)


def format_valuation(valuation: LineupValuation) -> str:
    """Summarise a lineup valuation in a few lines."""

    breakdown = valuation.source_breakdown
    multiplier = f"{valuation.multiplier:.1f}x" if valuation.count >= 2 else "-"
    confidence = (
        f"{valuation.average_confidence:.0f}% ({lineup_confidence_tier(valuation.average_confidence)})"
        if valuation.count
        else "-"
    )
    lines = [
        f"Picks: {valuation.count}",
        f"Entry: ${valuation.entry_amount}",
        f"Multiplier: {multiplier}",
        f"Payout: ${valuation.payout:.2f}",
        f"Avg Confidence: {confidence}",
        f"Total EV: {valuation.total_expected_value:+.1f}%",
        f"Sources: vendor={breakdown.vendor} enhanced={breakdown.enhanced} "
        f"simulation={breakdown.simulation}",
        f"Mode: {'Premium' if valuation.premium_connected else 'Enhanced'}",
    ]
    return "\n".join(lines)


def format_submission(submission: LineupSubmission) -> str:
    valuation = submission.valuation
    return "\n".join(
        [
            "Lineup submitted",
            f"Props: {valuation.count}",
            f"Entry: ${valuation.entry_amount}",
            f"Avg Confidence: {valuation.average_confidence:.1f}%",
            f"Total Expected Value: {valuation.total_expected_value:.1f}%",
            f"Data Source: {submission.primary_source}",
        ]
    )
