"""Utilities for loading projection and player tables."""

from __future__ import annotations

import io
import json
import math
from pathlib import Path
from typing import Any, Iterable, List
from urllib.parse import unquote, urlsplit

import pandas as pd
import requests
from pydantic import ValidationError

from .config import get_settings
from .data_models import PlayerStat, Projection
from .exceptions import DataSourceError
from .logging_utils import configure_logging

LOGGER = configure_logging(__name__)

PROJECTION_REQUIRED_COLUMNS = {"id", "player_name", "sport", "stat_type", "line"}
PLAYER_REQUIRED_COLUMNS = {"name", "sport"}
STAT_COLUMN_PREFIX = "stat_"


def _frame_from_text(text: str, fmt: str) -> pd.DataFrame:
    if fmt == "json":
        return pd.DataFrame(json.loads(text))
    return pd.read_csv(io.StringIO(text))


def _format_for(location: str) -> str:
    return "json" if location.lower().endswith(".json") else "csv"


def fetch_remote_table(url: str) -> pd.DataFrame:
    """Fetch a CSV or JSON table from ``url``, raising :class:`DataSourceError` on failure."""

    settings = get_settings()
    LOGGER.info("Fetching remote table from %s", url)
    try:
        response = requests.get(url, timeout=settings.HTTP_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as exc:  # pragma: no cover - network errors are logged
        LOGGER.error("Failed to download table from %s: %s", url, exc)
        raise DataSourceError(f"Failed to download table from {url}") from exc
    content_type = response.headers.get("Content-Type", "")
    fmt = "json" if "json" in content_type else _format_for(urlsplit(url).path)
    return _frame_from_text(response.text, fmt)


def read_table(location: str | Path) -> pd.DataFrame:
    """Read a table from a local path or URL. Supports http(s)://, file:// and bare paths."""

    text = str(location)
    parts = urlsplit(text)
    if parts.scheme in ("http", "https"):
        return fetch_remote_table(text)

    if parts.scheme == "file":
        netloc = parts.netloc
        if netloc in ("", "localhost"):
            path = Path(unquote(parts.path))
        else:
            path = Path(unquote("/" + netloc + parts.path))
    else:
        path = Path(unquote(text))

    if not path.exists():
        raise DataSourceError(f"Expected data file {path} was not found.")
    LOGGER.debug("Loading local table from %s", path)
    try:
        return _frame_from_text(path.read_text(encoding="utf-8"), _format_for(path.name))
    except (ValueError, pd.errors.ParserError) as exc:
        raise DataSourceError(f"Could not parse {path}: {exc}") from exc


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _clean_record(record: dict) -> dict:
    return {key: value for key, value in record.items() if not _is_missing(value)}


def _parse_sequence(value: Any) -> Any:
    """Accept a list, a JSON array, or a comma-separated string of numbers."""

    if not isinstance(value, str):
        return value
    text = value.strip()
    if text.startswith("["):
        return json.loads(text)
    return [float(part) for part in text.split(",") if part.strip()]


def _parse_mapping(value: Any) -> Any:
    if isinstance(value, str):
        return json.loads(value)
    return value


def _require_columns(df: pd.DataFrame, required: Iterable[str], label: str) -> None:
    missing = set(required).difference(df.columns)
    if missing:
        raise DataSourceError(f"{label} table is missing columns: {', '.join(sorted(missing))}")


def _to_models(records: Iterable[dict], model_cls, label: str) -> List:
    models = []
    for index, record in enumerate(records):
        try:
            models.append(model_cls(**record))
        except (ValidationError, ValueError) as exc:
            raise DataSourceError(f"Invalid {label} record at row {index}: {exc}") from exc
    return models


def load_projections_from_dataframe(df: pd.DataFrame) -> List[Projection]:
    """Convert a DataFrame into a list of :class:`Projection` models."""

    _require_columns(df, PROJECTION_REQUIRED_COLUMNS, "Projection")
    records = []
    for raw in df.to_dict(orient="records"):
        record = _clean_record(raw)
        if "recent_form" in record:
            try:
                record["recent_form"] = _parse_sequence(record["recent_form"])
            except ValueError as exc:
                raise DataSourceError(f"Unreadable recent_form {raw['recent_form']!r}") from exc
        records.append(record)
    projections = _to_models(records, Projection, "projection")
    LOGGER.info("Loaded %d projections", len(projections))
    return projections


def _stat_key(column: str) -> str:
    return column[len(STAT_COLUMN_PREFIX) :].replace("_", "").lower()


def load_players_from_dataframe(df: pd.DataFrame) -> List[PlayerStat]:
    """Convert a DataFrame into a list of :class:`PlayerStat` models.

    Season values come from a ``stats`` column (mapping or JSON object) and/or
    ``stat_*`` columns; ``stat_passing_yards`` is stored as ``passingyards``.
    """

    _require_columns(df, PLAYER_REQUIRED_COLUMNS, "Player")
    stat_columns = [column for column in df.columns if str(column).startswith(STAT_COLUMN_PREFIX)]
    records = []
    for raw in df.to_dict(orient="records"):
        record = _clean_record(raw)
        try:
            stats = dict(_parse_mapping(record.pop("stats", {})) or {})
        except ValueError as exc:
            raise DataSourceError(f"Unreadable stats for {record.get('name')!r}") from exc
        for column in stat_columns:
            value = record.pop(column, None)
            if value is not None:
                stats[_stat_key(column)] = value
        record["stats"] = stats
        records.append(record)
    players = _to_models(records, PlayerStat, "player")
    LOGGER.info("Loaded %d players", len(players))
    return players


def load_projections(location: str | Path) -> List[Projection]:
    return load_projections_from_dataframe(read_table(location))


def load_players(location: str | Path) -> List[PlayerStat]:
    return load_players_from_dataframe(read_table(location))


def export_csv(df: pd.DataFrame, path: str | Path) -> None:
    """Export ``df`` to ``path`` as CSV."""

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    LOGGER.debug("Writing %s rows to %s", len(df), destination)
    df.to_csv(destination, index=False)
