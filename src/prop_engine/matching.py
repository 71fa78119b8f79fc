"""Name normalization and fuzzy resolution of pick queries to props."""

from __future__ import annotations

import re
import unicodedata
from typing import List, Optional, Sequence

from rapidfuzz import fuzz, process

from .config import get_settings
from .data_models import Prop
from .exceptions import PropNotFoundError
from .logging_utils import configure_logging

LOGGER = configure_logging(__name__)

_SUFFIXES = {"jr", "sr", "ii", "iii"}
_WHITESPACE_RE = re.compile(r"\s+")
_PUNCT_RE = re.compile(r"[^a-z0-9\s]")


def normalize_name(value: str) -> str:
    """Return a normalized representation of a player's name."""
    if value is None:
        return ""
    text = str(value)
    if not text or text.lower() == "nan":
        return ""
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = _PUNCT_RE.sub(" ", text)
    tokens: List[str] = [token for token in text.split() if token]
    while tokens and tokens[-1] in _SUFFIXES:
        tokens.pop()
    normalized = " ".join(tokens)
    return _WHITESPACE_RE.sub(" ", normalized).strip()


def _prop_label(prop: Prop) -> str:
    return normalize_name(f"{prop.player_name} {prop.stat_type}")


def resolve_prop(props: Sequence[Prop], query: str, min_match_score: Optional[int] = None) -> Prop:
    """Return the prop whose id equals ``query`` or whose player and stat best match it."""

    for prop in props:
        if prop.id == query:
            return prop

    threshold = min_match_score if min_match_score is not None else get_settings().MIN_MATCH_SCORE
    labels = [_prop_label(prop) for prop in props]
    best_match = process.extractOne(normalize_name(query), labels, scorer=fuzz.WRatio)
    if best_match is None:
        raise PropNotFoundError(f"No prop matched {query!r}")
    label, score, index = best_match
    if score < threshold:
        raise PropNotFoundError(
            f"Best match score {score:.1f} for {query!r} below threshold {threshold}"
        )
    LOGGER.debug("Resolved pick %r to '%s' with score %.1f", query, label, score)
    return props[index]
