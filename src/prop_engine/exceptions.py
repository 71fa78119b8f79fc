"""Custom exception types for the application."""

from __future__ import annotations


class DataSourceError(RuntimeError):
    """Raised when an input table cannot be reached or parsed."""


class EntryAmountError(ValueError):
    """Raised when a lineup entry amount falls outside the allowed range."""


class SelectionLimitError(ValueError):
    """Raised when a selection set would exceed its maximum size."""


class PropNotFoundError(LookupError):
    """Raised when no prop can be matched to a pick query."""
