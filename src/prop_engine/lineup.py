"""Lineup selection and payout valuation."""

from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, Iterator, List, Optional, Sequence

from . import constants
from .data_models import (
    LineupSubmission,
    LineupValuation,
    Prop,
    SelectedPick,
    Side,
    SourceBreakdown,
    SourceTag,
)
from .exceptions import EntryAmountError, SelectionLimitError
from .logging_utils import configure_logging

LOGGER = configure_logging(__name__)

_VENDOR_PREFIX = SourceTag.VENDOR.value.split("_", 1)[0]
_ENHANCED_PREFIX = SourceTag.ENHANCED.value.split("_", 1)[0]


class SelectionSet:
    """Ordered, size-capped collection of picks keyed by ``"{prop_id}_{side}"``."""

    def __init__(self, picks: Iterable[SelectedPick] = (), max_size: int = constants.MAX_SELECTIONS) -> None:
        self._picks: "OrderedDict[str, SelectedPick]" = OrderedDict()
        self._max_size = max_size
        for pick in picks:
            self.add(pick)

    def __len__(self) -> int:
        return len(self._picks)

    def __iter__(self) -> Iterator[SelectedPick]:
        return iter(list(self._picks.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._picks

    @property
    def picks(self) -> List[SelectedPick]:
        return list(self._picks.values())

    def add(self, pick: SelectedPick) -> None:
        """Add ``pick``; a new key beyond the cap raises :class:`SelectionLimitError`."""

        if pick.key not in self._picks and len(self._picks) >= self._max_size:
            raise SelectionLimitError(
                f"Cannot select more than {self._max_size} props (rejected {pick.key})."
            )
        self._picks[pick.key] = pick
        LOGGER.debug("Selected %s (%d/%d)", pick.key, len(self._picks), self._max_size)

    def remove(self, key: str) -> Optional[SelectedPick]:
        return self._picks.pop(key, None)

    def remove_at(self, index: int) -> Optional[SelectedPick]:
        keys = list(self._picks)
        if not 0 <= index < len(keys):
            return None
        return self._picks.pop(keys[index])

    def clear(self) -> None:
        self._picks.clear()


def select_prop(selection: SelectionSet, prop: Prop, side: Side | str) -> SelectedPick:
    """Snapshot ``prop`` on ``side`` into a pick and add it to ``selection``."""

    chosen = Side.coerce(side)
    pick = SelectedPick(
        prop_id=prop.id,
        side=chosen,
        confidence=prop.confidence_for(chosen),
        expected_value=prop.expected_value,
        source=prop.source.value,
        prop=prop,
    )
    selection.add(pick)
    return pick


def base_multiplier(count: int) -> float:
    return float(constants.BASE_MULTIPLIERS.get(count, 0))


def lineup_multiplier(count: int, premium_connected: bool) -> float:
    """Base multiplier for ``count`` picks times the source bonus and enhancement factor."""

    bonus = constants.PREMIUM_SOURCE_BONUS if premium_connected else constants.STANDARD_SOURCE_BONUS
    return base_multiplier(count) * bonus * constants.ENHANCEMENT_FACTOR


def validate_entry_amount(entry_amount: int) -> int:
    """Return ``entry_amount`` if it is an integer within the allowed range."""

    if isinstance(entry_amount, bool) or not isinstance(entry_amount, int):
        raise EntryAmountError(f"Entry amount must be a whole number, got {entry_amount!r}.")
    if not constants.MIN_ENTRY_AMOUNT <= entry_amount <= constants.MAX_ENTRY_AMOUNT:
        raise EntryAmountError(
            f"Entry amount {entry_amount} outside "
            f"[{constants.MIN_ENTRY_AMOUNT}, {constants.MAX_ENTRY_AMOUNT}]."
        )
    return entry_amount


def source_breakdown(picks: Sequence[SelectedPick]) -> SourceBreakdown:
    vendor = enhanced = simulation = 0
    for pick in picks:
        source = pick.source or ""
        if source.startswith(_VENDOR_PREFIX):
            vendor += 1
        elif source.startswith(_ENHANCED_PREFIX):
            enhanced += 1
        else:
            simulation += 1
    return SourceBreakdown(vendor=vendor, enhanced=enhanced, simulation=simulation)


def compute_lineup_valuation(
    selections: Iterable[SelectedPick],
    entry_amount: int,
    premium_connected: bool,
) -> LineupValuation:
    """Value the current selection set for ``entry_amount``."""

    picks = list(selections)
    validate_entry_amount(entry_amount)
    if len(picks) > constants.MAX_SELECTIONS:
        raise SelectionLimitError(
            f"A lineup holds at most {constants.MAX_SELECTIONS} picks, got {len(picks)}."
        )

    count = len(picks)
    multiplier = lineup_multiplier(count, premium_connected)
    payout = entry_amount * multiplier if count >= constants.MIN_SELECTIONS else 0.0

    confidences = [
        pick.confidence if pick.confidence is not None else constants.DEFAULT_PICK_CONFIDENCE
        for pick in picks
    ]
    average_confidence = sum(confidences) / count if count else 0.0
    total_expected_value = sum(
        pick.expected_value if pick.expected_value is not None else 0.0 for pick in picks
    )

    return LineupValuation(
        count=count,
        entry_amount=entry_amount,
        premium_connected=premium_connected,
        multiplier=multiplier,
        payout=payout,
        average_confidence=average_confidence,
        total_expected_value=total_expected_value,
        source_breakdown=source_breakdown(picks),
    )


def lineup_confidence_tier(average_confidence: float) -> str:
    if average_confidence >= 85:
        return "strong"
    if average_confidence >= 75:
        return "moderate"
    return "weak"


def submit_lineup(
    selection: SelectionSet,
    entry_amount: int,
    premium_connected: bool,
) -> Optional[LineupSubmission]:
    """Finalize the selection; returns ``None`` without changes below two picks."""

    if len(selection) < constants.MIN_SELECTIONS:
        LOGGER.warning(
            "Lineup submission ignored: %d pick(s) selected, need at least %d",
            len(selection),
            constants.MIN_SELECTIONS,
        )
        return None

    picks = selection.picks
    valuation = compute_lineup_valuation(picks, entry_amount, premium_connected)
    submission = LineupSubmission(
        valuation=valuation,
        picks=tuple(picks),
        primary_source=picks[0].source or constants.DEFAULT_PRIMARY_SOURCE,
    )
    selection.clear()
    LOGGER.info(
        "Submitted %d-pick lineup: entry=%d multiplier=%.2f payout=%.2f",
        valuation.count,
        entry_amount,
        valuation.multiplier,
        valuation.payout,
    )
    return submission
