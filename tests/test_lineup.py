"""Tests for lineup selection, valuation and submission."""

from __future__ import annotations

import pytest

from prop_engine.data_models import PlayerStat, Prop, SelectedPick, Side, SourceTag
from prop_engine.exceptions import EntryAmountError, SelectionLimitError
from prop_engine.lineup import (
    SelectionSet,
    base_multiplier,
    compute_lineup_valuation,
    lineup_confidence_tier,
    lineup_multiplier,
    select_prop,
    source_breakdown,
    submit_lineup,
)
from prop_engine.random_source import SequenceRandomSource
from prop_engine.synthesizer import synthesize_from_player


def _pick(index: int, **overrides: object) -> SelectedPick:
    base: dict[str, object] = {
        "prop_id": f"prop-{index}",
        "side": "over",
        "confidence": 90.0,
        "expected_value": 2.5,
        "source": SourceTag.VENDOR.value,
    }
    base.update(overrides)
    return SelectedPick(**base)


@pytest.fixture()
def player_prop() -> Prop:
    player = PlayerStat(name="Nikola Jokic", team="DEN", position="C", sport="NBA", stats={"assists": 9.8})
    return synthesize_from_player(player, "Assists", SequenceRandomSource([0.5]))


def test_multiplier_table() -> None:
    for count in (0, 1, 7, -1):
        assert base_multiplier(count) == 0
        assert lineup_multiplier(count, premium_connected=True) == 0
    values = [lineup_multiplier(count, premium_connected=False) for count in range(2, 7)]
    assert all(value > 0 for value in values)
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_three_pick_premium_lineup() -> None:
    valuation = compute_lineup_valuation([_pick(i) for i in range(3)], 25, premium_connected=True)
    assert valuation.count == 3
    assert valuation.multiplier == pytest.approx(7.5)
    assert valuation.payout == pytest.approx(187.5)
    assert valuation.average_confidence == pytest.approx(90.0)
    assert valuation.total_expected_value == pytest.approx(7.5)
    assert valuation.source_breakdown.vendor == 3


def test_standard_source_bonus() -> None:
    valuation = compute_lineup_valuation([_pick(i) for i in range(2)], 10, premium_connected=False)
    assert valuation.multiplier == pytest.approx(3 * 1.15 * 1.20)
    assert valuation.payout == pytest.approx(10 * 3 * 1.15 * 1.20)


def test_single_pick_has_no_payout() -> None:
    valuation = compute_lineup_valuation([_pick(0)], 25, premium_connected=True)
    assert valuation.multiplier == 0
    assert valuation.payout == 0


def test_empty_selection() -> None:
    valuation = compute_lineup_valuation([], 25, premium_connected=False)
    assert valuation.count == 0
    assert valuation.average_confidence == 0
    assert valuation.total_expected_value == 0


def test_snapshot_defaults() -> None:
    picks = [_pick(0, confidence=None, expected_value=None), _pick(1, confidence=90.0)]
    valuation = compute_lineup_valuation(picks, 25, premium_connected=False)
    assert valuation.average_confidence == pytest.approx(85.0)
    assert valuation.total_expected_value == pytest.approx(2.5)


def test_source_breakdown_by_prefix() -> None:
    picks = [
        _pick(0, source=SourceTag.VENDOR.value),
        _pick(1, source=SourceTag.ENHANCED.value),
        _pick(2, source="SIMULATION_FALLBACK"),
        _pick(3, source=None),
        _pick(4, source="REAL_PLAYER_DATA_ENHANCED"),
    ]
    breakdown = source_breakdown(picks)
    assert (breakdown.vendor, breakdown.enhanced, breakdown.simulation) == (1, 1, 3)


@pytest.mark.parametrize("amount", [4, 5001, 0, -25, 25.0, True, "25"])
def test_entry_amount_rejected(amount: object) -> None:
    with pytest.raises(EntryAmountError):
        compute_lineup_valuation([_pick(0), _pick(1)], amount, premium_connected=False)  # type: ignore[arg-type]


@pytest.mark.parametrize("amount", [5, 5000])
def test_entry_amount_bounds_accepted(amount: int) -> None:
    valuation = compute_lineup_valuation([_pick(0), _pick(1)], amount, premium_connected=False)
    assert valuation.entry_amount == amount


def test_valuation_rejects_more_than_six_picks() -> None:
    with pytest.raises(SelectionLimitError):
        compute_lineup_valuation([_pick(i) for i in range(7)], 25, premium_connected=False)


def test_seventh_selection_rejected() -> None:
    selection = SelectionSet(_pick(i) for i in range(6))
    with pytest.raises(SelectionLimitError):
        selection.add(_pick(6))
    assert len(selection) == 6


def test_reselecting_existing_key_replaces_pick() -> None:
    selection = SelectionSet(_pick(i) for i in range(6))
    selection.add(_pick(0, confidence=70.0))
    assert len(selection) == 6
    assert selection.picks[0].confidence == pytest.approx(70.0)


def test_over_and_under_are_distinct_keys() -> None:
    selection = SelectionSet([_pick(0, side="over"), _pick(0, side="under")])
    assert len(selection) == 2
    assert "prop-0_under" in selection


def test_remove_and_remove_at() -> None:
    selection = SelectionSet(_pick(i) for i in range(3))
    assert selection.remove("prop-1_over") is not None
    assert selection.remove("missing") is None
    removed = selection.remove_at(1)
    assert removed is not None and removed.prop_id == "prop-2"
    assert selection.remove_at(5) is None
    assert [pick.prop_id for pick in selection] == ["prop-0"]


def test_select_prop_snapshots_side(player_prop: Prop) -> None:
    selection = SelectionSet()
    pick = select_prop(selection, player_prop, Side.UNDER)
    assert pick.key == f"{player_prop.id}_under"
    assert pick.confidence == pytest.approx(player_prop.under_confidence)
    assert pick.expected_value == pytest.approx(player_prop.expected_value)
    assert pick.source == SourceTag.ENHANCED.value
    assert pick.prop is player_prop or pick.prop == player_prop


def test_submission_rejected_below_two_picks() -> None:
    selection = SelectionSet([_pick(0)])
    assert submit_lineup(selection, 25, premium_connected=True) is None
    assert len(selection) == 1


def test_submission_finalizes_and_clears() -> None:
    selection = SelectionSet([_pick(0), _pick(1, source=None)])
    submission = submit_lineup(selection, 20, premium_connected=False)

    assert submission is not None
    assert submission.valuation.count == 2
    assert submission.valuation.payout == pytest.approx(20 * 3 * 1.15 * 1.20)
    assert submission.primary_source == SourceTag.VENDOR.value
    assert len(submission.picks) == 2
    assert len(selection) == 0


def test_submission_primary_source_default() -> None:
    selection = SelectionSet([_pick(0, source=None), _pick(1)])
    submission = submit_lineup(selection, 20, premium_connected=False)
    assert submission is not None
    assert submission.primary_source == "Real Player Data"


def test_lineup_confidence_tier() -> None:
    assert lineup_confidence_tier(88) == "strong"
    assert lineup_confidence_tier(80) == "moderate"
    assert lineup_confidence_tier(60) == "weak"
