"""Command-line interface for building prop boards and valuing lineups."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from . import constants
from .config import get_settings
from .data_loader import export_csv, load_players, load_projections
from .data_models import PlayerStat, Projection, Side
from .exceptions import DataSourceError, EntryAmountError, PropNotFoundError, SelectionLimitError
from .lineup import SelectionSet, compute_lineup_valuation, select_prop, submit_lineup
from .logging_utils import configure_logging
from .matching import resolve_prop
from .pipeline import build_props, props_to_frame
from .random_source import default_random_source
from .report import format_submission, format_top_table, format_valuation

LOGGER = configure_logging(__name__)


def _pick_argument(value: str) -> tuple[str, Side]:
    query, sep, side = value.rpartition(":")
    if not sep or not query.strip():
        raise argparse.ArgumentTypeError("Expected QUERY:SIDE, e.g. 'LeBron James Points:over'")
    try:
        return query.strip(), Side.coerce(side)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--projections",
        default=None,
        help="CSV/JSON path or URL with vendor projections. Omit when the vendor feed is down.",
    )
    parser.add_argument(
        "--players",
        default=None,
        help="CSV/JSON path or URL with player season stats (fallback source).",
    )
    parser.add_argument(
        "--sport",
        default=constants.ALL_SPORTS,
        choices=[constants.ALL_SPORTS, *constants.SPORTS],
        help="Restrict props to one sport (default: All).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for player-derived props (defaults to PROP_ENGINE_RANDOM_SEED).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score player props and value lineups.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    props_parser = subparsers.add_parser("props", help="Build and rank props.")
    _add_source_arguments(props_parser)
    props_parser.add_argument(
        "--top", type=int, default=20, help="Number of props to print (default: 20)."
    )
    props_parser.add_argument(
        "--output", default=None, help="Optional CSV path for the full ranked board."
    )

    lineup_parser = subparsers.add_parser("lineup", help="Select props and value the lineup.")
    _add_source_arguments(lineup_parser)
    lineup_parser.add_argument(
        "--pick",
        dest="picks",
        action="append",
        type=_pick_argument,
        required=True,
        metavar="QUERY:SIDE",
        help="Prop id or 'player stat' text plus side; repeat for each pick.",
    )
    lineup_parser.add_argument(
        "--entry",
        type=int,
        default=None,
        help="Entry amount in whole dollars (defaults to PROP_ENGINE_DEFAULT_ENTRY_AMOUNT).",
    )
    lineup_parser.add_argument(
        "--premium",
        action="store_true",
        help="Treat the premium vendor source as connected.",
    )
    lineup_parser.add_argument(
        "--no-submit",
        action="store_true",
        help="Only print the valuation; do not submit the lineup.",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _load_sources(args: argparse.Namespace) -> tuple[Optional[List[Projection]], List[PlayerStat]]:
    projections: Optional[List[Projection]] = None
    players: List[PlayerStat] = []
    if args.projections:
        LOGGER.info("Loading projections from %s", args.projections)
        projections = load_projections(args.projections)
    if args.players:
        LOGGER.info("Loading players from %s", args.players)
        players = load_players(args.players)
    if projections is None and not players:
        raise DataSourceError("Provide --projections and/or --players.")
    return projections, players


def _build(args: argparse.Namespace):
    projections, players = _load_sources(args)
    seed = args.seed if args.seed is not None else get_settings().RANDOM_SEED
    return build_props(projections, players, sport=args.sport, rng=default_random_source(seed))


def run_props(args: argparse.Namespace) -> int:
    report = props_to_frame(_build(args))
    print(format_top_table(report, n=max(1, args.top)))
    if args.output:
        export_csv(report, args.output)
        LOGGER.info("Wrote report to %s", args.output)
    return 0


def run_lineup(args: argparse.Namespace) -> int:
    props = _build(args)
    entry = args.entry if args.entry is not None else get_settings().DEFAULT_ENTRY_AMOUNT
    selection = SelectionSet()
    for query, side in args.picks:
        prop = resolve_prop(props, query)
        select_prop(selection, prop, side)

    valuation = compute_lineup_valuation(selection, entry, args.premium)
    print(format_valuation(valuation))

    if args.no_submit:
        return 0
    submission = submit_lineup(selection, entry, args.premium)
    if submission is None:
        print(f"Select at least {constants.MIN_SELECTIONS} props to submit a lineup.")
        return 1
    print()
    print(format_submission(submission))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    handlers = {"props": run_props, "lineup": run_lineup}
    try:
        return handlers[args.command](args)
    except (DataSourceError, EntryAmountError, SelectionLimitError, PropNotFoundError) as exc:
        LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":  # pragma: no cover - entry point for manual execution
    sys.exit(main())
