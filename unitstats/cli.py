from __future__ import annotations

import argparse
import json
import logging
import os
from typing import Any, List, Sequence

from .catalog import filter_units, find_mods, find_unit, mods_by_rarity, sort_units
from .config import feed_config_from_env
from .game_data import load_game_data
from .render import render_mods, render_unit_details, render_units_table
from .report import build_unit_report, build_units_table, mod_summary, to_jsonable
from .sheet_client import FeedError
from .sheet_ingest import load_catalog
from .stats import MAX_LEVEL, MIN_LEVEL

logger = logging.getLogger(__name__)


def _load_env() -> None:
    try:
        from dotenv import load_dotenv

        load_dotenv()
    except ImportError:
        pass


def _split_ids(values: Sequence[str] | None) -> List[str]:
    out: List[str] = []
    for v in values or []:
        out.extend(part.strip() for part in v.split(",") if part.strip())
    return out


def _level_arg(value: str) -> int:
    level = int(value)
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise argparse.ArgumentTypeError(f"level must be between {MIN_LEVEL} and {MAX_LEVEL}")
    return level


def _add_selection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--level", type=_level_arg, default=MIN_LEVEL, help="Unit level (1-25)")
    parser.add_argument("--max-level", action="store_true", help="Preview stats at max level")
    parser.add_argument(
        "--mod", action="append", default=None, help="Mod id to apply (repeat or comma separate)"
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Unit stat browser and calculator")
    parser.add_argument("--units-csv", default=None, help="Read units from a local CSV file")
    parser.add_argument("--mods-csv", default=None, help="Read mods from a local CSV file")
    parser.add_argument("--cache", action="store_true", help="Enable on-disk cache")
    parser.add_argument(
        "--format", choices=["json", "text"], default="text", help="Output format"
    )
    parser.add_argument("--output", default=None, help="Write output to a file")
    parser.add_argument("--debug", action="store_true", help="Print debug logs")

    sub = parser.add_subparsers(dest="command", required=True)

    units = sub.add_parser("units", help="List units")
    units.add_argument("--search", default="", help="Filter by label substring")
    units.add_argument("--rarity", default=None, help="Filter by rarity")
    units.add_argument("--class", dest="unit_class", default=None, help="Filter by class")
    units.add_argument("--sort", default=None, help="Column to sort by")
    units.add_argument("--desc", action="store_true", help="Sort descending")
    _add_selection_args(units)

    show = sub.add_parser("show", help="Show one unit with computed stats")
    show.add_argument("unit", help="Unit id or label (fuzzy matched)")
    _add_selection_args(show)

    sub.add_parser("mods", help="List mods grouped by rarity")
    return parser.parse_args(argv)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _emit(args: argparse.Namespace, text: str) -> None:
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)


def run(args: argparse.Namespace) -> str:
    units, mods = load_catalog(
        feed_config_from_env(), units_csv=args.units_csv, mods_csv=args.mods_csv
    )
    game_data = load_game_data()

    if args.command == "mods":
        groups = mods_by_rarity(mods)
        if args.format == "json":
            payload: Any = {r: [mod_summary(m) for m in ms] for r, ms in groups}
            return json.dumps(payload, indent=2)
        return render_mods(groups)

    try:
        selected = find_mods(mods, _split_ids(args.mod))
    except KeyError as exc:
        raise SystemExit(f"Unknown mod id: {exc.args[0]}")
    level = MAX_LEVEL if args.max_level else args.level

    if args.command == "show":
        unit = find_unit(units, args.unit)
        if unit is None:
            raise SystemExit(f"No unit matches '{args.unit}'.")
        report = build_unit_report(unit, level, selected, game_data)
        if args.format == "json":
            return json.dumps(to_jsonable(report), indent=2)
        return render_unit_details(report)

    shown = filter_units(units, args.search, args.rarity, args.unit_class)
    shown = sort_units(shown, args.sort, descending=args.desc)
    rows = build_units_table(shown, level, selected, game_data)
    if args.format == "json":
        return json.dumps(to_jsonable(rows), indent=2)
    return render_units_table(rows)


def main(argv: Sequence[str] | None = None) -> None:
    _load_env()
    args = _parse_args(argv)
    _configure_logging(args.debug)

    if args.cache:
        os.environ["UNITSTATS_CACHE"] = "1"

    try:
        output_text = run(args)
    except FeedError as exc:
        raise SystemExit(f"Could not load data: {exc}")
    _emit(args, output_text)


if __name__ == "__main__":
    main()
