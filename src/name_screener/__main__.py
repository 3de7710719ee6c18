"""Command line entry point for the Name Screener library."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .comparison import DEFAULT_MAX_EDIT_DISTANCE
from .pipeline import ScreenerConfig
from .runner import screen_file, validate

EXIT_OK = 0
EXIT_ERROR = 2


def _default_threshold() -> int:
    raw = os.getenv("NAME_SCREENER_MAX_EDIT_DISTANCE", "")
    return int(raw) if raw.strip() else DEFAULT_MAX_EDIT_DISTANCE


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--threshold",
        type=int,
        default=_default_threshold(),
        help="Maximum edit distance for a spelling match (default: 2 or $NAME_SCREENER_MAX_EDIT_DISTANCE)",
    )
    parser.add_argument(
        "--blacklist-column",
        default=None,
        help="Column holding the entries when the blacklist is a CSV or Excel file (default: first column)",
    )
    parser.add_argument(
        "--transliterate",
        action="store_true",
        help="Fold accented letters to ASCII before phonetic matching",
    )
    parser.add_argument(
        "--fix-encoding",
        action="store_true",
        help="Repair mis-decoded text in the noise and blacklist files",
    )
    parser.add_argument("--verbose", action="store_true", help="Log run statistics")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Screen person names against a blacklist.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    single = subparsers.add_parser("screen", help="Screen one name and print the matching entries")
    single.add_argument("name", help="Person name to screen")
    single.add_argument("blacklist", type=Path, help="Path to the blacklist file")
    single.add_argument("noise", type=Path, help="Path to the noise word file")
    _add_common_arguments(single)

    batch = subparsers.add_parser("batch", help="Screen every name of a CSV or Excel file")
    batch.add_argument("input", type=Path, help="Path to the input CSV or Excel file")
    batch.add_argument("output", type=Path, help="Path where the annotated results will be written")
    batch.add_argument("blacklist", type=Path, help="Path to the blacklist file")
    batch.add_argument("noise", type=Path, help="Path to the noise word file")
    batch.add_argument("--name-column", default="name", help="Column containing the raw names (default: name)")
    batch.add_argument("--workers", type=int, default=1, help="Number of names screened in parallel")
    batch.add_argument(
        "--disable-tqdm",
        action="store_true",
        help="Disable progress bars even if tqdm is installed",
    )
    _add_common_arguments(batch)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(argv if argv is not None else sys.argv[1:])
    except ValueError as exc:
        print(f"ERROR: NAME_SCREENER_MAX_EDIT_DISTANCE must be an integer ({exc})", file=sys.stderr)
        return EXIT_ERROR

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    try:
        config = ScreenerConfig(
            edit_distance_threshold=args.threshold,
            transliterate=args.transliterate,
            fix_encoding=args.fix_encoding,
            blacklist_column=args.blacklist_column,
            name_column=getattr(args, "name_column", "name"),
            workers=getattr(args, "workers", 1),
            use_tqdm=False if getattr(args, "disable_tqdm", False) else None,
            verbose=args.verbose,
        )
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.command == "batch":
        result = screen_file(args.input, args.output, args.blacklist, args.noise, config)
        return EXIT_OK if result is not None else EXIT_ERROR

    outcome = validate(args.name, args.blacklist, args.noise, config)
    if not outcome.ok:
        print(f"ERROR: {outcome.error}", file=sys.stderr)
        return EXIT_ERROR
    for entry in outcome.matches:
        print(entry)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
