#!/usr/bin/env python3
"""CLI entry point for the Trip Builder.

Usage:
    python build_trips.py [INPUT ...] [--home CODE] [--format FMT] [--output-dir DIR]

Options:
    INPUT             Itinerary file(s) with SEGMENT: lines (default: $TRIPS_INPUT_PATH)
    --home CODE       Home location code (default: $BASED)
    --format FMT      Output format: text, csv, json, all (default: text)
    --output-dir DIR  Directory for csv/json files (default: output/)
    --quiet           Don't print progress to stderr
"""

import argparse
import sys
from pathlib import Path

from trip_builder.config import HOME_LOCATION, INPUT_PATH, OUTPUT_DIR
from trip_builder.errors import ItineraryError
from trip_builder.output import format_trips, to_json, trips_to_csv
from trip_builder.pipeline import ItineraryProcessor


def _default_inputs():
    return [INPUT_PATH] if INPUT_PATH and Path(INPUT_PATH).is_file() else []


def _process(path: Path, home: str, fmt: str, output_dir: Path, verbose: bool) -> int:
    try:
        processor = ItineraryProcessor(home, verbose=verbose)
        trips = processor.process_file(path)
    except ItineraryError as e:
        print(f"Unexpected Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot read {path}: {e.strerror}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: cannot read {path}: not UTF-8 text ({e.reason})", file=sys.stderr)
        return 1

    if fmt in ("text", "all"):
        text = format_trips(trips)
        if text:
            print(text)
            print()

    if fmt in ("csv", "all"):
        csv_path = output_dir / f"{path.stem}_trips.csv"
        trips_to_csv(trips, csv_path)
        print(f"CSV written to: {csv_path}", file=sys.stderr)

    if fmt in ("json", "all"):
        json_path = output_dir / f"{path.stem}_trips.json"
        to_json(trips, json_path)
        print(f"JSON written to: {json_path}", file=sys.stderr)

    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Group travel segments into trips that start from a home location.",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="Itinerary file(s) to process",
    )
    parser.add_argument(
        "--home",
        default=HOME_LOCATION,
        help="Home location code (default: $BASED)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "csv", "json", "all"],
        default="text",
        help="Output format (text, csv, json, all)",
    )
    parser.add_argument(
        "--output-dir",
        default=str(OUTPUT_DIR),
        help="Output directory for csv/json",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Don't print progress to stderr",
    )
    args = parser.parse_args(argv)

    inputs = [Path(p) for p in (args.inputs or _default_inputs())]
    if not inputs:
        print("Warning: No input file provided", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir)
    status = 0
    for path in inputs:
        if len(inputs) > 1:
            print(f"Processing {path}...", file=sys.stderr)
        status |= _process(path, args.home, args.format, output_dir, not args.quiet)
    return status


if __name__ == "__main__":
    sys.exit(main())
