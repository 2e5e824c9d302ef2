"""Command-line interface for coffee-dex."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from coffee_dex import __version__
from coffee_dex.config import CoffeeDexConfig
from coffee_dex.core import MappingService
from coffee_dex.exceptions import CoffeeDexError, ExhaustionError, PersistenceError
from coffee_dex.schema import TastingRecord


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="coffee-dex",
        description="Assign collectible identities to coffee tasting records",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"coffee-dex {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score_parser = subparsers.add_parser("score", help="Show category scores for a tasting record")
    score_parser.add_argument("record", help="Path to a tasting record JSON file")
    score_parser.add_argument("--json", action="store_true", help="Output as JSON")
    score_parser.set_defaults(no_refiner=True)

    map_parser = subparsers.add_parser("map", help="Map a tasting record to a candidate")
    map_parser.add_argument("record", help="Path to a tasting record JSON file")
    map_parser.add_argument("--json", action="store_true", help="Output as JSON")
    map_parser.add_argument(
        "--no-refiner",
        action="store_true",
        help="Skip the generative refiner and use rule-based selection",
    )

    args = parser.parse_args(argv)

    try:
        record = TastingRecord.from_payload(_read_json(args.record))
        config = CoffeeDexConfig.from_env()
        if args.no_refiner:
            config = replace(config, refiner_enabled=False)
        service = MappingService.from_config(config)

        if args.command == "score":
            selection = service.classify(record)
            if args.json:
                print(json.dumps(
                    {
                        "primary": selection.primary,
                        "secondary": selection.secondary,
                        "scores": dict(selection.scores),
                    },
                    indent=2,
                ))
            else:
                _print_scores(selection)
            return 0

        mapping = service.map_record(service.records.add(record))
    except ExhaustionError as e:
        print(f"Collection complete: {e}", file=sys.stderr)
        return 2
    except PersistenceError as e:
        print(f"Storage unavailable, try again later: {e}", file=sys.stderr)
        return 3
    except (CoffeeDexError, OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(mapping.model_dump_json(indent=2))
    else:
        _print_mapping(mapping)
    return 0


def _read_json(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _print_scores(selection) -> None:
    print()
    print("  coffee-dex")
    print()
    print(f"  {'Primary:':<14} {selection.primary}")
    print(f"  {'Secondary:':<14} {selection.secondary or '-'}")
    print()
    for category, score in sorted(selection.scores.items(), key=lambda item: item[1], reverse=True):
        print(f"  {category + ':':<14} {score:.3f}")
    print()


def _print_mapping(mapping) -> None:
    print()
    print("  coffee-dex")
    print()

    fields = [
        ("Coffee", mapping.coffee_id),
        ("Candidate", f"#{mapping.candidate_id:03d} {mapping.candidate_name}"),
        ("Level", str(mapping.level)),
        ("Confidence", f"{mapping.confidence:.0%}"),
    ]
    for label, value in fields:
        print(f"  {label + ':':<14} {value}")

    print()
    for line in mapping.description.splitlines():
        print(f"  {line}")
    if mapping.trait_mapping:
        print()
        for item in mapping.trait_mapping:
            print(f"  {item.trait} -> {item.target_attribute}: {item.reasoning}")
    print()


if __name__ == "__main__":
    sys.exit(main())
