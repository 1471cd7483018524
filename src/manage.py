"""Stockroom data management CLI.

Usage:
    python src/manage.py init-data                 # Create empty collections if absent
    python src/manage.py reset-data                # Truncate items and transactions
    python src/manage.py reset-data --collection items
"""

import argparse
import sys

from stockroom.config import Settings
from stockroom.domain import build_persistence
from stockroom.persistence import COLLECTIONS


def init_data(settings: Settings) -> None:
    """Create every collection that does not exist yet."""
    persistence = build_persistence(settings)
    print(f"Initializing collections in {settings.data_dir}...")
    persistence.initialize()
    for collection in COLLECTIONS:
        print(f"  {collection}: {len(persistence.load(collection))} record(s)")
    print("Done.")


def reset_data(settings: Settings, collections=None) -> None:
    """Replace the given (or all) collections with an empty list."""
    persistence = build_persistence(settings)
    for collection in collections or COLLECTIONS:
        print(f"Resetting {collection}...")
        with persistence.lock(collection):
            persistence.save(collection, [])
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Stockroom data management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-data", help="Create empty collections if absent")

    reset_parser = subparsers.add_parser("reset-data", help="Truncate stored collections")
    reset_parser.add_argument(
        "--collection",
        choices=list(COLLECTIONS),
        nargs="*",
        help="Specific collection(s) to reset (default: all)",
    )

    args = parser.parse_args(argv)
    settings = Settings.from_env()

    if args.command == "init-data":
        init_data(settings)
    elif args.command == "reset-data":
        reset_data(settings, args.collection)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
