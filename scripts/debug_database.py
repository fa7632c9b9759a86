#!/usr/bin/env python3
"""
Inspect and manage the hybrid database.

Usage:
    python scripts/debug_database.py status
    python scripts/debug_database.py dump [--collection jobs]
    python scripts/debug_database.py seed
    python scripts/debug_database.py force-local
    python scripts/debug_database.py reconnect
    python scripts/debug_database.py clear [--yes]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add repo root to path
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from udyami.app import build_services
from udyami.config import Config
from udyami.shared.structured_logging import configure_logging

logger = logging.getLogger(__name__)


def print_counts(data: dict) -> None:
    for name, records in data.items():
        count = len(records) if isinstance(records, list) else "-"
        print(f"   {name:<15} {count}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect and manage the Udyami database")
    parser.add_argument(
        "command",
        choices=["status", "dump", "seed", "force-local", "reconnect", "clear"],
        help="Action to run",
    )
    parser.add_argument("--collection", default=None, help="Only dump this collection")
    parser.add_argument("--yes", action="store_true", help="Do not ask before clearing data")
    parser.add_argument("--log-level", default=Config.LOG_LEVEL, help="Log level")
    args = parser.parse_args()

    configure_logging(args.log_level)
    services = build_services()
    database = services.database

    if args.command == "force-local":
        database.force_initialize_local()
    elif args.command == "reconnect":
        if not database.reconnect_to_cloud():
            print(f"Backend API at {Config.API_BASE_URL} is not reachable")
    else:
        database.initialize()

    if args.command == "status":
        print(f"Database: {database.get_database_status()}")
        print_counts(database.get_all_data())
    elif args.command == "dump":
        data = database.get_all_data()
        if args.collection:
            data = {args.collection: data.get(args.collection, [])}
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif args.command == "seed":
        database.initialize_sample_data()
        print_counts(database.get_all_data())
    elif args.command == "clear":
        if not args.yes:
            answer = input(f"Clear all data in {database.get_database_status()}? [y/N] ")
            if answer.strip().lower() != "y":
                print("Aborted")
                return 1
        database.clear_all_data()
        print("All data cleared")
    else:
        print(f"Database: {database.get_database_status()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
