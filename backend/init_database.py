#!/usr/bin/env python3
"""
Schema management CLI for the travel map backend.

Upgrades the database to the newest migration, adopting a pre-Alembic
``locations`` table when one is found, or inspects the stamped revision.
"""

import argparse
import json
import sys

from travelmap.database.migrations import (
    DatabaseInitializationError,
    get_database_status,
    initialize_database,
)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PENDING = 2

METHOD_LABELS = {
    "fresh_schema": "created schema on an empty database",
    "legacy_adoption": "adopted existing locations table",
    "migrations": "applied pending migrations",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Travel map schema migrations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Upgrade to the newest revision
  %(prog)s --check                  # Exit 2 if migrations are pending
  %(prog)s --check --json           # Revision report as JSON
  %(prog)s --database-url postgresql://user@host/travelmap
        """,
    )
    parser.add_argument(
        "--check",
        "--status",
        dest="check",
        action="store_true",
        help="Report the schema revision without changing anything",
    )
    parser.add_argument(
        "--database-url",
        help="Connection string to use instead of DATABASE_URL",
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    return parser


def check_revision(database_url, as_json: bool) -> int:
    status = get_database_status(database_url)
    if as_json:
        print(json.dumps(status, indent=2))

    if status.get("error"):
        if not as_json:
            print(f"❌ Cannot read schema revision: {status['error']}")
        return EXIT_FAILED

    if not as_json:
        current = status["current_revision"] or "unversioned"
        print(f"Schema revision: {current} (newest: {status['head_revision']})")
    if status["up_to_date"]:
        return EXIT_OK

    if not as_json:
        print("⚠️  Migrations pending, run without --check to apply them")
    return EXIT_PENDING


def upgrade(database_url, as_json: bool) -> int:
    result = initialize_database(database_url)
    if as_json:
        print(json.dumps(result, indent=2))
        return EXIT_OK

    label = METHOD_LABELS.get(result["method"], result["method"])
    print(f"✅ {result['message']}: {label}")
    if result["previous_revision"] != result["current_revision"]:
        previous = result["previous_revision"] or "unversioned"
        print(f"   {previous} -> {result['current_revision']}")
    return EXIT_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.check:
            return check_revision(args.database_url, args.json)
        return upgrade(args.database_url, args.json)
    except DatabaseInitializationError as e:
        if args.json:
            print(json.dumps({"error": str(e), "success": False}))
        else:
            print(f"❌ {e}")
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
