"""Marketgate database management CLI.

Creates and drops the quality domain's database schema using the
setup_db/drop_db utilities.

Usage:
    python src/manage.py setup-db    # Create all tables
    python src/manage.py drop-db     # Drop all tables
    python src/manage.py reconcile   # Open assessments for orphan products
"""

import argparse
import sys


def _domain():
    from quality.domain import quality

    print("Initializing quality domain...")
    quality.init()
    return quality


def setup_database():
    from quality.utils.db import setup_db

    domain = _domain()
    print("Creating quality database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from quality.utils.db import drop_db

    domain = _domain()
    print("Dropping quality database schema...")
    drop_db(domain)
    print("Done.")


def reconcile():
    from quality.assessment.reconciliation import reconcile_orphans

    domain = _domain()
    with domain.domain_context():
        report = reconcile_orphans()
    print(f"Opened {len(report.created)} assessment(s), {len(report.failed)} failure(s).")
    return report


def main():
    parser = argparse.ArgumentParser(description="Marketgate database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("reconcile", help="Open assessments for products that lack one")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "reconcile":
        report = reconcile()
        if report.failed:
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
