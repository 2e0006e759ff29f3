"""Storefront database management CLI.

Creates, drops or empties the tables of every aggregate registered with the
storefront domain. The target database comes from ``domain.toml`` for the
environment named by ``PROTEAN_ENV``.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py reset-db   # Delete every row, keep the tables
"""

import argparse
import sys

from storefront.domain import storefront
from storefront.utils.db import drop_db, reset_db, setup_db

COMMANDS = {
    "setup-db": (setup_db, "Create all database tables"),
    "drop-db": (drop_db, "Drop all database tables"),
    "reset-db": (reset_db, "Delete every row from every table"),
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, help_text) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text)

    args = parser.parse_args(argv)
    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    storefront.init()
    print(f"Running {args.command} against the {storefront.config['env']} database...")
    command[0](storefront)
    print("Done.")


if __name__ == "__main__":
    main()
