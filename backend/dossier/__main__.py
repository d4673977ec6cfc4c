"""Dossier CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

env_file = Path.cwd() / ".env"
load_dotenv(env_file)

from dossier import __version__
from dossier.config import get_settings
from dossier.database import (
    check_db_connection,
    close_db,
    create_schema,
    drop_schema,
    get_db_info,
    init_db,
)
from dossier.errors import DataAccessError
from dossier.observability import configure_logging, initialize_logfire

logger = logging.getLogger(__name__)


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create tables and configured unique indexes."""
    settings = get_settings()
    engine = init_db(settings)
    initialize_logfire(settings, engine)
    create_schema(engine, settings.schema_options)
    return 0


def cmd_drop_db(args: argparse.Namespace) -> int:
    """Drop all tables."""
    if not args.yes:
        logger.error("Refusing to drop the schema without --yes")
        return 2
    engine = init_db(get_settings())
    drop_schema(engine)
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Print connection info and health."""
    init_db(get_settings())
    info = get_db_info()
    info["healthy"] = check_db_connection()
    print(json.dumps(info, indent=2))
    return 0 if info["healthy"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dossier",
        description="Manage the Dossier person/document database",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create the schema")
    init_parser.set_defaults(func=cmd_init_db)

    drop_parser = subparsers.add_parser("drop-db", help="Drop the schema")
    drop_parser.add_argument("--yes", action="store_true", help="Confirm the drop")
    drop_parser.set_defaults(func=cmd_drop_db)

    status_parser = subparsers.add_parser("status", help="Check the database connection")
    status_parser.set_defaults(func=cmd_status)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    try:
        return args.func(args)
    except (DataAccessError, SQLAlchemyError) as e:
        logger.error(f"Database operation failed: {e}")
        return 1
    finally:
        close_db()


if __name__ == "__main__":
    sys.exit(main())
