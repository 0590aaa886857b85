"""
=====================================
Command line entry point for dbutils.
=====================================

Thin CLI over the library: it configures logging from the DBUTILS_*
settings, opens an engine through utils.database_utils and runs either an
availability check or a filtered SELECT through sql.table.SimpleTable.
Every executed statement is logged by the SQL event logger installed on a
registry owned by this command.

Usage:
    # Wait until the configured database answers
    python main.py --check

    # Print matching rows as JSON lines
    python main.py --select t_book --columns id,name --where name=Python --limit 10

    # Same, showing every executed statement
    python main.py --select t_book --verbose

Exit codes:
    0 success, 1 error, 130 interrupted
"""

import argparse
import json
import sys
from typing import List, Optional, Sequence, TextIO

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.logger import get_logger, setup_logging_from_config
from events.registry import EventRegistry
from events.sql_events import install_sql_logger
from sql.errors import StatementBuildError
from sql.predicates import equal
from sql.query_builder import Limit, PredicateSet
from sql.table import use
from utils.database_utils import (
    DatabaseConnectionError,
    create_sqlalchemy_engine,
    wait_for_database,
)

logger = get_logger(__name__)


class CommandError(Exception):
    """Exception raised for invalid command line input."""
    pass


def parse_where(items: Optional[Sequence[str]]) -> PredicateSet:
    """
    Turn FIELD=VALUE arguments into equality predicates.

    Values are passed as text; the database applies column affinity.

    Raises:
        CommandError: If an item has no '=' or an empty field name
    """
    predicates = PredicateSet()
    for item in items or ():
        field_name, sep, value = item.partition('=')
        field_name = field_name.strip()
        if not sep or not field_name:
            raise CommandError(f"--where expects FIELD=VALUE, got {item!r}")
        predicates[field_name] = equal(value)
    return predicates


def parse_limit(value: Optional[str]) -> Optional[Limit]:
    """Parse 'COUNT' or 'OFFSET,COUNT'."""
    if value is None:
        return None
    try:
        bounds = [int(part) for part in value.split(',')]
        return Limit(*bounds)
    except ValueError as e:
        # InvalidLimitError is a ValueError too
        raise CommandError(f"--limit expects COUNT or OFFSET,COUNT: {e}") from e


def parse_columns(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [column.strip() for column in value.split(',') if column.strip()]


def run_check(engine: Engine, max_retries: int, retry_delay: float) -> int:
    """Wait for the database; DatabaseConnectionError propagates."""
    wait_for_database(engine, max_retries=max_retries, retry_delay=retry_delay)
    return 0


def run_select(
    engine: Engine,
    registry: EventRegistry,
    table: str,
    columns: List[str],
    where: PredicateSet,
    limit: Optional[Limit],
    out: Optional[TextIO] = None
) -> int:
    """
    Print the rows of `table` matching `where` as JSON lines.

    Args:
        engine: Engine to connect with
        registry: Registry receiving the SQLEvent of the query
        table: Table name
        columns: Selected columns (empty selects all)
        where: Equality predicates
        limit: Optional Limit
        out: Output stream (defaults to stdout)

    Returns:
        Exit code 0
    """
    out = out or sys.stdout
    with engine.connect() as conn:
        rows = use(conn, table, registry).query(columns, where, limit=limit)

    for row in rows:
        out.write(json.dumps(row, default=str) + '\n')

    logger.info(f"✅ {len(rows)} row(s) read from {table}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Run parameterized SQL through the dbutils statement builders',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--url',
        help='SQLAlchemy database URL (defaults to DBUTILS_DATABASE_URL)'
    )
    parser.add_argument(
        '--check',
        action='store_true',
        help='Wait until the database answers, then exit'
    )
    parser.add_argument(
        '--retries',
        type=int,
        default=5,
        help='Availability checks before --check gives up'
    )
    parser.add_argument(
        '--retry-delay',
        type=float,
        default=2,
        help='Seconds between availability checks'
    )
    parser.add_argument(
        '--select',
        metavar='TABLE',
        help='Print the rows of TABLE as JSON lines'
    )
    parser.add_argument(
        '--columns',
        help='Comma separated column list for --select'
    )
    parser.add_argument(
        '--where',
        action='append',
        metavar='FIELD=VALUE',
        help='Equality filter for --select (repeatable, joined with AND)'
    )
    parser.add_argument(
        '--limit',
        help='COUNT or OFFSET,COUNT for --select'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level, shows executed SQL)'
    )

    args = parser.parse_args(argv)

    setup_logging_from_config(log_level='DEBUG' if args.verbose else None)

    registry = install_sql_logger(EventRegistry(name='cli'))
    engine = create_sqlalchemy_engine(args.url)

    try:
        if args.check:
            return run_check(engine, args.retries, args.retry_delay)

        if args.select:
            return run_select(
                engine,
                registry,
                args.select,
                parse_columns(args.columns),
                parse_where(args.where),
                parse_limit(args.limit)
            )

        parser.print_help()
        logger.warning("⚠️  No operation specified. Use --check or --select.")
        return 1

    except (CommandError, StatementBuildError, DatabaseConnectionError) as e:
        logger.error(f"❌ {e}")
        return 1
    except SQLAlchemyError as e:
        logger.error(f"❌ Query failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("⚠️  Operation interrupted by user")
        return 130
    finally:
        engine.dispose()


if __name__ == '__main__':
    sys.exit(main())
