"""
pgcb/load.py

Database layer (store gateway) for the scrape pipeline.

Responsibilities
----------------
- Create a SQLAlchemy Engine for the local SQLite store.
- Initialise the schema from `db.models.metadata` (idempotent).
- Insert scraped records one at a time, each in its own transaction.
- Count and query records for the report exporter.
- Remove the store wholesale before a full re-fetch.
- Provide a small CLI for one-off DB initialisation (`--init-db`) and
  inspection (`--count`).

Environment Variables
---------------------
PGCB_DB_PATH
    Path of the SQLite file. Defaults to "db.sqlite" in the working directory.

Notes
-----
- Workers write concurrently from several threads. SQLite serialises writers
  with its own file lock; `SQLITE_TIMEOUT` is how long a writer waits for it.
- The year/month filter in `query_records` is two independent ranges, not a
  chronological window: month bounds apply to every year in range.
"""

from __future__ import annotations

import argparse
import os

from dotenv import find_dotenv, load_dotenv
from sqlalchemy import asc, create_engine, desc, func, select
from sqlalchemy.engine import Engine

from db.models import generation_records, metadata

from .validate import GenerationRecord

# Load `.env` for local development so shells on Windows/macOS/Linux
# do not need to export environment variables manually.
load_dotenv(find_dotenv(usecwd=True))

DB_PATH = os.getenv("PGCB_DB_PATH", "db.sqlite")

# Seconds a writer waits on SQLite's lock before giving up.
SQLITE_TIMEOUT = 60

SORT_DIRECTIONS = {"asc": asc, "desc": desc}


def get_engine(path: str = DB_PATH) -> Engine:
    """Create and return a SQLAlchemy engine for the SQLite file at `path`."""
    # Connections are pooled and handed between worker threads.
    connect_args = {"timeout": SQLITE_TIMEOUT, "check_same_thread": False}
    return create_engine(f"sqlite:///{path}", connect_args=connect_args)


def init_db(engine: Engine):
    """Create the `generation_records` table if it does not already exist.

    Safe to run multiple times.
    """
    metadata.create_all(engine)


def open_store(path: str = DB_PATH) -> Engine:
    """Return an engine for `path` with the schema in place."""
    engine = get_engine(path)
    init_db(engine)
    return engine


def store_exists(path: str = DB_PATH) -> bool:
    return os.path.exists(path)


def reset_store(path: str = DB_PATH):
    """Delete the store file, if any. The next `open_store` recreates it empty."""
    if os.path.exists(path):
        os.remove(path)


def insert_record(engine: Engine, record: GenerationRecord) -> int:
    """Append one record and return its store-assigned id.

    Each call is its own transaction; there is no batching across rows.
    """
    with engine.begin() as cx:
        res = cx.execute(generation_records.insert().values(**record.model_dump()))
    return res.inserted_primary_key[0]


def count_records(engine: Engine) -> int:
    """Return the total number of stored records."""
    stmt = select(func.count()).select_from(generation_records)
    with engine.connect() as cx:
        return cx.execute(stmt).scalar()


def query_records(
    engine: Engine,
    min_year: int,
    max_year: int,
    min_month: int,
    max_month: int,
    direction: str = "desc",
) -> list[dict]:
    """Return records within the year and month bounds, ordered for the report.

    Ordering is ``year <direction>, month <direction>, day ASC, time ASC``:
    only year and month follow `direction`.

    Args:
        engine: SQLAlchemy engine.
        min_year, max_year: Inclusive year bounds.
        min_month, max_month: Inclusive month bounds, applied to every year.
        direction: "asc" or "desc".

    Returns:
        list[dict]: One mapping per record, keyed by column name.

    Raises:
        ValueError: On an unknown `direction`.
    """
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction {direction!r}; expected 'asc' or 'desc'")
    order = SORT_DIRECTIONS[direction]
    t = generation_records.c

    stmt = (
        select(generation_records)
        .where(t.year >= min_year, t.year <= max_year)
        .where(t.month >= min_month, t.month <= max_month)
        .order_by(order(t.year), order(t.month), t.day.asc(), t.time.asc())
    )
    with engine.connect() as cx:
        return [dict(row) for row in cx.execute(stmt).mappings()]


def main(argv=None):
    """CLI entry point for store utilities.

    Supported actions:
        --init-db  Create the store file and table.
        --count    Print the number of stored records.

    Args:
        argv: Optional list of CLI arguments for testing.

    Returns:
        int: Process exit code (0 for success).
    """
    parser = argparse.ArgumentParser()
    parser.add_argument("--db-path", default=DB_PATH, help="SQLite store path")
    parser.add_argument("--init-db", action="store_true", help="Create the store and table")
    parser.add_argument("--count", action="store_true", help="Print the stored record count")
    args, _ = parser.parse_known_args(argv)

    engine = get_engine(args.db_path)

    if args.init_db:
        init_db(engine)
        print("DB initialised.")
        return 0

    if args.count:
        print(f"Total rows: {count_records(engine)}")
        return 0

    print("Nothing to do. Use --init-db or --count from this module, or run pgcb.run.")
    return 0


if __name__ == "__main__":
    # Delegate to `main()` and convert its return value to a process exit code.
    raise SystemExit(main())
