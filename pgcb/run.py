"""
pgcb/run.py

End-to-end scrape-and-export orchestrator for the PGCB generation report.

Responsibilities
----------------
- Decide whether the local store must be (re)built: on `--force-fetch` or when
  the store file is missing.
- Fetch every report page concurrently with a fixed worker cap, parse each page
  and write valid rows to the store as they are extracted.
- Export the filtered, sorted report once the store is complete.
- Expose a CLI for ad-hoc runs.

Failure contract
----------------
- Rows with a malformed date are dropped and logged; the run continues.
- A `TransportFault` or `SchemaViolation` from any page stops the fetch: pages
  not yet started are cancelled, pages in flight finish, and the fault is
  re-raised. Rows already written stay in the store, but no report is written
  and the next run must re-fetch (`--force-fetch`) to get a consistent store.
"""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed

from sqlalchemy.engine import Engine

from .client import fetch_page
from .errors import IngestError
from .export import export_report
from .load import DB_PATH, insert_record, open_store, reset_store, store_exists
from .parse import table_rows
from .validate import extract_row

# Maximum number of pages fetched at the same time.
CONCURRENCY = 10
SERVER_MAX_PAGE = 960

logger = logging.getLogger(__name__)


def process_page(engine: Engine, page: int) -> int:
    """Fetch, parse and store one report page.

    Rows are written in document order, one insert per row. Rows whose date is
    malformed are skipped.

    Returns:
        int: Number of rows stored from this page.

    Raises:
        TransportFault: If the page could not be fetched.
        SchemaViolation: If a row does not match the expected layout.
    """
    logger.info("Getting page %s", page)

    html = fetch_page(page)

    stored = 0
    for cells in table_rows(html, page=page):
        row = extract_row(cells, page=page)
        if row.faulted:
            logger.warning("Wrong date at page %s: %r", page, cells[0])
            continue
        insert_record(engine, row.record)
        stored += 1
    return stored


def fetch_all(
    engine: Engine,
    max_page: int = SERVER_MAX_PAGE,
    concurrency: int = CONCURRENCY,
    min_page: int = 1,
) -> dict[str, int]:
    """Process pages ``min_page..max_page`` (inclusive) with at most
    `concurrency` pages in flight.

    All pages are submitted up front; the executor's worker count is the cap.
    Returns only once every page has completed.

    Args:
        engine: Store handle shared by all workers.
        max_page: Last page number to fetch.
        concurrency: Maximum simultaneous workers.
        min_page: First page number to fetch.

    Returns:
        dict[str, int]: {"pages": <pages processed>, "stored": <rows written>}

    Raises:
        IngestError: The first run-fatal fault raised by a worker. Remaining
            queued pages are cancelled before it propagates.
    """
    pages = stored = 0

    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        futures = {
            executor.submit(process_page, engine, page): page
            for page in range(min_page, max_page + 1)
        }
        try:
            for future in as_completed(futures):
                stored += future.result()
                pages += 1
        except BaseException:
            # Stop dispatching; in-flight pages finish when the pool shuts down.
            executor.shutdown(wait=True, cancel_futures=True)
            raise

    return {"pages": pages, "stored": stored}


def run(
    output: str,
    force_fetch: bool = False,
    sort_by: str = "desc",
    min_year: int = 2017,
    min_month: int = 1,
    max_year: int = 2020,
    max_month: int = 12,
    server_max_page: int = SERVER_MAX_PAGE,
    concurrency: int = CONCURRENCY,
    db_path: str = DB_PATH,
) -> dict[str, int]:
    """Execute one pass: (re)build the store if needed, then export the report.

    Args:
        output: Report path.
        force_fetch: Re-fetch even if the store already exists.
        sort_by: Year/month ordering of the report, "asc" or "desc".
        min_year, min_month, max_year, max_month: Inclusive report bounds.
        server_max_page: Last report page to fetch.
        concurrency: Maximum pages fetched at the same time.
        db_path: SQLite store path.

    Returns:
        dict[str, int]: {"pages": ..., "stored": ..., "exported": ...}. The
        fetch counters are 0 when the existing store was reused.
    """
    stats = {"pages": 0, "stored": 0}

    if force_fetch or not store_exists(db_path):
        reset_store(db_path)
        engine = open_store(db_path)
        stats = fetch_all(engine, max_page=server_max_page, concurrency=concurrency)
    else:
        engine = open_store(db_path)

    stats["exported"] = export_report(
        engine,
        output,
        min_year=min_year,
        min_month=min_month,
        max_year=max_year,
        max_month=max_month,
        direction=sort_by,
    )
    return stats


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape the PGCB generation report and export hourly load.")
    parser.add_argument("-ff", "--force-fetch", action="store_true", help="force fetch data")
    parser.add_argument(
        "-sb", "--sort-by", choices=["asc", "desc"], default="desc", help="year sort by, values: asc or desc"
    )
    parser.add_argument("-o", "--output", help="(required) output file")
    parser.add_argument("-min-y", "--min-year", type=int, default=2017, help="min year")
    parser.add_argument("-min-m", "--min-month", type=int, default=1, help="min month")
    parser.add_argument("-max-y", "--max-year", type=int, default=2020, help="max year")
    parser.add_argument("-max-m", "--max-month", type=int, default=12, help="max month")
    parser.add_argument(
        "-smp", "--server-max-page", type=int, default=SERVER_MAX_PAGE, help="server's max page"
    )
    parser.add_argument("-c", "--concurrency", type=positive_int, default=CONCURRENCY, help="pages fetched at once")
    parser.add_argument("--db-path", default=DB_PATH, help="SQLite store path")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None):
    """CLI entry point for running the scrape and export.

    Args:
        argv: Optional list of CLI arguments (useful for testing).

    Returns:
        int: Exit code (0 on success, 1 on a missing output path or a
        run-fatal fault).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.output:
        parser.print_help(sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stdout,
    )

    try:
        stats = run(
            args.output,
            force_fetch=args.force_fetch,
            sort_by=args.sort_by,
            min_year=args.min_year,
            min_month=args.min_month,
            max_year=args.max_year,
            max_month=args.max_month,
            server_max_page=args.server_max_page,
            concurrency=args.concurrency,
            db_path=args.db_path,
        )
    except IngestError as e:
        logger.error("Run aborted: %s", e)
        return 1

    print(f"Done. Stats: {stats}")
    return 0


if __name__ == "__main__":
    # Convert the `main()` return value into a process exit status.
    raise SystemExit(main())
