"""
pgcb/export.py

Report exporter: turns stored records into a ``Date,Time,Load`` CSV.

Only on-the-hour readings are exported; half-hour readings (times containing
":30") are skipped. The report's midnight reading is published as "24:00" and
is written as "00:00".
"""

from __future__ import annotations

import logging

import pandas as pd
from sqlalchemy.engine import Engine

from .load import count_records, query_records

REPORT_COLUMNS = ["Date", "Time", "Load"]
HALF_HOUR_MARK = ":30"

logger = logging.getLogger(__name__)


def format_date(year: int, month: int, day: int) -> str:
    """``(2020, 8, 1)`` -> ``"2020/08/01"``."""
    return f"{year:02d}/{month:02d}/{day:02d}"


def format_time(t: str) -> str:
    """``"12:00:00"`` -> ``"12:00"``; ``"24:00:00"`` -> ``"00:00"``."""
    return t[:5].replace("24:00", "00:00")


def export_report(
    engine: Engine,
    output: str,
    min_year: int = 2017,
    min_month: int = 1,
    max_year: int = 2020,
    max_month: int = 12,
    direction: str = "desc",
) -> int:
    """Write the filtered, sorted report to `output`.

    Args:
        engine: Store handle.
        output: Destination path; overwritten.
        min_year, max_year: Inclusive year bounds.
        min_month, max_month: Inclusive month bounds (applied independently of
            the year bounds).
        direction: Year/month sort direction, "asc" or "desc".

    Returns:
        int: Number of data lines written (header excluded).
    """
    logger.info("Generating csv")
    logger.info("Total rows %s", count_records(engine))

    records = query_records(engine, min_year, max_year, min_month, max_month, direction)

    lines = []
    for rec in records:
        if HALF_HOUR_MARK in rec["time"]:
            continue
        lines.append(
            (format_date(rec["year"], rec["month"], rec["day"]), format_time(rec["time"]), rec["load"])
        )

    df = pd.DataFrame(lines, columns=REPORT_COLUMNS)
    df.to_csv(output, index=False, encoding="utf-8", lineterminator="\n")
    return len(df)
