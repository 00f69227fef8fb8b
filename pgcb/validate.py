"""
pgcb/validate.py

Validation and typing layer for scraped report rows.

Responsibilities
----------------
- Define a `GenerationRecord` model that captures one observation:
  * `year`, `month`, `day`: the reading date as integers.
  * `time`: the reading time as text (``HH:MM:SS``).
  * Measurement fields kept as normalised-digit text, exactly as published.
  * `comment`: free text.
- Provide `extract_row` to turn one table row's cell texts into a record,
  driven by the column contract in `pgcb/transform.py`.

Conventions
-----------
- Measurements are validated as floats but stored as text, so the original
  formatting and precision survive.
- Empty date/time/measurement cells become "0" before interpretation.
- A bad date is a row-level fault (`faulted=True`); a non-numeric measurement or
  a wrong cell count is a `SchemaViolation` that must abort the run.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from pydantic import BaseModel

from .errors import MalformedDate, SchemaViolation
from .transform import COLUMNS, COMMENT, DATE, MEASUREMENT, TIME, is_number, normalize_digits, parse_date


class GenerationRecord(BaseModel):
    """One row of the generation report, ready to be persisted.

    The store assigns the identifier, so it is not part of the model.
    """

    year: int = 0
    month: int = 0
    day: int = 0
    time: str = ""

    produced: str = ""
    load: str = ""
    loss: str = ""
    load_shed: str = ""

    gas: str = ""
    liquid_fuel: str = ""
    coal: str = ""
    hydro: str = ""
    solar: str = ""

    bheramara: str = ""
    tripura: str = ""

    comment: str = ""


class ExtractedRow(NamedTuple):
    record: GenerationRecord
    faulted: bool


def extract_row(cells: Sequence[str], page=None) -> ExtractedRow:
    """Interpret one table row according to `COLUMNS`.

    Args:
        cells: Cell texts of the row, in column order.
        page: Page number, only used for diagnostics.

    Returns:
        ExtractedRow: The fully populated record and whether its date was
        malformed. Faulted records must not be persisted.

    Raises:
        SchemaViolation: If the row does not have exactly one cell per column,
            or a measurement cell is not a number after normalisation.
    """
    if len(cells) != len(COLUMNS):
        raise SchemaViolation(
            f"Expected {len(COLUMNS)} cells, got {len(cells)} on page {page}",
            value=list(cells),
            page=page,
        )

    values: dict = {}
    faulted = False

    for col in COLUMNS:
        raw = cells[col.index]

        if col.kind == COMMENT:
            values[col.field] = raw.strip()
            continue

        val = normalize_digits(raw)
        if not val:
            val = "0"

        if col.kind == DATE:
            try:
                year, month, day = parse_date(val)
            except MalformedDate as e:
                faulted = True
                year, month, day = e.year, e.month, e.day
            values.update(year=year, month=month, day=day)
        elif col.kind == TIME:
            values[col.field] = val
        elif col.kind == MEASUREMENT:
            if not is_number(val):
                raise SchemaViolation(
                    f"Non-numeric {col.field!r} at column {col.index} on page {page}: {val!r}",
                    column=col.index,
                    value=val,
                    page=page,
                )
            values[col.field] = val

    return ExtractedRow(GenerationRecord(**values), faulted)
