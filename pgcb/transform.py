"""
pgcb/transform.py

Text-level normalisation for scraped PGCB report cells.

Responsibilities
----------------
- `normalize_digits`: map Bengali digit glyphs to ASCII digits.
- `parse_date`: split a fixed-width ``DD-MM-YYYY`` date into integers.
- `COLUMNS`: the ordered column contract of the report table, mapping each
  cell index to a record field and the way that cell is interpreted.
"""

from __future__ import annotations

from typing import NamedTuple

from .errors import MalformedDate

# Bengali digits ০..৯ (U+09E6..U+09EF) -> 0..9.
BENGALI_DIGITS = "০১২৩৪৫৬৭৮৯"
_DIGIT_TABLE = str.maketrans(BENGALI_DIGITS, "0123456789")

# Column interpretations.
DATE = "date"
TIME = "time"
MEASUREMENT = "measurement"
COMMENT = "comment"


class ColumnSpec(NamedTuple):
    index: int
    field: str
    kind: str


# Report table layout, left to right.
COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec(0, "date", DATE),
    ColumnSpec(1, "time", TIME),
    # Totals (MW)
    ColumnSpec(2, "produced", MEASUREMENT),
    ColumnSpec(3, "load", MEASUREMENT),
    ColumnSpec(4, "loss", MEASUREMENT),
    ColumnSpec(5, "load_shed", MEASUREMENT),
    # Generation by fuel (MW)
    ColumnSpec(6, "gas", MEASUREMENT),
    ColumnSpec(7, "liquid_fuel", MEASUREMENT),
    ColumnSpec(8, "coal", MEASUREMENT),
    ColumnSpec(9, "hydro", MEASUREMENT),
    ColumnSpec(10, "solar", MEASUREMENT),
    # Cross-border imports (MW)
    ColumnSpec(11, "bheramara", MEASUREMENT),
    ColumnSpec(12, "tripura", MEASUREMENT),
    ColumnSpec(13, "comment", COMMENT),
)

MEASUREMENT_FIELDS = tuple(c.field for c in COLUMNS if c.kind == MEASUREMENT)


def normalize_digits(text: str) -> str:
    """Replace Bengali digits with ASCII digits; everything else is untouched.

    >>> normalize_digits("১৮-০৮-২০২০")
    '18-08-2020'
    """
    return text.translate(_DIGIT_TABLE)


def _to_int(s: str) -> int | None:
    """Strict integer parse: optional sign then ASCII digits, else None."""
    digits = s[1:] if s[:1] in ("+", "-") else s
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    return int(s)


def is_number(text: str) -> bool:
    """Whether `text` is a plain ASCII float literal.

    Stricter than `float()`: non-ASCII digits, digit-group underscores and
    surrounding whitespace are rejected.
    """
    if not text.isascii() or "_" in text or text != text.strip():
        return False
    try:
        float(text)
    except ValueError:
        return False
    return True


def parse_date(text: str) -> tuple[int, int, int]:
    """Parse a ``DD-MM-YYYY`` string into ``(year, month, day)``.

    Fields are taken from the fixed slices ``[6:10]``, ``[3:5]`` and ``[0:2]``;
    the separators are not checked.

    Raises:
        MalformedDate: If the input is not exactly 10 characters (all fields
            zero), or if any field is not an integer. In the latter case the
            fields that did parse are carried on the exception.
    """
    if len(text) != 10:
        raise MalformedDate(text)

    year = _to_int(text[6:10])
    month = _to_int(text[3:5])
    day = _to_int(text[0:2])

    if year is None or month is None or day is None:
        raise MalformedDate(text, year or 0, month or 0, day or 0)
    return year, month, day
