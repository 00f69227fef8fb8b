"""
pgcb/errors.py

Exception taxonomy for the scrape/store/export pipeline.

Conventions
-----------
- `MalformedDate` is a per-row fault: the row is dropped and the run goes on.
- `SchemaViolation` and `TransportFault` are run-fatal: the orchestrator stops
  dispatching pages and re-raises them to the CLI, which exits non-zero without
  writing a report.
"""

from __future__ import annotations


class IngestError(Exception):
    """Base class for every pipeline fault."""


class MalformedDate(IngestError):
    """A date cell did not match the fixed-width ``DD-MM-YYYY`` layout.

    The parts that could be extracted are kept on the exception so callers can
    still build a complete (but discarded) record.
    """

    def __init__(self, text: str, year: int = 0, month: int = 0, day: int = 0):
        super().__init__(f"Wrong date {text!r}")
        self.text = text
        self.year = year
        self.month = month
        self.day = day


class SchemaViolation(IngestError):
    """A page row diverged from the expected 14-column numeric layout."""

    def __init__(self, message: str, column: int | None = None, value=None, page=None):
        super().__init__(message)
        self.column = column
        self.value = value
        self.page = page


class TransportFault(IngestError):
    """Fetching a report page failed at the HTTP/network level."""

    def __init__(self, page, url: str):
        super().__init__(f"Error fetching page {page} ({url})")
        self.page = page
        self.url = url
