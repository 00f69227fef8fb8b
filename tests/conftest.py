"""Pytest configuration shared across the test suite."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so ``import pgcb`` works when running
# the test suite without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from pgcb import load  # noqa: E402


def bn_row(date="০১-০১-২০১৮", time="০০:০০:০০", load_mw="৭৫০০", comment=""):
    """Build a 14-cell report row as published (Bengali digits)."""
    return [date, time, "৮০০০", load_mw, "১০০", "০", "৫০০০", "১০০০", "৫০০", "২০০", "৫০", "৯০০", "১৬০", comment]


def make_page(rows) -> bytes:
    """Render rows as a report page with a single data table."""
    body = "".join("<tr>" + "".join(f"<td> {c} </td>" for c in row) + "</tr>" for row in rows)
    html = (
        '<html><head><meta charset="utf-8"></head><body>'
        "<table><thead><tr><th>তারিখ</th></tr></thead>"
        f"<tbody>{body}</tbody></table></body></html>"
    )
    return html.encode("utf-8")


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "db.sqlite")


@pytest.fixture
def store(db_path):
    """A fresh SQLite store with the schema created."""
    engine = load.open_store(db_path)
    yield engine
    engine.dispose()
