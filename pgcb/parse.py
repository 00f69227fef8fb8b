"""
pgcb/parse.py

HTML layer: pull the data table's body rows out of a report page.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


def table_rows(html: bytes | str, page=None) -> list[list[str]]:
    """Return the stripped cell texts of every ``<tbody>`` row, in document order.

    Only the first ``<table>`` on the page is considered. A page without a table
    (or without a body) yields no rows.
    """
    soup = BeautifulSoup(html, "lxml")

    table = soup.find("table")
    tbody = table.find("tbody") if table is not None else None
    if tbody is None:
        logger.warning("No data table found on page %s", page)
        return []

    rows = []
    for tr in tbody.find_all("tr"):
        rows.append([td.get_text().strip() for td in tr.find_all("td")])
    return rows
