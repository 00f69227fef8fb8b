"""
pgcb/client.py

A minimal HTTP client for the PGCB (Power Grid Company of Bangladesh) daily
generation report, which is served as one HTML page per page number.

Responsibilities
---------------
- Map a page number to its report URL.
- Perform a single HTTP GET per page with a custom User-Agent.

Environment Variables
---------------------
PGCB_BASE_URL
    URL prefix the page number is appended to. Defaults to
    "https://web.pgcb.gov.bd/view_generations_bn?page=".

Notes
-----
- No retry: a failed page raises `TransportFault` and the whole run is
  aborted.
- The raw body bytes are returned so that the HTML parser can pick up the
  document's declared charset (the report is Bengali text).
"""

from __future__ import annotations

import logging
import os

import requests
from dotenv import find_dotenv, load_dotenv

from .errors import TransportFault

# Read `.env` from the working directory before any setting below is resolved.
load_dotenv(find_dotenv(usecwd=True))

BASE_URL = os.getenv("PGCB_BASE_URL", "https://web.pgcb.gov.bd/view_generations_bn?page=")

# HTTP client settings. No timeout: a slow page is waited on, not abandoned.
HTTP_TIMEOUT = None
USER_AGENT = "pgcb-generation-report/0.1 (+https://github.com/)"

logger = logging.getLogger(__name__)


def page_url(page: int) -> str:
    """Return the report URL for `page` (1-based)."""
    return f"{BASE_URL}{page}"


def fetch_page(page: int) -> bytes:
    """Fetch one report page.

    Args:
        page: Page number; mapped to a URL by :func:`page_url`.

    Returns:
        The response body as bytes.

    Raises:
        TransportFault: On any `requests` error, including non-2xx statuses.
            The original exception is chained.
    """
    url = page_url(page)
    headers = {"User-Agent": USER_AGENT}

    try:
        r = requests.get(url, headers=headers, timeout=HTTP_TIMEOUT)
        r.raise_for_status()
    except requests.RequestException as e:
        logger.error("Error fetching page %s: %s", page, e)
        raise TransportFault(page, url) from e

    return r.content
