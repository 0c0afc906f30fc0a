# fetch_years_data.py — loads the per-county uninsured dataset once per session
# What this file does:
# - Reads the dataset location from .env (YEARS_DATA_URL), local path or http(s) URL
# - Provides a robust HTTP session with retries for remote sources
# - Validates the {"Years": [...]} document shape
# - Wraps the rows in a read-only RecordStore (distinct counties, year tokens)

from __future__ import annotations
import json
import os
import re
from dataclasses import dataclass
from pathlib import Path

import requests
from dotenv import load_dotenv
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from dashboard.errors import LoadFailure
from dashboard.log import get_logger

log = get_logger(__name__)

# ------------------ CONFIG ------------------
load_dotenv()  # read .env if present

YEARS_DATA_URL = os.getenv("YEARS_DATA_URL", "assets/years.json")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))

# Column convention: "Percentage (2014)" etc.
CATEGORY_FIELD = "COUNTY"
VALUE_MARKER = "Percentage"
YEAR_TOKEN_RE = re.compile(r"\((\d{4})\)")

# ------------------ ROBUST HTTP SESSION ------------------
def _make_session() -> requests.Session:
    """
    Create a requests.Session with retry/backoff for remote dataset URLs.
    Retries are transport-level only; a final failure surfaces as LoadFailure.
    """
    sess = requests.Session()

    retry = Retry(
        total=3,
        connect=3,
        read=3,
        backoff_factor=0.6,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry)
    sess.mount("https://", adapter)
    sess.mount("http://", adapter)
    sess.headers.update({"User-Agent": "VA-Uninsured-Dashboard/1.0"})
    return sess

SESSION = _make_session()

# ------------------ RECORD STORE ------------------
@dataclass(frozen=True)
class RecordStore:
    """Canonical dataset for a session. Filtering always produces new lists."""

    records: tuple[dict, ...]

    def __len__(self) -> int:
        return len(self.records)

    def counties(self) -> list[str]:
        """Distinct COUNTY values, first-seen order (county select options)."""
        return list(dict.fromkeys(r[CATEGORY_FIELD] for r in self.records))

    def year_tokens(self) -> list[str]:
        """Sorted 4-digit tokens of the year-tagged columns (year select options)."""
        if not self.records:
            return []
        tokens = set()
        for key in self.records[0]:
            if VALUE_MARKER not in key:
                continue
            m = YEAR_TOKEN_RE.search(key)
            if m:
                tokens.add(m.group(1))
        return sorted(tokens)

# ------------------ LOADING ------------------
def _is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))

def _read_document(source: str) -> object:
    """Fetch and decode the JSON document from a URL or a local path."""
    if _is_remote(source):
        r = SESSION.get(source, timeout=HTTP_TIMEOUT)
        r.raise_for_status()
        return r.json()
    with Path(source).open(encoding="utf-8") as fh:
        return json.load(fh)

def load_records(source: str = YEARS_DATA_URL) -> list[dict]:
    """
    Return the rows under the document's top-level "Years" array.
    Any network, I/O, decoding or shape problem raises LoadFailure.
    """
    try:
        doc = _read_document(source)
    except (requests.RequestException, OSError, ValueError) as exc:
        log.error("dataset_load_failed", source=source, error=repr(exc))
        raise LoadFailure(f"could not load dataset from {source}: {exc}") from exc

    rows = doc.get("Years") if isinstance(doc, dict) else None
    if not isinstance(rows, list):
        raise LoadFailure(f"{source}: expected a top-level 'Years' array")

    for i, row in enumerate(rows):
        if not isinstance(row, dict) or CATEGORY_FIELD not in row:
            raise LoadFailure(f"{source}: record {i} has no {CATEGORY_FIELD!r} field")

    log.info("dataset_loaded", source=source, records=len(rows))
    return rows

def load_store(source: str = YEARS_DATA_URL) -> RecordStore:
    """Load the dataset and freeze it into a RecordStore."""
    return RecordStore(records=tuple(load_records(source)))
