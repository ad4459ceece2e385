"""Term/definition sources: local CSV files and an HTTP catalog.

CSV files use one entry per line, ``term;definition``. The remote layout
is a static site exposing ``bases.json`` (a list of ``{"category": ...,
"subcategories": [...]}`` objects) and one CSV per subcategory under
``csv/<category>/<subcategory>.csv``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import requests

from ..core.exceptions import WordSourceError
from ..core.models import Entry
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

DELIMITER = ";"


@dataclass
class Category:
    category: str
    subcategories: List[str] = field(default_factory=list)


def parse_csv(text: str, delimiter: str = DELIMITER) -> List[Entry]:
    """Parse ``term;definition`` lines, skipping rows missing either side."""

    entries: List[Entry] = []
    for line in text.split("\n"):
        columns = line.split(delimiter)
        term = columns[0].strip() if columns else ""
        definition = columns[1].strip() if len(columns) > 1 else ""
        if term and definition:
            entries.append(Entry(term=term, definition=definition))
    return entries


def load_entries(path: Path | str, delimiter: str = DELIMITER) -> List[Entry]:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise WordSourceError(f"Cannot read word file {source}: {exc}") from exc
    entries = parse_csv(text, delimiter)
    LOGGER.info("Loaded %d entries from %s", len(entries), source)
    return entries


class WordSourceClient:
    """Minimal client for a static catalog of term/definition CSV files."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout_seconds = timeout_seconds
        self._http = session or requests.Session()

    def categories(self) -> List[Category]:
        response = self._get("bases.json")
        try:
            payload = response.json()
        except ValueError as exc:
            raise WordSourceError(f"bases.json is not valid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise WordSourceError("bases.json must contain a list of categories")
        return [self._parse_category(item) for item in payload]

    def entries(self, category: str, sheet: str) -> List[Entry]:
        response = self._get(f"csv/{category}/{sheet}.csv")
        entries = parse_csv(response.text)
        LOGGER.info("Fetched %d entries for %s/%s", len(entries), category, sheet)
        return entries

    def _get(self, path: str) -> requests.Response:
        url = self.base_url + path
        try:
            response = self._http.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise WordSourceError(f"Failed to fetch {url}: {exc}") from exc
        return response

    @staticmethod
    def _parse_category(item: Any) -> Category:
        if not isinstance(item, dict) or "category" not in item:
            raise WordSourceError(f"Malformed category entry: {item!r}")
        subcategories = item.get("subcategories") or []
        return Category(category=str(item["category"]), subcategories=[str(s) for s in subcategories])
