"""Row sources: where raw sheet grids come from."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Protocol, Sequence

from leaguehub.cache import RowCache, Rows
from leaguehub.config import SheetLayout
from leaguehub.ingest import load_sheet_csv


logger = logging.getLogger(__name__)

DEFAULT_CACHE_TAG = "sheets"


class RowSource(Protocol):
    def fetch(self, layout: SheetLayout, *, playoffs: bool = False) -> Rows:
        ...


class CsvDirectorySource:
    """Reads one CSV export per sheet, named ``<sheet title>.csv``.

    The export is expected to contain the whole sheet, so rows above the
    layout's ``start_row`` (titles and headers) are skipped.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, layout: SheetLayout, *, playoffs: bool = False) -> Path:
        return self.directory / f"{layout.title_for(playoffs)}.csv"

    def fetch(self, layout: SheetLayout, *, playoffs: bool = False) -> Rows:
        path = self.path_for(layout, playoffs=playoffs)
        if not path.exists():
            raise FileNotFoundError(f"No export for sheet {layout.title_for(playoffs)!r} at {path}")
        rows = load_sheet_csv(path, skip_rows=layout.start_row - 1)
        logger.debug("Loaded %d rows from %s", len(rows), path)
        return [list(row) for row in rows]


class StaticRowSource:
    """Serves grids held in memory, keyed by sheet title."""

    def __init__(self, sheets: Mapping[str, Sequence[Sequence[object]]]):
        self._sheets = {title: [list(row) for row in rows] for title, rows in sheets.items()}

    def fetch(self, layout: SheetLayout, *, playoffs: bool = False) -> Rows:
        title = layout.title_for(playoffs)
        if title not in self._sheets:
            raise KeyError(f"No rows loaded for sheet {title!r}")
        return [list(row) for row in self._sheets[title]]


class CachedRowSource:
    """Wraps another source and memoizes fetches by A1 range.

    Every entry is tagged with ``tag`` and the layout kind so a single tag can
    evict everything at once.
    """

    def __init__(self, inner: RowSource, cache: RowCache, *, tag: str = DEFAULT_CACHE_TAG):
        self.inner = inner
        self.cache = cache
        self.tag = tag

    def fetch(self, layout: SheetLayout, *, playoffs: bool = False) -> Rows:
        key = layout.a1_range(playoffs)
        cached: Optional[Rows] = self.cache.get(key)
        if cached is not None:
            return cached
        rows = self.inner.fetch(layout, playoffs=playoffs)
        self.cache.put(key, rows, tags=(self.tag, layout.kind))
        return rows

    def invalidate(self, tag: Optional[str] = None) -> int:
        return self.cache.invalidate(tag or self.tag)


__all__ = [
    "CachedRowSource",
    "CsvDirectorySource",
    "DEFAULT_CACHE_TAG",
    "RowSource",
    "StaticRowSource",
]
