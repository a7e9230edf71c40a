"""In-memory match store.

Implements the :class:`~matchstats.adapters.base.MatchStore` protocol
over an immutable tuple of matches. Writes replace the tuple as a whole,
so a query that has read the snapshot keeps seeing it even while other
threads add matches.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from matchstats.adapters.records import load_matches
from matchstats.filtering.dates import filter_by_date
from matchstats.filtering.pagination import paginate_matches

if TYPE_CHECKING:
    import datetime as dt
    from collections.abc import Iterable
    from pathlib import Path

    from matchstats.adapters.schemas import Match, MatchPage

logger = logging.getLogger(__name__)


class InMemoryMatchStore:
    """Match store backed by an immutable in-memory snapshot.

    Attributes:
        _matches: Current snapshot of stored matches.
        _write_lock: Serializes writers; readers never block.
    """

    __slots__ = ("_matches", "_write_lock")

    def __init__(self, matches: Iterable[Match] = ()) -> None:
        self._matches: tuple[Match, ...] = tuple(matches)
        self._write_lock = threading.Lock()

    @classmethod
    def from_json(cls, path: Path, on_malformed: str = "skip") -> InMemoryMatchStore:
        """Build a store from a JSON array of match documents.

        Raises:
            AdapterError: If the file cannot be read.
            MalformedRecordError: On a malformed record when
                *on_malformed* is ``"raise"``.
        """
        return cls(load_matches(path, on_malformed=on_malformed))

    def __len__(self) -> int:
        return len(self._matches)

    def snapshot(self) -> tuple[Match, ...]:
        """Return the current immutable snapshot."""
        return self._matches

    def add(self, match: Match) -> None:
        self.extend((match,))

    def extend(self, matches: Iterable[Match]) -> None:
        """Append *matches*, publishing a new snapshot atomically."""
        new = tuple(matches)
        with self._write_lock:
            self._matches = self._matches + new
        logger.debug("Stored %d new matches (%d total)", len(new), len(self._matches))

    def find_matches(
        self,
        start: dt.date | None = None,
        end: dt.date | None = None,
    ) -> list[Match]:
        """Return stored matches played within ``[start, end]``."""
        return filter_by_date(self._matches, start, end)

    def find_matches_page(
        self,
        team: str | None = None,
        location: str | None = None,
        page: int = 1,
        limit: int = 10,
        start: object = None,
        end: object = None,
    ) -> MatchPage:
        """Return one page of stored matches for a team and/or location."""
        return paginate_matches(
            self._matches,
            team=team,
            location=location,
            page=page,
            limit=limit,
            start=start,
            end=end,
        )
