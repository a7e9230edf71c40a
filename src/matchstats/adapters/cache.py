"""Disk-based cache for raw feed responses.

Stores one JSON file per ``(competition, season)`` request. Writes are
atomic (write to a temporary file, then rename) so an interrupted import
never leaves a truncated payload behind.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any

import orjson

logger = logging.getLogger(__name__)


class FeedCache:
    """Disk-based cache for raw feed payloads.

    Attributes:
        _cache_dir: Root directory where cache files are stored.
    """

    __slots__ = ("_cache_dir",)

    def __init__(self, cache_dir: Path) -> None:
        """Initialize the cache and ensure the directory exists.

        Args:
            cache_dir: Directory for storing cached JSON files.
        """
        self._cache_dir = cache_dir
        self._cache_dir.mkdir(parents=True, exist_ok=True)

    def cache_path(self, competition_id: int, season: int) -> Path:
        """Return the file path for a competition season."""
        return self._cache_dir / f"matches_{competition_id}_{season}.json"

    def exists(self, competition_id: int, season: int) -> bool:
        return self.cache_path(competition_id, season).is_file()

    def get(self, competition_id: int, season: int) -> dict[str, Any] | None:
        """Load a cached payload.

        Returns:
            The cached response body, or ``None`` on a cache miss.
        """
        path = self.cache_path(competition_id, season)
        if not path.is_file():
            logger.debug("Cache miss for %s/%s", competition_id, season)
            return None

        logger.debug("Cache hit for %s/%s", competition_id, season)
        result: dict[str, Any] = orjson.loads(path.read_bytes())
        return result

    def put(self, competition_id: int, season: int, data: dict[str, Any]) -> None:
        """Save a payload using an atomic write.

        Args:
            competition_id: Feed competition identifier.
            season: Season start year.
            data: Raw response body.
        """
        path = self.cache_path(competition_id, season)
        fd, tmp_path_str = tempfile.mkstemp(dir=self._cache_dir, suffix=".tmp")
        tmp_path = Path(tmp_path_str)
        try:
            with open(fd, "wb") as f:
                f.write(orjson.dumps(data))
            tmp_path.replace(path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Cached feed payload for %s/%s at %s", competition_id, season, path)
