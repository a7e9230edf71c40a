"""football-data.org feed adapter for the match statistics engine.

Implements the :class:`~matchstats.adapters.base.FeedAdapter` protocol by
fetching competition matches from the football-data.org v4 API with
``requests``, mapping each feed match onto the stored document shape,
and validating it through :func:`~matchstats.adapters.records.parse_match`.
Raw responses can be cached to disk.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

import orjson
import requests

from matchstats.adapters.cache import FeedCache
from matchstats.adapters.records import parse_match, parse_matches
from matchstats.config import FeedConfig
from matchstats.exceptions import AdapterError

if TYPE_CHECKING:
    from pathlib import Path

    from matchstats.adapters.schemas import Match

logger = logging.getLogger(__name__)

AUTH_HEADER: str = "X-Auth-Token"


def _name(value: Any) -> str | None:
    """Return ``value["name"]`` for a nested feed object, else ``None``."""
    if isinstance(value, dict):
        name = value.get("name")
        return str(name) if name else None
    return None


def _full_time(score: dict[str, Any]) -> tuple[Any, Any]:
    """Extract the full-time score, accepting v4 and legacy v2 keys."""
    full_time = score.get("fullTime") or {}
    home = full_time.get("home", full_time.get("homeTeam"))
    away = full_time.get("away", full_time.get("awayTeam"))
    return home, away


def _goal_events(raw: dict[str, Any]) -> list[dict[str, Any]]:
    """Build stored event mappings from the feed's goal information.

    ``goals`` entries (match detail payloads) yield a goal event plus an
    assist event when the feed names an assisting player. Legacy
    ``scorers`` entries yield goal events only.
    """
    events: list[dict[str, Any]] = []
    for goal in raw.get("goals") or ():
        team = _name(goal.get("team"))
        minute = goal.get("minute")
        events.append(
            {
                "type": "goal",
                "player": _name(goal.get("scorer")),
                "team": team,
                "minute": minute,
            }
        )
        assist = _name(goal.get("assist"))
        if assist:
            events.append(
                {"type": "assist", "player": assist, "team": team, "minute": minute}
            )

    for scorer in raw.get("scorers") or ():
        events.append(
            {
                "type": "goal",
                "player": _name(scorer.get("player")),
                "team": _name(scorer.get("team")),
                "minute": None,
            }
        )
    return events


def feed_match_to_record(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Map one feed match onto the stored document shape.

    Args:
        raw: A single element of the feed's ``matches`` array.

    Returns:
        The stored-document mapping, or ``None`` if the match has no
        final score yet.
    """
    home_score, away_score = _full_time(raw.get("score") or {})
    if home_score is None or away_score is None:
        return None

    season = raw.get("season") or {}
    return {
        "id": raw.get("id"),
        "date": raw.get("utcDate"),
        "competition": _name(raw.get("competition")),
        "season": season.get("startDate"),
        "teams": {
            "home": _name(raw.get("homeTeam")),
            "away": _name(raw.get("awayTeam")),
        },
        "score": {"home": home_score, "away": away_score},
        "location": raw.get("venue"),
        "referees": [r for r in (_name(ref) for ref in raw.get("referees") or ()) if r],
        "events": _goal_events(raw),
    }


class FootballDataAdapter:
    """Adapter for importing finished matches from football-data.org.

    Satisfies the :class:`~matchstats.adapters.base.FeedAdapter` protocol.

    Attributes:
        _config: Feed configuration (URL, token, timeout).
        _cache: Optional disk cache for raw responses.
        _session: HTTP session used for requests.
        _on_malformed: Policy applied to feed matches that fail
            validation (``"raise"`` or ``"skip"``).
    """

    __slots__ = ("_cache", "_config", "_on_malformed", "_session")

    def __init__(
        self,
        config: FeedConfig | None = None,
        cache_dir: Path | None = None,
        session: requests.Session | None = None,
        on_malformed: str = "skip",
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Feed configuration; defaults to :class:`FeedConfig`.
            cache_dir: Directory for caching raw responses, or ``None``
                to always hit the API.
            session: HTTP session to reuse; a new one is created if
                omitted.
            on_malformed: Malformed-record policy for feed matches.
        """
        self._config = config or FeedConfig()
        self._cache = FeedCache(cache_dir) if cache_dir is not None else None
        self._session = session or requests.Session()
        self._on_malformed = on_malformed

    def api_key(self) -> str:
        """Return the configured API token.

        Raises:
            AdapterError: If no token is configured or set in the
                environment.
        """
        key = self._config.api_key or os.environ.get(self._config.api_key_env)
        if not key:
            msg = (
                f"No API key configured; set {self._config.api_key_env} "
                f"or FeedConfig.api_key"
            )
            raise AdapterError(msg)
        return key

    def fetch_raw(self, competition_id: int, season: int) -> dict[str, Any]:
        """Return the raw response body for a competition season.

        Checks the disk cache first. On a cache miss the payload is
        fetched from the API and cached for future calls. An unreadable
        cache file is treated as a miss and overwritten.

        Raises:
            AdapterError: On a network failure, a non-200 status, or a
                payload without a ``matches`` list.
        """
        if self._cache is not None:
            try:
                cached = self._cache.get(competition_id, season)
            except (OSError, orjson.JSONDecodeError) as exc:
                logger.warning(
                    "Ignoring unreadable cache file %s: %s",
                    self._cache.cache_path(competition_id, season),
                    exc,
                )
                cached = None
            if cached is not None:
                return cached

        url = f"{self._config.base_url}/competitions/{competition_id}/matches"
        try:
            response = self._session.get(
                url,
                headers={AUTH_HEADER: self.api_key()},
                params={"season": season},
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as exc:
            msg = f"Error fetching match data: {exc}"
            raise AdapterError(msg) from exc

        if response.status_code != 200:
            msg = (
                f"Feed request failed with status {response.status_code}: "
                f"{response.text[:200]}"
            )
            raise AdapterError(msg)

        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"Feed returned invalid JSON: {exc}"
            raise AdapterError(msg) from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("matches"), list):
            msg = "No match data found in feed response"
            raise AdapterError(msg)

        if self._cache is not None:
            self._cache.put(competition_id, season, payload)
        return payload

    def normalize_match(self, raw: dict[str, Any]) -> Match | None:
        """Convert one feed match, or return ``None`` if it is unplayed.

        Raises:
            MalformedRecordError: If a required field is missing.
        """
        record = feed_match_to_record(raw)
        if record is None:
            logger.debug("Skipping feed match %s without a final score", raw.get("id"))
            return None
        return parse_match(record)

    def fetch_matches(
        self,
        competition_id: int | None = None,
        season: int | None = None,
    ) -> list[Match]:
        """Fetch and normalize every finished match of a competition season.

        Args:
            competition_id: Feed competition identifier; defaults to the
                configured competition.
            season: Season start year; defaults to the configured season.

        Returns:
            Normalized matches sorted by date.
        """
        competition_id = competition_id or self._config.competition_id
        season = season or self._config.season

        payload = self.fetch_raw(competition_id, season)
        records = [
            record
            for record in (feed_match_to_record(raw) for raw in payload["matches"])
            if record is not None
        ]
        matches = parse_matches(records, on_malformed=self._on_malformed)
        matches.sort(key=lambda m: m.date)
        logger.info(
            "Imported %d finished matches for competition %s season %s",
            len(matches),
            competition_id,
            season,
        )
        return matches
