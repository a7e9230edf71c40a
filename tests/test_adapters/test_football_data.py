"""Tests for the football-data.org feed adapter.

Validates feed-to-record mapping (v4 and legacy score keys, goals,
assists and scorers), skipping of unplayed matches, API key lookup,
HTTP error handling, and cache-first loading for
:class:`matchstats.adapters.football_data.FootballDataAdapter`.

All tests use a mocked ``requests.Session`` to avoid real API calls.
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest
import requests

from matchstats.adapters.base import FeedAdapter
from matchstats.adapters.cache import FeedCache
from matchstats.adapters.football_data import (
    AUTH_HEADER,
    FootballDataAdapter,
    feed_match_to_record,
)
from matchstats.adapters.schemas import EventCategory
from matchstats.config import FeedConfig
from matchstats.exceptions import AdapterError, MalformedRecordError

if TYPE_CHECKING:
    from pathlib import Path


# ------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------


def _feed_match(match_id: int = 1, **overrides: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "id": match_id,
        "utcDate": "2024-09-17T19:00:00Z",
        "status": "FINISHED",
        "competition": {"id": 2001, "name": "UEFA Champions League"},
        "season": {"id": 2292, "startDate": "2024-09-17"},
        "homeTeam": {"id": 5, "name": "FC Bayern München"},
        "awayTeam": {"id": 1877, "name": "GNK Dinamo Zagreb"},
        "score": {"winner": "HOME_TEAM", "fullTime": {"home": 9, "away": 2}},
        "venue": "Allianz Arena",
        "referees": [{"id": 1, "name": "Chris Kavanagh"}],
        "goals": [
            {
                "minute": 19,
                "team": {"name": "FC Bayern München"},
                "scorer": {"name": "Harry Kane"},
                "assist": {"name": "Jamal Musiala"},
            },
            {
                "minute": 48,
                "team": {"name": "GNK Dinamo Zagreb"},
                "scorer": {"name": "Bruno Petković"},
                "assist": None,
            },
        ],
    }
    raw.update(overrides)
    return raw


def _response(status: int = 200, payload: Any = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    response.text = "error body"
    return response


@pytest.fixture()
def session() -> MagicMock:
    mock = MagicMock(spec=requests.Session)
    mock.get.return_value = _response(
        payload={
            "matches": [
                _feed_match(2, utcDate="2024-10-01T19:00:00Z"),
                _feed_match(1),
                _feed_match(
                    3,
                    status="SCHEDULED",
                    score={"fullTime": {"home": None, "away": None}},
                ),
            ]
        }
    )
    return mock


@pytest.fixture()
def config() -> FeedConfig:
    return FeedConfig(api_key="test-token")


# ------------------------------------------------------------------
# Mapping
# ------------------------------------------------------------------


class TestFeedMapping:
    def test_maps_core_fields(self) -> None:
        record = feed_match_to_record(_feed_match())
        assert record is not None
        assert record["id"] == 1
        assert record["competition"] == "UEFA Champions League"
        assert record["season"] == "2024-09-17"
        assert record["teams"] == {
            "home": "FC Bayern München",
            "away": "GNK Dinamo Zagreb",
        }
        assert record["score"] == {"home": 9, "away": 2}
        assert record["location"] == "Allianz Arena"
        assert record["referees"] == ["Chris Kavanagh"]

    def test_goals_yield_goal_and_assist_events(self) -> None:
        record = feed_match_to_record(_feed_match())
        assert record is not None
        assert [(e["type"], e["player"]) for e in record["events"]] == [
            ("goal", "Harry Kane"),
            ("assist", "Jamal Musiala"),
            ("goal", "Bruno Petković"),
        ]

    def test_legacy_score_keys_and_scorers(self) -> None:
        raw = _feed_match(
            score={"fullTime": {"homeTeam": 1, "awayTeam": 0}},
            goals=None,
            scorers=[{"player": {"name": "Harry Kane"}, "team": {"name": "FC Bayern München"}}],
        )
        record = feed_match_to_record(raw)
        assert record is not None
        assert record["score"] == {"home": 1, "away": 0}
        assert record["events"] == [
            {"type": "goal", "player": "Harry Kane", "team": "FC Bayern München", "minute": None}
        ]

    def test_unplayed_match_returns_none(self) -> None:
        raw = _feed_match(score={"fullTime": {"home": None, "away": None}})
        assert feed_match_to_record(raw) is None


class TestNormalizeMatch:
    def test_normalize(self, config: FeedConfig) -> None:
        adapter = FootballDataAdapter(config=config, session=MagicMock())
        match = adapter.normalize_match(_feed_match())
        assert match is not None
        assert match.match_id == "1"
        assert match.date == dt.date(2024, 9, 17)
        assert match.events[1].category is EventCategory.ASSIST

    def test_missing_team_is_malformed(self, config: FeedConfig) -> None:
        adapter = FootballDataAdapter(config=config, session=MagicMock())
        with pytest.raises(MalformedRecordError):
            adapter.normalize_match(_feed_match(homeTeam={"id": 5}))

    def test_satisfies_protocol(self, config: FeedConfig) -> None:
        assert isinstance(FootballDataAdapter(config=config), FeedAdapter)


# ------------------------------------------------------------------
# Fetching
# ------------------------------------------------------------------


class TestFetchMatches:
    def test_request_shape(self, config: FeedConfig, session: MagicMock) -> None:
        adapter = FootballDataAdapter(config=config, session=session)
        adapter.fetch_matches(2001, 2024)
        session.get.assert_called_once_with(
            "https://api.football-data.org/v4/competitions/2001/matches",
            headers={AUTH_HEADER: "test-token"},
            params={"season": 2024},
            timeout=20.0,
        )

    def test_skips_unplayed_and_sorts_by_date(
        self, config: FeedConfig, session: MagicMock
    ) -> None:
        adapter = FootballDataAdapter(config=config, session=session)
        matches = adapter.fetch_matches(2001, 2024)
        assert [m.match_id for m in matches] == ["1", "2"]

    def test_defaults_from_config(self, session: MagicMock) -> None:
        adapter = FootballDataAdapter(
            config=FeedConfig(api_key="k", competition_id=2021, season=2023),
            session=session,
        )
        adapter.fetch_matches()
        args, kwargs = session.get.call_args
        assert args[0].endswith("/competitions/2021/matches")
        assert kwargs["params"] == {"season": 2023}

    def test_malformed_feed_match_skipped(self, config: FeedConfig) -> None:
        session = MagicMock()
        session.get.return_value = _response(
            payload={"matches": [_feed_match(1), _feed_match(2, awayTeam=None)]}
        )
        adapter = FootballDataAdapter(config=config, session=session)
        assert [m.match_id for m in adapter.fetch_matches(2001, 2024)] == ["1"]

    def test_malformed_feed_match_raises_under_raise_policy(
        self, config: FeedConfig
    ) -> None:
        session = MagicMock()
        session.get.return_value = _response(
            payload={"matches": [_feed_match(2, awayTeam=None)]}
        )
        adapter = FootballDataAdapter(config=config, session=session, on_malformed="raise")
        with pytest.raises(MalformedRecordError):
            adapter.fetch_matches(2001, 2024)


class TestFetchErrors:
    def test_http_error_status(self, config: FeedConfig) -> None:
        session = MagicMock()
        session.get.return_value = _response(status=403)
        adapter = FootballDataAdapter(config=config, session=session)
        with pytest.raises(AdapterError, match="403"):
            adapter.fetch_matches(2001, 2024)

    def test_network_failure(self, config: FeedConfig) -> None:
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        adapter = FootballDataAdapter(config=config, session=session)
        with pytest.raises(AdapterError, match="refused"):
            adapter.fetch_matches(2001, 2024)

    def test_missing_matches_key(self, config: FeedConfig) -> None:
        session = MagicMock()
        session.get.return_value = _response(payload={"errorCode": 400})
        adapter = FootballDataAdapter(config=config, session=session)
        with pytest.raises(AdapterError, match="No match data"):
            adapter.fetch_matches(2001, 2024)

    def test_invalid_json(self, config: FeedConfig) -> None:
        session = MagicMock()
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response
        adapter = FootballDataAdapter(config=config, session=session)
        with pytest.raises(AdapterError, match="invalid JSON"):
            adapter.fetch_matches(2001, 2024)


class TestApiKey:
    def test_explicit_key_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FOOTBALL_API_KEY", "from-env")
        adapter = FootballDataAdapter(config=FeedConfig(api_key="explicit"))
        assert adapter.api_key() == "explicit"

    def test_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FOOTBALL_API_KEY", "from-env")
        assert FootballDataAdapter().api_key() == "from-env"

    def test_missing_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FOOTBALL_API_KEY", raising=False)
        session = MagicMock()
        adapter = FootballDataAdapter(session=session)
        with pytest.raises(AdapterError, match="FOOTBALL_API_KEY"):
            adapter.fetch_matches(2001, 2024)
        session.get.assert_not_called()


class TestCacheFirstLoading:
    def test_cache_hit_skips_request(self, tmp_path: Path, config: FeedConfig) -> None:
        cache_dir = tmp_path / "cache"
        FeedCache(cache_dir).put(2001, 2024, {"matches": [_feed_match(1)]})
        session = MagicMock()
        adapter = FootballDataAdapter(config=config, cache_dir=cache_dir, session=session)

        matches = adapter.fetch_matches(2001, 2024)

        assert [m.match_id for m in matches] == ["1"]
        session.get.assert_not_called()

    def test_cache_miss_populates_cache(
        self, tmp_path: Path, config: FeedConfig, session: MagicMock
    ) -> None:
        cache_dir = tmp_path / "cache"
        adapter = FootballDataAdapter(config=config, cache_dir=cache_dir, session=session)
        adapter.fetch_matches(2001, 2024)
        adapter.fetch_matches(2001, 2024)

        assert session.get.call_count == 1
        assert FeedCache(cache_dir).exists(2001, 2024)

    def test_corrupt_cache_file_is_refetched(
        self, tmp_path: Path, config: FeedConfig, session: MagicMock
    ) -> None:
        cache = FeedCache(tmp_path / "cache")
        cache.cache_path(2001, 2024).write_bytes(b"{trunc")
        adapter = FootballDataAdapter(
            config=config, cache_dir=tmp_path / "cache", session=session
        )

        matches = adapter.fetch_matches(2001, 2024)

        assert [m.match_id for m in matches] == ["1", "2"]
        session.get.assert_called_once()
        assert cache.get(2001, 2024)["matches"][0]["id"] == 2
