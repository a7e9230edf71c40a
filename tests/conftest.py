"""Shared test fixtures for the match statistics engine.

Provides reusable fixtures used across multiple test modules:

* :func:`make_match` -- factory building a valid :class:`Match` with
  sensible defaults.
* :func:`sample_matches` -- a small three-team round with goals,
  assists, cards and a goalless draw.
* :func:`sample_records` -- the same round in stored-document form.
* :func:`sample_store` -- an :class:`InMemoryMatchStore` over
  :func:`sample_matches`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from typing import Any

import pytest

from matchstats.adapters.records import match_to_record
from matchstats.adapters.schemas import EventCategory, Match, MatchEvent
from matchstats.store import InMemoryMatchStore

MatchFactory = Callable[..., Match]


def _build_match(
    match_id: str = "m1",
    *,
    date: dt.date = dt.date(2024, 3, 2),
    home_team: str = "Arsenal",
    away_team: str = "Chelsea",
    home_score: int = 0,
    away_score: int = 0,
    location: str = "Emirates Stadium",
    events: tuple[MatchEvent, ...] = (),
    competition: str = "Premier League",
    season: str = "2023",
) -> Match:
    return Match(
        match_id=match_id,
        date=date,
        competition=competition,
        season=season,
        home_team=home_team,
        away_team=away_team,
        home_score=home_score,
        away_score=away_score,
        location=location,
        referees=("Michael Oliver",),
        events=events,
    )


@pytest.fixture()
def make_match() -> MatchFactory:
    """Factory for :class:`Match` instances with defaults."""
    return _build_match


def _ev(category: EventCategory, player: str | None, team: str, minute: int) -> MatchEvent:
    return MatchEvent(category=category, player=player, team=team, minute=minute)


@pytest.fixture()
def sample_matches() -> list[Match]:
    """Three matches between Arsenal, Chelsea and Liverpool.

    * m1 (2024-03-02) Arsenal 2-0 Chelsea: Saka 2 goals, Odegaard assist,
      Enzo warning.
    * m2 (2024-03-09) Chelsea 1-1 Liverpool: Palmer goal, Salah goal,
      Alisson penalty saved, Palmer penalty.
    * m3 (2024-03-16) Liverpool 0-0 Arsenal: Raya penalty saved.
    """
    return [
        _build_match(
            "m1",
            date=dt.date(2024, 3, 2),
            home_team="Arsenal",
            away_team="Chelsea",
            home_score=2,
            away_score=0,
            location="Emirates Stadium",
            events=(
                _ev(EventCategory.GOAL, "Saka", "Arsenal", 12),
                _ev(EventCategory.ASSIST, "Odegaard", "Arsenal", 12),
                _ev(EventCategory.WARNING, "Enzo", "Chelsea", 40),
                _ev(EventCategory.GOAL, "Saka", "Arsenal", 77),
            ),
        ),
        _build_match(
            "m2",
            date=dt.date(2024, 3, 9),
            home_team="Chelsea",
            away_team="Liverpool",
            home_score=1,
            away_score=1,
            location="Stamford Bridge",
            events=(
                _ev(EventCategory.PENALTY, "Palmer", "Chelsea", 20),
                _ev(EventCategory.PENALTY_SAVED, "Alisson", "Liverpool", 21),
                _ev(EventCategory.GOAL, "Palmer", "Chelsea", 55),
                _ev(EventCategory.GOAL, "Salah", "Liverpool", 80),
            ),
        ),
        _build_match(
            "m3",
            date=dt.date(2024, 3, 16),
            home_team="Liverpool",
            away_team="Arsenal",
            home_score=0,
            away_score=0,
            location="Anfield",
            events=(_ev(EventCategory.PENALTY_SAVED, "Raya", "Arsenal", 64),),
        ),
    ]


@pytest.fixture()
def sample_records(sample_matches: list[Match]) -> list[dict[str, Any]]:
    """:func:`sample_matches` converted to stored documents."""
    return [match_to_record(m) for m in sample_matches]


@pytest.fixture()
def sample_store(sample_matches: list[Match]) -> InMemoryMatchStore:
    """In-memory store holding :func:`sample_matches`."""
    return InMemoryMatchStore(sample_matches)
