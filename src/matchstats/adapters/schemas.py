"""Internal data schemas for the match statistics engine.

Defines the canonical match records used by every adapter and by the
filter, accumulation and ranking stages. Every schema is a frozen,
slotted dataclass; validation happens in ``__post_init__`` so that an
invalid :class:`Match` can never be constructed.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any

from matchstats.exceptions import MalformedRecordError


class EventCategory(str, Enum):
    """Team-scoped category of a match event.

    Values are the labels used in stored match records.
    """

    GOAL = "goal"
    ASSIST = "assist"
    PENALTY = "penalty"
    WARNING = "warning"
    PENALTY_SAVED = "penaltySaved"
    WARNING_AVOIDED = "warningAvoided"


CONTROLLED_EVENT_TYPES: frozenset[str] = frozenset(c.value for c in EventCategory)


@dataclass(frozen=True, slots=True)
class MatchEvent:
    """A single action recorded against a match.

    Events carry no identity of their own beyond their position in
    :attr:`Match.events`.

    Attributes:
        category: What happened.
        player: Name of the acting player, or ``None`` when the source
            did not record one. Such events are ignored by aggregation.
        team: Name of the acting team.
        minute: Match minute (0-120+), or ``None`` if unknown.
    """

    category: EventCategory
    player: str | None
    team: str
    minute: int | None = None

    def __post_init__(self) -> None:
        """Validate that *category* is an :class:`EventCategory`."""
        if not isinstance(self.category, EventCategory):
            msg = f"category must be an EventCategory, got {self.category!r}"
            raise MalformedRecordError(msg)
        if self.minute is not None and self.minute < 0:
            msg = f"minute must be non-negative, got {self.minute}"
            raise MalformedRecordError(msg)


@dataclass(frozen=True, slots=True)
class Match:
    """A played match with its final score and event list.

    Attributes:
        match_id: Unique identifier of the match.
        date: Calendar date the match was played.
        competition: Competition name (e.g. ``"Premier League"``).
        season: Season label (e.g. ``"2024"``).
        home_team: Name of the home team.
        away_team: Name of the away team.
        home_score: Final home score (>= 0).
        away_score: Final away score (>= 0).
        location: Venue name.
        referees: Names of the match officials.
        events: Events in recorded order.
        home_lineup: Player names fielded by the home team.
        away_lineup: Player names fielded by the away team.

    Raises:
        MalformedRecordError: If a team name is empty or a score is not
            a non-negative integer.
    """

    match_id: str
    date: dt.date
    competition: str
    season: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    location: str = ""
    referees: tuple[str, ...] = ()
    events: tuple[MatchEvent, ...] = ()
    home_lineup: tuple[str, ...] = ()
    away_lineup: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate team names and scores."""
        for side, team in (("home", self.home_team), ("away", self.away_team)):
            if not isinstance(team, str) or not team:
                msg = f"match {self.match_id!r}: {side} team name is required"
                raise MalformedRecordError(msg, record_id=self.match_id)

        for side, score in (("home", self.home_score), ("away", self.away_score)):
            # bool is an int subclass but never a valid score
            if isinstance(score, bool) or not isinstance(score, int) or score < 0:
                msg = (
                    f"match {self.match_id!r}: {side} score must be a "
                    f"non-negative integer, got {score!r}"
                )
                raise MalformedRecordError(msg, record_id=self.match_id)

        if not isinstance(self.date, dt.date):
            msg = f"match {self.match_id!r}: date is required"
            raise MalformedRecordError(msg, record_id=self.match_id)
        if isinstance(self.date, dt.datetime):
            # filters compare calendar days only
            object.__setattr__(self, "date", self.date.date())

    def involves(self, team: str) -> bool:
        """Return ``True`` if *team* played home or away."""
        return team in (self.home_team, self.away_team)


@dataclass(frozen=True, slots=True)
class Pagination:
    """Pagination metadata for a page of matches.

    Attributes:
        total_matches: Number of matches satisfying the filter.
        total_pages: ``ceil(total_matches / per_page)``.
        current_page: 1-based page number that was requested.
        per_page: Requested page size.
    """

    total_matches: int
    total_pages: int
    current_page: int
    per_page: int

    def to_dict(self) -> dict[str, int]:
        """Return the camelCase mapping exposed to callers."""
        return {
            "totalMatches": self.total_matches,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "perPage": self.per_page,
        }


@dataclass(frozen=True, slots=True)
class MatchPage:
    """One page of a filtered match listing.

    Attributes:
        matches: Matches on this page, in store order.
        pagination: Metadata describing the full result set.
    """

    matches: tuple[Match, ...]
    pagination: Pagination

    def to_dict(self) -> dict[str, Any]:
        """Return the listing as stored-shape match documents plus metadata."""
        from matchstats.adapters.records import match_to_record

        return {
            "matches": [match_to_record(m) for m in self.matches],
            "pagination": self.pagination.to_dict(),
        }
