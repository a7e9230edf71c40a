"""Leaderboards projected from the per-player table.

Entries are sorted by the metric in descending order with ties broken
by player name, so equal inputs always produce the same leaderboard.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from matchstats.aggregation.accumulator import PlayerStat

DEFAULT_RANKING_SIZE: int = 5


@dataclass(frozen=True, slots=True)
class ScorerEntry:
    """One row of the top-scorers leaderboard."""

    name: str
    goals: int

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "goals": self.goals}


@dataclass(frozen=True, slots=True)
class AssistEntry:
    """One row of the top-assist-providers leaderboard."""

    name: str
    assists: int

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "assists": self.assists}


@dataclass(frozen=True, slots=True)
class Rankings:
    """Both leaderboards produced by one aggregation run.

    Attributes:
        top_scorers: Players with the most goals.
        top_assist_providers: Players with the most assists.
    """

    top_scorers: tuple[ScorerEntry, ...] = ()
    top_assist_providers: tuple[AssistEntry, ...] = ()

    def to_dict(self) -> dict[str, list[dict[str, object]]]:
        return {
            "topScorers": [e.to_dict() for e in self.top_scorers],
            "topAssistProviders": [e.to_dict() for e in self.top_assist_providers],
        }


def _ranked(
    players: Mapping[str, PlayerStat],
    metric: str,
    limit: int,
) -> list[tuple[str, int]]:
    if limit < 1:
        msg = f"limit must be >= 1, got {limit}"
        raise ValueError(msg)
    rows = [(name, getattr(stat, metric)) for name, stat in players.items()]
    rows.sort(key=lambda row: (-row[1], row[0]))
    return rows[:limit]


def top_scorers(
    players: Mapping[str, PlayerStat],
    limit: int = DEFAULT_RANKING_SIZE,
) -> tuple[ScorerEntry, ...]:
    """Return the *limit* players with the most goals.

    Args:
        players: Per-player counters keyed by name.
        limit: Maximum number of entries.

    Returns:
        Entries sorted by goals (descending), then name (ascending).

    Raises:
        ValueError: If *limit* is less than 1.
    """
    return tuple(
        ScorerEntry(name=name, goals=goals)
        for name, goals in _ranked(players, "goals", limit)
    )


def top_assist_providers(
    players: Mapping[str, PlayerStat],
    limit: int = DEFAULT_RANKING_SIZE,
) -> tuple[AssistEntry, ...]:
    """Return the *limit* players with the most assists.

    Sorted by assists (descending), then name (ascending).
    """
    return tuple(
        AssistEntry(name=name, assists=assists)
        for name, assists in _ranked(players, "assists", limit)
    )


def build_rankings(
    players: Mapping[str, PlayerStat],
    limit: int = DEFAULT_RANKING_SIZE,
) -> Rankings:
    """Build both leaderboards from the same player table."""
    return Rankings(
        top_scorers=top_scorers(players, limit),
        top_assist_providers=top_assist_providers(players, limit),
    )
