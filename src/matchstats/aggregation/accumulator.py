"""Mutable per-run counters and the keyed table that owns them.

:class:`TeamStat` and :class:`PlayerStat` are plain slotted dataclasses
that start at zero and only ever increase during one aggregation run.
:class:`StatTable` replaces ad-hoc ``dict.get(key) or default`` lookups
with a single :meth:`StatTable.get_or_init` entry point.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

POINTS_PER_WIN: int = 3
POINTS_PER_DRAW: int = 1


@dataclass(slots=True)
class TeamStat:
    """Running record of one team across the aggregated matches.

    Attributes:
        wins: Matches won.
        losses: Matches lost.
        draws: Matches drawn.
        goals_for: Goals scored.
        goals_against: Goals conceded.
        clean_sheets: Matches in which no goal was conceded.
    """

    wins: int = 0
    losses: int = 0
    draws: int = 0
    goals_for: int = 0
    goals_against: int = 0
    clean_sheets: int = 0

    @property
    def played(self) -> int:
        """Number of matches the team appeared in."""
        return self.wins + self.losses + self.draws

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def points(self) -> int:
        """League points: three per win, one per draw."""
        return self.wins * POINTS_PER_WIN + self.draws * POINTS_PER_DRAW

    def to_dict(self) -> dict[str, int]:
        """Return the camelCase counters exposed to callers."""
        return {
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "goalsFor": self.goals_for,
            "goalsAgainst": self.goals_against,
            "cleanSheets": self.clean_sheets,
        }


@dataclass(slots=True)
class PlayerStat:
    """Running totals for one player across the aggregated matches.

    ``warningAvoided`` events have no counter here; they only feed the
    per-match MVP score.

    Attributes:
        goals: Goals scored.
        assists: Assists provided.
        penalties: Penalties recorded against the player.
        warnings: Warnings (cards) received.
        saved_penalties: Penalties saved.
        mvp_count: Matches in which the player was player of the match.
    """

    goals: int = 0
    assists: int = 0
    penalties: int = 0
    warnings: int = 0
    saved_penalties: int = 0
    mvp_count: int = 0

    def to_dict(self) -> dict[str, int]:
        """Return the camelCase counters exposed to callers."""
        return {
            "goals": self.goals,
            "assists": self.assists,
            "penalties": self.penalties,
            "warnings": self.warnings,
            "savedPenalties": self.saved_penalties,
            "mvpCount": self.mvp_count,
        }


StatT = TypeVar("StatT", TeamStat, PlayerStat)


class StatTable(Generic[StatT]):
    """Name-keyed table of counters created on first access.

    Insertion order is preserved, so iteration follows the order in
    which entries were first touched.

    Example::

        teams = StatTable(TeamStat)
        teams.get_or_init("Arsenal").wins += 1
    """

    __slots__ = ("_entries", "_factory")

    def __init__(self, factory: Callable[[], StatT]) -> None:
        self._factory = factory
        self._entries: dict[str, StatT] = {}

    def get_or_init(self, key: str) -> StatT:
        """Return the entry for *key*, creating a zeroed one if absent."""
        entry = self._entries.get(key)
        if entry is None:
            entry = self._factory()
            self._entries[key] = entry
        return entry

    def __getitem__(self, key: str) -> StatT:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> list[tuple[str, StatT]]:
        return list(self._entries.items())

    def to_dict(self) -> dict[str, StatT]:
        """Return a shallow copy of the underlying mapping."""
        return dict(self._entries)

    def snapshot(self) -> dict[str, dict[str, int]]:
        """Return plain field dictionaries, suitable for equality checks."""
        return {key: asdict(entry) for key, entry in self._entries.items()}
