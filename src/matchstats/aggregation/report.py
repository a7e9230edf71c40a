"""End-to-end statistics computation over a match store.

Wires the filter stage (via the store), the accumulation stage and the
ranking stage into a single :class:`StatsReport`.

Public API
----------
.. function:: compute_stats

    Aggregate every stored match inside a date range.

.. function:: list_matches

    Return one page of matches for a team and/or location.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson

from matchstats.aggregation.accumulate import accumulate_matches
from matchstats.aggregation.ranking import Rankings, build_rankings
from matchstats.config import StatsConfig
from matchstats.filtering.dates import validate_date_range

if TYPE_CHECKING:
    from matchstats.adapters.base import MatchStore
    from matchstats.adapters.schemas import MatchPage
    from matchstats.aggregation.accumulator import PlayerStat, TeamStat

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StatsReport:
    """Aggregated statistics for one date range.

    Attributes:
        teams: Per-team counters keyed by team name.
        players: Per-player counters keyed by player name.
        player_of_the_match: Match identifier to MVP player name.
        rankings: Top scorers and top assist providers.
        match_count: Number of matches aggregated.
    """

    teams: dict[str, TeamStat] = field(default_factory=dict)
    players: dict[str, PlayerStat] = field(default_factory=dict)
    player_of_the_match: dict[str, str] = field(default_factory=dict)
    rankings: Rankings = field(default_factory=Rankings)
    match_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase structure exposed to callers."""
        return {
            "teams": {name: stat.to_dict() for name, stat in self.teams.items()},
            "players": {name: stat.to_dict() for name, stat in self.players.items()},
            "playerOfTheMatch": dict(self.player_of_the_match),
            "rankings": self.rankings.to_dict(),
        }

    def to_json(self, indent: bool = False) -> bytes:
        """Serialise :meth:`to_dict` to JSON bytes."""
        option = orjson.OPT_INDENT_2 if indent else None
        return orjson.dumps(self.to_dict(), option=option)


def compute_stats(
    store: MatchStore,
    start: object = None,
    end: object = None,
    config: StatsConfig | None = None,
) -> StatsReport:
    """Aggregate all stored matches played within ``[start, end]``.

    Bounds are validated before the store is queried. Every call
    recomputes from scratch into freshly allocated tables.

    Args:
        store: Storage collaborator supplying matches.
        start: Optional inclusive lower date bound.
        end: Optional inclusive upper date bound.
        config: Ranking configuration; defaults to :class:`StatsConfig`.

    Returns:
        The aggregated report. An empty match set yields an empty report.

    Raises:
        InvalidFilterParameterError: If a bound is invalid.
        MalformedRecordError: If the store returns an invalid record.
    """
    config = config or StatsConfig()
    start_date, end_date = validate_date_range(start, end)

    matches = store.find_matches(start=start_date, end=end_date)
    aggregates = accumulate_matches(matches)
    players = aggregates.players.to_dict()

    report = StatsReport(
        teams=aggregates.teams.to_dict(),
        players=players,
        player_of_the_match=dict(aggregates.player_of_the_match),
        rankings=build_rankings(players, limit=config.ranking_size),
        match_count=aggregates.match_count,
    )
    logger.info(
        "Computed stats for %d matches (%s to %s)",
        report.match_count,
        start_date or "open",
        end_date or "open",
    )
    return report


def list_matches(
    store: MatchStore,
    team: str | None = None,
    location: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    start: object = None,
    end: object = None,
    config: StatsConfig | None = None,
) -> MatchPage:
    """Return one page of stored matches for a team and/or location.

    *page* and *limit* fall back to the configured defaults (1 and 10)
    only when omitted; explicit invalid values are rejected.

    Raises:
        InvalidFilterParameterError: If *page*, *limit* or a date bound
            is invalid.
    """
    config = config or StatsConfig()
    return store.find_matches_page(
        team=team,
        location=location,
        page=config.default_page if page is None else page,
        limit=config.default_limit if limit is None else limit,
        start=start,
        end=end,
    )
