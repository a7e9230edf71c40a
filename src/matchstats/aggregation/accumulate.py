"""Single-pass accumulation of team, player and MVP statistics.

Folds a list of matches into per-team and per-player counters and picks
a player of the match for every match during the same pass. Every call
allocates fresh tables, so concurrent calls never share state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from matchstats.adapters.schemas import EventCategory, Match
from matchstats.aggregation.accumulator import PlayerStat, StatTable, TeamStat
from matchstats.exceptions import MalformedRecordError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

MVP_WEIGHTS: dict[EventCategory, int] = {
    EventCategory.GOAL: 2,
    EventCategory.ASSIST: 1,
    EventCategory.PENALTY: 0,
    EventCategory.WARNING: 0,
    EventCategory.PENALTY_SAVED: 3,
    EventCategory.WARNING_AVOIDED: 1,
}

# PlayerStat attribute incremented per category; None means no counter.
EVENT_COUNTERS: dict[EventCategory, str | None] = {
    EventCategory.GOAL: "goals",
    EventCategory.ASSIST: "assists",
    EventCategory.PENALTY: "penalties",
    EventCategory.WARNING: "warnings",
    EventCategory.PENALTY_SAVED: "saved_penalties",
    EventCategory.WARNING_AVOIDED: None,
}


def _check_dispatch_tables() -> None:
    """Fail at import time if a category lacks a weight or counter entry."""
    for table in (MVP_WEIGHTS, EVENT_COUNTERS):
        missing = set(EventCategory) - set(table)
        if missing:
            names = sorted(c.value for c in missing)
            msg = f"event categories without a handler: {names}"
            raise RuntimeError(msg)


_check_dispatch_tables()


@dataclass(slots=True)
class Aggregates:
    """Result of one accumulation run.

    Attributes:
        teams: Per-team counters keyed by team name.
        players: Per-player counters keyed by player name.
        player_of_the_match: Match identifier to MVP player name. Matches
            without a positive MVP score have no entry.
        match_count: Number of matches folded in.
    """

    teams: StatTable[TeamStat] = field(default_factory=lambda: StatTable(TeamStat))
    players: StatTable[PlayerStat] = field(
        default_factory=lambda: StatTable(PlayerStat)
    )
    player_of_the_match: dict[str, str] = field(default_factory=dict)
    match_count: int = 0


def _check_match(match: object) -> Match:
    """Reject anything that is not a fully validated :class:`Match`."""
    if not isinstance(match, Match):
        msg = f"expected a Match record, got {type(match).__name__}"
        raise MalformedRecordError(msg)
    return match


def _apply_result(teams: StatTable[TeamStat], match: Match) -> None:
    home = teams.get_or_init(match.home_team)
    away = teams.get_or_init(match.away_team)

    home.goals_for += match.home_score
    home.goals_against += match.away_score
    away.goals_for += match.away_score
    away.goals_against += match.home_score

    if match.home_score > match.away_score:
        home.wins += 1
        away.losses += 1
    elif match.home_score < match.away_score:
        away.wins += 1
        home.losses += 1
    else:
        home.draws += 1
        away.draws += 1

    if match.away_score == 0:
        home.clean_sheets += 1
    if match.home_score == 0:
        away.clean_sheets += 1


def _apply_event(
    players: StatTable[PlayerStat],
    player: str,
    category: EventCategory,
) -> int:
    """Update the player's counters and return the event's MVP weight."""
    stat = players.get_or_init(player)
    counter = EVENT_COUNTERS[category]
    if counter is not None:
        setattr(stat, counter, getattr(stat, counter) + 1)
    return MVP_WEIGHTS[category]


def select_mvp(scores: dict[str, int]) -> str | None:
    """Pick the player with the strictly highest positive score.

    *scores* must be ordered by first appearance in the event list; on
    a tie the earlier player keeps the title.

    Args:
        scores: Per-match MVP score per player, in encounter order.

    Returns:
        The MVP's name, or ``None`` if nobody scored above zero.
    """
    best: str | None = None
    best_score = 0
    for player, score in scores.items():
        if score > best_score:
            best, best_score = player, score
    return best


def accumulate_match(aggregates: Aggregates, match: Match) -> str | None:
    """Fold one match into *aggregates*.

    Returns:
        The match's MVP, or ``None`` if no player scored.
    """
    _apply_result(aggregates.teams, match)

    scores: dict[str, int] = {}
    for event in match.events:
        if not event.player:
            logger.debug(
                "Skipping %s event without a player in match %s",
                event.category.value,
                match.match_id,
            )
            continue
        weight = _apply_event(aggregates.players, event.player, event.category)
        scores[event.player] = scores.get(event.player, 0) + weight

    mvp = select_mvp(scores)
    if mvp is not None:
        aggregates.players[mvp].mvp_count += 1
        aggregates.player_of_the_match[match.match_id] = mvp

    aggregates.match_count += 1
    return mvp


def accumulate_matches(matches: Iterable[Match]) -> Aggregates:
    """Fold a batch of matches into fresh team and player tables.

    Each record is checked before any counter is touched, so a
    malformed record never leaves partial updates behind.

    Args:
        matches: Matches to aggregate, typically already date-filtered.

    Returns:
        Newly allocated :class:`Aggregates`. An empty input yields empty
        tables.

    Raises:
        MalformedRecordError: If an element is not a :class:`Match`.
    """
    aggregates = Aggregates()
    for item in matches:
        accumulate_match(aggregates, _check_match(item))

    logger.debug(
        "Accumulated %d matches: %d teams, %d players, %d MVPs",
        aggregates.match_count,
        len(aggregates.teams),
        len(aggregates.players),
        len(aggregates.player_of_the_match),
    )
    return aggregates
