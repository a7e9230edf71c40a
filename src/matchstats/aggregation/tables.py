"""Tabular views of a :class:`~matchstats.aggregation.report.StatsReport`.

Produces :class:`polars.DataFrame` league and player tables for display
and export.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import polars as pl

if TYPE_CHECKING:
    from matchstats.aggregation.report import StatsReport

TEAM_COLUMNS: tuple[str, ...] = (
    "team",
    "played",
    "wins",
    "draws",
    "losses",
    "goals_for",
    "goals_against",
    "goal_difference",
    "clean_sheets",
    "points",
)

PLAYER_COLUMNS: tuple[str, ...] = (
    "player",
    "goals",
    "assists",
    "penalties",
    "warnings",
    "saved_penalties",
    "mvp_count",
)

_TEAM_SCHEMA: dict[str, type[pl.DataType]] = {
    name: (pl.Utf8 if name == "team" else pl.Int64) for name in TEAM_COLUMNS
}
_PLAYER_SCHEMA: dict[str, type[pl.DataType]] = {
    name: (pl.Utf8 if name == "player" else pl.Int64) for name in PLAYER_COLUMNS
}


def team_table(report: StatsReport) -> pl.DataFrame:
    """Return a league table with one row per team.

    Rows are ordered by points, goal difference and goals scored (all
    descending), then by team name.
    """
    rows = [
        {
            "team": name,
            "played": stat.played,
            "wins": stat.wins,
            "draws": stat.draws,
            "losses": stat.losses,
            "goals_for": stat.goals_for,
            "goals_against": stat.goals_against,
            "goal_difference": stat.goal_difference,
            "clean_sheets": stat.clean_sheets,
            "points": stat.points,
        }
        for name, stat in report.teams.items()
    ]
    df = pl.DataFrame(rows, schema=_TEAM_SCHEMA)
    return df.sort(
        ["points", "goal_difference", "goals_for", "team"],
        descending=[True, True, True, False],
    )


def player_table(report: StatsReport) -> pl.DataFrame:
    """Return one row per player, ordered by goals, assists, then name."""
    rows = [
        {
            "player": name,
            "goals": stat.goals,
            "assists": stat.assists,
            "penalties": stat.penalties,
            "warnings": stat.warnings,
            "saved_penalties": stat.saved_penalties,
            "mvp_count": stat.mvp_count,
        }
        for name, stat in report.players.items()
    ]
    df = pl.DataFrame(rows, schema=_PLAYER_SCHEMA)
    return df.sort(
        ["goals", "assists", "player"],
        descending=[True, True, False],
    )
