"""Accumulation and ranking stages of the match statistics engine.

Re-exports the counters, the accumulation entry point, leaderboards and
the report service so downstream code can import everything from
:mod:`matchstats.aggregation`.
"""

from matchstats.aggregation.accumulate import (
    EVENT_COUNTERS,
    MVP_WEIGHTS,
    Aggregates,
    accumulate_match,
    accumulate_matches,
    select_mvp,
)
from matchstats.aggregation.accumulator import PlayerStat, StatTable, TeamStat
from matchstats.aggregation.ranking import (
    AssistEntry,
    Rankings,
    ScorerEntry,
    build_rankings,
    top_assist_providers,
    top_scorers,
)
from matchstats.aggregation.report import StatsReport, compute_stats, list_matches
from matchstats.aggregation.tables import player_table, team_table

__all__ = [
    "EVENT_COUNTERS",
    "MVP_WEIGHTS",
    "Aggregates",
    "AssistEntry",
    "PlayerStat",
    "Rankings",
    "ScorerEntry",
    "StatTable",
    "StatsReport",
    "TeamStat",
    "accumulate_match",
    "accumulate_matches",
    "build_rankings",
    "compute_stats",
    "list_matches",
    "player_table",
    "select_mvp",
    "team_table",
    "top_assist_providers",
    "top_scorers",
]
