"""Match Statistics Engine.

Aggregates football match records into team records, player totals,
player-of-the-match awards and leaderboards.
"""

from matchstats.aggregation.report import StatsReport, compute_stats, list_matches
from matchstats.config import EngineConfig, FeedConfig, StatsConfig
from matchstats.exceptions import MatchStatsError
from matchstats.store import InMemoryMatchStore

__version__ = "0.1.0"

__all__ = [
    "EngineConfig",
    "FeedConfig",
    "InMemoryMatchStore",
    "MatchStatsError",
    "StatsConfig",
    "StatsReport",
    "__version__",
    "compute_stats",
    "list_matches",
]
