"""Data adapter layer for the match statistics engine.

Re-exports the canonical schemas, the collaborator protocols, the record
parser, the football-data.org feed adapter and its disk cache so that
downstream code can import everything from :mod:`matchstats.adapters`.
"""

from matchstats.adapters.base import FeedAdapter, MatchStore
from matchstats.adapters.cache import FeedCache
from matchstats.adapters.football_data import FootballDataAdapter
from matchstats.adapters.records import (
    dump_matches,
    load_matches,
    match_to_record,
    parse_date,
    parse_event,
    parse_match,
    parse_matches,
)
from matchstats.adapters.schemas import (
    CONTROLLED_EVENT_TYPES,
    EventCategory,
    Match,
    MatchEvent,
    MatchPage,
    Pagination,
)

__all__ = [
    "CONTROLLED_EVENT_TYPES",
    "EventCategory",
    "FeedAdapter",
    "FeedCache",
    "FootballDataAdapter",
    "Match",
    "MatchEvent",
    "MatchPage",
    "MatchStore",
    "Pagination",
    "dump_matches",
    "load_matches",
    "match_to_record",
    "parse_date",
    "parse_event",
    "parse_match",
    "parse_matches",
]
