"""Configuration dataclasses for the match statistics engine.

All configuration containers are frozen (immutable) and slotted. Each
dataclass provides defaults so that a zero-argument ``EngineConfig()``
is always valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

MALFORMED_POLICIES: tuple[str, ...] = ("raise", "skip")


@dataclass(frozen=True, slots=True)
class StatsConfig:
    """Configuration for aggregation, ranking and match listing.

    Attributes:
        ranking_size: Number of entries kept in each leaderboard.
        on_malformed: What to do with a record that fails validation
            while a batch is parsed: ``"raise"`` fails the whole batch,
            ``"skip"`` drops only the offending record.
        default_page: Page used by the match listing when none is given.
        default_limit: Page size used by the match listing when none is
            given.

    Raises:
        ValueError: If any configuration invariant is violated.
    """

    ranking_size: int = 5
    on_malformed: str = "skip"
    default_page: int = 1
    default_limit: int = 10

    def __post_init__(self) -> None:
        """Validate configuration invariants after initialization."""
        if self.ranking_size < 1:
            msg = f"ranking_size must be >= 1, got {self.ranking_size}"
            raise ValueError(msg)

        if self.on_malformed not in MALFORMED_POLICIES:
            msg = (
                f"on_malformed must be one of {MALFORMED_POLICIES}, "
                f"got {self.on_malformed!r}"
            )
            raise ValueError(msg)

        if self.default_page < 1:
            msg = f"default_page must be >= 1, got {self.default_page}"
            raise ValueError(msg)

        if self.default_limit < 1:
            msg = f"default_limit must be >= 1, got {self.default_limit}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Configuration for the football-data.org import adapter.

    Attributes:
        base_url: Root URL of the v4 API.
        api_key: Explicit API token. When ``None`` the token is read
            from the environment variable named by *api_key_env*.
        api_key_env: Environment variable holding the API token.
        competition_id: Default competition to import (2001 is the
            UEFA Champions League).
        season: Default season start year.
        timeout_seconds: HTTP timeout for a single request.
    """

    base_url: str = "https://api.football-data.org/v4"
    api_key: str | None = None
    api_key_env: str = "FOOTBALL_API_KEY"
    competition_id: int = 2001
    season: int = 2024
    timeout_seconds: float = 20.0

    def __post_init__(self) -> None:
        """Validate configuration invariants after initialization."""
        if self.timeout_seconds <= 0.0:
            msg = f"timeout_seconds must be positive, got {self.timeout_seconds}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Master configuration for the statistics engine and its scripts.

    Attributes:
        cache_dir: Directory for caching raw feed responses.
        data_dir: Directory holding match record JSON files.
        stats: Aggregation and listing configuration.
        feed: External feed configuration.
    """

    cache_dir: Path = field(default_factory=lambda: Path("data/feed_cache"))
    data_dir: Path = field(default_factory=lambda: Path("data/matches"))
    stats: StatsConfig = field(default_factory=StatsConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
