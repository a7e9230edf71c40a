"""Structural interfaces for the engine's data collaborators.

* :class:`MatchStore` -- the storage collaborator that holds match
  records and answers date-range and listing queries. Implementations
  must give each query a consistent snapshot of the stored records.
* :class:`FeedAdapter` -- an external data provider that normalizes a
  third-party match feed into :class:`~matchstats.adapters.schemas.Match`
  values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import datetime as dt

    from matchstats.adapters.schemas import Match, MatchPage


@runtime_checkable
class MatchStore(Protocol):
    """Structural interface for match storage.

    Any class that implements the two query methods below is a valid
    ``MatchStore`` without needing to inherit from this class.
    """

    def find_matches(
        self,
        start: dt.date | None = None,
        end: dt.date | None = None,
    ) -> list[Match]:
        """Return every stored match played within ``[start, end]``.

        Args:
            start: Inclusive lower bound, or ``None`` for no bound.
            end: Inclusive upper bound, or ``None`` for no bound.

        Returns:
            Matching records in storage order.
        """
        ...

    def find_matches_page(
        self,
        team: str | None = None,
        location: str | None = None,
        page: int = 1,
        limit: int = 10,
        start: object = None,
        end: object = None,
    ) -> MatchPage:
        """Return one page of matches for a team and/or location.

        Returns:
            The requested :class:`MatchPage`, including the total count.
        """
        ...


@runtime_checkable
class FeedAdapter(Protocol):
    """Structural interface for external match-feed providers."""

    def fetch_matches(self, competition_id: int, season: int) -> list[Match]:
        """Fetch and normalize every finished match of a competition season.

        Args:
            competition_id: Provider-specific competition identifier.
            season: Season start year.

        Returns:
            Normalized matches sorted by date.
        """
        ...
