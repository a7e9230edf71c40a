"""Team/location match listing with pagination metadata."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from matchstats.adapters.schemas import MatchPage, Pagination
from matchstats.exceptions import InvalidFilterParameterError
from matchstats.filtering.dates import in_date_range, validate_date_range

if TYPE_CHECKING:
    from collections.abc import Iterable

    from matchstats.adapters.schemas import Match


def _validate_page_args(page: int, limit: int) -> None:
    for name, value in (("page", page), ("limit", limit)):
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"{name} must be an integer, got {value!r}"
            raise InvalidFilterParameterError(msg)
    if limit <= 0:
        msg = f"limit must be positive, got {limit}"
        raise InvalidFilterParameterError(msg)
    if page < 1:
        msg = f"page must be >= 1, got {page}"
        raise InvalidFilterParameterError(msg)


def paginate_matches(
    matches: Iterable[Match],
    team: str | None = None,
    location: str | None = None,
    page: int = 1,
    limit: int = 10,
    start: object = None,
    end: object = None,
) -> MatchPage:
    """Return one page of matches for a team and/or location.

    A match satisfies *team* when the team played either home or away;
    *location* must match the venue exactly. Omitted filters impose no
    constraint.

    Args:
        matches: Stored matches.
        team: Team name to look for on either side.
        location: Venue name.
        page: 1-based page number.
        limit: Page size.
        start: Optional inclusive lower date bound.
        end: Optional inclusive upper date bound.

    Returns:
        The requested page with pagination metadata. A page past the
        end of the result set is empty.

    Raises:
        InvalidFilterParameterError: If *page* or *limit* is invalid or a
            date bound cannot be parsed.
    """
    _validate_page_args(page, limit)
    start_date, end_date = validate_date_range(start, end)

    selected = [
        m
        for m in matches
        if (not team or m.involves(team))
        and (not location or m.location == location)
        and in_date_range(m, start_date, end_date)
    ]

    total = len(selected)
    offset = (page - 1) * limit
    return MatchPage(
        matches=tuple(selected[offset : offset + limit]),
        pagination=Pagination(
            total_matches=total,
            total_pages=math.ceil(total / limit),
            current_page=page,
            per_page=limit,
        ),
    )
