"""Custom exceptions for the match statistics engine.

All exceptions inherit from :class:`MatchStatsError` so callers can
catch the full family with a single ``except MatchStatsError`` clause.
"""

from __future__ import annotations


class MatchStatsError(Exception):
    """Base exception for all match statistics errors."""


class MalformedRecordError(MatchStatsError):
    """Raised when a match or event record is missing a required field.

    Attributes:
        record_id: Identifier of the offending record, or ``None`` when
            the record carried no usable identifier.
    """

    def __init__(self, message: str = "", record_id: str | None = None) -> None:
        if message:
            super().__init__(message)
        else:
            super().__init__()
        self.record_id = record_id


class InvalidFilterParameterError(MatchStatsError):
    """Raised when a filter argument (date bound, page, limit) is invalid."""


class AdapterError(MatchStatsError):
    """Raised when a data adapter fails to load or transform data."""
