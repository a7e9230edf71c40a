"""Conversion between stored match documents and :class:`Match` values.

Stored records use the document shape of the match collection::

    {
        "id": "...",
        "date": "2024-03-02T15:00:00Z",
        "competition": "Premier League",
        "season": "2023",
        "teams": {"home": "Arsenal", "away": "Chelsea"},
        "score": {"home": 2, "away": 0},
        "location": "Emirates Stadium",
        "referees": ["..."],
        "events": [{"type": "goal", "player": "...", "team": "...", "minute": 12}],
        "lineUp": {"home": ["..."], "away": ["..."]},
    }

Only the team names, the score, the date and each event's category are
required; every other field falls back to an empty value.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import orjson

from matchstats.adapters.schemas import EventCategory, Match, MatchEvent
from matchstats.config import MALFORMED_POLICIES
from matchstats.exceptions import AdapterError, MalformedRecordError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)


def parse_date(value: object) -> dt.date:
    """Convert a stored date value to a calendar date.

    Args:
        value: A :class:`datetime.date`, :class:`datetime.datetime`, or
            ISO 8601 string (a trailing ``Z`` is accepted).

    Returns:
        The calendar date.

    Raises:
        ValueError: If *value* cannot be interpreted as a date.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if len(text) == 10:
            return dt.date.fromisoformat(text)
        return dt.datetime.fromisoformat(text).date()
    msg = f"cannot interpret {value!r} as a date"
    raise ValueError(msg)


def _optional_str(value: object) -> str:
    return "" if value is None else str(value)


def _mapping(value: object, field: str, record_id: str | None) -> Mapping[str, Any]:
    """Return *value* as a mapping; ``None`` counts as empty."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        msg = f"match {record_id!r}: {field} must be an object, got {type(value).__name__}"
        raise MalformedRecordError(msg, record_id=record_id)
    return value


def _sequence(value: object, field: str, record_id: str | None) -> list[Any]:
    """Return *value* as a list; ``None`` counts as empty."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        msg = f"match {record_id!r}: {field} must be an array, got {type(value).__name__}"
        raise MalformedRecordError(msg, record_id=record_id)
    return list(value)


def _names(value: object, field: str, record_id: str | None) -> tuple[str, ...]:
    return tuple(str(v) for v in _sequence(value, field, record_id))


def _record_id(record: Mapping[str, Any]) -> str | None:
    for key in ("id", "_id", "match_id"):
        value = record.get(key)
        if value is not None and value != "":
            return str(value)
    return None


def parse_event(record: Mapping[str, Any], match_id: str | None = None) -> MatchEvent:
    """Build a :class:`MatchEvent` from a stored event mapping.

    Args:
        record: Event mapping with ``type``, ``player``, ``team`` and
            ``minute`` keys.
        match_id: Identifier of the owning match, used in error messages.

    Returns:
        The parsed event.

    Raises:
        MalformedRecordError: If the event is not an object, the category
            is missing or unknown, or the minute is not an integer.
    """
    if not isinstance(record, Mapping):
        msg = f"match {match_id!r}: event must be an object, got {type(record).__name__}"
        raise MalformedRecordError(msg, record_id=match_id)
    raw_type = record.get("type")
    try:
        category = EventCategory(raw_type)
    except ValueError:
        msg = f"match {match_id!r}: unknown event type {raw_type!r}"
        raise MalformedRecordError(msg, record_id=match_id) from None

    minute = record.get("minute")
    if minute is not None:
        try:
            minute = int(minute)
        except (TypeError, ValueError):
            msg = f"match {match_id!r}: event minute {minute!r} is not an integer"
            raise MalformedRecordError(msg, record_id=match_id) from None

    player = record.get("player") or None
    return MatchEvent(
        category=category,
        player=str(player) if player is not None else None,
        team=_optional_str(record.get("team")),
        minute=minute,
    )


def parse_match(record: Mapping[str, Any]) -> Match:
    """Build a validated :class:`Match` from a stored match document.

    A record without an identifier receives one derived from its date and
    team names.

    Args:
        record: Match document (see module docstring).

    Returns:
        The parsed match.

    Raises:
        MalformedRecordError: If a required field is missing or invalid.
    """
    if not isinstance(record, Mapping):
        msg = f"match record must be an object, got {type(record).__name__}"
        raise MalformedRecordError(msg)
    record_id = _record_id(record)
    teams = _mapping(record.get("teams"), "teams", record_id)
    score = _mapping(record.get("score"), "score", record_id)
    home = teams.get("home")
    away = teams.get("away")

    if not home or not away:
        msg = f"match {record_id!r}: teams.home and teams.away are required"
        raise MalformedRecordError(msg, record_id=record_id)

    try:
        date = parse_date(record.get("date"))
    except ValueError as exc:
        msg = f"match {record_id!r}: {exc}"
        raise MalformedRecordError(msg, record_id=record_id) from exc

    home_score = score.get("home")
    away_score = score.get("away")
    if home_score is None or away_score is None:
        msg = f"match {record_id!r}: score.home and score.away are required"
        raise MalformedRecordError(msg, record_id=record_id)

    match_id = record_id or f"{date.isoformat()}:{home}-{away}"
    lineup = _mapping(record.get("lineUp"), "lineUp", record_id)
    events = _sequence(record.get("events"), "events", record_id)

    return Match(
        match_id=match_id,
        date=date,
        competition=_optional_str(record.get("competition")),
        season=_optional_str(record.get("season")),
        home_team=str(home),
        away_team=str(away),
        home_score=home_score,
        away_score=away_score,
        location=_optional_str(record.get("location")),
        referees=_names(record.get("referees"), "referees", record_id),
        events=tuple(parse_event(e, match_id) for e in events),
        home_lineup=_names(lineup.get("home"), "lineUp.home", record_id),
        away_lineup=_names(lineup.get("away"), "lineUp.away", record_id),
    )


def parse_matches(
    records: Iterable[Mapping[str, Any]],
    on_malformed: str = "skip",
) -> list[Match]:
    """Parse a batch of stored documents.

    Args:
        records: Match documents.
        on_malformed: ``"raise"`` to fail the whole batch on the first
            malformed record, ``"skip"`` to log and drop it.

    Returns:
        Parsed matches in input order.

    Raises:
        ValueError: If *on_malformed* is not a known policy.
        MalformedRecordError: On a malformed record under ``"raise"``.
    """
    if on_malformed not in MALFORMED_POLICIES:
        msg = f"on_malformed must be one of {MALFORMED_POLICIES}, got {on_malformed!r}"
        raise ValueError(msg)

    matches: list[Match] = []
    skipped = 0
    for record in records:
        try:
            matches.append(parse_match(record))
        except MalformedRecordError as exc:
            if on_malformed == "raise":
                raise
            skipped += 1
            logger.warning("Skipping malformed match record: %s", exc)

    if skipped:
        logger.info("Parsed %d matches, skipped %d malformed", len(matches), skipped)
    return matches


def match_to_record(match: Match) -> dict[str, Any]:
    """Convert a :class:`Match` back to its stored document shape."""
    return {
        "id": match.match_id,
        "date": match.date.isoformat(),
        "competition": match.competition,
        "season": match.season,
        "teams": {"home": match.home_team, "away": match.away_team},
        "score": {"home": match.home_score, "away": match.away_score},
        "location": match.location,
        "referees": list(match.referees),
        "events": [
            {
                "type": e.category.value,
                "player": e.player,
                "team": e.team,
                "minute": e.minute,
            }
            for e in match.events
        ],
        "lineUp": {"home": list(match.home_lineup), "away": list(match.away_lineup)},
    }


def load_matches(path: Path, on_malformed: str = "skip") -> list[Match]:
    """Load a JSON array of match documents from *path*.

    Raises:
        AdapterError: If the file cannot be read or is not a JSON array.
    """
    try:
        payload = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        msg = f"Cannot load matches from {path}: {exc}"
        raise AdapterError(msg) from exc

    if not isinstance(payload, list):
        msg = f"Expected a JSON array of matches in {path}"
        raise AdapterError(msg)

    matches = parse_matches(payload, on_malformed=on_malformed)
    logger.debug("Loaded %d matches from %s", len(matches), path)
    return matches


def dump_matches(matches: Iterable[Match], path: Path) -> None:
    """Write *matches* to *path* as an indented JSON array."""
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [match_to_record(m) for m in matches]
    path.write_bytes(orjson.dumps(records, option=orjson.OPT_INDENT_2))
