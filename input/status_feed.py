"""Parser for the Dragon Go Server ``quick_status.php?version=2`` feed.

The feed is CSV without a header.  Each row starts with a type tag; only game
rows (tag starting with ``G``) are kept.  String fields are wrapped in single
quotes, e.g.::

    G,1234,'opponent','B','2024-03-01 10:20:30','F: 2d 5h (+ 1d)',0,'PLAY',17,0,0,'GO',0,'2024-03-01 09:00:00',0
"""
from __future__ import annotations

import csv
import io
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

FIELDS = [
    "g",
    "game_id",
    "opponent_handle",
    "player_color",
    "lastmove_date",
    "time_remaining",
    "game_action",
    "game_status",
    "move_id",
    "tournament_id",
    "shape_id",
    "game_type",
    "game_prio",
    "opponent_lastaccess_date",
    "handicap",
]

_TIME_UNITS = {"d": "days", "h": "hours"}


class StatusFeedError(ValueError):
    """Raised when a status feed row cannot be interpreted."""


@dataclass
class GameRecord:
    """One running game from the status feed."""

    g: str
    game_id: str
    opponent_handle: str
    player_color: str
    lastmove_date: datetime
    time_remaining: timedelta
    game_action: int
    game_status: str
    move_id: int
    tournament_id: int
    shape_id: int
    game_type: str
    game_prio: int
    opponent_lastaccess_date: datetime
    handicap: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["lastmove_date"] = self.lastmove_date.isoformat()
        data["opponent_lastaccess_date"] = self.opponent_lastaccess_date.isoformat()
        data["time_remaining"] = self.time_remaining.total_seconds()
        return data


def _unquote(value: str) -> str:
    return value.strip().replace("'", "")


def parse_date(value: str) -> datetime:
    """Parse ``'YYYY-MM-DD HH:MM:SS'`` as a UTC timestamp."""
    raw = _unquote(value)
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise StatusFeedError("bad date: %r" % raw) from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_time_remaining(value: str) -> timedelta:
    """Parse a Fischer time description like ``F: 2d 5h (+ 1d)``."""
    raw = _unquote(value)
    if not raw.startswith("F"):
        raise StatusFeedError("unsupported time system: %r" % raw)
    start = raw.find(":")
    end = raw.find("(")
    if start == -1:
        raise StatusFeedError("bad time remaining: %r" % raw)
    remaining = raw[start + 1 : end if end != -1 else len(raw)]
    delta = timedelta()
    for piece in remaining.split():
        unit = _TIME_UNITS.get(piece[-1])
        if unit is None:
            raise StatusFeedError("unknown time unit in %r" % piece)
        try:
            amount = int(piece[:-1], 10)
        except ValueError as exc:
            raise StatusFeedError("bad time amount in %r" % piece) from exc
        delta += timedelta(**{unit: amount})
    return delta


def _parse_int(name: str, value: str) -> int:
    try:
        return int(_unquote(value))
    except ValueError as exc:
        raise StatusFeedError("bad %s: %r" % (name, value)) from exc


def parse_game_row(row: List[str]) -> GameRecord:
    """Convert one CSV row into a :class:`GameRecord`."""
    if len(row) < len(FIELDS):
        raise StatusFeedError("expected %d fields, got %d" % (len(FIELDS), len(row)))
    values = dict(zip(FIELDS, row))
    return GameRecord(
        g=_unquote(values["g"]),
        game_id=_unquote(values["game_id"]),
        opponent_handle=_unquote(values["opponent_handle"]),
        player_color=_unquote(values["player_color"]),
        lastmove_date=parse_date(values["lastmove_date"]),
        time_remaining=parse_time_remaining(values["time_remaining"]),
        game_action=_parse_int("game_action", values["game_action"]),
        game_status=_unquote(values["game_status"]),
        move_id=_parse_int("move_id", values["move_id"]),
        tournament_id=_parse_int("tournament_id", values["tournament_id"]),
        shape_id=_parse_int("shape_id", values["shape_id"]),
        game_type=_unquote(values["game_type"]),
        game_prio=_parse_int("game_prio", values["game_prio"]),
        opponent_lastaccess_date=parse_date(values["opponent_lastaccess_date"]),
        handicap=_parse_int("handicap", values["handicap"]),
    )


def parse_status(text: str) -> List[GameRecord]:
    """Return the game records contained in a status feed body."""
    records: List[GameRecord] = []
    for row in csv.reader(io.StringIO(text)):
        if not row or not row[0].strip().startswith("G"):
            continue
        records.append(parse_game_row(row))
    return records


def load_status(path: str) -> List[GameRecord]:
    """Read and parse a status feed saved to ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_status(f.read())


__all__ = [
    "FIELDS",
    "GameRecord",
    "StatusFeedError",
    "load_status",
    "parse_date",
    "parse_game_row",
    "parse_status",
    "parse_time_remaining",
]
