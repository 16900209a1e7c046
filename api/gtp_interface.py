"""Go Text Protocol (GTP) controller for an external engine.

The controller writes one command per line to the engine and reads the reply,
which ends with an empty line.  It does not start or supervise the engine; the
caller passes the text streams connected to it (for example the ``stdout`` and
``stdin`` of a ``subprocess.Popen`` opened in text mode).

Vertices are exchanged as 1-based ``(x, y)`` points.  ``x`` maps to the column
letter (``I`` is skipped) and ``y`` to the row number.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple, Union

from core.grid import Point
from monitoring.performance import PerformanceMonitor

COLUMN_LETTERS = "ABCDEFGHJKLMNOPQRSTUVWXYZ"


class GTPError(RuntimeError):
    """Raised when the engine closes the stream or sends an unreadable reply."""


@dataclass
class GTPResponse:
    """A parsed engine reply."""

    success: bool
    text: str
    ident: Optional[int] = None

    def vertices(self) -> List[Optional[Point]]:
        """Interpret the reply as a whitespace separated vertex list."""
        return [parse_vertex(token) for token in self.text.split()]


def format_vertex(point: Optional[Tuple[int, int]]) -> str:
    """Return the GTP vertex for a 1-based ``point`` (``None`` is a pass)."""
    if point is None:
        return "pass"
    x, y = point
    if not 1 <= x <= len(COLUMN_LETTERS) or y < 1:
        raise ValueError("vertex out of range: %r" % (point,))
    return "%s%d" % (COLUMN_LETTERS[x - 1], y)


def parse_vertex(token: str) -> Optional[Point]:
    """Return the 1-based point for ``token``, or ``None`` for ``pass``."""
    token = token.strip().upper()
    if token == "PASS":
        return None
    if len(token) < 2:
        raise ValueError("invalid vertex: %r" % token)
    x = COLUMN_LETTERS.find(token[0])
    if x == -1:
        raise ValueError("invalid vertex column: %r" % token)
    y = int(token[1:])
    if y < 1:
        raise ValueError("invalid vertex row: %r" % token)
    return Point(x + 1, y)


class GTPController:
    """Send commands to a GTP engine and parse its replies."""

    def __init__(self, rfile: TextIO, wfile: TextIO, use_ids: bool = False) -> None:
        """Use ``rfile`` for engine output and ``wfile`` for engine input."""
        self.rfile = rfile
        self.wfile = wfile
        self.use_ids = use_ids
        self._next_id = 1

    # ------------------------------------------------------------------
    # Low level protocol
    # ------------------------------------------------------------------
    def send(self, command: str, *args: Union[str, int]) -> GTPResponse:
        """Send ``command`` with ``args`` and block until the reply arrives."""
        parts = [command] + [str(a) for a in args]
        ident: Optional[int] = None
        if self.use_ids:
            ident = self._next_id
            self._next_id += 1
            parts.insert(0, str(ident))
        line = " ".join(parts)
        with PerformanceMonitor(command):
            logging.info("gtp: %s", line)
            self.wfile.write(line + "\n")
            self.wfile.flush()
            response = self._read_response()
        logging.info("gtp resp: %s '%s'", "=" if response.success else "?", response.text)
        if ident is not None and response.ident is not None and response.ident != ident:
            raise GTPError("response id %d does not match command id %d" % (response.ident, ident))
        return response

    def _read_response(self) -> GTPResponse:
        lines: List[str] = []
        while True:
            line = self.rfile.readline()
            if not line:
                raise GTPError("engine closed the stream")
            line = line.rstrip("\r\n")
            if not line.strip():
                if lines:
                    break
                # Blank lines between replies are allowed.
                continue
            lines.append(line)
        return self._parse_response(lines)

    @staticmethod
    def _parse_response(lines: List[str]) -> GTPResponse:
        head = lines[0]
        if head[0] not in "=?":
            raise GTPError("malformed response: %r" % head)
        success = head[0] == "="
        rest = head[1:]
        ident: Optional[int] = None
        digits = ""
        while rest and rest[0].isdigit():
            digits += rest[0]
            rest = rest[1:]
        if digits:
            ident = int(digits)
        text = "\n".join([rest.strip()] + lines[1:]).strip()
        return GTPResponse(success, text, ident)

    # ------------------------------------------------------------------
    # Engine commands
    # ------------------------------------------------------------------
    def set_board_size(self, board_size: int) -> bool:
        return self.send("boardsize", board_size).success

    def clear_board(self) -> bool:
        return self.send("clear_board").success

    def list_stones(self, colour: str) -> List[Point]:
        """Return the 1-based points occupied by ``colour``."""
        resp = self.send("list_stones", colour)
        if not resp.success:
            raise GTPError("list_stones failed: %s" % resp.text)
        return [p for p in resp.vertices() if p is not None]

    def play(self, colour: str, point: Optional[Tuple[int, int]]) -> bool:
        """Play ``colour`` at the 1-based ``point``. Returns ``True`` if accepted."""
        resp = self.send("play", colour, format_vertex(point))
        return resp.success and resp.text == ""

    def captures(self, colour: str) -> int:
        """Return the number of stones captured by ``colour``."""
        resp = self.send("captures", colour)
        try:
            return int(resp.text)
        except ValueError as exc:
            raise GTPError("bad captures reply: %r" % resp.text) from exc

    def undo(self) -> bool:
        resp = self.send("undo")
        return resp.success and resp.text == ""

    def genmove(self, colour: str) -> Optional[Point]:
        """Ask the engine for a move, returning ``None`` on pass or resignation."""
        resp = self.send("genmove", colour)
        if not resp.success:
            raise GTPError("genmove failed: %s" % resp.text)
        if resp.text.lower() == "resign":
            return None
        return parse_vertex(resp.text)

    def quit(self) -> None:
        self.send("quit")


__all__ = [
    "COLUMN_LETTERS",
    "GTPController",
    "GTPError",
    "GTPResponse",
    "format_vertex",
    "parse_vertex",
]
