"""SGF reading: flatten a game collection into an ordered list of property events."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from sgfmill import sgf_grammar


class MalformedGameRecord(ValueError):
    """Raised when a game record cannot be interpreted."""


class EventKind(Enum):
    SIZE = "SZ"
    WHITE_MOVE = "W"
    BLACK_MOVE = "B"
    ADD_WHITE = "AW"
    ADD_BLACK = "AB"
    OTHER = "other"


_KINDS_BY_IDENT = {kind.value: kind for kind in EventKind if kind is not EventKind.OTHER}


@dataclass
class PropertyEvent:
    """A single SGF property in document order."""

    kind: EventKind
    identifier: str
    values: List[bytes] = field(default_factory=list)

    @classmethod
    def from_property(cls, identifier: str, values: Sequence[bytes]) -> "PropertyEvent":
        kind = _KINDS_BY_IDENT.get(identifier, EventKind.OTHER)
        return cls(kind, identifier, list(values))

    def __str__(self) -> str:
        raw = "".join("[%s]" % v.decode("utf-8", "replace") for v in self.values)
        return "%s%s" % (self.identifier, raw)


def parse_collection(raw_sgf: Union[str, bytes]) -> List[sgf_grammar.Coarse_game_tree]:
    """Parse ``raw_sgf`` into sgfmill coarse game trees."""
    if isinstance(raw_sgf, str):
        raw_sgf = raw_sgf.encode("utf-8")
    try:
        return sgf_grammar.parse_sgf_collection(raw_sgf)
    except ValueError as exc:
        raise MalformedGameRecord("unparseable SGF: %s" % exc) from exc


def _tree_properties(tree: sgf_grammar.Coarse_game_tree) -> List[Tuple[str, List[bytes]]]:
    output: List[Tuple[str, List[bytes]]] = []
    for node in tree.sequence:
        output.extend(node.items())
    for child in tree.children:
        output.extend(_tree_properties(child))
    return output


def flatten_properties(trees: Sequence[sgf_grammar.Coarse_game_tree]) -> List[Tuple[str, List[bytes]]]:
    """Return ``(identifier, values)`` pairs in depth-first pre-order.

    A node's own properties come before its variations, and top-level games
    follow each other in document order.
    """
    output: List[Tuple[str, List[bytes]]] = []
    for tree in trees:
        output.extend(_tree_properties(tree))
    return output


def iter_events(raw_sgf: Union[str, bytes]) -> List[PropertyEvent]:
    """Parse ``raw_sgf`` and return its property events in document order."""
    events = []
    for identifier, values in flatten_properties(parse_collection(raw_sgf)):
        event = PropertyEvent.from_property(identifier, values)
        if event.kind is EventKind.OTHER:
            logging.info("Other prop: %s", event)
        events.append(event)
    return events


def read_sgf(sgf_file_path: str) -> bytes:
    """Return the raw bytes of an SGF file."""
    with open(sgf_file_path, "rb") as f:
        return f.read()


def single_value(event: PropertyEvent) -> Optional[bytes]:
    """Return the only value of ``event`` (``None`` if it has none)."""
    if not event.values:
        return None
    if len(event.values) > 1:
        raise MalformedGameRecord("%s expects a single value, got %d" % (event.identifier, len(event.values)))
    return event.values[0]


__all__ = [
    "EventKind",
    "MalformedGameRecord",
    "PropertyEvent",
    "flatten_properties",
    "iter_events",
    "parse_collection",
    "read_sgf",
    "single_value",
]
