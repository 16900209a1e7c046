"""SGF file/string to final board conversion."""
from __future__ import annotations

from typing import Any, Dict

from core.game_record import GameData, get_game_data
from input.sgf_parser import read_sgf


def load_game_data(path: str) -> GameData:
    """Read the SGF file at ``path`` and return the final board."""
    return get_game_data(read_sgf(path))


def convert(path: str) -> Dict[str, Any]:
    """High level convenience wrapper returning JSON friendly data."""
    return load_game_data(path).to_dict()


def convert_from_string(sgf_content: str) -> Dict[str, Any]:
    """Same as :func:`convert` for SGF text already in memory."""
    return get_game_data(sgf_content).to_dict()


__all__ = ["convert", "convert_from_string", "load_game_data"]
