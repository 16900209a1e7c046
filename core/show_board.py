"""Utility functions to render a Go board in a human readable form."""
from core.game_record import GameData

SYMBOLS = {0: '.', 1: 'X', -1: 'O'}


def board_to_string(game: GameData) -> str:
    """Return a string representation of the final board of ``game``."""
    size = game.size
    board = [[0] * size for _ in range(size)]
    for x, y in game.black_stones:
        board[y - 1][x - 1] = 1
    for x, y in game.white_stones:
        board[y - 1][x - 1] = -1
    lines = []
    header = '   ' + ' '.join(f"{i:2d}" for i in range(1, size + 1))
    lines.append(header)
    for y in range(size):
        row = [f"{SYMBOLS[board[y][x]]:>2}" for x in range(size)]
        lines.append(f"{y+1:2d} " + ' '.join(row))
    return '\n'.join(lines)


def render_board(game: GameData) -> None:
    """Print the board to stdout."""
    print(board_to_string(game))
