"""Root-level pytest configuration and shared fixtures.

This module provides:
- Automatic sys.path configuration for all tests
- Shared fixtures available to all test modules
- Paths to the SGF records under ``tests/data``
"""
from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

# ---------------------------------------------------------------------------
# Path Configuration (automatically applied to all tests)
# ---------------------------------------------------------------------------

# Add project root to sys.path so imports work from any test directory
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from api.gtp_interface import GTPController  # noqa: E402
from core.grid import Grid, Point, Stone  # noqa: E402

DATA_DIR = Path(__file__).resolve().parent / "data"


# ---------------------------------------------------------------------------
# Board Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_grid() -> Callable[[int, Optional[List[Tuple[int, int, int]]]], Grid]:
    """Factory fixture to create grids with stones at specified positions.

    Usage:
        grid = make_grid(5, [(2, 2, 1), (0, 0, -1)])  # black at (2,2), white at (0,0)

    Args:
        size: Board size (e.g., 5, 9, 19)
        stones: List of (x, y, color) tuples where color is 1 (black) or -1 (white)
    """
    def _make_grid(size: int, stones: Optional[List[Tuple[int, int, int]]] = None) -> Grid:
        grid = Grid(size)
        for x, y, color in stones or []:
            grid.set(Point(x, y), Stone(color))
        return grid
    return _make_grid


# ---------------------------------------------------------------------------
# SGF Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def data_dir() -> Path:
    """Directory holding the SGF fixture records."""
    return DATA_DIR


@pytest.fixture
def basic_sgf() -> str:
    """13x13 record: four black star points and one white stone."""
    return (DATA_DIR / "basic.sgf").read_text(encoding="utf-8")


@pytest.fixture
def one_capture_sgf() -> str:
    """9x9 record ending in a single-stone capture."""
    return (DATA_DIR / "one-capture.sgf").read_text(encoding="utf-8")


@pytest.fixture
def simple_sgf_content() -> str:
    """Return a simple 9x9 SGF game string."""
    return "(;GM[1]FF[4]SZ[9]KM[7.5]RU[Chinese];B[ee];W[gc];B[cg])"


# ---------------------------------------------------------------------------
# Engine Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_engine() -> Callable[..., Tuple[GTPController, io.StringIO]]:
    """Build a controller whose engine replies are scripted in advance.

    Usage:
        controller, sent = scripted_engine("=", "= C3")

    Each reply is terminated with the blank line GTP requires. ``sent``
    collects everything the controller wrote.
    """
    def _make(*replies: str, use_ids: bool = False) -> Tuple[GTPController, io.StringIO]:
        rfile = io.StringIO("".join(reply + "\n\n" for reply in replies))
        wfile = io.StringIO()
        return GTPController(rfile, wfile, use_ids=use_ids), wfile
    return _make


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo ``setup_logging`` calls made by the CLI under test."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Pytest Configuration
# ---------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
