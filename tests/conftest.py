"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Iterable, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameSession


# ============================================================================
# Helpers
# ============================================================================

class FakeClock:
    """Manually advanced clock for timing tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_board(
    height: int, width: int, mines: Iterable[Tuple[int, int]]
) -> Board:
    """Build a board with a fixed mine layout and computed counts."""
    mines = list(mines)
    board = Board(BoardConfig(width=width, height=height, num_mines=len(mines)))
    board.place_mines(mines)
    board.calculate_adjacency()
    return board


def rig_session(session: GameSession, mines: Iterable[Tuple[int, int]]) -> None:
    """Swap a session's random board for a fixed layout of the same size."""
    config = session.config
    session._board = make_board(config.height, config.width, mines)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a generated reference board (18x27, 100 mines)."""
    return Board.generate(BoardConfig(), random.Random(7))


@pytest.fixture
def corner_mine_board() -> Board:
    """4x4 board with a single mine in the top-left corner."""
    return make_board(4, 4, [(0, 0)])


@pytest.fixture
def split_board() -> Board:
    """
    5x5 board with a wall of mines down column 2.

    The left and right zero regions are separated by the wall.
    """
    return make_board(5, 5, [(row, 2) for row in range(5)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return make_board(5, 5, [])


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(clock: FakeClock) -> GameSession:
    """4x4 session rigged with one mine at (0, 0)."""
    game = GameSession(
        BoardConfig(width=4, height=4, num_mines=1),
        clock=clock,
        rng=random.Random(3),
    )
    rig_session(game, [(0, 0)])
    return game


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
