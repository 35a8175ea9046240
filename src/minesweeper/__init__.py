"""
Minesweeper game engine.

Provides the board, the game session state machine and the
presentation adapters built on top of them.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    BoardView,
    DEFAULT_CONFIG,
    InvalidConfigurationError,
    RevealKind,
    RevealOutcome,
)
from .session import GameSession, GameStatus
from .explosion import DEFAULT_EXPLOSION, ExplosionAnimation, ticks_between
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "BoardView",
    "DEFAULT_CONFIG",
    "InvalidConfigurationError",
    "RevealKind",
    "RevealOutcome",
    "GameSession",
    "GameStatus",
    "DEFAULT_EXPLOSION",
    "ExplosionAnimation",
    "ticks_between",
    "MinesweeperEnv",
]
