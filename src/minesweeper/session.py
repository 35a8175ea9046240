"""
Game session module.

Owns one board and drives the win/loss state machine, the play timer
and the explosion marker recorded on a loss.
"""
import logging
import random
import time
from enum import Enum, auto
from typing import Callable, Optional, Tuple

from .board import (
    DEFAULT_CONFIG,
    Board,
    BoardConfig,
    BoardView,
    RevealKind,
    RevealOutcome,
)
from .explosion import ticks_between

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of a session."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    A single game of Minesweeper.

    Accepts reveal/flag commands while in progress; once won or lost the
    board is frozen until ``restart``. Time comes from ``clock`` so the
    session has no frame-rate assumptions.
    """

    def __init__(
        self,
        config: BoardConfig = DEFAULT_CONFIG,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Start a new game.

        Args:
            config: Board dimensions and mine count.
            clock: Returns the current time in seconds.
            rng: Random source for mine placement.
        """
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._start(config)

    def _start(self, config: BoardConfig) -> None:
        """Replace the board and reset every timer and status field."""
        self._config = config
        self._board = Board.generate(config, self._rng)
        self._status = GameStatus.IN_PROGRESS
        self._start_time = self._clock()
        self._end_time: Optional[float] = None
        self._explosion_start_time: Optional[float] = None

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The board's outcome, or ``NO_CHANGE`` when the game is over.
        """
        if self._status != GameStatus.IN_PROGRESS:
            return RevealOutcome.no_change()

        outcome = self._board.reveal(row, col)
        if outcome.kind == RevealKind.MINE_HIT:
            self._finish(GameStatus.LOST)
            self._explosion_start_time = self._end_time
        elif outcome.kind == RevealKind.REVEALED and self._board.is_fully_cleared():
            self._finish(GameStatus.WON)
        return outcome

    def toggle_flag(self, row: int, col: int) -> bool:
        """Toggle a flag; ignored once the game is over."""
        if self._status != GameStatus.IN_PROGRESS:
            return False
        return self._board.toggle_flag(row, col)

    def restart(
        self,
        height: Optional[int] = None,
        width: Optional[int] = None,
        num_mines: Optional[int] = None,
    ) -> None:
        """
        Discard the current game and start a fresh one.

        Omitted parameters keep the current configuration.

        Raises:
            InvalidConfigurationError: If the new parameters are invalid.
                The current game is left untouched.
        """
        config = BoardConfig(
            width=self._config.width if width is None else width,
            height=self._config.height if height is None else height,
            num_mines=self._config.num_mines if num_mines is None else num_mines,
        )
        self._start(config)
        logger.info(
            "Restarted %dx%d game with %d mines",
            config.height, config.width, config.num_mines,
        )

    def _finish(self, status: GameStatus) -> None:
        self._status = status
        self._end_time = self._clock()
        logger.info(
            "Game %s after %.1f seconds", status.name.lower(), self.elapsed_seconds
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_in_progress(self) -> bool:
        return self._status == GameStatus.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        return self._status == GameStatus.LOST

    @property
    def config(self) -> BoardConfig:
        return self._config

    @property
    def board(self) -> BoardView:
        """Read-only view of the current board."""
        return BoardView(self._board)

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def explosion_start_time(self) -> Optional[float]:
        """Clock reading when a mine was hit, or None unless lost."""
        return self._explosion_start_time

    @property
    def elapsed_seconds(self) -> float:
        """Play time, frozen once the game is won or lost."""
        end = self._end_time if self._end_time is not None else self._clock()
        return end - self._start_time

    def explosion_ticks(
        self, tick_rate: float, now: Optional[float] = None
    ) -> Optional[int]:
        """
        Ticks elapsed since the explosion.

        Args:
            tick_rate: Renderer ticks per second.
            now: Clock reading to measure to (defaults to the clock).

        Returns:
            Whole ticks since the mine was hit, or None unless lost.
        """
        if self._explosion_start_time is None:
            return None
        if now is None:
            now = self._clock()
        return ticks_between(self._explosion_start_time, now, tick_rate)

    def all_mine_coordinates(self) -> Tuple[Tuple[int, int], ...]:
        return self._board.all_mine_coordinates()
