"""
Board module for Minesweeper.

Implements the mine grid: mine placement, adjacency counts, the
flood-fill reveal, flagging and the cleared-board check.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellView

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

class InvalidConfigurationError(ValueError):
    """Raised when a board cannot be built from the given parameters."""


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 27
    height: int = 18
    num_mines: int = 100

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfigurationError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfigurationError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines


# 18 x 27 with 100 mines
DEFAULT_CONFIG = BoardConfig(width=27, height=18, num_mines=100)


# ============================================================================
# Reveal Outcome
# ============================================================================

class RevealKind(Enum):
    """What a reveal command did to the board."""

    NO_CHANGE = auto()
    REVEALED = auto()
    MINE_HIT = auto()


@dataclass(frozen=True)
class RevealOutcome:
    """
    Result of a reveal command.

    Attributes:
        kind: Category of the result.
        cells: Coordinates newly revealed by this command. For a mine hit
            this is the mine itself; empty for ``NO_CHANGE``.
    """

    kind: RevealKind
    cells: FrozenSet[Position] = frozenset()

    @classmethod
    def no_change(cls) -> "RevealOutcome":
        return cls(RevealKind.NO_CHANGE)

    @property
    def changed(self) -> bool:
        """Check if any cell changed state."""
        return self.kind != RevealKind.NO_CHANGE

    @property
    def hit_mine(self) -> bool:
        """Check if the command uncovered a mine."""
        return self.kind == RevealKind.MINE_HIT


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Lifecycle: constructed empty, mines placed once, adjacency computed
    once, then only per-cell reveal/flag state changes.
    """

    config: BoardConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    rng: Optional[random.Random] = field(default=None, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _mines_placed: bool = field(default=False, init=False)
    _mine_positions: Tuple[Position, ...] = field(
        default=(), init=False, repr=False
    )
    _safe_revealed: int = field(default=0, init=False)
    _flags: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if self.rng is None:
            self.rng = random.Random()
        self._init_grid()

    @classmethod
    def generate(
        cls, config: BoardConfig, rng: Optional[random.Random] = None
    ) -> "Board":
        """
        Build a ready-to-play board: random mines plus adjacency counts.

        Args:
            config: Board dimensions and mine count.
            rng: Random source (a fresh one when omitted).

        Returns:
            A board with mines placed and counts computed.
        """
        board = cls(config, rng)
        board.place_mines()
        board.calculate_adjacency()
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def place_mines(self, positions: Optional[Iterable[Position]] = None) -> None:
        """
        Place the board's mines.

        Without ``positions`` picks random cells, retrying on duplicates,
        until ``num_mines`` distinct cells hold a mine. With ``positions``
        places exactly those mines.

        Args:
            positions: Optional fixed (row, col) mine layout.

        Raises:
            RuntimeError: If mines were already placed on this board.
            InvalidConfigurationError: If a fixed layout does not match
                the configuration.
        """
        if self._mines_placed:
            raise RuntimeError("Mines already placed on this board")

        if positions is None:
            chosen = self._sample_mine_positions()
        else:
            chosen = self._check_mine_positions(positions)

        for row, col in chosen:
            self._grid[row][col].is_mine = True
        self._mine_positions = tuple(sorted(chosen))
        self._mines_placed = True
        logger.debug(
            "Placed %d mines on %dx%d board",
            len(chosen), self.config.height, self.config.width,
        )

    def _sample_mine_positions(self) -> Set[Position]:
        """Rejection-sample distinct mine positions."""
        chosen: Set[Position] = set()
        while len(chosen) < self.config.num_mines:
            row = self.rng.randrange(self.config.height)
            col = self.rng.randrange(self.config.width)
            chosen.add((row, col))
        return chosen

    def _check_mine_positions(self, positions: Iterable[Position]) -> Set[Position]:
        """Validate a fixed mine layout against the configuration."""
        listed = [(int(row), int(col)) for row, col in positions]
        chosen = set(listed)
        if len(chosen) != len(listed):
            raise InvalidConfigurationError("Duplicate mine positions")
        if len(chosen) != self.config.num_mines:
            raise InvalidConfigurationError(
                f"Expected {self.config.num_mines} mines, got {len(chosen)}"
            )
        for row, col in chosen:
            if not self._is_valid_position(row, col):
                raise InvalidConfigurationError(
                    f"Mine position {(row, col)} is off the board"
                )
        return chosen

    def calculate_adjacency(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                if not self._grid[row][col].is_mine:
                    count = self._count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell at the given position.

        Empty cells (0 adjacent mines) flood-fill to their neighbors
        through an explicit stack, stopping at numbered cells.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            ``NO_CHANGE`` if out of bounds, revealed or flagged;
            ``MINE_HIT`` if the cell holds a mine; otherwise ``REVEALED``
            with every newly revealed position.
        """
        if not self._is_valid_position(row, col):
            return RevealOutcome.no_change()

        cell = self._grid[row][col]
        if not cell.reveal():
            return RevealOutcome.no_change()

        if cell.is_mine:
            logger.debug("Mine hit at %s", (row, col))
            return RevealOutcome(RevealKind.MINE_HIT, frozenset({(row, col)}))

        self._safe_revealed += 1
        revealed = {(row, col)}
        if cell.adjacent_mines == 0:
            self._flood_fill(row, col, revealed)
        logger.debug("Revealed %d cells from %s", len(revealed), (row, col))
        return RevealOutcome(RevealKind.REVEALED, frozenset(revealed))

    def _flood_fill(self, row: int, col: int, revealed: Set[Position]) -> None:
        """Reveal the zero region around (row, col) and its numbered border."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                # Mines are never part of a cascade.
                if neighbor.is_mine or not neighbor.reveal():
                    continue
                self._safe_revealed += 1
                revealed.add((neighbor_row, neighbor_col))
                if neighbor.adjacent_mines == 0:
                    stack.append((neighbor_row, neighbor_col))

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return False
        self._flags += 1 if cell.is_flagged else -1
        return True

    def is_fully_cleared(self) -> bool:
        """Check if all non-mine cells are revealed."""
        return self._safe_revealed == self.config.safe_cells

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, mines included."""
        return sum(
            1 for row in self._grid for cell in row if cell.is_revealed
        )

    @property
    def flag_count(self) -> int:
        return self._flags

    @property
    def mines_remaining(self) -> int:
        """Mine count minus placed flags; negative when over-flagged."""
        return self.config.num_mines - self._flags

    def all_mine_coordinates(self) -> Tuple[Position, ...]:
        """Mine positions in row-major order."""
        return self._mine_positions

    def get_cell(self, row: int, col: int) -> Optional[CellView]:
        """Get a snapshot of the cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col].snapshot()

    def is_mine(self, row: int, col: int) -> bool:
        return self._is_valid_position(row, col) and self._grid[row][col].is_mine

    def is_revealed(self, row: int, col: int) -> bool:
        return (
            self._is_valid_position(row, col)
            and self._grid[row][col].is_revealed
        )

    def is_flagged(self, row: int, col: int) -> bool:
        return (
            self._is_valid_position(row, col)
            and self._grid[row][col].is_flagged
        )

    def adjacent_mine_count(self, row: int, col: int) -> int:
        if not self._is_valid_position(row, col):
            return 0
        return self._grid[row][col].adjacent_mines

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row in range(self.config.height):
            for col in range(self.config.width):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells a reveal would act on.

        Returns:
            List of hidden, unflagged (row, col) positions.
        """
        actions = []
        for row in range(self.config.height):
            for col in range(self.config.width):
                if self._grid[row][col].is_hidden:
                    actions.append((row, col))
        return actions


# ============================================================================
# Read-only Board View
# ============================================================================

class BoardView:
    """
    Query-only facade over a board.

    Handed to presentation code so it can read every cell without
    being able to mutate the grid.
    """

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def config(self) -> BoardConfig:
        return self._board.config

    @property
    def height(self) -> int:
        return self._board.config.height

    @property
    def width(self) -> int:
        return self._board.config.width

    @property
    def num_mines(self) -> int:
        return self._board.config.num_mines

    @property
    def revealed_count(self) -> int:
        return self._board.revealed_count

    @property
    def flag_count(self) -> int:
        return self._board.flag_count

    @property
    def mines_remaining(self) -> int:
        return self._board.mines_remaining

    def get_cell(self, row: int, col: int) -> Optional[CellView]:
        return self._board.get_cell(row, col)

    def is_mine(self, row: int, col: int) -> bool:
        return self._board.is_mine(row, col)

    def is_revealed(self, row: int, col: int) -> bool:
        return self._board.is_revealed(row, col)

    def is_flagged(self, row: int, col: int) -> bool:
        return self._board.is_flagged(row, col)

    def adjacent_mine_count(self, row: int, col: int) -> int:
        return self._board.adjacent_mine_count(row, col)

    def is_fully_cleared(self) -> bool:
        return self._board.is_fully_cleared()

    def all_mine_coordinates(self) -> Tuple[Position, ...]:
        return self._board.all_mine_coordinates()

    def get_observation(self) -> np.ndarray:
        return self._board.get_observation()

    def get_valid_actions(self) -> List[Position]:
        return self._board.get_valid_actions()
