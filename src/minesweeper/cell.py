"""
Cell module for Minesweeper.

Represents individual grid positions with their visibility state
(hidden/revealed/flagged) and content (mine/adjacent count), plus the
read-only view handed out to presentation code.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Read-only Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Immutable snapshot of a cell for rendering.

    Attributes:
        is_mine: Whether the cell holds a mine.
        adjacent_mines: Mines among the up-to-8 neighbours.
        is_revealed: Whether the player has uncovered the cell.
        is_flagged: Whether the player has marked the cell.
    """

    is_mine: bool
    adjacent_mines: int
    is_revealed: bool
    is_flagged: bool


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single mutable cell owned by a board.

    A cell is never both revealed and flagged: both live in ``state``.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if already revealed
            or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def snapshot(self) -> CellView:
        """Return an immutable copy of this cell's state."""
        return CellView(
            is_mine=self.is_mine,
            adjacent_mines=self.adjacent_mines,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
        )

    def to_observation(self) -> int:
        """
        Convert cell to a numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
