"""
Text console front end.

Renders a session as ASCII, parses typed commands and runs the
interactive loop. Everything here goes through the session's public
command and query methods.
"""
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .board import BoardView
from .explosion import DEFAULT_EXPLOSION, ExplosionAnimation
from .session import GameSession


# ============================================================================
# Constants
# ============================================================================

HIDDEN_GLYPH = "."
FLAG_GLYPH = "F"
MINE_GLYPH = "*"
# One glyph per explosion frame; frame 0 matches a revealed mine.
EXPLOSION_GLYPHS = "*oO@#%&$x."

DEFAULT_TICK_RATE = 30.0

PROMPT = "> "
HELP = (
    "Commands: r ROW COL (reveal), f ROW COL (flag), "
    "n (new game), q (quit)"
)

REVEAL = "reveal"
FLAG = "flag"
RESTART = "restart"
QUIT = "quit"

_ACTIONS = {
    "r": REVEAL,
    "reveal": REVEAL,
    "f": FLAG,
    "flag": FLAG,
    "n": RESTART,
    "new": RESTART,
    "restart": RESTART,
    "q": QUIT,
    "quit": QUIT,
    "exit": QUIT,
}


# ============================================================================
# Rendering
# ============================================================================

def format_elapsed(seconds: float) -> str:
    """Format whole elapsed seconds as MM:SS."""
    whole = max(0, int(seconds))
    minutes, secs = divmod(whole, 60)
    return f"{minutes:02d}:{secs:02d}"


def _cell_glyph(view: BoardView, row: int, col: int, frame: Optional[int]) -> str:
    cell = view.get_cell(row, col)
    if frame is not None and cell.is_mine:
        return EXPLOSION_GLYPHS[frame % len(EXPLOSION_GLYPHS)]
    if cell.is_revealed:
        if cell.is_mine:
            return MINE_GLYPH
        if cell.adjacent_mines == 0:
            return " "
        return str(cell.adjacent_mines)
    if cell.is_flagged:
        return FLAG_GLYPH
    return HIDDEN_GLYPH


def render_board(view: BoardView, explosion_frame: Optional[int] = None) -> str:
    """
    Render board as ASCII string.

    Args:
        view: Board to draw.
        explosion_frame: Current explosion frame; when set every mine is
            drawn with that frame's glyph.

    Returns:
        One line per row, each cell followed by a space.
    """
    lines = []
    for row in range(view.height):
        row_str = ""
        for col in range(view.width):
            row_str += _cell_glyph(view, row, col, explosion_frame) + " "
        lines.append(row_str)
    return "\n".join(lines)


def render_status(session: GameSession) -> str:
    """Timer, mine counter and end-of-game banner."""
    parts = [
        format_elapsed(session.elapsed_seconds),
        f"Mines: {session.board.mines_remaining}",
    ]
    if session.is_lost:
        parts.append("You Lost!")
    elif session.is_won:
        parts.append("You Won!")
    return "  ".join(parts)


def render_screen(session: GameSession) -> str:
    return render_status(session) + "\n" + render_board(session.board)


# ============================================================================
# Commands
# ============================================================================

@dataclass(frozen=True)
class Command:
    """A parsed console command."""

    action: str
    row: int = 0
    col: int = 0


def parse_command(text: str) -> Optional[Command]:
    """
    Parse one line of input.

    Returns:
        The command, or None if the line is not understood.
    """
    words = text.strip().lower().split()
    if not words or words[0] not in _ACTIONS:
        return None

    action = _ACTIONS[words[0]]
    if action in (RESTART, QUIT):
        return Command(action) if len(words) == 1 else None

    if len(words) != 3:
        return None
    try:
        row, col = int(words[1]), int(words[2])
    except ValueError:
        return None
    return Command(action, row, col)


# ============================================================================
# Interactive Loop
# ============================================================================

def play_explosion(
    session: GameSession,
    write: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
    tick_rate: float = DEFAULT_TICK_RATE,
    animation: ExplosionAnimation = DEFAULT_EXPLOSION,
) -> int:
    """
    Draw the explosion frames until the animation runs out.

    Returns:
        Number of frames drawn.
    """
    drawn = 0
    while True:
        ticks = session.explosion_ticks(tick_rate)
        if ticks is None:
            return drawn
        frame = animation.frame_at(ticks)
        if frame is None:
            return drawn
        write(render_board(session.board, frame))
        drawn += 1
        sleep(animation.ticks_per_frame / tick_rate)


def run(
    session: GameSession,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
    tick_rate: float = DEFAULT_TICK_RATE,
) -> List[str]:
    """
    Run the read-command/redraw loop until quit or end of input.

    Returns:
        The commands that were executed, by action name.
    """
    executed: List[str] = []
    write(render_screen(session))
    write(HELP)

    while True:
        try:
            line = read_line(PROMPT)
        except EOFError:
            break

        command = parse_command(line)
        if command is None:
            write(HELP)
            continue
        if command.action == QUIT:
            break

        if command.action == RESTART:
            session.restart()
        elif command.action == FLAG:
            session.toggle_flag(command.row, command.col)
        elif command.action == REVEAL:
            outcome = session.reveal(command.row, command.col)
            if outcome.hit_mine:
                play_explosion(session, write, sleep, tick_rate)

        executed.append(command.action)
        write(render_screen(session))

    return executed
