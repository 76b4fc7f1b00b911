import logging
from typing import Optional, Tuple

from connect_four.engine.board import (
    BoardState, Coord, Grid, Move, Player, ROWS, COLS, WIN_LENGTH, EMPTY
)
from connect_four.engine.errors import MoveRejected, RejectReason

# Logger setup
logger = logging.getLogger(__name__)

# Directions: Horizontal, Vertical, Diagonal \, Diagonal /
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]


def new_game() -> BoardState:
    """Fresh board, Player A to move."""
    return BoardState()


def _on_board(r: int, c: int) -> bool:
    return 0 <= r < ROWS and 0 <= c < COLS


def find_winning_line(grid: Grid, r: int, c: int, player: Player) -> Tuple[Coord, ...]:
    """
    Checks for 4-in-a-row through the piece at (r, c).
    For each axis, walks back to the start of the player's run and then
    collects the run going forward. Returns the first run of WIN_LENGTH or
    more cells, or an empty tuple.
    """
    for dr, dc in DIRECTIONS:
        # Walk backward
        sr, sc = r, c
        while _on_board(sr - dr, sc - dc) and grid[sr - dr][sc - dc] == player:
            sr -= dr
            sc -= dc

        # Collect forward
        cells = []
        while _on_board(sr, sc) and grid[sr][sc] == player:
            cells.append((sr, sc))
            sr += dr
            sc += dc

        if len(cells) >= WIN_LENGTH:
            return tuple(cells)
    return ()


def apply_move(state: BoardState, col: int, record: bool = True) -> BoardState:
    """
    Drops a piece for the current mover into the specified column.
    Returns the new state; the given state is left untouched.
    Raises MoveRejected if the game is over, the column is out of range
    or the column is full.

    With record=False the move is not appended to the history and the new
    state shares the parent's history tuple (used by the search).
    """
    if state.is_terminal():
        raise MoveRejected(RejectReason.GAME_ALREADY_OVER, col)
    if not isinstance(col, int) or col < 0 or col >= COLS:
        raise MoveRejected(RejectReason.OUT_OF_RANGE, col)

    row = state.lowest_open_row(col)
    if row is None:
        raise MoveRejected(RejectReason.COLUMN_FULL, col)

    player = state.mover
    # Only the landing row is rebuilt, the others are shared with the parent
    old_row = state.grid[row]
    new_row = old_row[:col] + (player,) + old_row[col + 1:]
    grid = state.grid[:row] + (new_row,) + state.grid[row + 1:]
    if record:
        history = state.history + (Move(player=player, column=col, row=row),)
    else:
        history = state.history

    winning_line = find_winning_line(grid, row, col, player)
    if winning_line:
        return BoardState(
            grid=grid,
            mover=player,
            winner=player,
            winning_line=winning_line,
            last_move=(row, col),
            history=history,
        )

    # Draw is only possible once the top row is filled
    if all(grid[0][c] != EMPTY for c in range(COLS)):
        return BoardState(
            grid=grid,
            mover=player,
            is_draw=True,
            last_move=(row, col),
            history=history,
        )

    return BoardState(
        grid=grid,
        mover=player.other(),
        last_move=(row, col),
        history=history,
    )


def try_move(state: BoardState, col: int) -> Optional[BoardState]:
    """
    Same as apply_move but returns None instead of raising.
    """
    try:
        return apply_move(state, col)
    except MoveRejected as e:
        logger.debug("Move rejected: %s", e)
        return None


def play_moves(columns, state: Optional[BoardState] = None) -> BoardState:
    """Applies a sequence of columns starting from `state` (or a new game)."""
    current = state if state is not None else new_game()
    for col in columns:
        current = apply_move(current, col)
    return current
