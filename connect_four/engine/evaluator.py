"""
Heuristic board evaluation for the minimax search.

Scores are from the perspective player's point of view and symmetric around
zero: swapping the perspective negates every window contribution. The center
bonus is the only asymmetric term, it only rewards the perspective player.
"""

from itertools import product
from typing import Dict, List, Tuple

from connect_four.engine.board import (
    BoardState, Coord, Player, ROWS, COLS, WIN_LENGTH, CENTER_COL, EMPTY
)

# --- Scoring System ---
WIN_SCORE = 100_000
THREE_IN_ROW = 100
TWO_IN_ROW = 10
CENTER_BONUS = 3


def _build_windows() -> List[Tuple[Coord, ...]]:
    windows = []
    span = range(WIN_LENGTH)
    # Horizontal
    for r in range(ROWS):
        for c in range(COLS - WIN_LENGTH + 1):
            windows.append(tuple((r, c + i) for i in span))
    # Vertical
    for c in range(COLS):
        for r in range(ROWS - WIN_LENGTH + 1):
            windows.append(tuple((r + i, c) for i in span))
    # Diagonal /
    for r in range(WIN_LENGTH - 1, ROWS):
        for c in range(COLS - WIN_LENGTH + 1):
            windows.append(tuple((r - i, c + i) for i in span))
    # Diagonal \
    for r in range(ROWS - WIN_LENGTH + 1):
        for c in range(COLS - WIN_LENGTH + 1):
            windows.append(tuple((r + i, c + i) for i in span))
    return windows


# 24 horizontal + 21 vertical + 12 + 12 diagonal = 69 windows
WINDOWS = _build_windows()
# Same windows as indexes into the row-major flattened grid
FLAT_WINDOWS = [tuple(r * COLS + c for r, c in window) for window in WINDOWS]


def score_window(cells, player: Player) -> int:
    own = 0
    opp = 0
    for v in cells:
        if v == EMPTY:
            continue
        if v == player:
            own += 1
        else:
            opp += 1

    # Mixed windows can never be completed by either side
    if own and opp:
        return 0

    empty = WIN_LENGTH - own - opp
    if own:
        if own == 4:
            return WIN_SCORE
        if own == 3 and empty == 1:
            return THREE_IN_ROW
        if own == 2 and empty == 2:
            return TWO_IN_ROW
        return 0
    if opp:
        if opp == 4:
            return -WIN_SCORE
        if opp == 3 and empty == 1:
            return -THREE_IN_ROW
        if opp == 2 and empty == 2:
            return -TWO_IN_ROW
    return 0


# Score of every possible window content, per perspective player
WINDOW_SCORES: Dict[Player, Dict[Tuple[int, ...], int]] = {
    player: {cells: score_window(cells, player) for cells in product((EMPTY, *Player), repeat=WIN_LENGTH)}
    for player in Player
}


def evaluate(state: BoardState, player: Player) -> int:
    # Decided games
    if state.winner is not None:
        return WIN_SCORE if state.winner == player else -WIN_SCORE
    if state.is_draw:
        return 0

    grid = state.grid
    flat = [v for row in grid for v in row]
    table = WINDOW_SCORES[player]
    score = 0
    for a, b, c, d in FLAT_WINDOWS:
        score += table[(flat[a], flat[b], flat[c], flat[d])]

    # Center control
    for r in range(ROWS):
        if grid[r][CENTER_COL] == player:
            score += CENTER_BONUS

    return score
