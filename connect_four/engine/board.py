from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple

from connect_four.engine.errors import MoveRejected, RejectReason

ROWS = 6
COLS = 7
WIN_LENGTH = 4
CENTER_COL = COLS // 2

EMPTY = 0

Coord = Tuple[int, int]
Grid = Tuple[Tuple[int, ...], ...]


class Player(IntEnum):
    PLAYER_A = 1
    PLAYER_B = 2

    def other(self) -> "Player":
        return Player.PLAYER_B if self is Player.PLAYER_A else Player.PLAYER_A


@dataclass(frozen=True)
class Move:
    player: Player
    column: int
    row: int


def empty_grid() -> Grid:
    return tuple(tuple(EMPTY for _ in range(COLS)) for _ in range(ROWS))


@dataclass(frozen=True)
class BoardState:
    """
    Board uses (row, col) indexing.
    Row 0 is the TOP of the board.
    Row 5 is the BOTTOM of the board.
    Values: 0=Empty, 1=Player A, 2=Player B

    States are never mutated: the move engine builds a new one per move.
    """
    grid: Grid = field(default_factory=empty_grid)
    mover: Player = Player.PLAYER_A
    winner: Optional[Player] = None
    is_draw: bool = False
    winning_line: Tuple[Coord, ...] = ()
    last_move: Optional[Coord] = None
    history: Tuple[Move, ...] = ()

    @classmethod
    def from_fields(
        cls,
        grid: List[List[int]],
        mover: Player,
        winner: Optional[Player] = None,
        is_draw: bool = False,
        history: Optional[List[Move]] = None,
    ) -> "BoardState":
        """
        Rebuilds a state from stored fields without replaying the moves.
        The caller is trusted to respect the gravity and terminal invariants;
        only the shape is checked. The winning line is re-derived from the last
        move when a winner is stored.
        """
        if len(grid) != ROWS or any(len(row) != COLS for row in grid):
            raise ValueError(f"Grid must be {ROWS}x{COLS}")
        if winner is not None and is_draw:
            raise ValueError("A state cannot have both a winner and a draw")

        frozen_grid = tuple(tuple(int(v) for v in row) for row in grid)
        moves = tuple(history or ())
        last_move = (moves[-1].row, moves[-1].column) if moves else None

        winning_line: Tuple[Coord, ...] = ()
        if winner is not None and last_move is not None:
            # Late import: the move engine depends on this module
            from connect_four.engine.game import find_winning_line
            winning_line = find_winning_line(frozen_grid, last_move[0], last_move[1], winner)

        return cls(
            grid=frozen_grid,
            mover=Player(mover),
            winner=Player(winner) if winner is not None else None,
            is_draw=is_draw,
            winning_line=winning_line,
            last_move=last_move,
            history=moves,
        )

    # --- Derived queries ---

    def is_terminal(self) -> bool:
        return self.winner is not None or self.is_draw

    def _check_column(self, col: int):
        # Negative indexes would silently wrap to the other side of the board
        if not isinstance(col, int) or col < 0 or col >= COLS:
            raise MoveRejected(RejectReason.OUT_OF_RANGE, col)

    def is_column_full(self, col: int) -> bool:
        self._check_column(col)
        return self.grid[0][col] != EMPTY

    def lowest_open_row(self, col: int) -> Optional[int]:
        """
        Row a piece dropped into `col` would land on, or None if full.
        Raises MoveRejected(OUT_OF_RANGE) for columns outside the board.
        """
        self._check_column(col)
        for r in range(ROWS - 1, -1, -1):
            if self.grid[r][col] == EMPTY:
                return r
        return None

    def is_board_full(self) -> bool:
        return all(self.grid[0][c] != EMPTY for c in range(COLS))

    def get_valid_moves(self) -> List[int]:
        """Returns a list of column indices (0-6) that are not full."""
        return [c for c in range(COLS) if self.grid[0][c] == EMPTY]

    @property
    def move_count(self) -> int:
        return sum(1 for row in self.grid for v in row if v != EMPTY)

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid representation."""
        symbols = {EMPTY: ".", Player.PLAYER_A: "X", Player.PLAYER_B: "O"}
        header = " " + " ".join(str(i) for i in range(COLS))
        rows_str = []
        for r in range(ROWS):
            row_cells = [symbols[self.grid[r][c]] for c in range(COLS)]
            rows_str.append("|" + "|".join(row_cells) + "|")
        return header + "\n" + "\n".join(rows_str)
