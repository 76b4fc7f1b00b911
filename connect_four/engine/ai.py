"""
Minimax AI with alpha-beta pruning.

The AI plays for whoever is to move at the root. Every simulated ply goes
through the real move engine, so the search can never reach a position the
rules would reject.
"""

import logging
import time
from enum import Enum
from typing import Any, Dict

from connect_four.engine.board import BoardState, Player, CENTER_COL
from connect_four.engine.evaluator import evaluate
from connect_four.engine.game import apply_move

logger = logging.getLogger(__name__)

INF = 10 ** 9


class Difficulty(Enum):
    EASY = 2
    MEDIUM = 4
    HARD = 6

    @property
    def depth(self) -> int:
        return self.value


class ConnectFourAI:
    def __init__(self, difficulty: Difficulty = Difficulty.MEDIUM, use_pruning: bool = True):
        self.difficulty = difficulty
        self.use_pruning = use_pruning
        self.nodes = 0

    def choose_move(self, state: BoardState) -> int:
        return self.analyze(state)["best_move"]

    def analyze(self, state: BoardState, exact_scores: bool = False) -> Dict[str, Any]:
        """
        Root entry point.
        With pruning on, each root column is searched against the best score
        found so far, so a column that cannot beat it reports an upper bound.
        The best move and its score are exact either way. Pass
        exact_scores=True to search every column with a full window.
        """
        if state.is_terminal():
            raise ValueError("Cannot choose a move on a finished game")
        valid_moves = state.get_valid_moves()
        if not valid_moves:
            raise ValueError("No open column to play")

        self.nodes = 0
        start_time = time.time()
        ai_player = state.mover
        depth = self.difficulty.depth
        narrow_root = self.use_pruning and not exact_scores

        move_scores: Dict[int, int] = {}
        best_move = CENTER_COL
        best_score = -INF

        # Left to right; the first column reaching the best score keeps it
        for col in valid_moves:
            alpha = best_score if narrow_root else -INF
            child = apply_move(state, col, record=False)
            score = self._minimax(child, depth - 1, alpha, INF, ai_player)
            move_scores[col] = score
            if score > best_score:
                best_score = score
                best_move = col

        duration = round(time.time() - start_time, 3)
        logger.debug(
            "AI (%s) chose column %d, score=%d nodes=%d in %.3fs",
            self.difficulty.name, best_move, best_score, self.nodes, duration
        )

        return {
            "best_move": best_move,
            "best_score": best_score,
            "scores": move_scores,
            "nodes_explored": self.nodes,
            "duration": duration,
        }

    def _minimax(self, state: BoardState, depth: int, alpha: int, beta: int, ai_player: Player) -> int:
        self.nodes += 1

        if depth == 0 or state.is_terminal():
            return evaluate(state, ai_player)

        if state.mover == ai_player:
            max_score = -INF
            for col in state.get_valid_moves():
                score = self._minimax(apply_move(state, col, record=False), depth - 1, alpha, beta, ai_player)
                max_score = max(max_score, score)
                if self.use_pruning:
                    alpha = max(alpha, score)
                    # Beta cutoff
                    if beta <= alpha:
                        break
            return max_score

        min_score = INF
        for col in state.get_valid_moves():
            score = self._minimax(apply_move(state, col, record=False), depth - 1, alpha, beta, ai_player)
            min_score = min(min_score, score)
            if self.use_pruning:
                beta = min(beta, score)
                # Alpha cutoff
                if beta <= alpha:
                    break
        return min_score


def choose_move(state: BoardState, difficulty: Difficulty = Difficulty.MEDIUM) -> int:
    """Column the computer should play for `state.mover`."""
    return ConnectFourAI(difficulty).choose_move(state)
