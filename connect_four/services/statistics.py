"""
Aggregated play statistics.

update_after_game is a pure function over GameStatistics; where the numbers
are stored is up to the caller. StatisticsTracker keeps them in memory and
feeds itself from game completion events.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from connect_four.engine.ai import Difficulty
from connect_four.engine.board import Player
from connect_four.models.enums import GameMode

logger = logging.getLogger(__name__)


class GameStatistics(BaseModel):
    # Games played per mode
    local_games_played: int = 0
    single_player_games_played: int = 0
    remote_games_played: int = 0

    player_a_wins_total: int = 0
    player_b_wins_total: int = 0
    draws_total: int = 0

    average_game_time: int = 0
    total_game_time: int = 0

    current_streak: int = 0
    last_winner: Optional[str] = None
    best_streak: int = 0

    # Human results against the AI, per difficulty
    easy_ai_wins: int = 0
    medium_ai_wins: int = 0
    hard_ai_wins: int = 0
    easy_ai_losses: int = 0
    medium_ai_losses: int = 0
    hard_ai_losses: int = 0

    @property
    def total_games(self) -> int:
        return self.local_games_played + self.single_player_games_played + self.remote_games_played


_MODE_COUNTERS = {
    GameMode.LOCAL_MULTIPLAYER: "local_games_played",
    GameMode.SINGLE_PLAYER: "single_player_games_played",
    GameMode.REMOTE_MULTIPLAYER: "remote_games_played",
}


def update_after_game(
    stats: GameStatistics,
    mode: GameMode,
    winner: Optional[Player],
    is_draw: bool,
    game_time_seconds: int,
    ai_difficulty: Optional[Difficulty] = None,
    ai_player: Player = Player.PLAYER_B,
) -> GameStatistics:
    """Returns a new GameStatistics including one finished game."""
    s = stats.model_copy()

    counter = _MODE_COUNTERS[mode]
    setattr(s, counter, getattr(s, counter) + 1)

    if is_draw or winner is None:
        s.draws_total += 1
        # A draw breaks the streak
        s.current_streak = 0
        s.last_winner = None
    else:
        if winner == Player.PLAYER_A:
            s.player_a_wins_total += 1
        else:
            s.player_b_wins_total += 1

        if mode == GameMode.SINGLE_PLAYER and ai_difficulty is not None:
            level = ai_difficulty.name.lower()
            outcome = "losses" if winner == ai_player else "wins"
            field = f"{level}_ai_{outcome}"
            setattr(s, field, getattr(s, field) + 1)

        if s.last_winner == winner.name:
            s.current_streak += 1
        else:
            s.current_streak = 1
            s.last_winner = winner.name
        s.best_streak = max(s.best_streak, s.current_streak)

    s.total_game_time += game_time_seconds
    if s.total_games > 0:
        s.average_game_time = s.total_game_time // s.total_games

    return s


class StatisticsTracker:
    def __init__(self):
        self.stats = GameStatistics()

    async def on_game_complete(self, session):
        profile = session.ai_profile
        self.stats = update_after_game(
            self.stats,
            mode=session.mode,
            winner=session.state.winner,
            is_draw=session.state.is_draw,
            game_time_seconds=session.elapsed_seconds,
            ai_difficulty=profile.difficulty if profile else None,
            ai_player=session.opponent,
        )
        logger.debug("Statistics updated after game %d", session.game_id)

    def reset(self):
        self.stats = GameStatistics()


# Singleton instance
statistics_tracker = StatisticsTracker()
