"""
Conversion between live sessions and GameSaveData records.

Only the record is defined here; writing it to disk (and in which format) is
the caller's business. Loaded boards are trusted, not replayed.
"""

import time
from typing import Optional

from connect_four.core.ai_registry import AIProfile, parse_difficulty
from connect_four.engine.board import BoardState, Move, Player, EMPTY
from connect_four.models.enums import GameMode
from connect_four.schemas.game_schema import GameSaveData, MoveRecord, SavedMove
from connect_four.services.game_service import GameService, GameSession

CELL_NAMES = {EMPTY: "EMPTY", Player.PLAYER_A: "PLAYER_A", Player.PLAYER_B: "PLAYER_B"}
CELL_VALUES = {name: value for value, name in CELL_NAMES.items()}


def _player_name(player: Optional[int]) -> Optional[str]:
    return Player(player).name if player is not None else None


def to_save_data(session: GameSession) -> GameSaveData:
    state = session.state
    return GameSaveData(
        timestamp=int(time.time() * 1000),
        game_mode=session.mode,
        board_state=[[CELL_NAMES[v] for v in row] for row in state.grid],
        current_player=state.mover.name,
        player_a_wins=session.player_a_wins,
        player_b_wins=session.player_b_wins,
        draws=session.draws,
        elapsed_time_seconds=session.elapsed_seconds,
        move_history=[
            SavedMove(
                player=_player_name(m.player),
                column=m.column,
                row=m.row,
                timestamp=m.timestamp,
            )
            for m in session.history
        ],
        winner=_player_name(state.winner),
        is_draw=state.is_draw,
        ai_difficulty=session.ai_profile.difficulty.name if session.ai_profile else None,
        opponent_player=int(session.opponent),
    )


def state_from_save_data(data: GameSaveData) -> BoardState:
    """
    Rebuilds the board state from a save record.
    Unknown cell names raise ValueError.
    """
    try:
        grid = [[CELL_VALUES[name] for name in row] for row in data.board_state]
    except KeyError as e:
        raise ValueError(f"Unknown cell value in save data: {e.args[0]}")

    moves = [
        Move(player=Player[m.player], column=m.column, row=m.row)
        for m in data.move_history
    ]
    return BoardState.from_fields(
        grid=grid,
        mover=Player[data.current_player],
        winner=Player[data.winner] if data.winner else None,
        is_draw=data.is_draw,
        history=moves,
    )


def load_session(service: GameService, data: GameSaveData) -> GameSession:
    """Registers a new session in `service` holding the saved game."""
    state = state_from_save_data(data)
    profile: Optional[AIProfile] = None
    if data.game_mode == GameMode.SINGLE_PLAYER:
        profile = service.profiles.resolve(None)
        if data.ai_difficulty:
            difficulty = parse_difficulty(data.ai_difficulty)
            # Keep the configured pacing for that difficulty when a profile exists
            profile = service.profiles.get(difficulty.name.lower()) or profile.model_copy(
                update={"label": difficulty.name.capitalize(), "difficulty": difficulty}
            )

    def build(game_id: int) -> GameSession:
        session = GameSession(game_id, data.game_mode, profile, Player(data.opponent_player))
        session.state = state
        session.history = [
            MoveRecord(player=int(Player[m.player]), column=m.column, row=m.row, timestamp=m.timestamp)
            for m in data.move_history
        ]
        session.player_a_wins = data.player_a_wins
        session.player_b_wins = data.player_b_wins
        session.draws = data.draws
        session.elapsed_offset = data.elapsed_time_seconds
        if state.is_terminal():
            session.finished_elapsed = data.elapsed_time_seconds
        return session

    return service.add_loaded_session(build)
