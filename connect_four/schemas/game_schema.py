from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict

from connect_four.models.enums import GameMode

class MoveRecord(BaseModel):
    # Allow extra fields so older records still load
    model_config = ConfigDict(extra='ignore')

    player: int
    column: int
    row: int
    timestamp: int = 0  # epoch milliseconds
    duration: Optional[float] = 0.0
    score: Optional[int] = None  # AI moves only

class GameCreate(BaseModel):
    mode: GameMode = GameMode.SINGLE_PLAYER
    ai_profile: Optional[str] = None
    # Seat taken by the AI (or the remote peer): 1 or 2
    opponent_player: int = Field(default=2, ge=1, le=2)

class MoveRequest(BaseModel):
    column: int

class GameResponse(BaseModel):
    id: int
    mode: GameMode
    status: str
    board: List[List[int]]
    current_turn: int
    winner: Optional[int] = None
    is_draw: bool = False
    winning_line: List[List[int]] = []
    last_move: Optional[List[int]] = None
    valid_moves: List[int] = []
    history: List[MoveRecord]
    player_types: Dict[int, str]
    ai_difficulty: Optional[str] = None
    player_a_wins: int = 0
    player_b_wins: int = 0
    draws: int = 0
    elapsed_seconds: int = 0

class SavedMove(BaseModel):
    player: str
    column: int
    row: int
    timestamp: int = 0

class GameSaveData(BaseModel):
    """
    Everything needed to rebuild a session. Board cells are stored as
    'EMPTY', 'PLAYER_A' or 'PLAYER_B', row 0 first (top of the board).
    """
    model_config = ConfigDict(extra='ignore')

    timestamp: int
    game_mode: GameMode
    board_state: List[List[str]]
    current_player: str
    player_a_wins: int = 0
    player_b_wins: int = 0
    draws: int = 0
    elapsed_time_seconds: int = 0
    move_history: List[SavedMove] = []
    winner: Optional[str] = None
    is_draw: bool = False
    ai_difficulty: Optional[str] = None
    opponent_player: int = 2
