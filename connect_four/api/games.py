from fastapi import APIRouter, HTTPException

from connect_four.engine.board import Player
from connect_four.schemas.game_schema import GameCreate, GameResponse, GameSaveData, MoveRequest
from connect_four.services.game_service import GameSession, game_service
from connect_four.services.save_data import load_session, to_save_data

router = APIRouter()


def build_response(session: GameSession) -> GameResponse:
    state = session.state
    return GameResponse(
        id=session.game_id,
        mode=session.mode,
        status=str(session.status),
        board=[[int(v) for v in row] for row in state.grid],
        current_turn=int(state.mover),
        winner=int(state.winner) if state.winner is not None else None,
        is_draw=state.is_draw,
        winning_line=[list(cell) for cell in state.winning_line],
        last_move=list(state.last_move) if state.last_move else None,
        valid_moves=[] if state.is_terminal() else state.get_valid_moves(),
        history=session.history,
        player_types={seat: str(kind) for seat, kind in session.player_types.items()},
        ai_difficulty=session.ai_profile.difficulty.name if session.ai_profile else None,
        player_a_wins=session.player_a_wins,
        player_b_wins=session.player_b_wins,
        draws=session.draws,
        elapsed_seconds=session.elapsed_seconds,
    )


@router.post("", response_model=GameResponse)
async def create_game(game_data: GameCreate):
    session = game_service.create_game(
        mode=game_data.mode,
        ai_profile=game_data.ai_profile,
        opponent=Player(game_data.opponent_player),
    )
    return build_response(session)


# --- Must stay above /{game_id} routes ---
@router.post("/load", response_model=GameResponse)
async def load_game(save_data: GameSaveData):
    """Creates a new session from a save record."""
    try:
        session = load_session(game_service, save_data)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid save data: {e}")
    return build_response(session)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(game_id: int):
    return build_response(game_service.get_session(game_id))


@router.post("/{game_id}/moves", response_model=GameResponse)
async def make_move(game_id: int, move: MoveRequest, respond: bool = False):
    """
    Applies a human move. With `respond=true` the AI answers in the same
    request when it is its turn.
    """
    session = await game_service.process_human_move(game_id, move.column)
    if respond and session.is_ai_turn():
        session = await game_service.step_ai_turn(game_id) or session
    return build_response(session)


@router.post("/{game_id}/ai-move", response_model=GameResponse)
async def ai_move(game_id: int):
    session = game_service.get_session(game_id)
    if not session.is_ai_turn():
        raise HTTPException(status_code=409, detail="It is not the AI's turn")
    session = await game_service.step_ai_turn(game_id) or session
    return build_response(session)


@router.post("/{game_id}/reset", response_model=GameResponse)
async def reset_game(game_id: int, keep_score: bool = True):
    session = await game_service.reset_game(game_id, keep_score=keep_score)
    return build_response(session)


@router.get("/{game_id}/save", response_model=GameSaveData)
async def save_game(game_id: int):
    return to_save_data(game_service.get_session(game_id))
