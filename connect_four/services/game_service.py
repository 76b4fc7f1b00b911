"""
Game Service - Centralized Game Logic

This service is the single source of truth for all session modifications.
It handles:
- Game creation and loading from save records
- Move processing (human and AI)
- Win tallies across rematches
- Game completion events

Used by the HTTP API and the console script. Moves of every kind go through
the same move engine.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional

from connect_four.core.ai_registry import AIProfile, AIProfileRegistry, registry
from connect_four.core.events import GameEvents
from connect_four.engine.ai import ConnectFourAI
from connect_four.engine.board import BoardState, Player
from connect_four.engine.errors import GameNotFound, NotPlayersTurn
from connect_four.engine.game import apply_move, new_game
from connect_four.models.enums import GameMode, GameStatus, PlayerType
from connect_four.schemas.game_schema import MoveRecord

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class GameSession:
    """One game plus the tallies kept across rematches."""

    def __init__(
        self,
        game_id: int,
        mode: GameMode,
        ai_profile: Optional[AIProfile] = None,
        opponent: Player = Player.PLAYER_B,
    ):
        self.game_id = game_id
        self.mode = mode
        self.ai_profile = ai_profile
        self.opponent = opponent
        self.state: BoardState = new_game()
        self.history: List[MoveRecord] = []

        self.player_a_wins = 0
        self.player_b_wins = 0
        self.draws = 0

        self.started_at = time.time()
        self.elapsed_offset = 0  # seconds carried over from a loaded save
        self.finished_elapsed: Optional[int] = None

        self.lock = asyncio.Lock()

    @property
    def player_types(self) -> Dict[int, PlayerType]:
        if self.mode == GameMode.SINGLE_PLAYER:
            other = PlayerType.AI
        elif self.mode == GameMode.REMOTE_MULTIPLAYER:
            other = PlayerType.REMOTE
        else:
            other = PlayerType.HUMAN
        return {
            int(self.opponent): other,
            int(self.opponent.other()): PlayerType.HUMAN,
        }

    def is_ai_turn(self) -> bool:
        return (
            self.mode == GameMode.SINGLE_PLAYER
            and not self.state.is_terminal()
            and self.state.mover == self.opponent
        )

    @property
    def status(self) -> GameStatus:
        if self.state.winner is not None:
            return GameStatus.COMPLETED
        if self.state.is_draw:
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    @property
    def elapsed_seconds(self) -> int:
        if self.finished_elapsed is not None:
            return self.finished_elapsed
        return self.elapsed_offset + int(time.time() - self.started_at)

    def restart(self, keep_score: bool = True):
        self.state = new_game()
        self.history = []
        self.started_at = time.time()
        self.elapsed_offset = 0
        self.finished_elapsed = None
        if not keep_score:
            self.player_a_wins = 0
            self.player_b_wins = 0
            self.draws = 0


class GameService:
    """Centralized service for all game operations"""

    def __init__(
        self,
        profiles: AIProfileRegistry = registry,
        events: Optional[GameEvents] = None,
        thinking_delay: Optional[float] = None,
    ):
        self.profiles = profiles
        self.events = events or GameEvents()
        # Overrides every profile's delay when set (tests, scripts)
        self.thinking_delay = thinking_delay
        self.sessions: Dict[int, GameSession] = {}
        self._next_id = 1

    def _register(self, session_factory) -> GameSession:
        game_id = self._next_id
        self._next_id += 1
        session = session_factory(game_id)
        self.sessions[game_id] = session
        return session

    def create_game(
        self,
        mode: GameMode = GameMode.SINGLE_PLAYER,
        ai_profile: Optional[str] = None,
        opponent: Player = Player.PLAYER_B,
    ) -> GameSession:
        profile = self.profiles.resolve(ai_profile) if mode == GameMode.SINGLE_PLAYER else None
        session = self._register(lambda gid: GameSession(gid, mode, profile, Player(opponent)))
        logger.info(
            "Created game %d (%s%s)", session.game_id, mode,
            f", AI {profile.difficulty.name} as player {int(opponent)}" if profile else ""
        )
        return session

    def get_session(self, game_id: int) -> GameSession:
        session = self.sessions.get(game_id)
        if session is None:
            raise GameNotFound(game_id)
        return session

    async def process_human_move(self, game_id: int, column: int) -> GameSession:
        """Apply a human (or remote peer) move. MoveRejected propagates to the caller."""
        start_time = time.time()
        session = self.get_session(game_id)

        async with session.lock:
            if session.is_ai_turn():
                raise NotPlayersTurn(game_id, int(session.state.mover))

            player = session.state.mover
            new_state = apply_move(session.state, column)
            duration = round(time.time() - start_time, 3)

            await self._record_move(session, new_state, MoveRecord(
                player=int(player),
                column=column,
                row=new_state.last_move[0],
                timestamp=_now_ms(),
                duration=duration,
            ))
        return session

    async def step_ai_turn(self, game_id: int) -> Optional[GameSession]:
        """
        Execute one AI turn. Returns None when it is not the AI's turn.
        The search runs in a worker thread without holding the session lock;
        the result is re-validated under the lock before it is applied.
        """
        session = self.get_session(game_id)

        # 1. READ - snapshot for the AI to think on
        snapshot = session.state
        if not session.is_ai_turn():
            return None

        profile = session.ai_profile
        delay = self.thinking_delay if self.thinking_delay is not None else profile.thinking_delay

        # 2. THINK - pacing delay stays outside the search itself
        start_time = time.time()
        if delay > 0:
            await asyncio.sleep(delay)
        ai = ConnectFourAI(profile.difficulty)
        result = await asyncio.to_thread(ai.analyze, snapshot)
        duration = round(time.time() - start_time, 3)

        # 3. WRITE - re-verify inside the lock
        async with session.lock:
            if session.state is not snapshot:
                logger.warning("Game %d changed while AI was thinking, move discarded", game_id)
                return session

            column = result["best_move"]
            new_state = apply_move(snapshot, column)
            await self._record_move(session, new_state, MoveRecord(
                player=int(snapshot.mover),
                column=column,
                row=new_state.last_move[0],
                timestamp=_now_ms(),
                duration=duration,
                score=result["best_score"],
            ))
            logger.info(
                "Game %d: AI (%s) played column %d after %d nodes",
                game_id, profile.difficulty.name, column, result["nodes_explored"]
            )
        return session

    async def _record_move(self, session: GameSession, new_state: BoardState, record: MoveRecord):
        session.state = new_state
        session.history.append(record)

        if not new_state.is_terminal():
            return

        session.finished_elapsed = session.elapsed_offset + int(time.time() - session.started_at)
        if new_state.winner == Player.PLAYER_A:
            session.player_a_wins += 1
        elif new_state.winner == Player.PLAYER_B:
            session.player_b_wins += 1
        else:
            session.draws += 1

        logger.info(
            "Game %d finished: %s",
            session.game_id,
            f"player {int(new_state.winner)} wins" if new_state.winner else "draw",
        )
        await self.events.notify_complete(session)

    async def reset_game(self, game_id: int, keep_score: bool = True) -> GameSession:
        """Start a rematch; tallies survive unless keep_score is False."""
        session = self.get_session(game_id)
        async with session.lock:
            session.restart(keep_score=keep_score)
        return session

    def add_loaded_session(self, build) -> GameSession:
        """Registers a session built by `build(game_id)` (see save_data)."""
        session = self._register(build)
        logger.info("Loaded game %d (%s, %d moves)", session.game_id, session.mode, len(session.history))
        return session


# Singleton instance
game_service = GameService()
