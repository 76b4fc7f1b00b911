import asyncio
import unittest

from connect_four.core.events import GameEvents
from connect_four.engine.board import Player
from connect_four.engine.errors import GameNotFound, MoveRejected, NotPlayersTurn, RejectReason
from connect_four.models.enums import GameMode, GameStatus, PlayerType
from connect_four.services.game_service import GameService


class TestGameService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.completed = []

        async def record(session):
            self.completed.append((session.game_id, session.state.winner, session.state.is_draw))

        events = GameEvents()
        events.subscribe_complete(record)
        self.service = GameService(events=events, thinking_delay=0)

    async def _play(self, game_id, columns):
        for col in columns:
            await self.service.process_human_move(game_id, col)

    async def test_local_game_win_updates_tallies(self):
        session = self.service.create_game(GameMode.LOCAL_MULTIPLAYER)
        self.assertIsNone(session.ai_profile)
        self.assertEqual(session.player_types, {1: PlayerType.HUMAN, 2: PlayerType.HUMAN})

        await self._play(session.game_id, [0, 1, 0, 1, 0, 1, 0])

        self.assertEqual(session.status, GameStatus.COMPLETED)
        self.assertEqual(session.player_a_wins, 1)
        self.assertEqual(session.player_b_wins, 0)
        self.assertEqual(len(session.history), 7)
        self.assertEqual(session.history[-1].player, 1)
        self.assertEqual(session.history[-1].row, 2)
        self.assertEqual(self.completed, [(session.game_id, Player.PLAYER_A, False)])

    async def test_rejected_move_propagates(self):
        session = self.service.create_game(GameMode.LOCAL_MULTIPLAYER)
        await self._play(session.game_id, [4] * 6)

        with self.assertRaises(MoveRejected) as ctx:
            await self.service.process_human_move(session.game_id, 4)
        self.assertEqual(ctx.exception.reason, RejectReason.COLUMN_FULL)
        self.assertEqual(len(session.history), 6)

    async def test_unknown_game(self):
        with self.assertRaises(GameNotFound):
            self.service.get_session(999)
        with self.assertRaises(GameNotFound):
            await self.service.process_human_move(999, 3)

    async def test_single_player_turns(self):
        session = self.service.create_game(GameMode.SINGLE_PLAYER, ai_profile="easy")
        self.assertEqual(session.player_types[2], PlayerType.AI)

        # Human goes first; AI has nothing to do yet
        self.assertIsNone(await self.service.step_ai_turn(session.game_id))

        await self.service.process_human_move(session.game_id, 3)
        self.assertTrue(session.is_ai_turn())

        with self.assertRaises(NotPlayersTurn):
            await self.service.process_human_move(session.game_id, 3)

        await self.service.step_ai_turn(session.game_id)
        self.assertEqual(len(session.history), 2)
        self.assertEqual(session.history[1].player, 2)
        self.assertIsNotNone(session.history[1].score)
        self.assertEqual(session.state.mover, Player.PLAYER_A)

    async def test_ai_as_first_player(self):
        session = self.service.create_game(GameMode.SINGLE_PLAYER, ai_profile="easy", opponent=Player.PLAYER_A)
        self.assertTrue(session.is_ai_turn())

        await self.service.step_ai_turn(session.game_id)
        self.assertEqual(session.state.mover, Player.PLAYER_B)
        self.assertFalse(session.is_ai_turn())

    async def test_stale_ai_move_discarded(self):
        self.service.thinking_delay = 0.05
        session = self.service.create_game(GameMode.SINGLE_PLAYER, ai_profile="easy")
        await self.service.process_human_move(session.game_id, 3)

        thinking = asyncio.create_task(self.service.step_ai_turn(session.game_id))
        await asyncio.sleep(0)
        # Rematch starts while the AI is still thinking on the old board
        await self.service.reset_game(session.game_id)
        await thinking

        self.assertEqual(session.history, [])
        self.assertEqual(session.state.move_count, 0)
        self.assertFalse(session.is_ai_turn())

    async def test_unknown_profile_falls_back(self):
        session = self.service.create_game(GameMode.SINGLE_PLAYER, ai_profile="grandmaster")
        self.assertIsNotNone(session.ai_profile)

    async def test_reset_keeps_score(self):
        session = self.service.create_game(GameMode.LOCAL_MULTIPLAYER)
        await self._play(session.game_id, [0, 1, 0, 1, 0, 1, 0])

        await self.service.reset_game(session.game_id)
        self.assertEqual(session.player_a_wins, 1)
        self.assertEqual(session.status, GameStatus.IN_PROGRESS)
        self.assertEqual(session.history, [])
        self.assertEqual(session.state.move_count, 0)

        await self.service.reset_game(session.game_id, keep_score=False)
        self.assertEqual(session.player_a_wins, 0)

    async def test_failing_listener_does_not_break_move(self):
        async def broken(session):
            raise RuntimeError("listener down")

        self.service.events.subscribe_complete(broken)
        session = self.service.create_game(GameMode.LOCAL_MULTIPLAYER)
        with self.assertLogs("connect_four.core.events", level="ERROR"):
            await self._play(session.game_id, [0, 1, 0, 1, 0, 1, 0])
        self.assertEqual(session.player_a_wins, 1)
        self.assertEqual(len(self.completed), 1)


if __name__ == '__main__':
    unittest.main()
