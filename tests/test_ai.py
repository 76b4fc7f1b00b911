import time
import unittest

from connect_four.engine.ai import ConnectFourAI, Difficulty, choose_move
from connect_four.engine.board import Player
from connect_four.engine.evaluator import WIN_SCORE
from connect_four.engine.game import apply_move, new_game, play_moves
from tests.positions import A_HORIZONTAL_THREAT, B_HORIZONTAL_THREAT, DRAW_SEQUENCE

# Seconds; generous for slow CI machines
HARD_LATENCY_BUDGET = 1.0

SAMPLE_POSITIONS = [
    [],
    [3],
    [3, 3, 2],
    [3, 2, 4, 4, 2, 5],
    A_HORIZONTAL_THREAT,
    B_HORIZONTAL_THREAT,
    [3, 3, 3, 3, 2, 4, 2, 4, 4, 2, 1, 5],
]


class TestDifficulty(unittest.TestCase):

    def test_depths(self):
        self.assertEqual(Difficulty.EASY.depth, 2)
        self.assertEqual(Difficulty.MEDIUM.depth, 4)
        self.assertEqual(Difficulty.HARD.depth, 6)


class TestSearch(unittest.TestCase):

    def test_takes_immediate_win_hard(self):
        """
        Scenario: B (AI, Hard) holds (5,1) (5,2) (5,3) with (5,4) open.
        Column 4 wins on the spot and must be chosen over anything else.
        """
        state = play_moves(B_HORIZONTAL_THREAT)
        self.assertEqual(state.mover, Player.PLAYER_B)

        self.assertEqual(choose_move(state, Difficulty.HARD), 4)

    def test_takes_immediate_win_as_player_a(self):
        state = play_moves([0, 6, 1, 6, 2, 5])
        self.assertEqual(state.mover, Player.PLAYER_A)
        self.assertEqual(choose_move(state, Difficulty.EASY), 3)

    def test_immediate_win_scores_win_sentinel(self):
        state = play_moves(B_HORIZONTAL_THREAT)
        result = ConnectFourAI(Difficulty.MEDIUM).analyze(state)

        self.assertEqual(result["best_move"], 4)
        self.assertEqual(result["best_score"], WIN_SCORE)

    def test_winning_columns_tie_to_first(self):
        """
        Scenario: A can win through column 0 and through column 2.
        Both are worth the plain win score, so the lower column is played.
        """
        state = play_moves([2, 4, 1, 6, 3, 1, 3, 0, 3, 3, 2, 0, 5, 1, 3, 0, 1, 5, 2, 6])
        self.assertEqual(state.mover, Player.PLAYER_A)

        result = ConnectFourAI(Difficulty.MEDIUM).analyze(state, exact_scores=True)
        self.assertEqual(result["scores"][0], WIN_SCORE)
        self.assertEqual(result["scores"][2], WIN_SCORE)
        self.assertEqual(result["best_move"], 0)
        self.assertEqual(choose_move(state, Difficulty.MEDIUM), 0)

    def test_blocks_open_three(self):
        """
        Scenario: A threatens (5,3) with three on the bottom row.
        B cannot win at once, so blocking is the only move that survives.
        """
        state = play_moves(A_HORIZONTAL_THREAT)
        self.assertEqual(state.mover, Player.PLAYER_B)

        for difficulty in (Difficulty.EASY, Difficulty.MEDIUM):
            with self.subTest(difficulty=difficulty.name):
                result = ConnectFourAI(difficulty).analyze(state, exact_scores=True)
                self.assertEqual(result["best_move"], 3)
                self.assertGreater(result["best_score"], -WIN_SCORE)
                # Every other column loses to the open three
                for col, score in result["scores"].items():
                    if col != 3:
                        self.assertEqual(score, -WIN_SCORE)

    def test_deterministic(self):
        for moves in SAMPLE_POSITIONS:
            state = play_moves(moves)
            with self.subTest(moves=moves):
                first = choose_move(state, Difficulty.MEDIUM)
                second = choose_move(state, Difficulty.MEDIUM)
                self.assertEqual(first, second)

    def test_never_picks_full_column(self):
        state = play_moves([3] * 6)
        self.assertTrue(state.is_column_full(3))

        for difficulty in (Difficulty.EASY, Difficulty.MEDIUM):
            col = choose_move(state, difficulty)
            self.assertFalse(state.is_column_full(col))
            # The engine accepts it
            apply_move(state, col)

    def test_single_open_column(self):
        state = play_moves(DRAW_SEQUENCE[:-1])
        self.assertEqual(state.get_valid_moves(), [5])
        self.assertEqual(choose_move(state, Difficulty.HARD), 5)

    def test_legal_on_sample_positions(self):
        for moves in SAMPLE_POSITIONS:
            state = play_moves(moves)
            with self.subTest(moves=moves):
                self.assertIn(choose_move(state, Difficulty.EASY), state.get_valid_moves())

    def test_alpha_beta_matches_plain_minimax(self):
        for difficulty in (Difficulty.EASY, Difficulty.MEDIUM):
            for moves in SAMPLE_POSITIONS:
                state = play_moves(moves)
                with self.subTest(difficulty=difficulty.name, moves=moves):
                    plain = ConnectFourAI(difficulty, use_pruning=False).analyze(state)
                    full = ConnectFourAI(difficulty).analyze(state, exact_scores=True)
                    narrow = ConnectFourAI(difficulty).analyze(state)

                    self.assertEqual(full["scores"], plain["scores"])
                    for result in (full, narrow):
                        self.assertEqual(result["best_move"], plain["best_move"])
                        self.assertEqual(result["best_score"], plain["best_score"])
                        self.assertLessEqual(result["nodes_explored"], plain["nodes_explored"])

                    # Columns that cannot beat the best report an upper bound
                    for col, score in narrow["scores"].items():
                        self.assertGreaterEqual(score, plain["scores"][col])
                    self.assertLessEqual(narrow["nodes_explored"], full["nodes_explored"])

    def test_pruning_saves_work(self):
        state = new_game()
        pruned = ConnectFourAI(Difficulty.MEDIUM).analyze(state)
        plain = ConnectFourAI(Difficulty.MEDIUM, use_pruning=False).analyze(state)
        self.assertLess(pruned["nodes_explored"], plain["nodes_explored"])

    def test_report_tie_break(self):
        """The first column reaching the best score is the one returned."""
        for moves in SAMPLE_POSITIONS:
            state = play_moves(moves)
            with self.subTest(moves=moves):
                result = ConnectFourAI(Difficulty.EASY).analyze(state)
                self.assertEqual(sorted(result["scores"]), state.get_valid_moves())
                self.assertEqual(result["best_score"], max(result["scores"].values()))
                first_best = min(c for c, s in result["scores"].items() if s == result["best_score"])
                self.assertEqual(result["best_move"], first_best)

    def test_search_does_not_touch_state(self):
        state = play_moves([3, 2, 4])
        before = (state.grid, state.mover, state.history)
        choose_move(state, Difficulty.MEDIUM)
        self.assertEqual((state.grid, state.mover, state.history), before)

    def test_refuses_finished_game(self):
        won = play_moves([0, 1, 0, 1, 0, 1, 0])
        with self.assertRaises(ValueError):
            choose_move(won, Difficulty.EASY)

    def test_hard_latency_on_open_positions(self):
        """The deepest search stays interactive on the widest trees."""
        for moves in ([], [3], [3, 3, 2]):
            state = play_moves(moves)
            with self.subTest(moves=moves):
                start = time.perf_counter()
                col = choose_move(state, Difficulty.HARD)
                elapsed = time.perf_counter() - start

                self.assertIn(col, state.get_valid_moves())
                self.assertLess(elapsed, HARD_LATENCY_BUDGET)


if __name__ == '__main__':
    unittest.main()
