import argparse
import time

from connect_four.core.ai_registry import registry
from connect_four.core.config import configure_logging, settings
from connect_four.engine.ai import ConnectFourAI
from connect_four.engine.board import Player
from connect_four.engine.errors import MoveRejected
from connect_four.engine.game import apply_move, new_game


def main():
    parser = argparse.ArgumentParser(description="Play Connect Four against the minimax AI.")
    parser.add_argument("--profile", default="medium", help="AI profile key (easy, medium, hard)")
    parser.add_argument("--ai-first", action="store_true", help="Let the AI play as Player A")
    args = parser.parse_args()

    configure_logging(settings)
    profile = registry.resolve(args.profile)
    ai_player = Player.PLAYER_A if args.ai_first else Player.PLAYER_B
    ai_agent = ConnectFourAI(profile.difficulty)

    print("=======================================")
    print(f"   CONNECT FOUR: Human vs AI ({profile.label})")
    print("=======================================")

    state = new_game()
    print(state.get_visual_board())

    while not state.is_terminal():

        # --- Human Turn ---
        if state.mover != ai_player:
            valid_moves = state.get_valid_moves()
            try:
                col = int(input(f"\nYour Move (Columns {valid_moves}): "))
                state = apply_move(state, col)
            except ValueError as e:
                # MoveRejected is a ValueError too
                print(e if isinstance(e, MoveRejected) else "Please enter a valid number.")
                continue

        # --- AI Turn ---
        else:
            print("\nAI is thinking...")
            time.sleep(profile.thinking_delay)
            col = ai_agent.choose_move(state)
            print(f"AI plays Column: {col}")
            state = apply_move(state, col)

        # Show Board
        print("\n" + state.get_visual_board())

    # --- End Game ---
    if state.winner is not None:
        winner_name = "AI" if state.winner == ai_player else "Human"
        print(f"\nGame Over! Winner: {winner_name}")
    else:
        print("\nGame Over! It's a Draw.")


if __name__ == "__main__":
    main()
