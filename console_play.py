import logging
import sys

from connect_n.app.config import load_settings
from connect_n.app.enums import PlayerType
from connect_n.app.game import ConnectN, HUMAN

def main():
    settings = load_settings(sys.argv[1] if len(sys.argv) > 1 else None)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    print("=======================================")
    print(f"   CONNECT {settings.win_length}: Human vs Computer")
    print("=======================================")

    game = ConnectN(settings)
    print(game.get_visual_board())

    while not game.is_over():

        # --- Human Turn ---
        if game.current_player_type == PlayerType.HUMAN:
            valid_moves = game.get_valid_moves()
            try:
                user_input = input(f"\nYour Move (Columns {valid_moves}): ")
                col = int(user_input)
            except ValueError:
                print("Please enter a valid number.")
                continue
            if not game.drop_piece(col):
                print("Invalid column. Try again.")
                continue

        # --- Computer Turn ---
        else:
            print("\nComputer is thinking...")
            record = game.computer_move()
            print(f"Computer plays Column: {record.column}")

        # Show Board
        print("\n" + game.get_visual_board())

    # --- End Game ---
    if game.winner is not None:
        print("\nYou Won!" if game.winner == HUMAN else "\nYou Lose!")
    else:
        print("\nDraw!")

if __name__ == "__main__":
    main()
