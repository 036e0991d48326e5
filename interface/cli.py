import logging
from typing import Optional

from solver.config import CONFIG
from solver.core.types import Direction, Outcome
from solver.main import Engine

logger = logging.getLogger(__name__)

KEYS = {
    "8": Direction.UP,
    "6": Direction.RIGHT,
    "2": Direction.DOWN,
    "4": Direction.LEFT,
}

PLAY_HELP = ("Use 8 for UP, 6 for RIGHT, 2 for DOWN and 4 for LEFT. "
             "Type a to play automatically and q to exit. Press enter to submit your choice.")

MENU = """
Choices:
1. Play the game
2. Estimate the accuracy of the AI solver
3. Help
4. Quit

Enter a number from 1-4:"""


def play_game(depth: Optional[int] = None, seed: Optional[int] = None) -> Optional[Outcome]:
    """Interactive game with a solver hint after every turn. None if the user quit."""
    print("Play the game!")
    print(PLAY_HELP)

    engine = Engine(depth=depth, seed=seed)
    hint, _ = engine.get_best_move()
    engine.print_board(hint if CONFIG.ui.show_hint else None)

    outcome = Outcome.CONTINUE
    while not outcome.is_over:
        try:
            key = input().strip()
        except EOFError:
            return None
        if not key:
            continue
        if key == "q":
            print("Game ended, user quit.")
            return None
        if key == "a":
            if hint is None:
                print(Outcome.NO_MORE_MOVES.description)
                return Outcome.NO_MORE_MOVES
            direction = hint
        elif key in KEYS:
            direction = KEYS[key]
        else:
            print("Invalid key! " + PLAY_HELP)
            continue

        outcome = engine.make_move(direction)
        if not outcome.is_over:
            hint, _ = engine.get_best_move()
        else:
            hint = None
        engine.print_board(hint if CONFIG.ui.show_hint else None)

        if outcome is not Outcome.CONTINUE:
            print(outcome.description)
    return outcome


def estimate_accuracy(total: Optional[int] = None, depth: Optional[int] = None,
                      seed: Optional[int] = None) -> int:
    """Let the solver play ``total`` games on its own and count the wins."""
    total = CONFIG.ui.accuracy_games if total is None else total
    print(f"Running {total} games to estimate the accuracy:")

    wins = 0
    for i in range(total):
        game_seed = None if seed is None else seed + i
        engine = Engine(depth=depth, seed=game_seed)
        outcome = engine.autoplay()
        logger.debug("game %d finished after %d turns with score %d, max tile %d",
                     i + 1, len(engine.history), engine.board.score, engine.board.max_tile())
        if outcome is Outcome.WIN:
            wins += 1
            print(f"Game {i + 1} - won")
        else:
            print(f"Game {i + 1} - lost")

    print(f"{wins} wins out of {total} games.")
    return wins


def main():
    logging.basicConfig(level=CONFIG.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    print(f"{CONFIG.ui.name}: the {CONFIG.game.target} sliding-tile game")
    print("=" * 40)
    while True:
        print(MENU)
        try:
            choice = int(input())
        except ValueError:
            print("Wrong choice")
            continue
        except EOFError:
            return

        if choice == 1:
            play_game()
        elif choice == 2:
            estimate_accuracy()
        elif choice == 3:
            print("Merge equal tiles by sliding them; reach "
                  f"{CONFIG.game.target} to win. The hint is the solver's recommended move.")
        elif choice == 4:
            return
        else:
            print("Wrong choice")


if __name__ == "__main__":
    main()
