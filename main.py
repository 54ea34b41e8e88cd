"""
Main entry point for TicTacToe Arena.

Launches the Tkinter UI by default, or a console game with --no-ui.
Both talk to the same GameController.
"""

import random
from typing import Optional, Tuple

from engine.ai_player import AIPlayer
from engine.config import GameConfig
from engine.controller import GameController
from engine.events import GameListener
from engine.game_state import GameMode, Mark
from engine.scheduler import ImmediateScheduler


HELP_TEXT = """Commands:
  1-9  place your mark (cells numbered left to right, top to bottom)
  h    hint for the current player
  r    new game
  s    reset score
  m    toggle Player vs Player / Player vs AI
  q    quit"""


class ConsoleRenderer(GameListener):
    """Prints controller notifications to the terminal."""

    def __init__(self, controller: GameController):
        self.controller = controller
        self.board_dirty = False

    def on_cell_changed(self, index: int, mark: Mark):
        self.board_dirty = True

    def on_winning_line(self, indices: Tuple[int, int, int]):
        cells = ", ".join(str(i + 1) for i in indices)
        print(f"Winning line: {cells}")

    def on_status(self, text: str):
        if self.board_dirty:
            self.show_board()
        print(f">>> {text}")

    def on_score_changed(self, x_wins: int, o_wins: int, draws: int):
        print(f"Score  X: {x_wins}  O: {o_wins}  Draws: {draws}")

    def show_board(self):
        self.board_dirty = False
        print()
        print(self.controller.state.render())
        print()


class ConsoleGame:
    """
    Console version of the game.
    The AI answers immediately - there is nothing to animate here.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.AI,
        seed: Optional[int] = None,
        verbose: bool = False
    ):
        self.rng = random.Random(seed)
        self.controller = GameController(
            mode=mode,
            scheduler=ImmediateScheduler(),
            ai=AIPlayer(GameConfig.AI_MARK, rng=self.rng, verbose=verbose),
            verbose=verbose
        )
        self.renderer = ConsoleRenderer(self.controller)
        self.controller.add_listener(self.renderer)
        self.is_running = False

    def start(self):
        """Start the game loop."""
        print("\n" + "="*60)
        print("   TicTacToe Arena - Console")
        print("="*60)
        print(HELP_TEXT)

        self.controller.set_mode(self.controller.mode)

        self.is_running = True
        while self.is_running:
            try:
                command = input("> ").strip().lower()
            except EOFError:
                break
            self.handle_command(command)

    def handle_command(self, command: str):
        """Run one console command."""
        if command == "q":
            print("\nGame quit by user.")
            self.is_running = False
        elif command == "r":
            self.controller.reset_game()
        elif command == "s":
            self.controller.reset_score()
        elif command == "m":
            new_mode = GameMode.PVP if self.controller.mode == GameMode.AI else GameMode.AI
            self.controller.set_mode(new_mode)
        elif command == "h":
            state = self.controller.state
            if state.is_active:
                advisor = AIPlayer(state.current_player, rng=self.rng)
                print(advisor.get_move_suggestion(state))
            else:
                print("Game is over - press r for a new game.")
        elif command.isdigit() and len(command) == 1 and command != "0":
            result = self.controller.apply_move(int(command) - 1)
            if not result.applied:
                print(f"Invalid move: {result.reason}")
        elif command:
            print(HELP_TEXT)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe Arena")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GameMode],
        default=None,
        help="Starting mode (default: pvp in the UI, ai in the console)"
    )
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the AI's random corner/cell choices"
    )
    parser.add_argument(
        "--delay",
        type=int,
        default=GameConfig.AI_DELAY_MS,
        help="Delay before the AI moves, in milliseconds (UI only)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every move and AI decision"
    )

    args = parser.parse_args()

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        print("\n" + "="*60)
        print("   TicTacToe Arena UI")
        print("="*60 + "\n")
        ui = TicTacToeUI(
            mode=GameMode(args.mode or GameMode.PVP.value),
            ai_delay_ms=args.delay,
            seed=args.seed,
            verbose=args.verbose
        )
        ui.run()
        return

    game = ConsoleGame(
        mode=GameMode(args.mode or GameMode.AI.value),
        seed=args.seed,
        verbose=args.verbose
    )

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
