"""
AI player for TicTacToe Arena.
Uses a fixed priority heuristic (one move lookahead) to choose a move.
"""

import random
from typing import Optional, List

from .config import GameConfig
from .game_state import GameState, Mark
from .move_validator import MoveValidator
from .win_checker import WinChecker


class AIPlayer:
    """
    An AI that plays TicTacToe with a priority cascade:

    1. Win if a line can be completed this move
    2. Block the opponent's winning cell
    3. Take the center
    4. Take a random free corner
    5. Take any random free cell

    This is not a full search - odd openings can still beat it.
    """

    def __init__(
        self,
        player: Mark = GameConfig.AI_MARK,
        rng: Optional[random.Random] = None,
        verbose: bool = False
    ):
        """
        Initialize the AI player.

        Args:
            player: Which mark the AI controls (default: O)
            rng: Random source for corner/any-cell tie breaks.
            verbose: Print every decision.
        """
        self.player = player
        self.rng = rng if rng is not None else random.Random()
        self.verbose = verbose
        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        # Which rule produced the last move (for debugging)
        self.last_rule: Optional[str] = None

    def get_best_move(self, game_state: GameState) -> Optional[int]:
        """
        Get the move for the current position.

        Args:
            game_state: Current game state.

        Returns:
            Cell index (0-8), or None if no moves available.
        """
        self.last_rule = None

        if game_state.current_player != self.player:
            print(f"Warning: It's not {self.player.name}'s turn!")
            return None

        empty_cells = self.validator.get_valid_moves(game_state)
        if not empty_cells:
            return None

        move = self._find_completing_cell(game_state, empty_cells, self.player)
        if move is not None:
            return self._choose(move, "win")

        move = self._find_completing_cell(game_state, empty_cells, self.player.opposite())
        if move is not None:
            return self._choose(move, "block")

        if GameConfig.CENTER in empty_cells:
            return self._choose(GameConfig.CENTER, "center")

        corners = [c for c in GameConfig.CORNERS if c in empty_cells]
        if corners:
            return self._choose(self.rng.choice(corners), "corner")

        return self._choose(self.rng.choice(empty_cells), "random")

    def _find_completing_cell(
        self,
        game_state: GameState,
        empty_cells: List[int],
        mark: Mark
    ) -> Optional[int]:
        """
        Scan empty cells in order for one that completes a line for mark.

        Returns:
            The first such cell, or None.
        """
        for index in empty_cells:
            trial = game_state.board.copy()
            trial[index] = mark
            if self.win_checker.has_won(trial, mark):
                return index
        return None

    def _choose(self, index: int, rule: str) -> int:
        self.last_rule = rule
        if self.verbose:
            print(f"AI ({self.player.name}) picks cell {index} [{rule}]")
        return index

    def get_move_suggestion(self, game_state: GameState) -> str:
        """
        Get a human-readable move suggestion.

        Args:
            game_state: Current game state.

        Returns:
            A string describing the suggested move.
        """
        move = self.get_best_move(game_state)

        if move is None:
            return "No moves available!"

        return f"Place {self.player.name} on cell {move + 1} ({self.last_rule})"
