"""
Win checker for TicTacToe Arena.
Checks if a player has won or if the game is a draw.
"""

from typing import Optional, Tuple

import numpy as np

from .game_state import GameState, Mark


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 identical marks in a row
    (horizontally, vertically, or diagonally)
    """

    # All possible winning lines (as cell index triples)
    WINNING_LINES = np.array([
        # Rows
        [0, 1, 2],
        [3, 4, 5],
        [6, 7, 8],
        # Columns
        [0, 3, 6],
        [1, 4, 7],
        [2, 5, 8],
        # Diagonals
        [0, 4, 8],
        [2, 4, 6],
    ], dtype=np.intp)

    def find_win(self, board: np.ndarray) -> Optional[Tuple[Mark, Tuple[int, int, int]]]:
        """
        Find the first completed line on a board.

        Args:
            board: 9 Mark codes.

        Returns:
            (winner, line) for the first completed line, or None.
        """
        lines = board[self.WINNING_LINES]
        complete = (lines[:, 0] != Mark.EMPTY) & np.all(lines == lines[:, :1], axis=1)

        hits = np.flatnonzero(complete)
        if hits.size == 0:
            return None

        first = int(hits[0])
        line = tuple(int(i) for i in self.WINNING_LINES[first])
        return Mark(int(lines[first, 0])), line

    def check_winner(self, game_state: GameState) -> Optional[Mark]:
        """
        Check if there's a winner.

        Args:
            game_state: The current game state.

        Returns:
            The winning Mark, or None if no winner yet.
        """
        result = self.find_win(game_state.board)
        return result[0] if result else None

    def get_winning_line(self, game_state: GameState) -> Optional[Tuple[int, int, int]]:
        """Get the winning line (for highlighting), or None."""
        result = self.find_win(game_state.board)
        return result[1] if result else None

    def has_won(self, board: np.ndarray, mark: Mark) -> bool:
        """Check if one specific mark fills any line."""
        return bool(np.any(np.all(board[self.WINNING_LINES] == mark, axis=1)))

    def check_draw(self, game_state: GameState) -> bool:
        """
        Check if the game is a draw.

        A draw occurs when all cells are filled AND there is no winner.

        Args:
            game_state: The current game state.

        Returns:
            True if the game is a draw.
        """
        if self.check_winner(game_state) is not None:
            return False

        return game_state.is_full()

    def update_game_state(self, game_state: GameState) -> GameState:
        """
        Update the game state with winner/draw information.
        Win is checked first, then draw.

        Args:
            game_state: The game state to update.

        Returns:
            Updated game state.
        """
        result = self.find_win(game_state.board)

        if result is not None:
            game_state.winner, game_state.winning_line = result
            game_state.is_active = False
        elif game_state.is_full():
            game_state.is_draw = True
            game_state.is_active = False

        return game_state
