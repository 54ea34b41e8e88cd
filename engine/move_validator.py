"""
Move validator for TicTacToe Arena.
Validates that moves follow the rules.
"""

from numbers import Integral
from typing import List, Optional
from dataclasses import dataclass

from .game_state import CELL_COUNT, GameState, Mark


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Game must still be active
    2. Index must be a cell on the board (0-8)
    3. Can only place on empty cells
    """

    def validate_move(self, game_state: GameState, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place the current player's mark on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if not game_state.is_active:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # bool is an int subclass, but True is not a cell
        if isinstance(index, bool) or not isinstance(index, Integral):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index!r}. Must be an integer 0-8."
            )

        if not 0 <= index < CELL_COUNT:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index}. Must be 0-8."
            )

        occupant = game_state.get_cell(index)
        if occupant != Mark.EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {occupant.name}"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """
        Get all valid moves for the current player.

        Args:
            game_state: Current game state.

        Returns:
            List of valid cell indices.
        """
        if not game_state.is_active:
            return []

        return game_state.get_empty_cells()
