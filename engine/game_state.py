"""
Game state management for TicTacToe Arena.
Tracks the board, current player, game mode, and score.
"""

from enum import Enum, IntEnum
from typing import Optional, List, Sequence, Tuple
from dataclasses import dataclass, field

import numpy as np


class Mark(IntEnum):
    """What a cell can hold. Also used for the two players."""
    EMPTY = 0
    X = 1
    O = 2

    @property
    def symbol(self) -> str:
        """Display symbol ("" for an empty cell)."""
        return "" if self == Mark.EMPTY else self.name

    def opposite(self) -> "Mark":
        """Get the opposite player."""
        if self == Mark.EMPTY:
            raise ValueError("EMPTY has no opposite")
        return Mark.O if self == Mark.X else Mark.X

    @classmethod
    def from_symbol(cls, symbol: str) -> "Mark":
        """
        Parse a cell symbol.

        Args:
            symbol: "X", "O", or "" / " " for empty (case-insensitive).

        Returns:
            The matching Mark.
        """
        if not isinstance(symbol, str):
            raise ValueError(f"Cell symbol must be a string, got {symbol!r}")
        text = symbol.strip().upper()
        if text == "":
            return cls.EMPTY
        if text in ("X", "O"):
            return cls[text]
        raise ValueError(f"Unknown cell symbol: {symbol!r}")


class GameMode(Enum):
    """Who sits on the O side."""
    PVP = "pvp"   # Player vs Player
    AI = "ai"     # Player vs AI


# Number of cells on the 3x3 board
CELL_COUNT = 9


@dataclass
class Move:
    """
    A move in the game.
    """
    player: Mark            # Who made the move
    index: int              # Cell index (0-8)
    move_number: int        # Which move this is (0-8)


@dataclass
class ScoreBoard:
    """Win/draw counters. Survive game resets until cleared."""
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0

    def record_win(self, player: Mark):
        if player == Mark.X:
            self.x_wins += 1
        elif player == Mark.O:
            self.o_wins += 1
        else:
            raise ValueError("EMPTY cannot win")

    def record_draw(self):
        self.draws += 1

    def reset(self):
        self.x_wins = 0
        self.o_wins = 0
        self.draws = 0

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x_wins, self.o_wins, self.draws)


def _empty_board() -> np.ndarray:
    return np.zeros(CELL_COUNT, dtype=np.int8)


@dataclass
class GameState:
    """
    The complete state of one TicTacToe game.

    Tracks:
    - The board (9 cells, row-major, Mark codes)
    - Current player
    - Game mode and score
    - Move history
    - Game status (active, won, draw)
    - Session number (bumped on every reset)
    """

    # 9 cells as Mark codes: 0,1,2 / 3,4,5 / 6,7,8
    board: np.ndarray = field(default_factory=_empty_board)

    # Current player's turn
    current_player: Mark = Mark.X

    mode: GameMode = GameMode.PVP
    score: ScoreBoard = field(default_factory=ScoreBoard)

    # Move history
    moves: List[Move] = field(default_factory=list)

    # Game result
    is_active: bool = True
    winner: Optional[Mark] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    is_draw: bool = False

    session: int = 0

    @classmethod
    def from_cells(
        cls,
        cells: Sequence[str],
        current_player: Mark = Mark.X,
        mode: GameMode = GameMode.PVP
    ) -> "GameState":
        """
        Build a state from cell symbols, e.g. ["O", "O", "", "", "X", ...].

        Args:
            cells: 9 symbols in row-major order.
            current_player: Whose turn it is.
            mode: Game mode.

        Returns:
            A new GameState (outcome fields are not evaluated).
        """
        if len(cells) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} cells, got {len(cells)}")

        board = np.array([Mark.from_symbol(c) for c in cells], dtype=np.int8)
        return cls(board=board, current_player=current_player, mode=mode)

    def get_cell(self, index: int) -> Mark:
        """Get the mark at a cell index."""
        return Mark(int(self.board[index]))

    @property
    def cells(self) -> List[Mark]:
        """All 9 cells as Marks."""
        return [Mark(int(code)) for code in self.board]

    def place_mark(self, index: int) -> Move:
        """
        Put the current player's mark on a cell and record the move.
        No rule checks here - see MoveValidator.

        Args:
            index: Cell index (0-8).

        Returns:
            The recorded Move.
        """
        self.board[index] = self.current_player
        move = Move(
            player=self.current_player,
            index=index,
            move_number=len(self.moves)
        )
        self.moves.append(move)
        return move

    def switch_player(self) -> Mark:
        """Hand the turn to the other player."""
        self.current_player = self.current_player.opposite()
        return self.current_player

    def get_empty_cells(self) -> List[int]:
        """
        Get all empty cells on the board.

        Returns:
            Cell indices in ascending order.
        """
        return np.flatnonzero(self.board == Mark.EMPTY).tolist()

    def is_full(self) -> bool:
        return bool(np.all(self.board != Mark.EMPTY))

    def reset(self):
        """
        Start a new game: empty board, X to move, active.
        Mode and score are kept.
        """
        self.board = _empty_board()
        self.current_player = Mark.X
        self.moves = []
        self.is_active = True
        self.winner = None
        self.winning_line = None
        self.is_draw = False
        self.session += 1

    def render(self) -> str:
        """Board as text, cells numbered 1-9 when empty."""
        lines = []
        for row in range(3):
            row_cells = []
            for col in range(3):
                index = row * 3 + col
                mark = self.get_cell(index)
                row_cells.append(mark.symbol if mark != Mark.EMPTY else str(index + 1))
            lines.append(" " + " | ".join(row_cells))
            if row < 2:
                lines.append("---+---+---")
        return "\n".join(lines)
