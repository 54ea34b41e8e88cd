"""
Game configuration for TicTacToe Arena.
All the settings for turn timing, marks, and status messages.
"""

from .game_state import Mark


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tweak the game!
    """

    # ==================== TIMING ====================
    # Delay before the AI answers a human move (milliseconds)
    # Purely visual - the AI decision itself is instant
    AI_DELAY_MS = 600

    # ==================== PLAYERS ====================
    # Human always plays X and moves first, AI plays O
    HUMAN_MARK = Mark.X
    AI_MARK = Mark.O

    # ==================== BOARD ====================
    CENTER = 4
    CORNERS = (0, 2, 6, 8)

    # ==================== STATUS MESSAGES ====================
    STATUS_NEW_GAME_PVP = "New game started! Player X's turn"
    STATUS_NEW_GAME_AI = "New game started! You are X, make your move!"

    STATUS_MODE_PVP = "Player vs Player mode. Player X starts!"
    STATUS_MODE_AI = "Playing against AI. You are X!"

    STATUS_TURN_PVP = "Player {player}'s turn"
    STATUS_TURN_HUMAN = "Your turn!"
    STATUS_TURN_AI = "AI is thinking..."

    STATUS_WIN = "🎉 Player {player} wins!"
    STATUS_DRAW = "🤝 It's a draw!"
