"""
Engine module for TicTacToe Arena.
Handles game state, rules, scoring, and the AI opponent.
"""

__version__ = "1.0.0"

from .game_state import GameState, GameMode, Mark, Move, ScoreBoard
from .move_validator import MoveValidator, ValidationResult
from .win_checker import WinChecker
from .ai_player import AIPlayer
from .events import GameListener, RecordingListener
from .scheduler import Scheduler, ImmediateScheduler, ManualScheduler
from .controller import GameController, MoveResult
