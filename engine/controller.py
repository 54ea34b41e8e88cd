"""
Game controller for TicTacToe Arena.

Owns one GameState and is the only thing that changes it:
apply move -> check win -> check draw -> switch turn, one move at a time.
Renderers subscribe as GameListeners and forward user input here.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from .ai_player import AIPlayer
from .config import GameConfig
from .events import GameListener
from .game_state import CELL_COUNT, GameMode, GameState, Mark
from .move_validator import MoveValidator
from .scheduler import ImmediateScheduler, Scheduler
from .win_checker import WinChecker


@dataclass
class MoveResult:
    """What happened to a requested move."""
    applied: bool
    index: Optional[int] = None
    mark: Optional[Mark] = None
    reason: Optional[str] = None       # Why it was rejected
    winner: Optional[Mark] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    is_draw: bool = False

    @property
    def is_game_over(self) -> bool:
        return self.winner is not None or self.is_draw


class GameController:
    """
    Runs a TicTacToe game in Player vs Player or Player vs AI mode.

    In AI mode the human plays X. After each human move the AI reply is
    scheduled with a short delay; the reply is dropped if the game was
    reset (or the mode changed) before it fires.
    """

    def __init__(
        self,
        mode: Union[GameMode, str] = GameMode.PVP,
        scheduler: Optional[Scheduler] = None,
        ai: Optional[AIPlayer] = None,
        ai_delay_ms: int = GameConfig.AI_DELAY_MS,
        verbose: bool = False
    ):
        """
        Initialize the controller.

        Args:
            mode: Starting game mode ("pvp" or "ai").
            scheduler: Runs the delayed AI turn (default: run immediately).
            ai: AI opponent, must play O (default: heuristic AI).
            ai_delay_ms: Delay before the AI answers.
            verbose: Print moves and outcomes to the console.

        Raises:
            ValueError: The AI plays a mark other than O.
        """
        self.state = GameState(mode=GameMode(mode))
        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self.ai = ai if ai is not None else AIPlayer(GameConfig.AI_MARK, verbose=verbose)
        if self.ai.player != GameConfig.AI_MARK:
            raise ValueError(
                f"AI must play {GameConfig.AI_MARK.name}, got {self.ai.player.name}"
            )
        self.scheduler = scheduler if scheduler is not None else ImmediateScheduler()
        self.ai_delay_ms = ai_delay_ms
        self.verbose = verbose

        self.listeners: List[GameListener] = []

        # Pending AI turn: (session, ticket number) and the scheduler handle
        self._ai_ticket: Optional[Tuple[int, int]] = None
        self._ai_tickets = 0
        self._ai_handle: object = None

    # ==================== LISTENERS ====================

    def add_listener(self, listener: GameListener):
        self.listeners.append(listener)

    def remove_listener(self, listener: GameListener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def _emit(self, notify: Callable[[GameListener], None]):
        for listener in list(self.listeners):
            notify(listener)

    def publish_state(self):
        """Send the whole current state to every listener (initial draw)."""
        state = self.state
        for index, mark in enumerate(state.cells):
            self._emit(lambda l, i=index, m=mark: l.on_cell_changed(i, m))
        if state.winning_line is not None:
            self._emit(lambda l: l.on_winning_line(state.winning_line))
        self._emit(lambda l: l.on_turn_changed(state.current_player))
        self._emit(lambda l: l.on_score_changed(*state.score.as_tuple()))
        self._emit(lambda l: l.on_status(self._current_status()))

    # ==================== COMMANDS ====================

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    @property
    def pending_ai_turn(self) -> bool:
        """True while an AI reply is scheduled but has not fired yet."""
        return self._ai_ticket is not None

    def apply_move(self, index: int) -> MoveResult:
        """
        Place the current player's mark on a cell.

        Args:
            index: Cell index (0-8).

        Returns:
            MoveResult - applied=False (with a reason) when the move is
            rejected; the board and turn are then unchanged.
        """
        if self._is_ai_turn():
            return self._reject(index, "Wait for the AI to move!")

        result = self._play(index)

        if result.applied and self._is_ai_turn():
            self._schedule_ai_turn()

        return result

    def run_ai_turn(self) -> MoveResult:
        """
        Let the AI move now. A scheduled AI reply is cancelled.

        Returns:
            MoveResult of the AI move, or a rejection when it is not the
            AI's turn or no cell is left.
        """
        self._cancel_ai_turn()
        if not self._is_ai_turn():
            return self._reject(None, "Not the AI's turn")

        index = self.ai.get_best_move(self.state)
        if index is None:
            return self._reject(None, "No move available")

        return self._play(index)

    def reset_game(self):
        """Clear the board and give X the first move. Scores are kept."""
        self._cancel_ai_turn()
        self.state.reset()
        self._log(f"New game (session {self.state.session}, mode {self.state.mode.value})")

        for index in range(CELL_COUNT):
            self._emit(lambda l, i=index: l.on_cell_changed(i, Mark.EMPTY))
        self._emit(lambda l: l.on_turn_changed(self.state.current_player))

        if self.state.mode == GameMode.AI:
            self._emit(lambda l: l.on_status(GameConfig.STATUS_NEW_GAME_AI))
        else:
            self._emit(lambda l: l.on_status(GameConfig.STATUS_NEW_GAME_PVP))

    def set_mode(self, mode: Union[GameMode, str]):
        """
        Switch between "pvp" and "ai". Always starts a new game.

        Raises:
            ValueError: Unknown mode.
        """
        mode = GameMode(mode)
        self.state.mode = mode
        self.reset_game()

        if mode == GameMode.AI:
            self._emit(lambda l: l.on_status(GameConfig.STATUS_MODE_AI))
        else:
            self._emit(lambda l: l.on_status(GameConfig.STATUS_MODE_PVP))

    def reset_score(self):
        """Zero all score counters. The board is untouched."""
        self.state.score.reset()
        self._log("Score reset")
        self._emit(lambda l: l.on_score_changed(*self.state.score.as_tuple()))

    # ==================== MOVE RESOLUTION ====================

    def _play(self, index) -> MoveResult:
        """Validate and apply one move, then resolve the outcome."""
        validation = self.validator.validate_move(self.state, index)
        if not validation.is_valid:
            return self._reject(index, validation.error_message)

        state = self.state
        index = int(index)
        move = state.place_mark(index)
        self._log(f"{move.player.name} -> cell {index}")
        self._emit(lambda l: l.on_cell_changed(index, move.player))

        self.win_checker.update_game_state(state)

        if state.winner is not None:
            state.score.record_win(state.winner)
            self._log(f"{state.winner.name} wins on line {state.winning_line}")
            self._emit(lambda l: l.on_winning_line(state.winning_line))
            self._emit(lambda l: l.on_score_changed(*state.score.as_tuple()))
            self._emit(lambda l: l.on_status(
                GameConfig.STATUS_WIN.format(player=state.winner.name)))
        elif state.is_draw:
            state.score.record_draw()
            self._log("Draw")
            self._emit(lambda l: l.on_score_changed(*state.score.as_tuple()))
            self._emit(lambda l: l.on_status(GameConfig.STATUS_DRAW))
        else:
            state.switch_player()
            self._emit(lambda l: l.on_turn_changed(state.current_player))
            self._emit(lambda l: l.on_status(self._turn_status()))

        return MoveResult(
            applied=True,
            index=index,
            mark=move.player,
            winner=state.winner,
            winning_line=state.winning_line,
            is_draw=state.is_draw
        )

    def _reject(self, index, reason: str) -> MoveResult:
        self._log(f"Move rejected: {reason}")
        return MoveResult(applied=False, index=index, reason=reason)

    # ==================== AI TURN ====================

    def _is_ai_turn(self) -> bool:
        state = self.state
        return (
            state.mode == GameMode.AI
            and state.is_active
            and state.current_player == self.ai.player
        )

    def _schedule_ai_turn(self):
        # Each scheduled reply gets its own ticket; only the latest may fire
        self._ai_tickets += 1
        ticket = (self.state.session, self._ai_tickets)
        self._ai_ticket = ticket
        handle = self.scheduler.schedule(
            self.ai_delay_ms,
            lambda: self._on_ai_timer(ticket)
        )
        # An immediate scheduler has already run the turn
        if self._ai_ticket == ticket:
            self._ai_handle = handle

    def _on_ai_timer(self, ticket: Tuple[int, int]):
        session = ticket[0]
        if session != self.state.session or self._ai_ticket != ticket:
            self._log(f"Dropping stale AI turn from session {session}")
            return

        self._ai_ticket = None
        self._ai_handle = None
        self.run_ai_turn()

    def _cancel_ai_turn(self):
        if self._ai_ticket is None:
            return
        self.scheduler.cancel(self._ai_handle)
        self._ai_ticket = None
        self._ai_handle = None

    # ==================== STATUS ====================

    def _turn_status(self) -> str:
        player = self.state.current_player
        if self.state.mode == GameMode.AI:
            if player == self.ai.player:
                return GameConfig.STATUS_TURN_AI
            return GameConfig.STATUS_TURN_HUMAN
        return GameConfig.STATUS_TURN_PVP.format(player=player.name)

    def _current_status(self) -> str:
        state = self.state
        if state.winner is not None:
            return GameConfig.STATUS_WIN.format(player=state.winner.name)
        if state.is_draw:
            return GameConfig.STATUS_DRAW
        if not state.moves:
            if state.mode == GameMode.AI:
                return GameConfig.STATUS_NEW_GAME_AI
            return GameConfig.STATUS_NEW_GAME_PVP
        return self._turn_status()

    def _log(self, message: str):
        if self.verbose:
            print(message)
