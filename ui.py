"""
TicTacToe Arena UI
A graphical interface for the game using Tkinter.

Shows:
- The 3x3 board (click a cell to play)
- Current player and game status
- Score for X, O and draws
- Game mode selection (Player vs Player / Player vs AI)
"""

import random
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional, Tuple

from engine.ai_player import AIPlayer
from engine.config import GameConfig
from engine.controller import GameController
from engine.events import GameListener
from engine.game_state import GameMode, Mark
from engine.scheduler import Scheduler


# Colors
BG_COLOR = '#1a1a2e'
CELL_BG = '#16213e'
X_COLORS = ('#065f46', '#10b981')   # (background, foreground)
O_COLORS = ('#7f1d1d', '#f87171')
WIN_COLORS = ('#b45309', '#ffd700')
INACTIVE_BUTTON = '#2d3748'

MODE_BUTTONS = [
    ("Player vs Player", GameMode.PVP, "#4ade80"),
    ("Player vs AI", GameMode.AI, "#f87171"),
]


class TkScheduler(Scheduler):
    """Runs the delayed AI turn on the Tk event loop."""

    def __init__(self, root: tk.Tk):
        self.root = root

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.root.after(delay_ms, callback)

    def cancel(self, handle: Optional[str]):
        if handle is not None:
            self.root.after_cancel(handle)


class TicTacToeUI(GameListener):
    """
    Main UI class. Renders controller notifications, forwards clicks.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.PVP,
        ai_delay_ms: int = GameConfig.AI_DELAY_MS,
        seed: Optional[int] = None,
        verbose: bool = False
    ):
        """Initialize the UI."""
        self._create_ui()

        self.controller = GameController(
            mode=mode,
            scheduler=TkScheduler(self.root),
            ai=AIPlayer(GameConfig.AI_MARK, rng=random.Random(seed), verbose=verbose),
            ai_delay_ms=ai_delay_ms,
            verbose=verbose
        )
        self.controller.add_listener(self)
        self._highlight_mode(self.controller.mode)
        self.controller.publish_state()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("TicTacToe Arena")
        self.root.configure(bg=BG_COLOR)
        self.root.minsize(420, 620)

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=20, pady=20)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=BG_COLOR)
        style.configure('TLabel', background=BG_COLOR, foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 18, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('Score.TLabel', font=('Segoe UI', 11, 'bold'), foreground='#00ff88')

        ttk.Label(main_frame, text="🎮 TicTacToe Arena", style='Title.TLabel').pack(pady=(0, 10))

        # Mode section
        mode_frame = ttk.Frame(main_frame)
        mode_frame.pack(pady=5)

        self.mode_buttons = {}
        for text, mode, color in MODE_BUTTONS:
            btn = tk.Button(
                mode_frame,
                text=text,
                font=('Segoe UI', 10, 'bold'),
                width=15,
                bg=INACTIVE_BUTTON,
                fg='white',
                activebackground=color,
                command=lambda m=mode: self._set_mode(m)
            )
            btn.pack(side=tk.LEFT, padx=5)
            self.mode_buttons[mode] = (btn, color)

        # Board
        self.board_frame = ttk.Frame(main_frame)
        self.board_frame.pack(pady=15)

        self.board_cells = []
        for index in range(9):
            cell = tk.Label(
                self.board_frame,
                text="",
                font=('Segoe UI', 28, 'bold'),
                width=4,
                height=2,
                bg=CELL_BG,
                fg='white',
                relief='ridge',
                borderwidth=2,
                cursor='hand2'
            )
            cell.grid(row=index // 3, column=index % 3, padx=2, pady=2)
            cell.bind('<Button-1>', lambda event, i=index: self._on_cell_click(i))
            self.board_cells.append(cell)

        # Game status section
        self.turn_label = ttk.Label(main_frame, text="Current player: X")
        self.turn_label.pack()

        self.status_label = ttk.Label(main_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=5)

        # Score section
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)

        score_frame = ttk.Frame(main_frame)
        score_frame.pack()

        self.score_x_label = ttk.Label(score_frame, text="X: 0", style='Score.TLabel')
        self.score_x_label.pack(side=tk.LEFT, padx=10)
        self.score_o_label = ttk.Label(score_frame, text="O: 0", style='Score.TLabel')
        self.score_o_label.pack(side=tk.LEFT, padx=10)
        self.score_draw_label = ttk.Label(score_frame, text="Draws: 0", style='Score.TLabel')
        self.score_draw_label.pack(side=tk.LEFT, padx=10)

        # Control buttons
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)

        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=5)

        tk.Button(
            control_frame,
            text="🔄 New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._reset_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="🧹 Reset Score",
            font=('Segoe UI', 11, 'bold'),
            bg='#10b981',
            fg='white',
            width=12,
            command=self._reset_score
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            main_frame,
            text="✕ Quit",
            font=('Segoe UI', 10),
            bg='#ef4444',
            fg='white',
            width=26,
            command=self._quit
        ).pack(pady=10)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    # ==================== INPUT ====================

    def _on_cell_click(self, index: int):
        self.controller.apply_move(index)

    def _set_mode(self, mode: GameMode):
        self._highlight_mode(mode)
        self.controller.set_mode(mode)

    def _highlight_mode(self, mode: GameMode):
        for button_mode, (btn, color) in self.mode_buttons.items():
            if button_mode == mode:
                btn.configure(bg=color, fg='black')
            else:
                btn.configure(bg=INACTIVE_BUTTON, fg='white')

    def _reset_game(self):
        self.controller.reset_game()

    def _reset_score(self):
        self.controller.reset_score()

    # ==================== NOTIFICATIONS ====================

    def on_cell_changed(self, index: int, mark: Mark):
        cell = self.board_cells[index]
        if mark == Mark.EMPTY:
            cell.configure(text="", bg=CELL_BG, fg='white')
        else:
            bg_color, fg_color = X_COLORS if mark == Mark.X else O_COLORS
            cell.configure(text=mark.symbol, bg=bg_color, fg=fg_color)

    def on_winning_line(self, indices: Tuple[int, int, int]):
        bg_color, fg_color = WIN_COLORS
        for index in indices:
            self.board_cells[index].configure(bg=bg_color, fg=fg_color)

    def on_status(self, text: str):
        self.status_label.configure(text=text)

    def on_score_changed(self, x_wins: int, o_wins: int, draws: int):
        self.score_x_label.configure(text=f"X: {x_wins}")
        self.score_o_label.configure(text=f"O: {o_wins}")
        self.score_draw_label.configure(text=f"Draws: {draws}")

    def on_turn_changed(self, player: Mark):
        self.turn_label.configure(text=f"Current player: {player.name}")

    # ==================== LIFECYCLE ====================

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self.controller.reset_game()  # drops a pending AI turn
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()
