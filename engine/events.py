"""
Notifications sent by the game controller to renderers.
"""

from typing import List, Tuple, Any

from .game_state import Mark


class GameListener:
    """
    Base class for anything that renders the game.
    Override only the notifications you care about.
    """

    def on_cell_changed(self, index: int, mark: Mark):
        pass

    def on_winning_line(self, indices: Tuple[int, int, int]):
        pass

    def on_status(self, text: str):
        pass

    def on_score_changed(self, x_wins: int, o_wins: int, draws: int):
        pass

    def on_turn_changed(self, player: Mark):
        pass


class RecordingListener(GameListener):
    """Keeps every notification as (name, args) - handy in tests and replays."""

    def __init__(self):
        self.events: List[Tuple[str, Tuple[Any, ...]]] = []

    def on_cell_changed(self, index: int, mark: Mark):
        self.events.append(("cell_changed", (index, mark)))

    def on_winning_line(self, indices: Tuple[int, int, int]):
        self.events.append(("winning_line", (tuple(indices),)))

    def on_status(self, text: str):
        self.events.append(("status", (text,)))

    def on_score_changed(self, x_wins: int, o_wins: int, draws: int):
        self.events.append(("score_changed", (x_wins, o_wins, draws)))

    def on_turn_changed(self, player: Mark):
        self.events.append(("turn_changed", (player,)))

    def of_kind(self, name: str) -> List[Tuple[Any, ...]]:
        """Arguments of every recorded notification with this name."""
        return [args for kind, args in self.events if kind == name]

    @property
    def last_status(self) -> str:
        statuses = self.of_kind("status")
        return statuses[-1][0] if statuses else ""

    def clear(self):
        self.events.clear()
