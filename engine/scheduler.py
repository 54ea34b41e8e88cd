"""
Delayed task scheduling for the AI turn.

The controller only needs schedule() and cancel(). Renderers with their
own event loop (Tkinter) provide a scheduler on top of it.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional


class Scheduler:
    """Interface: run a callback after a delay, allow cancelling it."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> object:
        raise NotImplementedError

    def cancel(self, handle: object):
        raise NotImplementedError


class ImmediateScheduler(Scheduler):
    """
    Runs callbacks right away, ignoring the delay.
    Used by the console mode where there is nothing to animate.
    """

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> object:
        callback()
        return None

    def cancel(self, handle: object):
        pass


@dataclass
class ScheduledTask:
    """A callback waiting in a ManualScheduler."""
    delay_ms: int
    callback: Callable[[], None]
    cancelled: bool = False


class ManualScheduler(Scheduler):
    """
    Queues callbacks until run_pending() is called.
    Lets tests decide exactly when the delay "elapses".
    """

    def __init__(self):
        self.tasks: List[ScheduledTask] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(delay_ms=delay_ms, callback=callback)
        self.tasks.append(task)
        return task

    def cancel(self, handle: Optional[ScheduledTask]):
        if handle is not None:
            handle.cancelled = True

    @property
    def pending(self) -> List[ScheduledTask]:
        return [task for task in self.tasks if not task.cancelled]

    def run_pending(self) -> int:
        """
        Fire every queued task that was not cancelled, oldest first.
        Tasks scheduled while running wait for the next call.

        Returns:
            Number of callbacks fired.
        """
        tasks, self.tasks = self.tasks, []
        fired = 0
        for task in tasks:
            if task.cancelled:
                continue
            task.callback()
            fired += 1
        return fired
