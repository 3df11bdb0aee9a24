"""
Schedulers - Single-shot delayed callbacks.

The only timer in the game is the mismatch delay. Once scheduled it
always runs; there is no cancellation.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable
import threading
import time


class Scheduler(ABC):
    """Runs a callback once after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        pass


class ThreadingScheduler(Scheduler):
    """Fires the callback on a daemon timer thread. For event-driven hosts."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()


class BlockingScheduler(Scheduler):
    """Sleeps, then runs the callback inline. For the console game."""

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self._sleep(delay)
        callback()
