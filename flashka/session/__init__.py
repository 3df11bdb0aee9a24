"""
Session Module - Runs one game on one device.

A session is a single board:
- Created when the kiosk starts a game
- Driven by flips from whatever front end is attached
- Finished by a win or by running out of attempts

Only the device record (play counter, lock flag) outlives a session.
"""

from .controller import GameController
from .scheduler import Scheduler, ThreadingScheduler, BlockingScheduler
from .renderer import Renderer, ConsoleRenderer, letter_faces

__all__ = [
    "GameController",
    "Scheduler",
    "ThreadingScheduler",
    "BlockingScheduler",
    "Renderer",
    "ConsoleRenderer",
    "letter_faces",
]
