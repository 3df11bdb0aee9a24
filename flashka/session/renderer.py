"""
Renderers - Turn game events into something a player can see.

A renderer subscribes to a GameController and reacts to events; it
never changes game state. The console renderer draws the board as a
text grid for the CLI.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, TextIO
import string
import sys

from ..engine_core import BoardState, CardStatus, EventType, GameEvent
from ..games.variants import GameVariant


class Renderer(ABC):
    """Base class for event-driven renderers."""

    def handle(self, event: GameEvent):
        """Dispatch an event to the matching hook."""
        if event.event_type == EventType.DEVICE_LOCKED:
            self.render_locked()
        elif event.event_type in (EventType.GAME_WON, EventType.GAME_LOST):
            self.render_result(event.event_type == EventType.GAME_WON, event.state)
        elif event.state is not None:
            self.render_board(event.state, event)

    @abstractmethod
    def render_board(self, state: BoardState, event: GameEvent):
        pass

    @abstractmethod
    def render_result(self, won: bool, state: BoardState):
        pass

    @abstractmethod
    def render_locked(self):
        pass


def letter_faces(pair_count: int) -> dict[int, str]:
    """Identifier -> single character face, stable for a board size."""
    symbols = string.ascii_uppercase + string.digits
    if pair_count > len(symbols):
        raise ValueError(f"Console faces support at most {len(symbols)} pairs")
    return {i: symbols[i - 1] for i in range(1, pair_count + 1)}


class ConsoleRenderer(Renderer):
    """
    Text renderer.

    Hidden cards show their position number, flipped cards their face,
    matched cards their face in brackets.
    """

    def __init__(
        self,
        variant: GameVariant,
        out: TextIO | None = None,
        faces: dict[int, str] | None = None,
        share_link: Callable[[], str | None] | None = None,
    ):
        self.variant = variant
        self.out = out or sys.stdout
        self.faces = faces or letter_faces(variant.pair_count)
        self.share_link = share_link

    def _write(self, text: str = ""):
        self.out.write(text + "\n")

    def _cell(self, state: BoardState, position: int) -> str:
        card = state.cards[position]
        face = self.faces[card.identifier]
        if card.status == CardStatus.MATCHED:
            return f"[{face}]"
        if card.status == CardStatus.FLIPPED:
            return f" {face} "
        return f"{position:>3}"

    def render_board(self, state: BoardState, event: GameEvent):
        if event.event_type == EventType.PAIR_MATCHED:
            self._write("Match!")
        elif event.event_type == EventType.PAIR_MISMATCHED:
            self._write("No match.")

        cols = self.variant.columns
        for row_start in range(0, len(state.cards), cols):
            row = range(row_start, min(row_start + cols, len(state.cards)))
            self._write(" ".join(self._cell(state, p) for p in row))
        self._write(
            f"Attempts: {state.attempts}  Left: {state.attempts_left}  "
            f"Pairs: {state.matched_pairs}/{state.pair_count}"
        )
        self._write()

    def render_result(self, won: bool, state: BoardState):
        title = self.variant.win_title if won else self.variant.lose_title
        message = self.variant.win_message if won else self.variant.lose_message
        self._write("=" * 40)
        self._write(title)
        self._write(message)
        self._write(
            f"{state.matched_pairs}/{state.pair_count} pairs in {state.attempts} attempts"
        )
        if won and self.share_link:
            link = self.share_link()
            if link:
                self._write(f"Share: {link}")
        self._write("=" * 40)

    def render_locked(self):
        self._write("=" * 40)
        self._write(self.variant.locked_message)
        self._write("=" * 40)
