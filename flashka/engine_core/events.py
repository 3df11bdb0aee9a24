"""
Game Events - What renderers and trackers get told about.

The reducer emits events as plain data; the controller publishes them
to its subscribers after the new state is in place.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventType(Enum):
    DECK_DEALT = "deck_dealt"
    CARD_FLIPPED = "card_flipped"
    PAIR_MATCHED = "pair_matched"
    PAIR_MISMATCHED = "pair_mismatched"
    PAIR_HIDDEN = "pair_hidden"
    GAME_WON = "game_won"
    GAME_LOST = "game_lost"
    DEVICE_LOCKED = "device_locked"


@dataclass(frozen=True)
class GameEvent:
    """A single state change notification."""
    event_type: EventType
    positions: tuple[int, ...] = ()
    state: Any | None = None  # BoardState after the change

    def with_state(self, state: Any) -> GameEvent:
        return GameEvent(event_type=self.event_type, positions=self.positions, state=state)
