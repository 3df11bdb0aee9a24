"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player input (flip a card)
2. Timed transitions (hide a mismatched pair once the delay elapses)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    FLIP = "flip"
    HIDE_PAIR = "hide_pair"


class RejectCode:
    """Error codes for rejected actions."""
    GAME_OVER = "GAME_OVER"
    BOARD_LOCKED = "BOARD_LOCKED"
    INVALID_CARD = "INVALID_CARD"
    SAME_CARD = "SAME_CARD"
    CARD_NOT_HIDDEN = "CARD_NOT_HIDDEN"
    NO_ATTEMPTS_LEFT = "NO_ATTEMPTS_LEFT"
    NOTHING_PENDING = "NOTHING_PENDING"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class ActionPayload:
    """Payload for an action."""
    position: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the board.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def flip(cls, position: int) -> Action:
        """Factory for a card flip."""
        return cls(
            action_type=ActionType.FLIP,
            payload=ActionPayload(position=position),
        )

    @classmethod
    def hide_pair(cls) -> Action:
        """Factory for the delayed hide of a mismatched pair."""
        return cls(action_type=ActionType.HIDE_PAIR)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action was accepted
    - New state (if accepted)
    - Error and code (if rejected)
    - Events for renderers and the controller
    """
    success: bool
    new_state: Any | None = None  # BoardState
    error: str | None = None
    error_code: str | None = None

    events: list[Any] = field(default_factory=list)  # GameEvent
    state_changes: list[str] = field(default_factory=list)

    # Set on the flip that compared two cards
    matched: bool | None = None

    @property
    def terminated_game(self) -> bool:
        """True when this action is the one that ended the game."""
        from .events import EventType
        return any(
            e.event_type in (EventType.GAME_WON, EventType.GAME_LOST)
            for e in self.events
        )

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        events: list[Any] | None = None,
        changes: list[str] | None = None,
        matched: bool | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            events=events or [],
            state_changes=changes or [],
            matched=matched,
        )
