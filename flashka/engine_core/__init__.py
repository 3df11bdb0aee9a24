"""
Engine Core - Deterministic memory-match state and turn resolution.

The engine is the headless part of the game:
1. Builds a shuffled deck of pairs
2. Holds the BoardState
3. Applies flips via the reducer
4. Decides win/loss termination

Nothing in here touches the screen, storage or the network.
"""

from .state import BoardState, Card, CardStatus, TurnPhase
from .action import Action, ActionType, ActionPayload, ActionResult
from .events import EventType, GameEvent
from .deck import build_deck, deal, shuffle_in_place
from .reducer import Reducer, apply_action

__all__ = [
    "BoardState",
    "Card",
    "CardStatus",
    "TurnPhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "EventType",
    "GameEvent",
    "build_deck",
    "deal",
    "shuffle_in_place",
    "Reducer",
    "apply_action",
]
