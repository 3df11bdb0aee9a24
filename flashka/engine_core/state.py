"""
Board State - The memory-match session aggregate.

Design principles:
- Immutable-friendly: the reducer returns new state instead of mutating
- Self-contained: pair count and attempt limit travel with the state
- Observable: the current turn phase is derived, never stored
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import uuid


class CardStatus(Enum):
    """Visible status of a single card."""
    HIDDEN = "hidden"
    FLIPPED = "flipped"
    MATCHED = "matched"


class TurnPhase(Enum):
    """Where the board is in the flip/compare cycle."""
    IDLE = "idle"  # No card selected
    ONE_SELECTED = "one_selected"  # First card up, waiting for the second
    RESOLVING = "resolving"  # Mismatched pair up, waiting to be hidden
    TERMINATED = "terminated"  # Won or lost, absorbing


@dataclass
class Card:
    """
    A card on the board.

    The identifier is the pair value (1..pair_count); the position is
    the card's index in the dealt deck and never changes.
    """
    position: int
    identifier: int
    status: CardStatus = CardStatus.HIDDEN

    @property
    def is_hidden(self) -> bool:
        return self.status == CardStatus.HIDDEN

    def with_status(self, status: CardStatus) -> Card:
        """Return a copy of the card with a different status."""
        return Card(position=self.position, identifier=self.identifier, status=status)


@dataclass
class BoardState:
    """
    Complete state of one memory-match session.

    All changes go through the reducer. A terminated board accepts
    no further flips; `won` is None until the board terminates.
    """
    game_id: str
    cards: list[Card]
    pair_count: int
    max_attempts: int

    attempts: int = 0
    matched_pairs: int = 0

    # Pending selection (card positions)
    first_selected: int | None = None
    second_selected: int | None = None

    # Input lock while a mismatched pair waits to be hidden
    locked: bool = False

    terminated: bool = False
    won: bool | None = None

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        cards: list[Card],
        max_attempts: int,
        game_id: str | None = None,
    ) -> BoardState:
        """Create a fresh board from a dealt deck."""
        return cls(
            game_id=game_id or str(uuid.uuid4()),
            cards=cards,
            pair_count=len(cards) // 2,
            max_attempts=max_attempts,
        )

    @property
    def phase(self) -> TurnPhase:
        if self.terminated:
            return TurnPhase.TERMINATED
        if self.locked:
            return TurnPhase.RESOLVING
        if self.first_selected is not None:
            return TurnPhase.ONE_SELECTED
        return TurnPhase.IDLE

    @property
    def attempts_left(self) -> int:
        return max(self.max_attempts - self.attempts, 0)

    @property
    def is_won(self) -> bool:
        return self.terminated and bool(self.won)

    @property
    def is_lost(self) -> bool:
        return self.terminated and self.won is False

    @property
    def out_of_attempts(self) -> bool:
        return self.attempts >= self.max_attempts and self.matched_pairs < self.pair_count

    def card(self, position: int) -> Card | None:
        """Get a card by position, None when out of range."""
        if 0 <= position < len(self.cards):
            return self.cards[position]
        return None

    def pending_positions(self) -> list[int]:
        """Positions currently face up but not matched."""
        return [
            p for p in (self.first_selected, self.second_selected)
            if p is not None
        ]

    def with_cards(self, updates: dict[int, CardStatus]) -> BoardState:
        """Return new state with some card statuses replaced."""
        new_cards = [
            c.with_status(updates[c.position]) if c.position in updates else c
            for c in self.cards
        ]
        return self._copy_with(cards=new_cards)

    def _copy_with(self, **kwargs) -> BoardState:
        """Create a copy with some fields replaced."""
        return BoardState(
            game_id=kwargs.get("game_id", self.game_id),
            cards=kwargs.get("cards", self.cards),
            pair_count=kwargs.get("pair_count", self.pair_count),
            max_attempts=kwargs.get("max_attempts", self.max_attempts),
            attempts=kwargs.get("attempts", self.attempts),
            matched_pairs=kwargs.get("matched_pairs", self.matched_pairs),
            first_selected=kwargs.get("first_selected", self.first_selected),
            second_selected=kwargs.get("second_selected", self.second_selected),
            locked=kwargs.get("locked", self.locked),
            terminated=kwargs.get("terminated", self.terminated),
            won=kwargs.get("won", self.won),
            action_history=kwargs.get("action_history", self.action_history),
        )
