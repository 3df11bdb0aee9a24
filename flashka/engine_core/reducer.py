"""
Reducer - Applies actions to the board.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying; a rejected action changes nothing
- One attempt is one completed pair of flips, never a single flip
- A win is checked before a loss on the same resolving flip
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import BoardState, CardStatus
from .action import Action, ActionType, ActionResult, RejectCode
from .events import EventType, GameEvent


@dataclass
class Reducer:
    """
    Reducer applies actions to a BoardState.

    Stateless - all state is in BoardState, including the pair count
    and attempt limit.
    """

    def apply(self, state: BoardState, action: Action) -> ActionResult:
        """
        Apply an action to the board.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=RejectCode.NO_HANDLER,
            )

        result = handler(state, action)
        if result.success and result.new_state:
            new_state = result.new_state._copy_with(
                action_history=state.action_history + [action],
            )
            result.new_state = new_state
            result.events = [e.with_state(new_state) for e in result.events]
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.FLIP: self._handle_flip,
            ActionType.HIDE_PAIR: self._handle_hide_pair,
        }
        return handlers.get(action_type)

    def _validate_flip(self, state: BoardState, position: int | None) -> tuple[str, str] | None:
        """
        Check that a flip is allowed.

        Returns (message, code) if rejected, None if allowed.
        """
        if state.terminated:
            return "Game is over - no flips allowed", RejectCode.GAME_OVER
        if state.locked:
            return "Board is locked while a pair resolves", RejectCode.BOARD_LOCKED
        card = state.card(position) if position is not None else None
        if card is None:
            return f"No card at position {position}", RejectCode.INVALID_CARD
        if position == state.first_selected:
            return f"Card {position} is already selected", RejectCode.SAME_CARD
        if not card.is_hidden:
            return f"Card {position} is already {card.status.value}", RejectCode.CARD_NOT_HIDDEN
        if state.out_of_attempts:
            return "No attempts left", RejectCode.NO_ATTEMPTS_LEFT
        return None

    def _handle_flip(self, state: BoardState, action: Action) -> ActionResult:
        """Handle a card flip."""
        position = action.payload.position
        rejection = self._validate_flip(state, position)
        if rejection:
            return ActionResult.failure(*rejection)

        flipped = state.with_cards({position: CardStatus.FLIPPED})

        if state.first_selected is None:
            new_state = flipped._copy_with(first_selected=position)
            return ActionResult.success_with_state(
                new_state,
                events=[GameEvent(EventType.CARD_FLIPPED, (position,))],
                changes=[f"Card {position} flipped"],
            )

        first = state.first_selected
        attempts = state.attempts + 1
        events = [GameEvent(EventType.CARD_FLIPPED, (position,))]

        if state.cards[first].identifier == state.cards[position].identifier:
            new_state = flipped.with_cards({
                first: CardStatus.MATCHED,
                position: CardStatus.MATCHED,
            })._copy_with(
                attempts=attempts,
                matched_pairs=state.matched_pairs + 1,
                first_selected=None,
                second_selected=None,
            )
            events.append(GameEvent(EventType.PAIR_MATCHED, (first, position)))
            matched = True
        else:
            new_state = flipped._copy_with(
                attempts=attempts,
                second_selected=position,
                locked=True,
            )
            events.append(GameEvent(EventType.PAIR_MISMATCHED, (first, position)))
            matched = False

        new_state, end_event = self._evaluate_termination(new_state)
        if end_event:
            events.append(end_event)

        return ActionResult.success_with_state(
            new_state,
            events=events,
            changes=[f"Attempt {attempts}: cards {first} and {position} {'match' if matched else 'differ'}"],
            matched=matched,
        )

    def _handle_hide_pair(self, state: BoardState, action: Action) -> ActionResult:
        """
        Turn a mismatched pair face down again and unlock the board.

        Allowed after termination: a scheduled hide always runs.
        """
        if not state.locked or state.second_selected is None:
            return ActionResult.failure("No mismatched pair to hide", RejectCode.NOTHING_PENDING)

        pending = tuple(state.pending_positions())
        new_state = state.with_cards(
            {p: CardStatus.HIDDEN for p in pending}
        )._copy_with(
            first_selected=None,
            second_selected=None,
            locked=False,
        )
        return ActionResult.success_with_state(
            new_state,
            events=[GameEvent(EventType.PAIR_HIDDEN, pending)],
            changes=[f"Cards {pending[0]} and {pending[1]} hidden"],
        )

    def _evaluate_termination(self, state: BoardState) -> tuple[BoardState, GameEvent | None]:
        """Win takes priority over a loss reached on the same flip."""
        if state.matched_pairs == state.pair_count:
            return state._copy_with(terminated=True, won=True), GameEvent(EventType.GAME_WON)
        if state.attempts >= state.max_attempts:
            return state._copy_with(terminated=True, won=False), GameEvent(EventType.GAME_LOST)
        return state, None


def apply_action(state: BoardState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer().apply(state, action)
