"""
Game Controller - Owns one session and its collaborators.

LIFECYCLE:
1. start() checks the device lock flag
   - locked: publish DEVICE_LOCKED, build no deck
   - otherwise: deal a fresh deck, publish DECK_DEALT
2. flip(position) runs the reducer
   - mismatches schedule a single HIDE_PAIR after the variant delay
3. The flip that ends the game triggers the termination side effects:
   - play counter (variants that count finished games)
   - lock flag (single-play variants)
   - win notification (variants that track wins)
   - then GAME_WON / GAME_LOST is published

COLLABORATORS:
- DeviceRecord (key-value store): best-effort, never changes the outcome
- NotificationSink: fire-and-forget, failures logged only
- Listeners (renderers): get every GameEvent in order, failures logged only
"""

from __future__ import annotations
from typing import Any, Callable
import logging
import random
import threading

from ..engine_core import (
    Action,
    ActionResult,
    BoardState,
    EventType,
    GameEvent,
    Reducer,
    deal,
)
from ..games.variants import GameVariant, COUNT_ON_START, COUNT_ON_FINISH, TRACK_PLAY, TRACK_WIN
from ..sms import compose_sms_link
from ..storage import DeviceRecord, KeyValueStore, MemoryStore
from ..tracking import NotificationSink, NullSink
from .scheduler import Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent], None]

_TERMINAL_EVENTS = (EventType.GAME_WON, EventType.GAME_LOST)


class GameController:
    """
    Drives one memory-match session.

    Usage:
        controller = GameController(get_variant("classic"))
        controller.subscribe(renderer.handle)
        controller.start()
        controller.flip(3)
        controller.flip(7)
    """

    def __init__(
        self,
        variant: GameVariant,
        store: KeyValueStore | None = None,
        sink: NotificationSink | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        sms_recipient: str | None = None,
    ):
        self.variant = variant
        self.device = DeviceRecord(store or MemoryStore(), prefix=variant.storage_prefix)
        self.sink = sink or NullSink()
        self.scheduler = scheduler or ThreadingScheduler()
        self.rng = rng or random.Random()
        self.sms_recipient = sms_recipient

        self.state: BoardState | None = None
        self.device_locked = False

        self._reducer = Reducer()
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: Listener):
        """Register a callback for every GameEvent."""
        self._listeners.append(listener)

    def _publish(self, events: list[GameEvent]):
        """Deliver events in order. A failing listener never stalls the board."""
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception as e:
                    logger.warning("Listener failed on %s: %s", event.event_type.value, e)

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def start(self) -> BoardState | None:
        """
        Start a new session.

        Returns the fresh board, or None if this device is locked.
        """
        with self._lock:
            if self.variant.lock_after_play and self.device.is_locked():
                logger.info("Device already played %s, showing locked screen", self.variant.name)
                self.state = None
                self.device_locked = True
                self._publish([GameEvent(EventType.DEVICE_LOCKED)])
                return None

            self.device_locked = False
            self.state = BoardState.create(
                cards=deal(self.variant.pair_count, self.rng),
                max_attempts=self.variant.max_attempts,
            )
            logger.info(
                "Dealt %d cards for %s (game %s)",
                len(self.state.cards), self.variant.name, self.state.game_id,
            )
            self._publish([GameEvent(EventType.DECK_DEALT, state=self.state)])

            if self.variant.count_plays_on == COUNT_ON_START:
                self.device.increment_play_count()
            if TRACK_PLAY in self.variant.track_events:
                self._notify(TRACK_PLAY, self._payload())

            return self.state

    def flip(self, position: int) -> ActionResult:
        """
        Flip the card at a position.

        Rejected flips (locked board, same card, finished game, ...) leave
        the session untouched and are returned as failures.
        """
        with self._lock:
            if self.state is None:
                return ActionResult.failure("No game in progress", "NO_GAME")

            result = self._reducer.apply(self.state, Action.flip(position))
            if not result.success:
                logger.debug("Ignored flip of %s: %s", position, result.error)
                return result

            self.state = result.new_state
            self._log_changes(result)
            terminal = [e for e in result.events if e.event_type in _TERMINAL_EVENTS]
            self._publish([e for e in result.events if e.event_type not in _TERMINAL_EVENTS])

            if result.matched is False:
                game_id = self.state.game_id
                self.scheduler.call_later(
                    self.variant.mismatch_delay,
                    lambda: self._hide_pair(game_id),
                )

            if terminal:
                self._finish(terminal)

            return result

    def _hide_pair(self, game_id: str):
        """Timer callback: turn the mismatched pair back over."""
        with self._lock:
            if self.state is None or self.state.game_id != game_id:
                # A new game started while the timer was pending
                return
            result = self._reducer.apply(self.state, Action.hide_pair())
            if not result.success:
                logger.debug("Nothing to hide: %s", result.error)
                return
            self.state = result.new_state
            self._log_changes(result)
            self._publish(result.events)

    def _finish(self, terminal: list[GameEvent]):
        """Persist, notify, then tell the renderers. Win and loss persist alike."""
        state = self.state
        logger.info(
            "Game %s %s after %d attempts (%d/%d pairs)",
            state.game_id,
            "won" if state.won else "lost",
            state.attempts,
            state.matched_pairs,
            state.pair_count,
        )

        if self.variant.count_plays_on == COUNT_ON_FINISH:
            self.device.increment_play_count()
        if self.variant.lock_after_play:
            self.device.lock()
        if state.won and TRACK_WIN in self.variant.track_events:
            self._notify(TRACK_WIN, self._payload())

        self._publish(terminal)

    # =========================================================================
    # Collaborator helpers
    # =========================================================================

    def _log_changes(self, result: ActionResult):
        for change in result.state_changes:
            logger.debug("Game %s: %s", self.state.game_id, change)

    def _notify(self, event: str, payload: dict[str, Any]):
        try:
            self.sink.notify(event, payload)
        except Exception as e:
            logger.warning("Notification sink failed for %s: %s", event, e)

    def _payload(self) -> dict[str, Any]:
        state = self.state
        return {
            "variant": self.variant.name,
            "game_id": state.game_id if state else None,
            "attempts": state.attempts if state else 0,
            "matched_pairs": state.matched_pairs if state else 0,
        }

    # =========================================================================
    # Presentation helpers
    # =========================================================================

    @property
    def sms_link(self) -> str | None:
        """Share link for a won game, if the variant allows sharing."""
        if not self.variant.share_by_sms or not self.state or not self.state.is_won:
            return None
        return compose_sms_link(
            self.variant.sms_body(self.state.attempts),
            recipient=self.sms_recipient,
        )

    def result_message(self) -> tuple[str, str] | None:
        """(title, message) for a finished game."""
        if not self.state or not self.state.terminated:
            return None
        if self.state.won:
            return self.variant.win_title, self.variant.win_message
        return self.variant.lose_title, self.variant.lose_message
