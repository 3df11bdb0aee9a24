"""
Device Record - Play counter and one-time lock flag.

Both live in a KeyValueStore as strings:
    <prefix>:plays   -> "3"
    <prefix>:locked  -> "1"

Storage is best-effort. A broken or unreadable store never changes the
outcome of a game: reads fall back to "0 plays, not locked" and failed
writes are logged and dropped.
"""

from __future__ import annotations
import logging

from .store import KeyValueStore

logger = logging.getLogger(__name__)

LOCKED_VALUE = "1"

# What a store may raise when its backing file is missing, unreadable or corrupt
STORE_ERRORS = (OSError, ValueError)


class DeviceRecord:
    """Per-device counters on top of a KeyValueStore."""

    def __init__(self, store: KeyValueStore, prefix: str = "flashka"):
        self.store = store
        self.prefix = prefix

    @property
    def plays_key(self) -> str:
        return f"{self.prefix}:plays"

    @property
    def locked_key(self) -> str:
        return f"{self.prefix}:locked"

    def play_count(self) -> int:
        """Number of plays recorded on this device."""
        try:
            raw = self.store.get(self.plays_key)
            return int(raw) if raw else 0
        except STORE_ERRORS as e:
            logger.warning("Could not read play count: %s", e)
            return 0

    def increment_play_count(self) -> int:
        """Add one play. Returns the new count (best-effort)."""
        count = self.play_count() + 1
        try:
            self.store.set(self.plays_key, str(count))
        except STORE_ERRORS as e:
            logger.warning("Could not save play count: %s", e)
        return count

    def is_locked(self) -> bool:
        """True once this device has used its one play."""
        try:
            return self.store.get(self.locked_key) == LOCKED_VALUE
        except STORE_ERRORS as e:
            logger.warning("Could not read lock flag: %s", e)
            return False

    def lock(self):
        """Set the lock flag."""
        try:
            self.store.set(self.locked_key, LOCKED_VALUE)
        except STORE_ERRORS as e:
            logger.warning("Could not save lock flag: %s", e)

    def reset(self, clear_plays: bool = False):
        """
        Clear the lock flag (and optionally the play counter).

        This is the external reset for locked devices; unlike the
        in-game writes, failures here are raised to the operator.
        """
        self.store.delete(self.locked_key)
        if clear_plays:
            self.store.delete(self.plays_key)
