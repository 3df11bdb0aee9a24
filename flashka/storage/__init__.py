"""
Storage Module - Device-local persistence.

The only persistence in the game is per device:
- A play counter
- A one-time lock flag (for variants that allow a single play)

Nothing about the board itself is ever stored.
"""

from .store import KeyValueStore, MemoryStore, JsonFileStore
from .device import DeviceRecord

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "DeviceRecord",
]
