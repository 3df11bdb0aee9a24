"""
Pytest fixtures for Flashka tests.
"""

import random

import pytest

from ..engine_core.state import BoardState, Card
from ..games.variants import GameVariant, COUNT_ON_START, TRACK_PLAY, TRACK_WIN
from ..session import GameController, Scheduler
from ..storage import MemoryStore
from ..tracking import NotificationSink


class ManualScheduler(Scheduler):
    """Holds timer callbacks until the test runs them."""

    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback):
        self.pending.append((delay, callback))

    def run_pending(self):
        while self.pending:
            _, callback = self.pending.pop(0)
            callback()


class RecordingSink(NotificationSink):
    """Keeps every notification in a list."""

    def __init__(self):
        self.calls = []

    def notify(self, event, payload=None):
        self.calls.append((event, payload))

    @property
    def events(self):
        return [event for event, _ in self.calls]


def make_board(identifiers, max_attempts=6):
    """Board with a fixed deck order."""
    cards = [Card(position=p, identifier=i) for p, i in enumerate(identifiers)]
    return BoardState.create(cards=cards, max_attempts=max_attempts, game_id="test_game")


def pair_positions(state):
    """identifier -> [position, position] for a dealt board."""
    positions = {}
    for card in state.cards:
        positions.setdefault(card.identifier, []).append(card.position)
    return positions


@pytest.fixture
def fixed_board() -> BoardState:
    """4 pairs laid out 1,2,1,2,3,4,3,4 with 6 attempts."""
    return make_board([1, 2, 1, 2, 3, 4, 3, 4], max_attempts=6)


@pytest.fixture
def mini_variant() -> GameVariant:
    """4 pairs / 6 attempts, no device lock."""
    return GameVariant(
        name="test_mini",
        pair_count=4,
        max_attempts=6,
        mismatch_delay=0.6,
    )


@pytest.fixture
def locking_variant() -> GameVariant:
    """4 pairs / 6 attempts, one play per device, counts and tracks on start."""
    return GameVariant(
        name="test_locking",
        pair_count=4,
        max_attempts=6,
        mismatch_delay=0.6,
        lock_after_play=True,
        count_plays_on=COUNT_ON_START,
        track_events=frozenset({TRACK_PLAY, TRACK_WIN}),
        share_by_sms=True,
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_controller(scheduler, sink, store):
    """Factory for controllers sharing the test's scheduler, sink and store."""
    def _make(variant, seed=42, **kwargs):
        options = {
            "store": store,
            "sink": sink,
            "scheduler": scheduler,
            "rng": random.Random(seed),
        }
        options.update(kwargs)
        return GameController(variant, **options)
    return _make
