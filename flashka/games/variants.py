"""
Game Variants - Per-deployment rules for the kiosk.

A variant fixes everything that differed between kiosk deployments:
board size, attempt limit, mismatch delay, whether a device may only
play once, when plays are counted, which events are tracked and
whether a win can be shared by SMS.
"""

from __future__ import annotations
from dataclasses import dataclass, field


COUNT_ON_START = "start"
COUNT_ON_FINISH = "finish"

TRACK_PLAY = "play"
TRACK_WIN = "win"


@dataclass(frozen=True)
class GameVariant:
    """Rules for one kiosk deployment."""
    name: str
    pair_count: int
    max_attempts: int
    mismatch_delay: float = 1.0  # seconds

    # Device persistence
    lock_after_play: bool = False
    count_plays_on: str = COUNT_ON_FINISH
    storage_prefix: str = "flashka"

    # Outbound tracking
    track_events: frozenset[str] = field(default_factory=lambda: frozenset({TRACK_WIN}))

    # Presentation
    columns: int = 4
    share_by_sms: bool = False
    win_title: str = "WINNER!"
    lose_title: str = "BETTER LUCK NEXT TIME"
    win_message: str = "Congratulations! You won a choccy!"
    lose_message: str = "Oh shucks! Out of attempts. Try again tomorrow!"
    locked_message: str = "You've already played on this device. Thanks for playing!"
    sms_template: str = "I just won a choccy playing Flashka Memory Match! {attempts} attempts, {pairs} pairs."

    def __post_init__(self):
        if self.pair_count < 1:
            raise ValueError(f"pair_count must be at least 1, got {self.pair_count}")
        if self.max_attempts < self.pair_count:
            raise ValueError(
                f"max_attempts ({self.max_attempts}) must allow matching all {self.pair_count} pairs"
            )
        if self.mismatch_delay < 0:
            raise ValueError("mismatch_delay cannot be negative")
        if self.count_plays_on not in (COUNT_ON_START, COUNT_ON_FINISH):
            raise ValueError(f"Unknown count_plays_on: {self.count_plays_on}")
        unknown = set(self.track_events) - {TRACK_PLAY, TRACK_WIN}
        if unknown:
            raise ValueError(f"Unknown track events: {sorted(unknown)}")
        if self.columns < 1:
            raise ValueError("columns must be at least 1")

    @property
    def card_count(self) -> int:
        return self.pair_count * 2

    def sms_body(self, attempts: int) -> str:
        """Fill the share template for a finished game."""
        return self.sms_template.format(attempts=attempts, pairs=self.pair_count)


VARIANTS: dict[str, GameVariant] = {
    # 16 cards, generous attempts, no device lock
    "classic": GameVariant(
        name="classic",
        pair_count=8,
        max_attempts=17,
        mismatch_delay=1.0,
        share_by_sms=True,
    ),
    # 8 cards, one play per device
    "mini": GameVariant(
        name="mini",
        pair_count=4,
        max_attempts=6,
        mismatch_delay=0.6,
        lock_after_play=True,
        count_plays_on=COUNT_ON_START,
        track_events=frozenset({TRACK_PLAY, TRACK_WIN}),
    ),
    # 20 cards laid out 5 wide, one play per device
    "kiosk": GameVariant(
        name="kiosk",
        pair_count=10,
        max_attempts=20,
        mismatch_delay=0.8,
        lock_after_play=True,
        count_plays_on=COUNT_ON_START,
        track_events=frozenset({TRACK_PLAY, TRACK_WIN}),
        columns=5,
        share_by_sms=True,
    ),
}


def get_variant(name: str) -> GameVariant:
    """Look up a preset variant by name."""
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown variant: {name} (choose from {', '.join(sorted(VARIANTS))})"
        ) from None
