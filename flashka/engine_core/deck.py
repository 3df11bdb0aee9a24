"""
Deck Builder - Paired identifiers in uniformly random order.

Each identifier 1..pair_count appears exactly twice. Shuffling is an
in-place Fisher-Yates pass; pass a seeded random.Random for determinism.
"""

from __future__ import annotations
import random
from typing import Any, MutableSequence

from .state import Card


def shuffle_in_place(items: MutableSequence[Any], rng: random.Random | None = None) -> MutableSequence[Any]:
    """
    Fisher-Yates shuffle.

    For i from the last index down to 1, swap items[i] with a uniformly
    chosen items[j], j in [0, i]. Returns the same sequence.
    """
    rng = rng or random.Random()
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def build_deck(pair_count: int, rng: random.Random | None = None) -> list[int]:
    """Return 2 * pair_count shuffled identifiers."""
    identifiers = []
    for i in range(1, pair_count + 1):
        identifiers.extend((i, i))
    shuffle_in_place(identifiers, rng)
    return identifiers


def deal(pair_count: int, rng: random.Random | None = None) -> list[Card]:
    """Build a deck and lay it out as hidden cards."""
    return [
        Card(position=position, identifier=identifier)
        for position, identifier in enumerate(build_deck(pair_count, rng))
    ]
