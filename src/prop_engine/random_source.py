"""Injectable pseudorandom source for the player-derived synthesis path."""

from __future__ import annotations

import random
from typing import Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Anything exposing ``random() -> float`` in [0, 1); ``random.Random`` qualifies."""

    def random(self) -> float:
        ...


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    """Return a ``random.Random`` seeded with ``seed`` (unseeded when ``None``)."""

    return random.Random(seed)


class SequenceRandomSource:
    """Replay a fixed sequence of floats, cycling when exhausted."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(value) for value in values]
        if not self._values:
            raise ValueError("SequenceRandomSource needs at least one value.")
        for value in self._values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Random values must lie in [0, 1), got {value}")
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value
