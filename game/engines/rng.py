from __future__ import annotations

import random
from typing import Optional


class RNG:
    """Thin wrapper around random.Random so briefings can be replayed from a seed."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)
