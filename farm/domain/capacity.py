# farm/domain/capacity.py
"""
Capacity policy: the maximum number of animals a barn may hold at rest and
the generator used to name new barns.
"""
import random
from typing import Optional

from farm.config.settings import settings


class CapacityPolicy:
    def __init__(
        self,
        capacity: Optional[int] = None,
        name_prefix: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        capacity = settings.BARN_CAPACITY if capacity is None else capacity
        if capacity < 1:
            raise ValueError(f"barn capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._prefix = name_prefix or settings.BARN_NAME_PREFIX
        self._rng = rng or random.Random()

    def capacity(self) -> int:
        return self._capacity

    def generate_name(self, seed: int) -> str:
        return f"{self._prefix} {seed}"

    def next_seed(self) -> int:
        """Random seed in [0, 999] for generate_name."""
        return self._rng.randint(0, 999)
