# farm/services/locks.py
"""
Per-color serialization for allocation operations.

The read-decide-write sequence in AnimalService is not isolated against
interleaving, so every operation holds the lock of the color it touches from
the first read until commit. Colors are disjoint balancing domains and never
block each other.
"""
import threading
from contextlib import contextmanager
from typing import Dict

from farm.domain.models import Color


class ColorLockRegistry:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Color, threading.Lock] = {}

    def lock_for(self, color: Color) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(color)
            if lock is None:
                lock = self._locks[color] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, *colors: Color):
        """Acquire the locks of all given colors, in a fixed order."""
        ordered = sorted(set(colors), key=lambda c: c.value)
        acquired = []
        try:
            for color in ordered:
                lock = self.lock_for(color)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


# shared by every AnimalService in the process
color_locks = ColorLockRegistry()
