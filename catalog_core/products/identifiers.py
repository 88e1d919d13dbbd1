"""Product id generators.

The catalog only relies on the ``PREFIX`` + digits contract; how the digits
are produced is up to the generator plugged into the service.
"""

import itertools
import random
import threading
import time
from typing import Protocol


class ProductIdGenerator(Protocol):
    """Produces ids of the form ``PREFIX`` followed by digits."""

    prefix: str

    def generate(self) -> str:
        """Return a new product id."""
        ...


class TimestampIdGenerator:
    """Epoch milliseconds followed by a random 0-999 suffix.

    Collisions are possible within the same millisecond; the service checks
    for them before inserting.
    """

    def __init__(self, prefix: str = "MLA", rng: random.Random | None = None) -> None:
        self.prefix = prefix
        self._rng = rng or random.Random()

    def generate(self) -> str:
        millis = int(time.time() * 1000)
        return f"{self.prefix}{millis}{self._rng.randint(0, 999)}"


class SequentialIdGenerator:
    """Monotonic counter, safe to share between threads."""

    def __init__(self, prefix: str = "MLA", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def generate(self) -> str:
        with self._lock:
            return f"{self.prefix}{next(self._counter)}"
