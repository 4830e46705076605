"""Thread-safe monotonically increasing identifiers."""

import threading


class IdSequence:
    """Counter seeded with a starting value; the first issued ID is ``start + 1``.

    Parameters
    ----------
    start : int
        Value the counter starts from. Must not be negative.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Increment and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def current(self) -> int:
        """Last issued value (or the seed when nothing was issued)."""
        with self._lock:
            return self._value
