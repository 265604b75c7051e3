"""
Time-based cache slots for provider metadata and JWKS.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A fetched value and the clock reading at which it was fetched."""

    value: T
    fetched_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.fetched_at < ttl


class CacheSlot(Generic[T]):
    """
    Holds at most one CacheEntry, replaced wholesale on every store.

    Readers take a reference to the current entry and never observe a partially
    updated value/timestamp pair. Fetching happens outside the slot, so several
    callers that find the slot stale may each fetch and store; the last store wins.
    """

    def __init__(self, ttl: float, clock: Callable[[], float]) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entry: CacheEntry[T] | None = None

    def get(self) -> T | None:
        """Return the cached value if fresh, None if empty or stale."""
        entry = self._entry
        if entry is not None and entry.is_fresh(self._clock(), self._ttl):
            return entry.value
        return None

    def store(self, value: T) -> T:
        self._entry = CacheEntry(value=value, fetched_at=self._clock())
        return value

    def clear(self) -> None:
        self._entry = None

    @property
    def is_fresh(self) -> bool:
        return self.get() is not None

    @property
    def expires_in(self) -> float | None:
        """Seconds until the entry goes stale, or None if the slot is empty."""
        entry = self._entry
        if entry is None:
            return None
        remaining = entry.fetched_at + self._ttl - self._clock()
        return max(0.0, remaining)
