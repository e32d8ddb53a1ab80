"""Storage for code suggestions awaiting application.

The abstraction hides:
- Retention policy (unbounded, count-capped, time-limited)
- Storage mechanism
"""

import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Callable

from .models import Suggestion


class SuggestionStore(ABC):
    """Keyed storage of suggestions.

    Inserts always use freshly minted ids, so writes never collide and no
    locking is needed. Reads never remove entries.
    """

    @abstractmethod
    def put(self, suggestion: Suggestion) -> None:
        """Insert a suggestion under its id."""

    @abstractmethod
    def get(self, suggestion_id: str) -> Suggestion | None:
        """Look up a suggestion, or None if unknown (or evicted)."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of retained suggestions."""


class InMemorySuggestionStore(SuggestionStore):
    """Process-local suggestion store.

    With no limits configured, entries live for the process lifetime.

    Args:
        max_entries: Evict oldest entries beyond this count
        ttl_seconds: Treat entries older than this as missing
        clock: Time source (monotonic seconds)
    """

    def __init__(
        self,
        max_entries: int | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = max_entries
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Suggestion]] = OrderedDict()

    def put(self, suggestion: Suggestion) -> None:
        self._entries[suggestion.id] = (self._clock(), suggestion)
        self._evict()

    def get(self, suggestion_id: str) -> Suggestion | None:
        entry = self._entries.get(suggestion_id)
        if entry is None:
            return None
        stored_at, suggestion = entry
        if self._expired(stored_at):
            del self._entries[suggestion_id]
            return None
        return suggestion

    def __len__(self) -> int:
        return len(self._entries)

    def _expired(self, stored_at: float) -> bool:
        return self._ttl_seconds is not None and self._clock() - stored_at > self._ttl_seconds

    def _evict(self) -> None:
        # Oldest first; insertion order is storage order
        while self._entries and self._expired(next(iter(self._entries.values()))[0]):
            self._entries.popitem(last=False)
        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)


def create_suggestion_store(backend: str = "memory", **kwargs) -> SuggestionStore:
    """Create a suggestion store.

    Args:
        backend: Backend type ("memory")
        **kwargs: Backend-specific configuration (max_entries, ttl_seconds)

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        return InMemorySuggestionStore(**kwargs)

    raise ValueError(
        f"Unsupported suggestion store backend: {backend}. "
        f"Supported backends: memory"
    )
