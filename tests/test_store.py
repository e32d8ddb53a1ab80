"""Unit tests for suggestion storage."""
import pytest

from askai.chat import InMemorySuggestionStore, Suggestion, SuggestionStore, create_suggestion_store


def make(suggestion_id: str, session_id: str = "s1") -> Suggestion:
    return Suggestion(id=suggestion_id, session_id=session_id, original_code="a", proposed_code="b")


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestSuggestionStore:
    """Tests for the SuggestionStore interface."""

    def test_store_is_abstract(self):
        """Test that SuggestionStore cannot be instantiated directly."""
        with pytest.raises(TypeError):
            SuggestionStore()  # type: ignore


class TestInMemorySuggestionStore:
    """Tests for InMemorySuggestionStore."""

    def test_put_then_get(self):
        """Test a basic insert and lookup."""
        store = InMemorySuggestionStore()
        store.put(make("a"))

        assert store.get("a") == make("a")
        assert store.get("missing") is None

    def test_unbounded_by_default(self):
        """Test that nothing is evicted without limits."""
        store = InMemorySuggestionStore()
        for i in range(1000):
            store.put(make(str(i)))

        assert len(store) == 1000
        assert store.get("0") is not None

    def test_max_entries_evicts_oldest(self):
        """Test count-based eviction."""
        store = InMemorySuggestionStore(max_entries=2)
        for suggestion_id in ("a", "b", "c"):
            store.put(make(suggestion_id))

        assert store.get("a") is None
        assert store.get("b") is not None
        assert store.get("c") is not None

    def test_ttl_hides_expired_entries(self):
        """Test time-based expiry."""
        clock = FakeClock()
        store = InMemorySuggestionStore(ttl_seconds=60, clock=clock)
        store.put(make("a"))

        clock.now = 59
        assert store.get("a") is not None

        clock.now = 61
        assert store.get("a") is None
        assert len(store) == 0

    def test_ttl_purges_on_insert(self):
        """Test that inserts drop expired entries."""
        clock = FakeClock()
        store = InMemorySuggestionStore(ttl_seconds=10, clock=clock)
        store.put(make("old"))
        clock.now = 100
        store.put(make("new"))

        assert len(store) == 1

    def test_invalid_max_entries(self):
        """Test that a non-positive cap is refused."""
        with pytest.raises(ValueError):
            InMemorySuggestionStore(max_entries=0)


class TestSuggestionStoreFactory:
    """Tests for the store factory."""

    def test_create_memory_store(self):
        """Test creating the in-memory backend."""
        store = create_suggestion_store("memory", max_entries=5)

        assert isinstance(store, InMemorySuggestionStore)

    def test_unknown_backend(self):
        """Test that unknown backends are rejected."""
        with pytest.raises(ValueError, match="Unsupported suggestion store backend"):
            create_suggestion_store("redis")
