"""Tests for saved_state.py."""

from saved_state import SavedStateRegistry


class TestSavedStateRegistry:
    def test_consume_returns_and_forgets(self):
        registry = SavedStateRegistry()
        registry.save("screen", {"text": "abc"})
        assert "screen" in registry
        assert registry.consume("screen") == {"text": "abc"}
        assert registry.consume("screen") is None

    def test_save_copies_bundle(self):
        registry = SavedStateRegistry()
        bundle = {"text": "abc"}
        registry.save("screen", bundle)
        bundle["text"] = "changed"
        assert registry.consume("screen") == {"text": "abc"}

    def test_save_replaces(self):
        registry = SavedStateRegistry()
        registry.save("screen", {"text": "one"})
        registry.save("screen", {"text": "two"})
        assert registry.consume("screen") == {"text": "two"}

    def test_clear(self):
        registry = SavedStateRegistry()
        registry.save("screen", {"text": "abc"})
        registry.clear()
        assert "screen" not in registry
