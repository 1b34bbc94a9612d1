"""Transient save/restore for presentation-local state.

Bundles live in memory only. They carry small values (the half-typed entry
text) across a screen recreation, such as a terminal resize, and are lost
when the process exits.
"""
from typing import Any, Dict, Optional

Bundle = Dict[str, Any]


class SavedStateRegistry:
    def __init__(self) -> None:
        self._bundles: Dict[str, Bundle] = {}

    def save(self, key: str, bundle: Bundle) -> None:
        """Store a copy of `bundle` under `key`, replacing any earlier one."""
        self._bundles[key] = dict(bundle)

    def consume(self, key: str) -> Optional[Bundle]:
        """Return and forget the bundle for `key` (None if nothing saved)."""
        return self._bundles.pop(key, None)

    def clear(self) -> None:
        self._bundles.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._bundles
