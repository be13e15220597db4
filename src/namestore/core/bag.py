"""
Name-based property bag built on NameValueStore.

``PropertyBag`` wraps a private store and gives it a mapping-style surface
for the common case: connection properties, schema references, and other
small named collections where names may repeat and order matters.

The bag composes a store rather than subclassing it, so the store's
bookkeeping (index, null slot, version) is never reachable from outside.

Examples:
    >>> bag = PropertyBag.from_pairs([("Provider", "SQLOLEDB"), ("Data Source", "db01")])
    >>> bag["provider"]
    'SQLOLEDB'
    >>> bag.add("Data Source", "db02")
    >>> bag.get_values("data source")
    ['db01', 'db02']
    >>> bag.lock()
    >>> bag["Timeout"] = 30
    Traceback (most recent call last):
    ...
    ReadOnlyViolationError: Collection is read-only
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from namestore.core.comparers import KeyComparer
from namestore.core.store import NameValueStore
from namestore.core.views import KeyEnumerator, KeyView


class PropertyBag:
    """Ordered named values with mapping-style access.

    Keyword arguments other than ``comparer`` and ``capacity`` become initial
    properties. Those two names are reserved: build the bag with
    ``from_pairs`` when a property needs one of them, or a ``None`` name.
    """

    def __init__(
        self,
        *,
        comparer: KeyComparer | None = None,
        capacity: int | None = None,
        **properties: Any,
    ):
        self._store = NameValueStore(comparer, capacity=capacity)
        for name, value in properties.items():
            self._store.add(name, value)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str | None, Any]],
        comparer: KeyComparer | None = None,
    ) -> PropertyBag:
        """Build a bag from ``(name, value)`` pairs, keeping duplicates."""
        bag = cls(comparer=comparer)
        for name, value in pairs:
            bag.add(name, value)
        return bag

    # ── Mapping-style access ─────────────────────────────────────

    def __getitem__(self, name: str | None) -> Any:
        return self._store.get(name)

    def __setitem__(self, name: str | None, value: Any) -> None:
        self._store.set(name, value)

    def __delitem__(self, name: str | None) -> None:
        self._store.remove(name)

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> KeyEnumerator:
        return iter(self._store)

    def get(self, name: str | None, default: Any = None) -> Any:
        """First value for ``name``, or ``default`` when the name is not reachable."""
        if not self._store.contains_key(name):
            return default
        return self._store.get(name)

    # ── Multi-value access ───────────────────────────────────────

    def add(self, name: str | None, value: Any) -> None:
        """Append a value, keeping any existing values for ``name``."""
        self._store.add(name, value)

    def get_values(self, name: str | None) -> list[Any] | None:
        """Every value stored under ``name`` in positional order, or None."""
        comparer = self._store.comparer
        keys = self._store.get_all_keys()
        values = self._store.get_all_values()
        matches = [
            value
            for key, value in zip(keys, values)
            if (key is None if name is None else comparer.equals(name, key))
        ]
        return matches or None

    def items(self) -> list[tuple[str | None, Any]]:
        """All ``(name, value)`` pairs in positional order."""
        return list(zip(self._store.get_all_keys(), self._store.get_all_values()))

    def to_dict(self) -> dict[str | None, Any]:
        """First value per distinct name, in positional order.

        Names are compared with the bag's comparer; the spelling of the
        first occurrence is kept.
        """
        result: dict[str | None, Any] = {}
        comparer = self._store.comparer
        for key, value in self.items():
            if key is None:
                result.setdefault(None, value)
            elif not any(k is not None and comparer.equals(k, key) for k in result):
                result[key] = value
        return result

    # ── Lock / introspection ─────────────────────────────────────

    @property
    def names(self) -> KeyView:
        return self._store.keys()

    def lock(self) -> None:
        """Make the bag read-only."""
        self._store.set_read_only(True)

    @property
    def is_locked(self) -> bool:
        return self._store.is_read_only()

    def __repr__(self) -> str:
        return f"PropertyBag({self.items()!r})"


__all__ = ["PropertyBag"]
