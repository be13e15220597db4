"""
Ordered, name-indexed collection with duplicate keys and a null key.

``NameValueStore`` keeps two synchronized views of the same entries: an
insertion-ordered list for positional access and duplicates, and a hash index
for O(1) lookup of the first entry registered under each key. All writes go
through the store's methods so both views stay consistent.

Manifesto:
    Name-based property bags (connection properties, schema references,
    header-like collections) need lookup by name, stable order, duplicate
    names, and a way to freeze them once built. A dict gives lookup, a list
    gives order; neither gives both plus duplicates.

    - **First-inserted wins:** Lookup by key returns the first surviving entry
    - **Duplicates are positional:** Later duplicates are reachable by index only
    - **Null key slot:** ``None`` is a valid key with its own reachability slot
    - **Fail fast:** Enumerators detect mutation through a version counter
    - **Read-only lock:** Every mutator checks the flag before touching state

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                       NameValueStore                         │
        ├──────────────────────────────────────────────────────────────┤
        │  _entries: list[Entry]        positional truth, duplicates   │
        │  _index: {IndexKey → Entry}   first entry per non-null key   │
        │  _null_entry: Entry | None    first entry for key None       │
        │  _read_only: bool             guards every mutator           │
        │  _version: int                bumped on every mutation       │
        ├──────────────────────────────────────────────────────────────┤
        │  keys() ──► KeyView (cached)   iter() ──► KeyEnumerator      │
        └──────────────────────────────────────────────────────────────┘

        add("A", 1)  add("a", 2)  add("B", 3)      (ignore-case comparer)

        _entries:  [A=1] [a=2] [B=3]
        _index:    {a → [A=1], b → [B=3]}

Examples:
    >>> store = NameValueStore()
    >>> store.add("A", 1); store.add("a", 2); store.add("B", 3)
    >>> store.get("a")
    1
    >>> list(store.keys())
    ['A', 'a', 'B']
    >>> store.remove("a")
    >>> store.get_all_keys()
    ['B']

Performance:
    - add / get / set by key: O(1) expected
    - positional get / set: O(1)
    - remove(key): O(n), scans every entry for duplicates
    - remove_at(i): O(n) list deletion

Guardrails:
    ❌ DON'T: Expect the index to move to the next duplicate after a removal
    ✅ DO: Use positional access (or remove + add) when duplicates matter

    ❌ DON'T: Mutate the store inside ``for key in store``
    ✅ DO: Collect keys first (``get_all_keys()``), then mutate

    ❌ DON'T: Share a store across threads without external locking
    ✅ DO: Keep a store owned by one thread at a time

Tags:
    collection, ordered-dict, multimap, name-value, read-only,
    fail-fast, namestore
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from namestore.core.comparers import IGNORE_CASE, KeyComparer, get_comparer
from namestore.core.errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    ReadOnlyViolationError,
    UnsupportedOperationError,
    ValueTypeError,
)
from namestore.core.logging import get_logger
from namestore.core.views import KeyEnumerator, KeyView

logger = get_logger(__name__)


@dataclass(eq=False)
class Entry:
    """One key/value pair. Compared by identity."""

    key: str | None
    value: Any


class _IndexKey:
    """Hash-table key that delegates equality and hashing to a comparer."""

    __slots__ = ("key", "_comparer", "_hash")

    def __init__(self, key: str, comparer: KeyComparer):
        self.key = key
        self._comparer = comparer
        self._hash = comparer.hash(key)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _IndexKey):
            return NotImplemented
        return self._comparer.equals(self.key, other.key)


class NameValueStore:
    """
    Ordered key/value collection with duplicate keys and a null key.

    Args:
        comparer: Key comparer used for the lifetime of the store
            (default: case-insensitive, culture-invariant)
        capacity: Optional non-negative capacity hint

    Raises:
        InvalidArgumentError: If ``capacity`` is negative
    """

    def __init__(
        self,
        comparer: KeyComparer | None = None,
        *,
        capacity: int | None = None,
    ):
        self._comparer: KeyComparer = comparer or IGNORE_CASE
        self._read_only = False
        self._version = 0
        self._keys: KeyView | None = None
        self._reset(capacity)

    @classmethod
    def from_settings(cls, settings: Any = None) -> NameValueStore:
        """Build a store from ``NameStoreSettings`` (loaded if not given)."""
        if settings is None:
            from namestore.core.settings import get_settings

            settings = get_settings()
        return cls(get_comparer(settings.comparer), capacity=settings.initial_capacity)

    # ------------------------------------------------------------------ #
    # Internal bookkeeping
    # ------------------------------------------------------------------ #

    def _reset(self, capacity: int | None) -> None:
        if capacity is not None and capacity < 0:
            raise InvalidArgumentError(
                f"Capacity must be non-negative, got {capacity}"
            ).with_context(operation="reset", capacity=capacity)
        self._capacity = capacity
        self._entries: list[Entry] = []
        self._index: dict[_IndexKey, Entry] = {}
        self._null_entry: Entry | None = None

    def _find(self, key: str | None) -> Entry | None:
        if key is None:
            return self._null_entry
        return self._index.get(_IndexKey(key, self._comparer))

    def _ensure_writable(self, operation: str, **context: Any) -> None:
        if self._read_only:
            logger.debug("mutation_rejected", operation=operation, **context)
            raise ReadOnlyViolationError().with_context(
                operation=operation, count=len(self._entries), **context
            )

    def _check_index_type(self, index: Any, operation: str) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgumentError(
                f"Index must be an int, got {type(index).__name__}"
            ).with_context(operation=operation, index_type=type(index).__name__)

    def _check_index(self, index: int, operation: str) -> None:
        self._check_index_type(index, operation)
        count = len(self._entries)
        if not 0 <= index < count:
            raise IndexOutOfRangeError(
                f"Index {index} is out of range for a collection of {count} entries"
            ).with_context(operation=operation, index=index, count=count)

    # ------------------------------------------------------------------ #
    # Key-based access
    # ------------------------------------------------------------------ #

    def add(self, key: str | None, value: Any) -> None:
        """Append an entry. Duplicate keys are allowed.

        The entry becomes reachable by key only if no entry is currently
        registered for ``key``; otherwise it is reachable by position only.
        """
        self._ensure_writable("add", key=key)

        entry = Entry(key, value)
        if key is not None:
            self._index.setdefault(_IndexKey(key, self._comparer), entry)
        elif self._null_entry is None:
            self._null_entry = entry

        self._entries.append(entry)
        self._version += 1

    def get(self, key: str | None) -> Any:
        """Value of the first entry reachable for ``key``, or ``None``."""
        entry = self._find(key)
        return entry.value if entry is not None else None

    def set(self, key: str | None, value: Any) -> None:
        """Overwrite the value reachable for ``key``, or add a new entry."""
        self._ensure_writable("set", key=key)

        entry = self._find(key)
        if entry is not None:
            entry.value = value
            self._version += 1
        else:
            self.add(key, value)

    def remove(self, key: str | None) -> None:
        """Remove every entry whose key compares equal to ``key``.

        Entries that were never reachable by key (later duplicates) are
        removed too. The version is bumped once per call, even when nothing
        matched.
        """
        self._ensure_writable("remove", key=key)

        if key is not None:
            self._index.pop(_IndexKey(key, self._comparer), None)
            comparer = self._comparer
            kept = [e for e in self._entries if not comparer.equals(key, e.key)]
        else:
            self._null_entry = None
            kept = [e for e in self._entries if e.key is not None]

        removed = len(self._entries) - len(kept)
        self._entries = kept
        self._version += 1
        logger.debug("keys_removed", key=key, removed=removed, version=self._version)

    def contains_key(self, key: str | None) -> bool:
        """Whether ``key`` is reachable by key lookup."""
        return self._find(key) is not None

    def has_keys(self) -> bool:
        """Whether any non-null key is registered in the index."""
        return len(self._index) > 0

    # ------------------------------------------------------------------ #
    # Positional access
    # ------------------------------------------------------------------ #

    def get_at(self, index: int) -> Any:
        """Value at ``index``."""
        self._check_index(index, "get_at")
        return self._entries[index].value

    def get_key_at(self, index: int) -> str | None:
        """Key at ``index``."""
        self._check_index(index, "get_key_at")
        return self._entries[index].key

    def set_at(self, index: int, value: Any) -> None:
        """Overwrite the value at ``index``. The key is unchanged."""
        self._ensure_writable("set_at", index=index)
        self._check_index(index, "set_at")

        self._entries[index].value = value
        self._version += 1

    def remove_at(self, index: int) -> None:
        """Remove the entry at ``index``.

        The key of the removed entry is dropped from the index (or the null
        slot). Other entries with the same key are not re-registered, so the
        key stays unreachable by lookup until it is added again.
        """
        self._ensure_writable("remove_at", index=index)
        self._check_index(index, "remove_at")

        key = self._entries[index].key
        if key is not None:
            self._index.pop(_IndexKey(key, self._comparer), None)
        else:
            self._null_entry = None

        del self._entries[index]
        self._version += 1

    # ------------------------------------------------------------------ #
    # Whole-collection operations
    # ------------------------------------------------------------------ #

    def clear(self) -> None:
        """Remove all entries."""
        self._ensure_writable("clear")

        removed = len(self._entries)
        self._reset(self._capacity)
        self._version += 1
        logger.debug("store_cleared", removed=removed, version=self._version)

    def reset(self, capacity: int | None = None) -> None:
        """Remove all entries and record a new capacity hint."""
        self._ensure_writable("reset")

        removed = len(self._entries)
        self._reset(capacity)
        self._version += 1
        logger.debug("store_reset", removed=removed, capacity=capacity, version=self._version)

    def get_all_keys(self) -> list[str | None]:
        """All keys in positional order, duplicates and ``None`` included."""
        return [entry.key for entry in self._entries]

    def get_all_values(self, value_type: type | None = None) -> list[Any]:
        """All values in positional order.

        Args:
            value_type: If given, every non-None value must be an instance of it

        Raises:
            ValueTypeError: If a value is not an instance of ``value_type``
        """
        values = [entry.value for entry in self._entries]
        if value_type is not None:
            for position, value in enumerate(values):
                if value is not None and not isinstance(value, value_type):
                    raise ValueTypeError(
                        f"Value at index {position} is {type(value).__name__}, "
                        f"not {value_type.__name__}"
                    ).with_context(
                        operation="get_all_values",
                        index=position,
                        key=self._entries[position].key,
                    )
        return values

    def copy_to(self, target: list[Any], index: int = 0) -> None:
        """Write all keys, in order, into ``target`` starting at ``index``.

        ``target`` must already be long enough; it is written in place.

        Raises:
            InvalidArgumentError: If ``index`` is not a non-negative int or
                ``target`` is too short
            ConcurrentModificationError: If the store changes while copying
        """
        self._check_index_type(index, "copy_to")
        if index < 0:
            raise InvalidArgumentError(
                f"Index must be non-negative, got {index}"
            ).with_context(operation="copy_to", index=index)
        if len(target) - index < len(self._entries):
            raise InvalidArgumentError(
                "Destination list is not long enough to copy all the keys"
            ).with_context(operation="copy_to", index=index, count=len(self._entries))

        enumerator = KeyEnumerator(self)
        while enumerator.move_next():
            target[index] = enumerator.current
            index += 1

    def keys(self) -> KeyView:
        """Live read-only view of the keys. Same instance on every call."""
        if self._keys is None:
            self._keys = KeyView(self)
        return self._keys

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def count(self) -> int:
        return len(self._entries)

    @property
    def version(self) -> int:
        """Mutation counter used by enumerators to detect changes."""
        return self._version

    @property
    def comparer(self) -> KeyComparer:
        return self._comparer

    @property
    def capacity(self) -> int | None:
        return self._capacity

    @property
    def read_only(self) -> bool:
        return self._read_only

    @read_only.setter
    def read_only(self, value: bool) -> None:
        self.set_read_only(value)

    def set_read_only(self, value: bool) -> None:
        """Set the read-only flag. Does not change the version."""
        value = bool(value)
        if value != self._read_only:
            logger.debug("read_only_changed", read_only=value, count=len(self._entries))
        self._read_only = value

    def is_read_only(self) -> bool:
        return self._read_only

    # ------------------------------------------------------------------ #
    # Python protocols
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> KeyEnumerator:
        return KeyEnumerator(self)

    def __contains__(self, key: object) -> bool:
        if key is not None and not isinstance(key, str):
            return False
        return self.contains_key(key)

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support serialization"
        ).with_context(operation="serialize")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(count={len(self._entries)}, "
            f"read_only={self._read_only}, comparer={self._comparer!r})"
        )


__all__ = [
    "Entry",
    "NameValueStore",
]
