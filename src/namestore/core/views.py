"""
Read-only projections over a NameValueStore.

``KeyView`` exposes the ordered keys of a store (duplicates and ``None``
included) and ``KeyEnumerator`` walks them. Neither owns data: every call
goes back to the live store.

Enumerators capture the store's version when created. Any mutation after
that point (add, set, remove, clear, reset) makes every later call on the
enumerator raise ``ConcurrentModificationError``. This detects mutation
inside a loop; it is not a thread-safety mechanism.

Architecture:
    ::

        KeyEnumerator states

          NOT_STARTED ──move_next()──► IN_RANGE ──move_next()──► EXHAUSTED
          (position -1)               (0 ≤ pos < count)         (pos == count)
                ▲                                                   │
                └──────────────────────── reset() ──────────────────┘

        version mismatch on move_next / current / reset
          ──► ConcurrentModificationError (enumerator stays unusable)

Examples:
    >>> store = NameValueStore()
    >>> store.add("A", 1)
    >>> enumerator = iter(store)
    >>> enumerator.move_next()
    True
    >>> enumerator.current
    'A'
    >>> store.add("B", 2)
    >>> enumerator.move_next()
    Traceback (most recent call last):
    ...
    ConcurrentModificationError: Collection was modified; enumeration operation may not execute

Tags:
    view, enumerator, iterator, fail-fast, namestore
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from namestore.core.errors import ConcurrentModificationError, InvalidCursorStateError

if TYPE_CHECKING:
    from namestore.core.store import NameValueStore


class CursorState(str, Enum):
    """Logical state of a KeyEnumerator."""

    NOT_STARTED = "not_started"
    IN_RANGE = "in_range"
    EXHAUSTED = "exhausted"


class KeyEnumerator:
    """
    Version-stamped cursor over a store's keys.

    Supports both the explicit cursor API (``move_next``, ``current``,
    ``reset``) and the Python iterator protocol, so ``for key in store``
    fails fast when the loop body mutates the store.
    """

    def __init__(self, store: NameValueStore):
        self._store = store
        self._version = store.version
        self._position = -1

    def _check_version(self, operation: str) -> None:
        actual = self._store.version
        if self._version != actual:
            raise ConcurrentModificationError().with_context(
                operation=operation,
                expected_version=self._version,
                actual_version=actual,
            )

    def move_next(self) -> bool:
        """Advance to the next key. Returns False once past the last key."""
        self._check_version("move_next")

        count = len(self._store)
        if self._position < count - 1:
            self._position += 1
            return True

        self._position = count
        return False

    @property
    def current(self) -> str | None:
        """Key at the cursor."""
        self._check_version("current")

        count = len(self._store)
        if 0 <= self._position < count:
            return self._store.get_key_at(self._position)

        raise InvalidCursorStateError().with_context(
            operation="current", index=self._position, count=count
        )

    def reset(self) -> None:
        """Return to the position before the first key."""
        self._check_version("reset")
        self._position = -1

    @property
    def position(self) -> int:
        return self._position

    @property
    def state(self) -> CursorState:
        if self._position < 0:
            return CursorState.NOT_STARTED
        if self._position < len(self._store):
            return CursorState.IN_RANGE
        return CursorState.EXHAUSTED

    def __iter__(self) -> KeyEnumerator:
        return self

    def __next__(self) -> str | None:
        if not self.move_next():
            raise StopIteration
        return self.current

    def __repr__(self) -> str:
        return f"KeyEnumerator(position={self._position}, version={self._version})"


class KeyView:
    """Live read-only view of a store's keys in positional order."""

    def __init__(self, store: NameValueStore):
        self._store = store

    def get(self, index: int) -> str | None:
        """Key at ``index``. Raises IndexOutOfRangeError outside ``[0, count)``."""
        return self._store.get_key_at(index)

    def __getitem__(self, index: int | slice) -> str | None | list[str | None]:
        """Key at ``index``; a slice returns a list snapshot of those keys."""
        if isinstance(index, slice):
            return self._store.get_all_keys()[index]
        return self.get(index)

    @property
    def count(self) -> int:
        return len(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> KeyEnumerator:
        return KeyEnumerator(self._store)

    def copy_to(self, target: list[Any], index: int = 0) -> None:
        """Write all keys into ``target`` starting at ``index``."""
        self._store.copy_to(target, index)

    def __repr__(self) -> str:
        return f"KeyView({self._store.get_all_keys()!r})"


__all__ = [
    "CursorState",
    "KeyEnumerator",
    "KeyView",
]
