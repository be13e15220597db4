"""
Key comparers for name-indexed collections.

A store takes one comparer at construction and uses it for every key
comparison for the rest of its life: index lookups, duplicate detection on
``add``, and the positional scan in ``remove``.

Architecture:
    ::

        KeyComparer (Protocol)
        ├── CaseInsensitiveComparer  : default, invariant ignore-case (IGNORE_CASE)
        └── OrdinalComparer          : exact, case-sensitive (ORDINAL)

        API: equals(x, y) → bool
             hash(key) → int

Examples:
    >>> IGNORE_CASE.equals("Provider", "PROVIDER")
    True
    >>> ORDINAL.equals("Provider", "PROVIDER")
    False
    >>> get_comparer("ordinal") is ORDINAL
    True

Tags:
    comparer, equality, hashing, case-insensitive, namestore
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from namestore.core.errors import InvalidConfigError


@runtime_checkable
class KeyComparer(Protocol):
    """Equality and hash contract over non-null string keys.

    Implementations must be consistent: keys that compare equal must hash
    equal. ``None`` keys never reach a comparer's ``hash``; stores keep the
    null key in a separate slot.
    """

    def equals(self, x: str | None, y: str | None) -> bool:
        """Return whether two keys name the same entry."""
        ...

    def hash(self, key: str) -> int:
        """Hash a non-null key consistently with ``equals``."""
        ...


class CaseInsensitiveComparer:
    """Culture-invariant, case-insensitive comparison.

    Uses Unicode case folding, so ``"STRASSE"`` and ``"straße"`` compare
    equal in addition to plain ASCII case differences.
    """

    name = "ignore_case"

    def equals(self, x: str | None, y: str | None) -> bool:
        if x is None or y is None:
            return x is y
        return x.casefold() == y.casefold()

    def hash(self, key: str) -> int:
        return hash(key.casefold())

    def __repr__(self) -> str:
        return "CaseInsensitiveComparer()"


class OrdinalComparer:
    """Exact, case-sensitive comparison."""

    name = "ordinal"

    def equals(self, x: str | None, y: str | None) -> bool:
        return x == y

    def hash(self, key: str) -> int:
        return hash(key)

    def __repr__(self) -> str:
        return "OrdinalComparer()"


IGNORE_CASE = CaseInsensitiveComparer()
ORDINAL = OrdinalComparer()

_COMPARERS: dict[str, KeyComparer] = {
    IGNORE_CASE.name: IGNORE_CASE,
    ORDINAL.name: ORDINAL,
}


def get_comparer(name: str) -> KeyComparer:
    """Resolve a comparer by its settings name.

    Raises:
        InvalidConfigError: If the name is not a known comparer
    """
    try:
        return _COMPARERS[name]
    except KeyError:
        raise InvalidConfigError(
            "comparer", name, f"expected one of {sorted(_COMPARERS)}"
        ) from None


__all__ = [
    "KeyComparer",
    "CaseInsensitiveComparer",
    "OrdinalComparer",
    "IGNORE_CASE",
    "ORDINAL",
    "get_comparer",
]
