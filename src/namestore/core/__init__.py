"""Namestore Core -- ordered, name-indexed collections.

Architecture::

    Layer 1 -- Errors & Ambient
        errors.py          Structured error hierarchy (NameStoreError, ...)
        logging.py         structlog configuration + context binding
        settings.py        pydantic-settings driven defaults (NAMESTORE_*)

    Layer 2 -- Collections
        comparers.py       KeyComparer protocol, IGNORE_CASE / ORDINAL
        store.py           NameValueStore (ordered list + key index)
        views.py           KeyView, KeyEnumerator (fail-fast cursor)
        bag.py             PropertyBag (mapping-style wrapper over a store)
"""

from namestore.core.bag import PropertyBag
from namestore.core.comparers import (
    IGNORE_CASE,
    ORDINAL,
    CaseInsensitiveComparer,
    KeyComparer,
    OrdinalComparer,
    get_comparer,
)
from namestore.core.errors import (
    ConcurrentModificationError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidConfigError,
    InvalidCursorStateError,
    NameStoreError,
    ReadOnlyViolationError,
    UnsupportedOperationError,
    ValueTypeError,
    categorize_error,
)
from namestore.core.store import NameValueStore
from namestore.core.views import CursorState, KeyEnumerator, KeyView

__all__ = [
    # Collections
    "NameValueStore",
    "KeyView",
    "KeyEnumerator",
    "CursorState",
    "PropertyBag",
    # Comparers
    "KeyComparer",
    "CaseInsensitiveComparer",
    "OrdinalComparer",
    "IGNORE_CASE",
    "ORDINAL",
    "get_comparer",
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "NameStoreError",
    "ReadOnlyViolationError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "ValueTypeError",
    "ConcurrentModificationError",
    "InvalidCursorStateError",
    "UnsupportedOperationError",
    "ConfigError",
    "InvalidConfigError",
    "categorize_error",
]
