"""
Structured error types for namestore.

Provides a small hierarchy of typed errors with rich metadata for error
categorization, structured logging, and root cause analysis through error
chaining.

Every failure a store, view, or enumerator can raise is a NameStoreError.
Instead of bare exceptions that lose context, NameStoreError and its
subclasses carry:
- **Category:** What kind of failure (state, argument, iteration, etc.)
- **Context:** Operation name, key, index, count, and version stamps
- **Cause:** Chained underlying exception for root cause analysis

Concrete errors also inherit the builtin exception a Python caller would
expect (``IndexError``, ``RuntimeError``, ``TypeError``, ``ValueError``), so
code written against plain containers keeps working.

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure mode
    - **Check-then-act:** Errors are raised before any state change
    - **Rich Context:** Errors carry metadata for logging
    - **No retries:** Every failure is terminal for the call that raised it

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                      NameStoreError                              │
        │              (category, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ReadOnlyViolationError        ConcurrentModificationError       │
        │  (STATE)                       (ITERATION, RuntimeError)         │
        │                                                                  │
        │  IndexOutOfRangeError          InvalidCursorStateError           │
        │  (ARGUMENT, IndexError)        (ITERATION)                       │
        │                                                                  │
        │  InvalidArgumentError          UnsupportedOperationError         │
        │  (ARGUMENT, ValueError)        (UNSUPPORTED, TypeError)          │
        │                                                                  │
        │  ValueTypeError                ConfigError                       │
        │  (ARGUMENT, TypeError)         (CONFIG)                          │
        │                                     │                            │
        │                                InvalidConfigError                │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = ReadOnlyViolationError("collection is read-only")
    >>> error.category
    <ErrorCategory.STATE: 'STATE'>

    >>> error = IndexOutOfRangeError("index 5 out of range").with_context(index=5, count=3)
    >>> error.context.count
    3
    >>> isinstance(error, IndexError)
    True

Guardrails:
    ❌ DON'T: Raise a bare Exception from store code
    ✅ DO: Use the matching NameStoreError subclass

    ❌ DON'T: Mutate state and then raise
    ✅ DO: Validate first, raise, and only then mutate

Tags:
    error-handling, exception-hierarchy, error-context, namestore

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and logging.

    Attributes:
        STATE: Operation not allowed in the current state (read-only)
        ARGUMENT: Bad index, bad argument, wrong value type
        ITERATION: Enumerator invalidated or read outside its range
        UNSUPPORTED: Operation the collection deliberately does not offer
        CONFIG: Invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    STATE = "STATE"
    ARGUMENT = "ARGUMENT"
    ITERATION = "ITERATION"
    UNSUPPORTED = "UNSUPPORTED"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover what store operations know at the point of failure;
    anything else goes into ``metadata``. ``to_dict()`` serializes all
    non-None fields for logging.

    Attributes:
        operation: Name of the failing operation (e.g. ``"remove_at"``)
        key: Key involved, if any
        index: Position involved, if any
        count: Entry count at the time of failure
        expected_version: Version captured by an enumerator
        actual_version: Version of the store when the check failed
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    key: str | None = None
    index: int | None = None
    count: int | None = None
    expected_version: int | None = None
    actual_version: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "key", "index", "count",
                    "expected_version", "actual_version"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class NameStoreError(Exception):
    """
    Base exception for all namestore errors.

    All NameStoreError instances carry:
    - **category:** ErrorCategory enum for classification
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` to give each failure mode its
    classification.

    Examples:
        >>> error = NameStoreError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = NameStoreError("bad", category=ErrorCategory.ARGUMENT)
        >>> error.to_dict()["category"]
        'ARGUMENT'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> NameStoreError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ReadOnlyViolationError("read-only").with_context(
                operation="add", key="Provider"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# STATE ERRORS
# =============================================================================


class ReadOnlyViolationError(NameStoreError):
    """A mutating operation was called on a read-only collection."""

    default_category = ErrorCategory.STATE

    def __init__(self, message: str = "Collection is read-only", **kwargs: Any):
        super().__init__(message, **kwargs)


# =============================================================================
# ARGUMENT ERRORS
# =============================================================================


class IndexOutOfRangeError(NameStoreError, IndexError):
    """Position outside ``[0, count)``."""

    default_category = ErrorCategory.ARGUMENT


class InvalidArgumentError(NameStoreError, ValueError):
    """Argument is unusable, e.g. a negative capacity or a non-int index."""

    default_category = ErrorCategory.ARGUMENT


class ValueTypeError(NameStoreError, TypeError):
    """A stored value is not an instance of the requested type."""

    default_category = ErrorCategory.ARGUMENT


# =============================================================================
# ITERATION ERRORS
# =============================================================================


class ConcurrentModificationError(NameStoreError, RuntimeError):
    """
    The collection changed after an enumerator captured its version.

    The enumerator stays unusable: every later ``move_next()``, ``current``
    or ``reset()`` call raises again. Create a new enumerator instead.
    """

    default_category = ErrorCategory.ITERATION

    def __init__(
        self,
        message: str = "Collection was modified; enumeration operation may not execute",
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)


class InvalidCursorStateError(NameStoreError):
    """``current`` was read before the first ``move_next()`` or after the end."""

    default_category = ErrorCategory.ITERATION

    def __init__(
        self,
        message: str = "Enumeration has either not started or has already finished",
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)


# =============================================================================
# UNSUPPORTED / CONFIG ERRORS
# =============================================================================


class UnsupportedOperationError(NameStoreError, TypeError):
    """Operation the collection does not offer (serialization, pickling)."""

    default_category = ErrorCategory.UNSUPPORTED


class ConfigError(NameStoreError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, reason: str, **kwargs: Any):
        message = f"Invalid config value for {key}: {reason}"
        super().__init__(message, **kwargs)
        self.context.metadata["config_key"] = key
        self.context.metadata["config_value"] = str(value)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """
    Categorize any exception.

    NameStoreError instances report their own category; builtin exceptions
    are mapped by type.
    """
    if isinstance(error, NameStoreError):
        return error.category

    if isinstance(error, (IndexError, KeyError, ValueError, TypeError)):
        return ErrorCategory.ARGUMENT
    # NotImplementedError is a RuntimeError subclass
    if isinstance(error, NotImplementedError):
        return ErrorCategory.UNSUPPORTED
    if isinstance(error, RuntimeError):
        return ErrorCategory.ITERATION

    return ErrorCategory.UNKNOWN


__all__ = [
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
