"""Domain exception hierarchy for type-safe error handling.

This module provides the base exception hierarchy for preference store
errors. Exceptions carry structured error codes and context so that callers
and log processors can tell programming errors (unsupported value types,
invalid suite names) from runtime conditions (storage backend failures).

Example:
    >>> from placita.foundation.domain.exceptions import UnsupportedValueTypeError
    >>> raise UnsupportedValueTypeError(object(), path="colors[2]")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "DomainError",
    "InvalidSuiteNameError",
    "StorageBackendError",
    "UnsupportedValueTypeError",
    "ValidationError",
]


class DomainError(Exception):
    """Base class for all preference store errors.

    Provides error code and structured context for debugging.

    Attributes:
        error_code: Machine-readable error code for client handling.
        message: Human-readable error description.
        context: Structured debugging information (keys, domain names).

    Example:
        >>> raise DomainError("Operation failed", context={"key": "Theme"})
        DomainError: Operation failed (key=Theme)
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class UnsupportedValueTypeError(DomainError):
    """Raised when a value falls outside the closed set of value kinds.

    This is a caller programming error, not a recoverable runtime condition.
    Strict entry points (``set``, ``register_defaults``,
    ``set_volatile_domain``, ``set_persistent_domain``) let it propagate.

    Attributes:
        error_code: "UNSUPPORTED_VALUE_TYPE" (class constant).
        value_type: Name of the offending Python type.
        path: Location of the offending element inside a container
            ("" for a top-level value).

    Example:
        >>> raise UnsupportedValueTypeError({1, 2}, path="tags")
        UnsupportedValueTypeError: Unsupported value type 'set' at 'tags'
    """

    error_code: str = "UNSUPPORTED_VALUE_TYPE"

    def __init__(self, value: object, path: str = "", **extra_context: Any) -> None:
        """Initialize unsupported value type error.

        Args:
            value: The value that could not be converted.
            path: Container path of the value (e.g., "colors[2]").
            **extra_context: Additional debugging context (e.g., key, domain).
        """
        self.value_type = type(value).__name__
        self.path = path
        if path:
            message = f"Unsupported value type '{self.value_type}' at '{path}'"
        else:
            message = f"Unsupported value type '{self.value_type}'"
        context = {"value_type": self.value_type, **extra_context}
        if path:
            context["path"] = path
        super().__init__(message, context)


class InvalidSuiteNameError(DomainError):
    """Raised when a suite name cannot identify a persistent domain.

    Attributes:
        error_code: "INVALID_SUITE_NAME" (class constant).
        suite_name: The rejected name.
        reason: Why the name was rejected.
    """

    error_code: str = "INVALID_SUITE_NAME"

    def __init__(self, suite_name: str, reason: str) -> None:
        """Initialize invalid suite name error.

        Args:
            suite_name: The rejected suite name.
            reason: Human-readable rejection reason.
        """
        self.suite_name = suite_name
        self.reason = reason
        message = f"Invalid suite name {suite_name!r}: {reason}"
        super().__init__(message, {"suite_name": suite_name, "reason": reason})


class ValidationError(DomainError):
    """Raised when input fails domain validation rules.

    Used for operations that are well-typed but not allowed, such as
    replacing the read-only argument domain.

    Attributes:
        error_code: "VALIDATION_ERROR" (class constant).
        field: Field or parameter that failed validation.
        reason: Human-readable validation failure reason.

    Example:
        >>> raise ValidationError("domain_name", "argument domain is read-only")
        ValidationError: Validation failed for 'domain_name': argument domain is read-only
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        field: str,
        reason: str,
        **extra_context: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            field: Field or parameter name that failed validation.
            reason: Human-readable validation failure reason.
            **extra_context: Additional debugging context.
        """
        self.field = field
        self.reason = reason
        message = f"Validation failed for '{field}': {reason}"
        context = {
            "field": field,
            "reason": reason,
            **extra_context,
        }
        super().__init__(message, context)


class StorageBackendError(DomainError):
    """Raised by storage backends when durable storage cannot be reached.

    Never escapes the persistent domain adapter: reads degrade to absent
    values and ``synchronize`` reports ``False``.

    Attributes:
        error_code: "STORAGE_BACKEND_ERROR" (class constant).
        operation: Backend operation that failed (e.g., "load", "flush").
    """

    error_code: str = "STORAGE_BACKEND_ERROR"

    def __init__(self, operation: str, reason: str, **extra_context: Any) -> None:
        """Initialize storage backend error.

        Args:
            operation: Name of the failing backend operation.
            reason: Human-readable failure description.
            **extra_context: Additional debugging context (e.g., domain).
        """
        self.operation = operation
        self.reason = reason
        message = f"Storage backend {operation} failed: {reason}"
        super().__init__(message, {"operation": operation, **extra_context})
