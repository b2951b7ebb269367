# SPDX-License-Identifier: MIT
"""Exceptions raised by semantic version operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .fields import Identifier


class SemVerError(Exception):
    """Base class for all semantic version errors."""


class MalformedVersionError(SemVerError, ValueError):
    """Raised when a string does not follow semantic versioning.

    Attributes:
        version: The rejected input
        offset: Index of the first character where the input stops being a
            viable semantic version (equals ``len(version)`` when the input is
            a valid but incomplete prefix, e.g. ``"1.0"``)
    """

    def __init__(self, version: str, offset: int, message: str = ""):
        self.version = version
        self.offset = offset
        self.message = message or (
            f"Invalid semantic version {version!r}: unexpected "
            + ("end of input" if offset >= len(version) else "character")
            + f" at index {offset}"
        )
        super().__init__(self.message)


class InvalidFieldError(SemVerError, ValueError):
    """Raised when a version component makes the assembled version invalid."""

    def __init__(self, field: str, value: Any, message: str = ""):
        self.field = field
        self.value = value
        self.message = message or f"Invalid {field}: {value!r}"
        super().__init__(self.message)


class IllegalOperationError(SemVerError, ValueError):
    """Raised when an operation is undefined for the given identifier."""

    def __init__(self, identifier: Identifier, reason: str):
        self.identifier = identifier
        self.reason = reason
        self.message = f"Cannot operate on {identifier.name}: {reason}"
        super().__init__(self.message)


class TypeMismatchError(SemVerError, TypeError):
    """Raised when a value's kind does not match its identifier."""

    def __init__(self, identifier: Identifier, supplied_kind: str, expected_kind: str = ""):
        self.identifier = identifier
        self.supplied_kind = supplied_kind
        self.expected_kind = expected_kind
        message = f"{identifier.name} does not accept a value of type {supplied_kind}"
        if expected_kind:
            message += f" (expected {expected_kind})"
        self.message = message
        super().__init__(self.message)
