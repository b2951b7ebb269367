# SPDX-License-Identifier: MIT
"""Deriving new versions from existing ones.

Both operations reset every identifier less significant than the one they
touch: numeric identifiers to ``0``, pre-release and metadata to empty. For
example ``1.2.5-alpha`` becomes ``1.3.0`` when MINOR is incremented, and
``1.8.0`` when MINOR is set to 8.
"""

from __future__ import annotations

from typing import Any

from .errors import IllegalOperationError, TypeMismatchError
from .fields import AlphanumericField, Identifier, NumericField
from .semver import SemVer


def next_version(version: SemVer, identifier: Identifier) -> SemVer:
    """Return the version following ``version`` at ``identifier``.

    If the last pre-release field is numeric it is incremented, otherwise a
    numeric field initialized to 1 is appended (``1.0.0-alpha`` becomes
    ``1.0.0-alpha.1``).

    Raises:
        IllegalOperationError: If ``identifier`` is METADATA, or PRERELEASE on
            a stable version

    Examples:
        >>> next_version(SemVer.parse("1.2.5-alpha"), Identifier.MINOR)
        SemVer('1.3.0')
        >>> next_version(SemVer.parse("1.0.0-alpha.1"), Identifier.PRERELEASE)
        SemVer('1.0.0-alpha.2')
    """
    major, minor, patch = version.major, version.minor, version.patch
    match identifier:
        case Identifier.MAJOR:
            return SemVer(major + 1, 0, 0)
        case Identifier.MINOR:
            return SemVer(major, minor + 1, 0)
        case Identifier.PATCH:
            return SemVer(major, minor, patch + 1)
        case Identifier.PRERELEASE:
            if version.is_stable:
                raise IllegalOperationError(
                    identifier, "stable version has no pre-release to increment"
                )
            fields = list(version.prerelease_fields)
            match fields[-1]:
                case NumericField(value=n):
                    fields[-1] = NumericField(n + 1)
                case AlphanumericField():
                    fields.append(NumericField(1))
            return SemVer(major, minor, patch, ".".join(str(f) for f in fields))
        case Identifier.METADATA:
            raise IllegalOperationError(identifier, "build metadata has no successor")
    raise TypeError(f"Not a version identifier: {identifier!r}")


def _expect(identifier: Identifier, value: Any, numeric: bool) -> None:
    if numeric:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeMismatchError(identifier, type(value).__name__, "int")
    elif value is not None and not isinstance(value, str):
        raise TypeMismatchError(identifier, type(value).__name__, "str")


def with_value(version: SemVer, identifier: Identifier, value: Any) -> SemVer:
    """Return ``version`` with ``identifier`` set to ``value``.

    MAJOR, MINOR and PATCH take an ``int``; PRERELEASE and METADATA take a
    ``str`` (``None`` or ``""`` clears them). Setting METADATA resets nothing.

    Raises:
        TypeMismatchError: If the type of ``value`` does not suit ``identifier``
        InvalidFieldError: If ``value`` makes the version invalid

    Examples:
        >>> with_value(SemVer.parse("1.2.5-alpha"), Identifier.MINOR, 8)
        SemVer('1.8.0')
        >>> with_value(SemVer.parse("1.0.0"), Identifier.METADATA, "001")
        SemVer('1.0.0+001')
    """
    _expect(identifier, value, identifier.is_numeric)
    major, minor, patch = version.major, version.minor, version.patch
    match identifier:
        case Identifier.MAJOR:
            return SemVer.of(value, 0, 0)
        case Identifier.MINOR:
            return SemVer.of(major, value, 0)
        case Identifier.PATCH:
            return SemVer.of(major, minor, value)
        case Identifier.PRERELEASE:
            return SemVer.of(major, minor, patch, value)
        case Identifier.METADATA:
            return SemVer.of(major, minor, patch, version.prerelease, value)
    raise TypeError(f"Not a version identifier: {identifier!r}")
