# SPDX-License-Identifier: MIT
"""Version comparison following SemVer 2.0.0 precedence rules.

Two orderings are provided and must not be confused:

- :func:`precedence` is the semantic ordering defined by the specification
  (item 11). Build metadata is ignored, so distinct versions such as
  ``1.0.0+a`` and ``1.0.0+b`` have equal precedence.
- :func:`compare` is a strict total ordering for deterministic sorting and
  deduplication: precedence first, then raw build metadata as a tie-break.
"""

from __future__ import annotations

from typing import Iterable, Union

from .fields import AlphanumericField, NumericField, PrereleaseField
from .semver import SemVer

VersionLike = Union[str, SemVer]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _coerce(version: VersionLike) -> SemVer:
    return SemVer.parse(version) if isinstance(version, str) else version


def _compare_fields(field1: PrereleaseField, field2: PrereleaseField) -> int:
    match field1, field2:
        case NumericField(value=n1), NumericField(value=n2):
            return _sign(n1 - n2)
        case AlphanumericField(text=t1), AlphanumericField(text=t2):
            return (t1 > t2) - (t1 < t2)
        case NumericField(), AlphanumericField():
            # Numeric identifiers always have lower precedence
            return -1
        case AlphanumericField(), NumericField():
            return 1
    raise TypeError(f"Not pre-release fields: {field1!r}, {field2!r}")


def precedence(version1: SemVer, version2: SemVer) -> int:
    """Compare two versions by SemVer precedence.

    Returns:
        -1 if version1 has lower precedence than version2
        0 if both have the same precedence (build metadata is ignored)
        1 if version1 has higher precedence than version2

    Examples:
        >>> precedence(SemVer.parse("1.0.0-alpha"), SemVer.parse("1.0.0-alpha.1"))
        -1
        >>> precedence(SemVer.parse("1.0.0+build.1"), SemVer.parse("1.0.0"))
        0
    """
    # Major, minor and patch are compared numerically; first difference wins
    for attr in ("major", "minor", "patch"):
        diff = getattr(version1, attr) - getattr(version2, attr)
        if diff:
            return _sign(diff)

    # A pre-release version has lower precedence than a normal version
    if version1.is_stable or version2.is_stable:
        return int(version1.is_stable) - int(version2.is_stable)

    fields1 = version1.prerelease_fields
    fields2 = version2.prerelease_fields
    for field1, field2 in zip(fields1, fields2):
        ret = _compare_fields(field1, field2)
        if ret:
            return ret

    # All compared fields equal - the larger set has higher precedence
    return _sign(len(fields1) - len(fields2))


def compare(version1: SemVer, version2: SemVer) -> int:
    """Compare two versions by strict ordering.

    Ties in precedence are broken by comparing the raw build metadata strings,
    so the result is 0 only for structurally equal versions. Use it to order
    collections, never to decide compatibility.

    Examples:
        >>> compare(SemVer.parse("1.0.0+a"), SemVer.parse("1.0.0+b"))
        -1
    """
    ret = precedence(version1, version2)
    if ret:
        return ret
    meta1, meta2 = version1.metadata, version2.metadata
    return (meta1 > meta2) - (meta1 < meta2)


def compare_versions(version1: VersionLike, version2: VersionLike, *, strict: bool = False) -> int:
    """Compare two semantic versions given as strings or SemVer objects.

    Args:
        version1: First version (string or SemVer object)
        version2: Second version (string or SemVer object)
        strict: Break precedence ties with build metadata

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        MalformedVersionError: If either version string is invalid

    Examples:
        >>> compare_versions("1.0.0", "2.0.0")
        -1
        >>> compare_versions("1.0.0+build", "1.0.0")
        0
        >>> compare_versions("1.0.0+build", "1.0.0", strict=True)
        1
    """
    v1, v2 = _coerce(version1), _coerce(version2)
    return compare(v1, v2) if strict else precedence(v1, v2)


def precedence_key(version: VersionLike) -> tuple:
    """Return a sort key ordering versions by precedence.

    Versions of equal precedence get equal keys; ``sorted()`` keeps their
    input order.

    Examples:
        >>> sorted(["1.0.0", "2.0.0", "1.0.0-alpha"], key=precedence_key)
        ['1.0.0-alpha', '1.0.0', '2.0.0']
    """
    v = _coerce(version)

    # Stable versions sort after any pre-release of the same normal version
    if v.is_stable:
        prerelease_key: tuple = (1,)
    else:
        parts = []
        for field in v.prerelease_fields:
            match field:
                case NumericField(value=n):
                    parts.append((0, n, ""))
                case AlphanumericField(text=t):
                    parts.append((1, 0, t))
        prerelease_key = (0, tuple(parts))

    return (v.major, v.minor, v.patch, prerelease_key)


def strict_key(version: VersionLike) -> tuple:
    """Return a sort key matching :func:`compare`."""
    v = _coerce(version)
    return (precedence_key(v), v.metadata)


def sort_versions(
    versions: Iterable[VersionLike], *, strict: bool = True, reverse: bool = False
) -> list[SemVer]:
    """Parse and sort versions, by strict ordering unless ``strict`` is False."""
    key = strict_key if strict else precedence_key
    return sorted((_coerce(v) for v in versions), key=key, reverse=reverse)


def max_version(versions: Iterable[VersionLike]) -> SemVer:
    """Return the version with the highest precedence.

    Among versions of equal precedence, the strict ordering decides.

    Raises:
        ValueError: If ``versions`` is empty
    """
    parsed = [_coerce(v) for v in versions]
    if not parsed:
        raise ValueError("max_version() arg is an empty iterable")
    return max(parsed, key=strict_key)
