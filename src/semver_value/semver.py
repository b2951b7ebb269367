# SPDX-License-Identifier: MIT
"""Semantic version value type.

Supports MAJOR.MINOR.PATCH format with optional pre-release and build metadata:
- Pre-release: -alpha, -alpha.1, -0.3.7, -x.7.z.92, -x-y-z.--
- Build metadata: +build, +build.123, +20130313144700, +001
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property, total_ordering
from typing import Any, Optional, Union

from .diagnostics import index_of_match_failure
from .errors import InvalidFieldError, MalformedVersionError, TypeMismatchError
from .fields import Identifier, PrereleaseField, parse_prerelease_fields, split_fields
from .grammar import is_viable_prefix, scan

logger = logging.getLogger(__name__)

_SEPARATED = (Identifier.PRERELEASE, Identifier.METADATA)


@total_ordering
@dataclass(frozen=True, repr=False)
class SemVer:
    """A `Semantic Version 2.0.0 <https://semver.org/spec/v2.0.0.html>`_.

    Instances are immutable; build them with :meth:`parse` or :meth:`of` (the
    constructor itself performs no validation).

    Equality is structural over all five components. Rich comparisons follow
    the *strict* ordering (precedence, then build metadata), which keeps
    ``sorted()`` deterministic. DO NOT use them to decide semantic
    compatibility, use :meth:`precedence` instead.

    Attributes:
        major: Major version number (backward-incompatible API changes)
        minor: Minor version number (backward-compatible features)
        patch: Patch version number (backward-compatible bug fixes)
        prerelease: Pre-release identifiers (e.g., "alpha.1"), empty if stable
        metadata: Build metadata (e.g., "exp.sha.5114f85"), empty if absent
    """

    major: int
    minor: int
    patch: int
    prerelease: str = ""
    metadata: str = ""

    @classmethod
    def parse(cls, text: str) -> SemVer:
        """Parse a semantic version string.

        Raises:
            MalformedVersionError: If ``text`` is not a semantic version; its
                ``offset`` is the index of the first offending character

        Examples:
            >>> SemVer.parse("1.0.0-alpha+001").prerelease
            'alpha'
        """
        if not isinstance(text, str):
            raise MalformedVersionError(
                str(text), 0, f"Version must be a string, got {type(text).__name__}"
            )

        result = scan(text)
        if not result.matched:
            offset = index_of_match_failure(text, is_viable_prefix)
            logger.debug("Rejected version %r at index %d (%s)", text, offset, result.state.value)
            raise MalformedVersionError(text, offset)

        groups = result.groups
        return cls(
            int(groups["major"]),
            int(groups["minor"]),
            int(groups["patch"]),
            groups["prerelease"],
            groups["metadata"],
        )

    @classmethod
    def of(
        cls,
        major: Union[int, str],
        minor: Optional[int] = None,
        patch: Optional[int] = None,
        prerelease: Optional[str] = None,
        metadata: Optional[str] = None,
    ) -> SemVer:
        """Create a version from a string or from its components.

        ``SemVer.of("1.2.3")`` is :meth:`parse`. ``SemVer.of(1, 2, 3, "rc.1")``
        validates the assembled version and reports the offending component.
        ``None`` and ``""`` both mean an absent pre-release or metadata.

        Raises:
            MalformedVersionError: If a version string is invalid
            InvalidFieldError: If a component makes the version invalid
            TypeMismatchError: If a component has the wrong type
        """
        if isinstance(major, str):
            if any(arg is not None for arg in (minor, patch, prerelease, metadata)):
                raise TypeError("SemVer.of() takes either a version string or its components")
            return cls.parse(major)

        for identifier, value in (
            (Identifier.MAJOR, major),
            (Identifier.MINOR, minor),
            (Identifier.PATCH, patch),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeMismatchError(identifier, type(value).__name__, "int")
        for identifier, value in ((Identifier.PRERELEASE, prerelease), (Identifier.METADATA, metadata)):
            if value is not None and not isinstance(value, str):
                raise TypeMismatchError(identifier, type(value).__name__, "str")

        # Validation is centralized in the grammar, so the components are
        # serialized and the failure offset traced back to its component.
        parts = [
            (Identifier.MAJOR, major, f"{major}."),
            (Identifier.MINOR, minor, f"{minor}."),
            (Identifier.PATCH, patch, f"{patch}"),
            (Identifier.PRERELEASE, prerelease, f"-{prerelease}" if prerelease else ""),
            (Identifier.METADATA, metadata, f"+{metadata}" if metadata else ""),
        ]
        try:
            version = cls.parse("".join(part for _, _, part in parts))
        except MalformedVersionError as e:
            identifier, value = _component_at(parts, e.offset)
            raise InvalidFieldError(identifier.value, value) from e

        # A separator inside a component parses, but moves text across the boundary.
        for identifier, value in (
            (Identifier.PRERELEASE, prerelease),
            (Identifier.METADATA, metadata),
        ):
            if version.get(identifier) != (value or ""):
                raise InvalidFieldError(identifier.value, value)
        return version

    @staticmethod
    def check(text: str) -> str:
        """Return ``text`` unchanged if it is a semantic version.

        Raises:
            MalformedVersionError: If ``text`` is not a semantic version
        """
        SemVer.parse(text)
        return text

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        version = self.core
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.metadata:
            version += f"+{self.metadata}"
        return version

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        from .compare import compare

        return compare(self, other) < 0

    @property
    def core(self) -> str:
        """Return the normal version (MAJOR.MINOR.PATCH) without pre-release or metadata."""
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def is_stable(self) -> bool:
        """Return True if this is not a pre-release version."""
        return not self.prerelease

    @cached_property
    def prerelease_fields(self) -> tuple[PrereleaseField, ...]:
        """Pre-release identifiers, typed as numeric or alphanumeric."""
        return parse_prerelease_fields(self.prerelease)

    @cached_property
    def metadata_fields(self) -> tuple[str, ...]:
        """Build metadata identifiers."""
        return split_fields(self.metadata)

    def get(self, identifier: Identifier) -> Union[int, str]:
        """Return the value of an identifier (int for MAJOR/MINOR/PATCH, str otherwise)."""
        match identifier:
            case Identifier.MAJOR:
                return self.major
            case Identifier.MINOR:
                return self.minor
            case Identifier.PATCH:
                return self.patch
            case Identifier.PRERELEASE:
                return self.prerelease
            case Identifier.METADATA:
                return self.metadata
        raise TypeError(f"Not a version identifier: {identifier!r}")

    def precedence(self, other: SemVer) -> int:
        """Compare by SemVer precedence, ignoring build metadata.

        Returns:
            -1, 0 or 1 as this version has lower, equal or higher precedence
        """
        from .compare import precedence

        return precedence(self, other)

    def next(self, identifier: Identifier) -> SemVer:
        """Return the version following this one at ``identifier``.

        See :func:`semver_value.increment.next_version`.
        """
        from .increment import next_version

        return next_version(self, identifier)

    def with_(self, identifier: Identifier, value: Any) -> SemVer:
        """Return this version with ``identifier`` set to ``value``.

        See :func:`semver_value.increment.with_value`.
        """
        from .increment import with_value

        return with_value(self, identifier, value)


def _component_at(parts: list[tuple[Identifier, Any, str]], offset: int) -> tuple[Identifier, Any]:
    # MAJOR always serializes to a non-empty part
    first_identifier, first_value, _ = parts[0]
    owner: tuple[Identifier, Any] = (first_identifier, first_value)
    start = 0
    for identifier, value, part in parts:
        if not part:
            continue
        end = start + len(part)
        if offset < end:
            if offset == start and identifier in _SEPARATED:
                # A rejected separator means the preceding component is incomplete.
                return owner
            return identifier, value
        owner = identifier, value
        start = end
    return owner


def parse_version(version_string: str) -> SemVer:
    """Parse a semantic version string into a SemVer object.

    Examples:
        >>> parse_version("2.0.0-rc.1+build.456")
        SemVer('2.0.0-rc.1+build.456')
    """
    return SemVer.parse(version_string)


def is_valid_semver(version_string: str) -> bool:
    """Check if a string is a valid semantic version.

    Examples:
        >>> is_valid_semver("1.0.0")
        True
        >>> is_valid_semver("1.0")
        False
    """
    if not isinstance(version_string, str):
        return False
    return scan(version_string).matched
