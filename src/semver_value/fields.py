# SPDX-License-Identifier: MIT
"""Version identifiers and typed pre-release fields."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Union

_DIGITS = frozenset(string.digits)


class Identifier(Enum):
    """Version identifiers, from most to least significant."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"
    METADATA = "metadata"

    @property
    def is_numeric(self) -> bool:
        """Return True for the identifiers holding integers."""
        return self in (Identifier.MAJOR, Identifier.MINOR, Identifier.PATCH)

    @classmethod
    def from_name(cls, name: str) -> "Identifier":
        """Resolve an identifier by name, ignoring case.

        Raises:
            ValueError: If no identifier has that name
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown version identifier {name!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class NumericField:
    """Pre-release identifier made of digits only, compared numerically."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AlphanumericField:
    """Pre-release identifier containing letters or hyphens, compared lexically."""

    text: str

    def __str__(self) -> str:
        return self.text


PrereleaseField = Union[NumericField, AlphanumericField]


def is_uinteger(token: str) -> bool:
    """Return True if ``token`` is a non-empty run of ASCII digits.

    Unlike ``int()``, signs are rejected: ``"-7"`` is an opaque identifier.
    """
    return bool(token) and _DIGITS.issuperset(token)


def split_fields(raw: str) -> tuple[str, ...]:
    """Split a dot-separated identifier list (empty for an empty string)."""
    return tuple(raw.split(".")) if raw else ()


def parse_prerelease_fields(raw: str) -> tuple[PrereleaseField, ...]:
    """Split a pre-release string into typed fields.

    Examples:
        >>> parse_prerelease_fields("alpha.1")
        (AlphanumericField(text='alpha'), NumericField(value=1))
        >>> parse_prerelease_fields("x.-7")
        (AlphanumericField(text='x'), AlphanumericField(text='-7'))
    """
    return tuple(
        NumericField(int(token)) if is_uinteger(token) else AlphanumericField(token)
        for token in split_fields(raw)
    )
