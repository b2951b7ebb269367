# SPDX-License-Identifier: MIT
"""Semantic version grammar.

A hand-written scanner walks the SemVer 2.0.0 grammar one character at a time:

    major "." minor "." patch ["-" prerelease] ["+" metadata]

Besides accepting or rejecting a string, the scanner tells apart inputs that
are merely incomplete (``"1.0"``, ``"1.0.0-"``) from inputs that can never be
completed (``"1.01.0"``), which is what divergence diagnostics are built on.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import NoReturn, Optional

# Semantic versioning regex pattern (SemVer 2.0.0 compliant)
# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<metadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$",
    re.ASCII,
)

GROUP_NAMES = ("major", "minor", "patch", "prerelease", "metadata")

_DIGITS = frozenset(string.digits)
_IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "-")


class MatchState(Enum):
    """Outcome of scanning a string against the grammar."""

    MATCH = "match"
    """The whole string is a semantic version."""
    PARTIAL = "partial"
    """Not a semantic version, but some extension of it is."""
    MISMATCH = "mismatch"
    """No extension of the string is a semantic version."""


@dataclass(frozen=True)
class Scan:
    """Result of :func:`scan`.

    Attributes:
        state: How the input relates to the grammar
        position: Where scanning stopped; for a mismatch, the offending index
        groups: Raw component strings keyed by :data:`GROUP_NAMES` (only on a
            match; absent pre-release and metadata are empty strings)
    """

    state: MatchState
    position: int
    groups: dict[str, str] = field(default_factory=dict)

    @property
    def matched(self) -> bool:
        return self.state is MatchState.MATCH


class _Stop(Exception):
    def __init__(self, state: MatchState):
        self.state = state


class _Scanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _peek(self) -> Optional[str]:
        return self.text[self.pos] if self.pos < len(self.text) else None

    def _fail(self) -> NoReturn:
        # Running out of input is never fatal: the caller may still append.
        if self.pos >= len(self.text):
            raise _Stop(MatchState.PARTIAL)
        raise _Stop(MatchState.MISMATCH)

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            self._fail()
        self.pos += 1

    def _number(self) -> str:
        start = self.pos
        char = self._peek()
        if char is None or char not in _DIGITS:
            self._fail()
        self.pos += 1
        if char != "0":
            while (char := self._peek()) is not None and char in _DIGITS:
                self.pos += 1
        return self.text[start : self.pos]

    def _identifier(self, prerelease: bool) -> None:
        start = self.pos
        while (char := self._peek()) is not None and char in _IDENTIFIER_CHARS:
            self.pos += 1
        if self.pos == start:
            self._fail()

        token = self.text[start : self.pos]
        if prerelease and len(token) > 1 and token[0] == "0" and _DIGITS.issuperset(token):
            # "00" may still become alphanumeric ("00a"), so only a
            # terminator makes the leading zero fatal.
            self._fail()

    def _identifiers(self, prerelease: bool) -> str:
        start = self.pos
        self._identifier(prerelease)
        while self._peek() == ".":
            self.pos += 1
            self._identifier(prerelease)
        return self.text[start : self.pos]

    def run(self) -> dict[str, str]:
        major = self._number()
        self._expect(".")
        minor = self._number()
        self._expect(".")
        patch = self._number()

        prerelease = metadata = ""
        if self._peek() == "-":
            self.pos += 1
            prerelease = self._identifiers(prerelease=True)
        if self._peek() == "+":
            self.pos += 1
            metadata = self._identifiers(prerelease=False)
        if self._peek() is not None:
            self._fail()

        return dict(zip(GROUP_NAMES, (major, minor, patch, prerelease, metadata)))


def scan(text: str) -> Scan:
    """Scan ``text`` against the semantic version grammar.

    Examples:
        >>> scan("1.2.3-rc.1").groups["prerelease"]
        'rc.1'
        >>> scan("1.2").state
        <MatchState.PARTIAL: 'partial'>
        >>> scan("1.02.3").position
        3
    """
    scanner = _Scanner(text)
    try:
        groups = scanner.run()
    except _Stop as stop:
        return Scan(stop.state, scanner.pos)
    return Scan(MatchState.MATCH, scanner.pos, groups)


def is_viable_prefix(text: str) -> bool:
    """Return True if ``text`` is, or can be extended into, a semantic version."""
    return scan(text).state is not MatchState.MISMATCH
