# SPDX-License-Identifier: MIT
"""Semantic Versioning 2.0.0 value type.

This package parses and validates semantic versions, orders them by SemVer
precedence (or by a strict total ordering for deterministic sorting), and
derives new versions by incrementing or replacing identifiers.

Example:
    >>> from semver_value import SemVer, Identifier, precedence
    >>>
    >>> version = SemVer.parse("1.2.3-alpha.1+build.456")
    >>> version.major
    1
    >>> version.prerelease
    'alpha.1'
    >>>
    >>> str(version.next(Identifier.PRERELEASE))
    '1.2.3-alpha.2'
    >>>
    >>> precedence(SemVer.parse("1.0.0+a"), SemVer.parse("1.0.0+b"))
    0
"""

__version__ = "0.1.0"

from .errors import (
    SemVerError,
    MalformedVersionError,
    InvalidFieldError,
    IllegalOperationError,
    TypeMismatchError,
)
from .fields import (
    Identifier,
    NumericField,
    AlphanumericField,
    PrereleaseField,
)
from .diagnostics import index_of_match_failure
from .grammar import SEMVER_PATTERN
from .semver import (
    SemVer,
    parse_version,
    is_valid_semver,
)
from .compare import (
    precedence,
    compare,
    compare_versions,
    precedence_key,
    strict_key,
    sort_versions,
    max_version,
)

__all__ = [
    # Version value
    "SemVer",
    "Identifier",
    "NumericField",
    "AlphanumericField",
    "PrereleaseField",
    "parse_version",
    "is_valid_semver",
    "SEMVER_PATTERN",
    "index_of_match_failure",
    # Version comparison
    "precedence",
    "compare",
    "compare_versions",
    "precedence_key",
    "strict_key",
    "sort_versions",
    "max_version",
    # Errors
    "SemVerError",
    "MalformedVersionError",
    "InvalidFieldError",
    "IllegalOperationError",
    "TypeMismatchError",
]
