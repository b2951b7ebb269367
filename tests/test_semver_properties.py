# SPDX-License-Identifier: MIT
"""Property-based tests for semantic version parsing and ordering.

These tests verify that:
- Valid versions round-trip through parsing and formatting
- The scanner accepts exactly the language of the reference regex
- Divergence offsets sit on the boundary between viable and dead prefixes
- Precedence is a preorder that ignores build metadata
- The strict ordering is a total order consistent with equality
- Increments always move forward in precedence
"""

from __future__ import annotations

from hypothesis import assume, given, settings, strategies as st

from semver_value import (
    SEMVER_PATTERN,
    Identifier,
    InvalidFieldError,
    MalformedVersionError,
    SemVer,
    compare,
    precedence,
    precedence_key,
    strict_key,
)
from semver_value.grammar import is_viable_prefix, scan


# =============================================================================
# Strategies for generating test data
# =============================================================================

numbers = st.integers(min_value=0, max_value=10**12)

small_numbers = st.integers(min_value=0, max_value=3)

numeric_identifiers = numbers.map(str)

alphanumeric_identifiers = st.from_regex(r"[0-9A-Za-z-]{0,4}[A-Za-z-][0-9A-Za-z-]{0,4}", fullmatch=True)

metadata_identifiers = st.from_regex(r"[0-9A-Za-z-]{1,8}", fullmatch=True)

# Few distinct values, so that generated versions often collide
small_prerelease_identifiers = st.sampled_from(["0", "1", "2", "11", "alpha", "beta", "rc", "-", "a1"])

small_metadata_identifiers = st.sampled_from(["001", "build", "exp", "sha"])

# Text mixing the grammar's alphabet with a few characters outside it
version_like_text = st.text(alphabet="0123456789.-+aZ_ ", max_size=16)

# Component values built from the separators of the grammar
separator_heavy_text = st.one_of(st.none(), st.text(alphabet="01a.-+", max_size=6))


def _dotted(identifiers, max_size):
    return st.lists(identifiers, max_size=max_size).map(".".join)


@st.composite
def version_strings(draw):
    """Generate a valid semantic version string."""
    core = ".".join(str(draw(numbers)) for _ in range(3))
    prerelease = draw(_dotted(st.one_of(numeric_identifiers, alphanumeric_identifiers), 4))
    metadata = draw(_dotted(metadata_identifiers, 3))
    text = core
    if prerelease:
        text += f"-{prerelease}"
    if metadata:
        text += f"+{metadata}"
    return text


@st.composite
def small_versions(draw):
    """Generate versions from a small space, so comparisons often tie."""
    return SemVer.of(
        draw(small_numbers),
        draw(small_numbers),
        draw(small_numbers),
        draw(_dotted(small_prerelease_identifiers, 3)),
        draw(_dotted(small_metadata_identifiers, 2)),
    )


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _key_order(key1, key2) -> int:
    return (key1 > key2) - (key1 < key2)


# =============================================================================
# Property-Based Tests
# =============================================================================


class TestParsingProperties:
    """Property-based tests for parsing and formatting."""

    @given(text=version_strings())
    @settings(max_examples=200)
    def test_round_trip(self, text):
        """*For any* valid version string, formatting its parse SHALL reproduce it."""
        version = SemVer.parse(text)
        assert str(version) == text
        assert SemVer.parse(str(version)) == version

    @given(text=version_strings())
    def test_components_rebuild_version(self, text):
        """*For any* valid version, SemVer.of on its components SHALL rebuild it."""
        version = SemVer.parse(text)
        rebuilt = SemVer.of(
            version.major, version.minor, version.patch, version.prerelease, version.metadata
        )
        assert rebuilt == version

    @given(prerelease=separator_heavy_text, metadata=separator_heavy_text)
    @settings(max_examples=300)
    def test_components_keep_their_values(self, prerelease, metadata):
        """*For any* components SemVer.of accepts, each SHALL be stored unchanged."""
        try:
            version = SemVer.of(1, 0, 0, prerelease, metadata)
        except InvalidFieldError:
            return
        assert version.get(Identifier.PRERELEASE) == (prerelease or "")
        assert version.get(Identifier.METADATA) == (metadata or "")

    @given(text=version_strings())
    def test_fields_rejoin_to_raw(self, text):
        """*For any* valid version, field decompositions SHALL rejoin to the raw strings."""
        version = SemVer.parse(text)
        assert ".".join(str(f) for f in version.prerelease_fields) == version.prerelease
        assert ".".join(version.metadata_fields) == version.metadata
        assert version.is_stable == (version.prerelease_fields == ())

    @given(text=st.one_of(version_strings(), version_like_text))
    @settings(max_examples=300)
    def test_scanner_agrees_with_reference_pattern(self, text):
        """The scanner SHALL accept exactly the strings the reference regex accepts."""
        assert scan(text).matched == (SEMVER_PATTERN.fullmatch(text) is not None)

    @given(text=version_like_text)
    @settings(max_examples=300)
    def test_offset_is_viability_boundary(self, text):
        """*For any* rejected string, the offset SHALL end the longest viable prefix."""
        assume(not scan(text).matched)
        try:
            SemVer.parse(text)
        except MalformedVersionError as e:
            offset = e.offset
        else:
            raise AssertionError(f"{text!r} should not parse")

        assert is_viable_prefix(text[:offset])
        if offset < len(text):
            assert not is_viable_prefix(text[: offset + 1])
            assert scan(text).position == offset


class TestPrecedenceProperties:
    """Property-based tests for precedence."""

    @given(a=small_versions())
    def test_reflexive(self, a):
        """Every version SHALL have the same precedence as itself."""
        assert precedence(a, a) == 0

    @given(a=small_versions(), b=small_versions())
    @settings(max_examples=300)
    def test_antisymmetric(self, a, b):
        """Swapping operands SHALL flip the sign of precedence."""
        assert precedence(a, b) == -precedence(b, a)

    @given(a=small_versions(), b=small_versions(), c=small_versions())
    @settings(max_examples=300)
    def test_transitive(self, a, b, c):
        """If a <= b and b <= c by precedence, then a <= c."""
        if precedence(a, b) <= 0 and precedence(b, c) <= 0:
            assert precedence(a, c) <= 0

    @given(a=small_versions(), metadata=_dotted(metadata_identifiers, 3))
    def test_metadata_never_changes_precedence(self, a, metadata):
        """Replacing build metadata SHALL NOT change precedence."""
        assert precedence(a, a.with_(Identifier.METADATA, metadata)) == 0

    @given(a=small_versions(), b=small_versions())
    @settings(max_examples=300)
    def test_precedence_key_consistent(self, a, b):
        """Ordering precedence keys SHALL agree with precedence."""
        assert _key_order(precedence_key(a), precedence_key(b)) == precedence(a, b)


class TestStrictOrderingProperties:
    """Property-based tests for the strict ordering."""

    @given(a=small_versions(), b=small_versions())
    @settings(max_examples=300)
    def test_total_and_consistent_with_equality(self, a, b):
        """Exactly one of <, ==, > SHALL hold, and == SHALL mean structural equality."""
        result = compare(a, b)
        assert result in (-1, 0, 1)
        assert (result == 0) == (a == b)
        assert [a < b, a == b, a > b].count(True) == 1

    @given(a=small_versions(), b=small_versions())
    def test_refines_precedence(self, a, b):
        """A non-zero precedence SHALL decide the strict ordering."""
        if precedence(a, b) != 0:
            assert compare(a, b) == precedence(a, b)

    @given(a=small_versions(), b=small_versions(), c=small_versions())
    @settings(max_examples=300)
    def test_transitive(self, a, b, c):
        """If a <= b and b <= c, then a <= c."""
        if compare(a, b) <= 0 and compare(b, c) <= 0:
            assert compare(a, c) <= 0

    @given(a=small_versions(), b=small_versions())
    @settings(max_examples=300)
    def test_strict_key_consistent(self, a, b):
        """Ordering strict keys SHALL agree with compare."""
        assert _key_order(strict_key(a), strict_key(b)) == compare(a, b)

    @given(versions=st.lists(small_versions(), max_size=8))
    def test_sorting_independent_of_input_order(self, versions):
        """Sorting SHALL produce the same sequence for any permutation."""
        assert sorted(versions) == sorted(reversed(versions))


class TestIncrementProperties:
    """Property-based tests for next."""

    @given(
        a=small_versions(),
        identifier=st.sampled_from([Identifier.MAJOR, Identifier.MINOR, Identifier.PATCH]),
    )
    def test_normal_increment_moves_forward(self, a, identifier):
        """Incrementing a normal identifier SHALL yield a stable, higher version."""
        b = a.next(identifier)
        assert precedence(a, b) == -1
        assert b.is_stable
        assert b.metadata == ""

    @given(a=small_versions())
    def test_prerelease_increment_moves_forward(self, a):
        """Incrementing the pre-release SHALL yield a higher pre-release of the same core."""
        assume(not a.is_stable)
        b = a.next(Identifier.PRERELEASE)
        assert precedence(a, b) == -1
        assert b.core == a.core
        assert not b.is_stable
        assert _sign(precedence(b, SemVer.parse(a.core))) == -1
