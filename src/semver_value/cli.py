# SPDX-License-Identifier: MIT
"""CLI entry point for the semver command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from .compare import compare_versions, sort_versions
from .config import ConfigError, SemVerConfig, load_config
from .errors import MalformedVersionError, SemVerError
from .fields import AlphanumericField, Identifier, NumericField
from .semver import SemVer

IDENTIFIER_CHOICE = click.Choice([identifier.value for identifier in Identifier], case_sensitive=False)


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[SemVerConfig] = None
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def load_config(self) -> SemVerConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            self.config = load_config(self.project_dir)
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def fail(message: str) -> NoReturn:
    """Report an error and exit with status 1."""
    echo_error(message)
    sys.exit(1)


def echo_divergence(error: MalformedVersionError) -> None:
    """Print the rejected version with a marker under the offending character."""
    echo_error(str(error))
    click.echo(f"  {error.version}\n  {' ' * error.offset}^", err=True)


def parse_or_fail(text: str) -> SemVer:
    """Parse a version argument, exiting with a diagnostic on failure."""
    try:
        return SemVer.parse(text)
    except MalformedVersionError as e:
        echo_divergence(e)
        sys.exit(1)


@click.group()
@click.version_option(package_name="semver-value")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Read pyproject.toml from this directory.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """Semantic version toolkit.

    Validate, compare, sort and bump SemVer 2.0.0 versions.

    \b
    Examples:
        semver check 1.0.0-alpha.1
        semver compare 1.0.0-rc.1 1.0.0
        semver bump 1.2.5-alpha -i minor
        semver sort 1.0.0 1.0.0-beta 0.9.0
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )


@cli.command()
@click.argument("versions", nargs=-1, required=True)
def check(versions: tuple[str, ...]) -> None:
    """Check that VERSIONS are valid semantic versions."""
    failed = False
    for text in versions:
        try:
            SemVer.check(text)
        except MalformedVersionError as e:
            failed = True
            echo_divergence(e)
        else:
            echo_success(f"{text}: valid")

    if failed:
        sys.exit(1)


@cli.command()
@click.argument("version1")
@click.argument("version2")
@click.option("--strict", is_flag=True, help="Break precedence ties with build metadata.")
def compare(version1: str, version2: str, strict: bool) -> None:
    """Compare two versions, printing -1, 0 or 1."""
    echo_info(str(compare_versions(parse_or_fail(version1), parse_or_fail(version2), strict=strict)))


@cli.command()
@click.argument("version", required=False)
@click.option(
    "-i",
    "--identifier",
    type=IDENTIFIER_CHOICE,
    help="Identifier to increment (defaults to the configured default-bump).",
)
@pass_context
def bump(ctx: Context, version: Optional[str], identifier: Optional[str]) -> None:
    """Print the version following VERSION.

    VERSION defaults to the project version in pyproject.toml.
    """
    try:
        config = ctx.load_config()
    except (ConfigError, FileNotFoundError) as e:
        fail(str(e))

    if version is None:
        if not config.version:
            fail("No VERSION given and no [project].version in pyproject.toml")
        version = config.version

    target = Identifier.from_name(identifier) if identifier else config.default_bump
    try:
        echo_info(str(parse_or_fail(version).next(target)))
    except SemVerError as e:
        fail(str(e))


@cli.command(name="set")
@click.argument("identifier", type=IDENTIFIER_CHOICE)
@click.argument("value")
@click.argument("version")
def set_(identifier: str, value: str, version: str) -> None:
    """Print VERSION with IDENTIFIER set to VALUE.

    Less significant identifiers are reset. A VALUE starting with a hyphen
    must follow "--", otherwise it is read as an option:

    \b
        semver set prerelease -- -x.1 1.0.0
    """
    target = Identifier.from_name(identifier)
    parsed = parse_or_fail(version)
    if target.is_numeric:
        try:
            new_value: object = int(value)
        except ValueError:
            fail(f"{target.value} must be an integer, got {value!r}")
    else:
        new_value = value

    try:
        echo_info(str(parsed.with_(target, new_value)))
    except SemVerError as e:
        fail(str(e))


@cli.command(name="sort")
@click.argument("versions", nargs=-1, required=True)
@click.option(
    "--precedence/--strict",
    "by_precedence",
    default=None,
    help="Order by precedence only, or break ties with build metadata.",
)
@click.option("-r", "--reverse", is_flag=True, help="Sort in descending order.")
@pass_context
def sort_(ctx: Context, versions: tuple[str, ...], by_precedence: Optional[bool], reverse: bool) -> None:
    """Print VERSIONS in ascending order, one per line."""
    if by_precedence is None:
        try:
            by_precedence = ctx.load_config().sort_mode == "precedence"
        except (ConfigError, FileNotFoundError) as e:
            fail(str(e))

    parsed = [parse_or_fail(text) for text in versions]
    for version in sort_versions(parsed, strict=not by_precedence, reverse=reverse):
        echo_info(str(version))


@cli.command()
@click.argument("version")
def fields(version: str) -> None:
    """Print the identifiers of VERSION."""
    parsed = parse_or_fail(version)
    for identifier in Identifier:
        echo_info(f"{identifier.value}: {parsed.get(identifier)}")
    echo_info(f"stable: {str(parsed.is_stable).lower()}")
    for index, field in enumerate(parsed.prerelease_fields):
        match field:
            case NumericField(value=n):
                echo_info(f"prerelease[{index}]: {n} (numeric)")
            case AlphanumericField(text=t):
                echo_info(f"prerelease[{index}]: {t} (alphanumeric)")
    for index, token in enumerate(parsed.metadata_fields):
        echo_info(f"metadata[{index}]: {token}")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except (SemVerError, ConfigError, FileNotFoundError) as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
