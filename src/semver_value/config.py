# SPDX-License-Identifier: MIT
"""Configuration loading from pyproject.toml and the environment."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .fields import Identifier

logger = logging.getLogger(__name__)

SORT_MODES = ("strict", "precedence")

TOOL_TABLE = "semver-value"


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


def _bump_identifier(value: Any, source: str) -> Identifier:
    if not isinstance(value, str):
        raise ConfigError(f"{source}: expected a string, got {type(value).__name__}")
    try:
        identifier = Identifier.from_name(value)
    except ValueError as e:
        raise ConfigError(f"{source}: {e}") from e
    if identifier is Identifier.METADATA:
        raise ConfigError(f"{source}: build metadata cannot be bumped")
    return identifier


def _sort_mode(value: Any, source: str) -> str:
    if value not in SORT_MODES:
        raise ConfigError(f"{source}: expected one of {', '.join(SORT_MODES)}, got {value!r}")
    return value


@dataclass
class SemVerConfig:
    """Settings for the semver command.

    Attributes:
        project_dir: Directory containing pyproject.toml, if one was found
        version: The project version declared in ``[project].version``
        default_bump: Identifier bumped when none is given
        sort_mode: "strict" (metadata breaks ties) or "precedence"
    """

    project_dir: Optional[Path] = None
    version: str = ""
    default_bump: Identifier = Identifier.PATCH
    sort_mode: str = "strict"

    @classmethod
    def from_pyproject(cls, project_dir: str | Path) -> "SemVerConfig":
        """Load configuration from pyproject.toml.

        Args:
            project_dir: Directory containing pyproject.toml

        Returns:
            SemVerConfig instance

        Raises:
            ConfigError: If the file is invalid
            FileNotFoundError: If pyproject.toml doesn't exist
        """
        project_path = Path(project_dir)
        pyproject_path = project_path / "pyproject.toml"

        if not pyproject_path.exists():
            raise FileNotFoundError(f"pyproject.toml not found in {project_path}")

        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        logger.debug("Loaded configuration from %s", pyproject_path)
        return cls.from_pyproject_dict(pyproject, project_path)

    @classmethod
    def from_pyproject_dict(
        cls,
        pyproject: dict[str, Any],
        project_dir: Optional[Path] = None,
    ) -> "SemVerConfig":
        """Create SemVerConfig from a parsed pyproject.toml dictionary.

        Settings live in the ``[tool.semver-value]`` table:

            [tool.semver-value]
            default-bump = "minor"
            sort-mode = "precedence"
        """
        project = pyproject.get("project", {})
        tool = pyproject.get("tool", {}).get(TOOL_TABLE, {})

        config = cls(project_dir=project_dir, version=project.get("version", ""))
        if "default-bump" in tool:
            config.default_bump = _bump_identifier(
                tool["default-bump"], f"tool.{TOOL_TABLE}.default-bump"
            )
        if "sort-mode" in tool:
            config.sort_mode = _sort_mode(tool["sort-mode"], f"tool.{TOOL_TABLE}.sort-mode")
        return config

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "SemVerConfig":
        """Override settings from environment variables.

        Reads ``SEMVER_DEFAULT_BUMP`` and ``SEMVER_SORT_MODE``.
        """
        env = os.environ if environ is None else environ

        if default_bump := env.get("SEMVER_DEFAULT_BUMP"):
            self.default_bump = _bump_identifier(default_bump, "SEMVER_DEFAULT_BUMP")
        if sort_mode := env.get("SEMVER_SORT_MODE"):
            self.sort_mode = _sort_mode(sort_mode.lower(), "SEMVER_SORT_MODE")

        return self


def find_project_root(start_dir: Optional[str | Path] = None) -> Path:
    """Find the project root by looking for pyproject.toml.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the project root directory

    Raises:
        ConfigError: If no project root is found
    """
    current = Path(start_dir) if start_dir else Path.cwd()
    current = current.resolve()

    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent

    raise ConfigError("Could not find project root (no pyproject.toml found)")


def load_config(
    project_dir: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SemVerConfig:
    """Load configuration from the project directory and the environment.

    Without a ``project_dir``, the nearest pyproject.toml above the working
    directory is used; if there is none, defaults apply.

    Raises:
        ConfigError: If configuration values are invalid
        FileNotFoundError: If ``project_dir`` has no pyproject.toml
    """
    if project_dir is None:
        try:
            project_dir = find_project_root()
        except ConfigError:
            logger.debug("No pyproject.toml found, using default configuration")
            return SemVerConfig().apply_env(environ)

    return SemVerConfig.from_pyproject(project_dir).apply_env(environ)
