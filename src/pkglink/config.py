# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for pkglink.

Configuration is optional. Values are read from the ``[tool.pkglink]`` table of
the workspace ``pyproject.toml`` and then from ``pkglink.toml`` at the workspace
root, with the later document deep-merged over the earlier one. Every field has
a default matching the layout of the Expo monorepo.
"""

from __future__ import annotations

import shlex
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    CONFIG_FILENAME,
    DEFAULT_APP_ID_PREFIX,
    DEFAULT_BARE_TEMPLATE,
    DEFAULT_BLANK_TEMPLATE,
    DEFAULT_CHANGED_BASE,
    DEFAULT_CHANGED_REF,
    DEFAULT_DEPENDENCY_FIELDS,
    DEFAULT_ENTRY_PACKAGE,
    DEFAULT_EXCLUDED_PACKAGES,
    DEFAULT_INSTALL_COMMAND,
    DEFAULT_PACK_COMMAND,
    DEFAULT_PACKAGE_DIRS,
    DEFAULT_TEMPLATES_DIR,
    DEFAULT_TEMPLATING_COMMAND,
    PYPROJECT_MANIFEST,
)
from .errors import ConfigError
from .json_file import deep_merge

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "pkglink"


def _coerce_str_tuple(value: object, field: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        return tuple(str(entry) for entry in value)
    raise ValueError(f"{field} must be a string or a sequence of strings")


class TemplateSettings(BaseModel):
    """Location of the local templates used to create and prebuild projects."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    directory: str = DEFAULT_TEMPLATES_DIR
    blank: str = DEFAULT_BLANK_TEMPLATE
    bare: str = DEFAULT_BARE_TEMPLATE
    app_id_prefix: str = DEFAULT_APP_ID_PREFIX


class SelectionSettings(BaseModel):
    """Settings that drive catalog discovery and package selection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    package_dirs: tuple[str, ...] = DEFAULT_PACKAGE_DIRS
    dependency_fields: tuple[str, ...] = DEFAULT_DEPENDENCY_FIELDS
    entry_package: str = DEFAULT_ENTRY_PACKAGE
    excluded_packages: tuple[str, ...] = DEFAULT_EXCLUDED_PACKAGES
    changed_base: str = DEFAULT_CHANGED_BASE
    changed_ref: str = DEFAULT_CHANGED_REF

    @field_validator("package_dirs", "dependency_fields", "excluded_packages", mode="before")
    @classmethod
    def _coerce_names(cls, value: object) -> tuple[str, ...]:
        return _coerce_str_tuple(value, "selection entries")


class CommandSettings(BaseModel):
    """Command prefixes used to reach the external collaborators."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    templating: tuple[str, ...] = DEFAULT_TEMPLATING_COMMAND
    pack: tuple[str, ...] = DEFAULT_PACK_COMMAND
    install: tuple[str, ...] = DEFAULT_INSTALL_COMMAND

    @field_validator("templating", "pack", "install", mode="before")
    @classmethod
    def _coerce_command(cls, value: object) -> tuple[str, ...]:
        if isinstance(value, str):
            value = shlex.split(value)
        command = _coerce_str_tuple(value, "commands")
        if not command:
            raise ValueError("command must contain at least one argument")
        return command


class LinkConfig(BaseModel):
    """Top-level configuration bundle."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    templates: TemplateSettings = Field(default_factory=TemplateSettings)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    commands: CommandSettings = Field(default_factory=CommandSettings)


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc


def _pyproject_section(root: Path) -> Mapping[str, Any]:
    data = _read_toml(root / PYPROJECT_MANIFEST)
    tool = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool, Mapping):
        return {}
    section = tool.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] must be a table")
    return section


def load_config(root: Path) -> LinkConfig:
    """Load the configuration for the workspace rooted at ``root``.

    Args:
        root: Workspace root directory.

    Returns:
        LinkConfig: Validated configuration with defaults for missing fields.

    Raises:
        ConfigError: If a configuration document is unreadable or invalid.
    """

    merged = deep_merge(_pyproject_section(root), _read_toml(root / CONFIG_FILENAME))
    try:
        return LinkConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pkglink configuration: {exc}") from exc


__all__ = [
    "CommandSettings",
    "LinkConfig",
    "SelectionSettings",
    "TemplateSettings",
    "load_config",
]
