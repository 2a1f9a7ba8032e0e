# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across pkglink modules."""

from __future__ import annotations

from typing import Final

PACKAGE_MANIFEST: Final[str] = "package.json"
APP_CONFIG_DOCUMENT: Final[str] = "app.json"
CONFIG_FILENAME: Final[str] = "pkglink.toml"
PYPROJECT_MANIFEST: Final[str] = "pyproject.toml"
ROOT_ENV_VAR: Final[str] = "PKGLINK_ROOT"

DEFAULT_PACKAGE_DIRS: Final[tuple[str, ...]] = ("packages",)
DEFAULT_DEPENDENCY_FIELDS: Final[tuple[str, ...]] = ("dependencies", "peerDependencies")
DEFAULT_ENTRY_PACKAGE: Final[str] = "expo"

# Template and fixture packages that must never be installed into a real project.
DEFAULT_EXCLUDED_PACKAGES: Final[tuple[str, ...]] = (
    "expo-module-template",
    "workspace-template",
    "first-package",
    "second-package",
    "unimodules-test-core",
)

DEFAULT_TEMPLATES_DIR: Final[str] = "templates"
DEFAULT_BLANK_TEMPLATE: Final[str] = "expo-template-blank"
DEFAULT_BARE_TEMPLATE: Final[str] = "expo-template-bare-minimum"
DEFAULT_APP_ID_PREFIX: Final[str] = "dev.expo"

DEFAULT_TEMPLATING_COMMAND: Final[tuple[str, ...]] = ("npx", "expo")
DEFAULT_PACK_COMMAND: Final[tuple[str, ...]] = ("npm", "pack")
DEFAULT_INSTALL_COMMAND: Final[tuple[str, ...]] = ("yarn",)

DEFAULT_CHANGED_BASE: Final[str] = "master"
DEFAULT_CHANGED_REF: Final[str] = "HEAD"

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        "node_modules",
        "build",
        "dist",
        ".cache",
    }
)
