# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Utilities for locating the monorepo workspace root."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from .constants import CONFIG_FILENAME, PACKAGE_MANIFEST, ROOT_ENV_VAR
from .errors import DiscoveryError


def locate_workspace_root(start: Path | None = None, *, env: Mapping[str, str] | None = None) -> Path:
    """Return the workspace root that owns ``start``.

    The ``PKGLINK_ROOT`` environment variable takes precedence. Otherwise the
    directory tree is walked upward from ``start`` (default: the current
    directory) until a directory declaring a workspace is found.

    Args:
        start: Directory from which the upward search begins.
        env: Environment mapping consulted for the override variable.

    Returns:
        Path: Resolved workspace root directory.

    Raises:
        DiscoveryError: If no workspace root can be located.
    """

    environ = os.environ if env is None else env
    if override := environ.get(ROOT_ENV_VAR):
        candidate = Path(override).expanduser().resolve()
        if not candidate.is_dir():
            raise DiscoveryError(f"{ROOT_ENV_VAR} points at {candidate}, which is not a directory")
        return candidate

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        if is_workspace_root(directory):
            return directory
    raise DiscoveryError(
        f"Unable to locate the workspace root from {origin}; set {ROOT_ENV_VAR} to override.",
    )


def is_workspace_root(directory: Path) -> bool:
    """Return ``True`` when *directory* declares a package workspace."""

    if (directory / CONFIG_FILENAME).is_file():
        return True
    manifest = directory / PACKAGE_MANIFEST
    if not manifest.is_file():
        return False
    try:
        payload = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    return isinstance(payload, dict) and "workspaces" in payload


__all__ = ["is_workspace_root", "locate_workspace_root"]
