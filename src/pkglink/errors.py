# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the scaffolding and resolution pipeline."""

from __future__ import annotations


class PkgLinkError(RuntimeError):
    """Base class for every failure the command surface reports to the operator."""


class ConfigError(PkgLinkError):
    """Raised when configuration input is invalid."""


class MissingNameError(PkgLinkError):
    """Raised when the project name is empty or absent."""

    def __init__(self) -> None:
        super().__init__("Missing project name. Run with `--name <string>`.")


class DiscoveryError(PkgLinkError):
    """Raised when the workspace root or its packages cannot be located."""


class EntryPackageNotFoundError(PkgLinkError):
    """Raised when the entry package is absent from the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot find the `{name}` package.")
        self.name = name


class TemplateArchiveNotFoundError(PkgLinkError):
    """Raised when packing a template produced no archive matching the expected name."""

    def __init__(self, template: str, pattern: str) -> None:
        super().__init__(f"Failed to create {template} tarball (no file matching {pattern!r}).")
        self.template = template
        self.pattern = pattern


class VcsQueryError(PkgLinkError):
    """Raised when the changed-file query fails, e.g. for unknown refs."""


class ManifestShapeError(PkgLinkError):
    """Raised when a project manifest lacks the expected ``dependencies`` mapping."""


class StageError(PkgLinkError):
    """Wrap a failure raised while a named pipeline stage was running."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        """Initialise the error with the failing stage and the underlying cause.

        Args:
            stage: Human-readable stage label (``"scaffold"``, ``"install"`` ...).
            cause: Exception raised by the stage.
        """

        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause


__all__ = [
    "ConfigError",
    "DiscoveryError",
    "EntryPackageNotFoundError",
    "ManifestShapeError",
    "MissingNameError",
    "PkgLinkError",
    "StageError",
    "TemplateArchiveNotFoundError",
    "VcsQueryError",
]
