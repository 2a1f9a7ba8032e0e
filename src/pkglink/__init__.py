# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scaffold projects from local templates and link them to workspace packages."""

from __future__ import annotations

from .catalog import PackageCatalog, PackageRecord, load_catalog
from .changes import ChangeSetResolver, GitChangedFiles
from .config import LinkConfig, load_config
from .errors import (
    ConfigError,
    DiscoveryError,
    EntryPackageNotFoundError,
    ManifestShapeError,
    MissingNameError,
    PkgLinkError,
    StageError,
    TemplateArchiveNotFoundError,
    VcsQueryError,
)
from .manifest import ManifestRewriter
from .pipeline import BareProjectPipeline, PipelineOptions, PipelineResult
from .scaffold import ProjectScaffolder, packed_template
from .selection import PackageSelector, SelectionMode

__all__ = [
    "BareProjectPipeline",
    "ChangeSetResolver",
    "ConfigError",
    "DiscoveryError",
    "EntryPackageNotFoundError",
    "GitChangedFiles",
    "LinkConfig",
    "ManifestRewriter",
    "ManifestShapeError",
    "MissingNameError",
    "PackageCatalog",
    "PackageRecord",
    "PackageSelector",
    "PipelineOptions",
    "PipelineResult",
    "PkgLinkError",
    "ProjectScaffolder",
    "SelectionMode",
    "StageError",
    "TemplateArchiveNotFoundError",
    "VcsQueryError",
    "load_catalog",
    "load_config",
    "packed_template",
]
