# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Point a project's ``package.json`` at local workspace packages."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from .catalog import PackageCatalog
from .constants import PACKAGE_MANIFEST
from .errors import ManifestShapeError
from .json_file import JsonDocumentError, JsonObject, read_object, write_object
from .selection import ordered_union

DEPENDENCIES_KEY = "dependencies"
RESOLUTIONS_KEY = "resolutions"


class ManifestRewriter:
    """Rewrite dependency and resolution entries to relative workspace paths."""

    def __init__(self, catalog: PackageCatalog) -> None:
        self._catalog = catalog

    def eligible_names(self, manifest: Mapping[str, object], selected_names: Iterable[str]) -> list[str]:
        """Return manifest dependencies and selected names that exist in the catalog.

        Raises:
            ManifestShapeError: If ``manifest`` has no ``dependencies`` mapping.
        """

        dependencies = _dependencies_of(manifest)
        return [name for name in ordered_union(dependencies, selected_names) if name in self._catalog]

    def rewrite(self, project_dir: Path, selected_names: Iterable[str]) -> dict[str, str]:
        """Rewrite ``project_dir/package.json`` so eligible packages resolve locally.

        Each eligible name gets the same relative path in ``dependencies`` and
        ``resolutions``. Entries for other names are left as they were. The
        document is rewritten in place without an atomic swap.

        Args:
            project_dir: Project directory holding ``package.json``.
            selected_names: Package names chosen by the selector.

        Returns:
            dict[str, str]: Rewritten package names mapped to their relative paths.

        Raises:
            ManifestShapeError: If the manifest is unreadable, lacks ``dependencies``
                or carries a non-object ``resolutions`` entry.
        """

        manifest_path = project_dir / PACKAGE_MANIFEST
        try:
            manifest: JsonObject = read_object(manifest_path)
        except JsonDocumentError as exc:
            raise ManifestShapeError(str(exc)) from exc

        rewritten: dict[str, str] = {}
        for name in self.eligible_names(manifest, selected_names):
            rewritten[name] = _relative_locator(self._catalog[name].path, project_dir)

        dependencies = manifest[DEPENDENCIES_KEY]
        resolutions = manifest.get(RESOLUTIONS_KEY)
        if resolutions is None:
            resolutions = {}
        elif not isinstance(resolutions, dict):
            raise ManifestShapeError(f"`{RESOLUTIONS_KEY}` in {manifest_path} must be an object")
        for name, locator in rewritten.items():
            dependencies[name] = locator
            resolutions[name] = locator
        manifest[RESOLUTIONS_KEY] = resolutions
        write_object(manifest_path, manifest)
        return rewritten


def _dependencies_of(manifest: Mapping[str, object]) -> dict[str, object]:
    dependencies = manifest.get(DEPENDENCIES_KEY)
    if not isinstance(dependencies, dict):
        raise ManifestShapeError(f"Project manifest must declare a `{DEPENDENCIES_KEY}` object")
    return dependencies


def _relative_locator(package_path: Path, project_dir: Path) -> str:
    return Path(os.path.relpath(package_path, project_dir.resolve())).as_posix()


__all__ = ["ManifestRewriter"]
