# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery and indexing of the buildable packages in a workspace."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import LinkConfig
from .constants import ALWAYS_EXCLUDE_DIRS, PACKAGE_MANIFEST
from .errors import DiscoveryError
from .json_file import JsonDocumentError, read_object
from .workspace import locate_workspace_root


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """A workspace package and the workspace packages it declares as dependencies."""

    name: str
    path: Path
    dependency_names: tuple[str, ...] = ()
    version: str | None = None
    private: bool = False


class PackageCatalog(Mapping[str, PackageRecord]):
    """Read-only index of workspace packages keyed by package name."""

    def __init__(self, records: Iterable[PackageRecord], *, root: Path) -> None:
        """Index ``records`` for the workspace rooted at ``root``.

        Args:
            records: Package records with unique names.
            root: Workspace root the records were discovered under.

        Raises:
            DiscoveryError: If two records share a name.
        """

        index: dict[str, PackageRecord] = {}
        for record in records:
            if (existing := index.get(record.name)) is not None:
                raise DiscoveryError(
                    f"Package name {record.name!r} is declared by both {existing.path} and {record.path}",
                )
            index[record.name] = record
        self._records = index
        self._root = root

    @property
    def root(self) -> Path:
        """Return the workspace root directory."""

        return self._root

    def __getitem__(self, name: str) -> PackageRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"PackageCatalog(root={self._root!s}, packages={len(self._records)})"

    def lookup(self, name: str) -> PackageRecord | None:
        """Return the record registered for ``name`` or ``None``."""

        return self._records.get(name)

    def names(self) -> list[str]:
        """Return every package name in discovery order."""

        return list(self._records)

    def records(self) -> list[PackageRecord]:
        """Return every package record in discovery order."""

        return list(self._records.values())

    def declared_dependencies(self, name: str) -> list[PackageRecord]:
        """Return the records of the workspace packages ``name`` depends on directly.

        Raises:
            KeyError: If ``name`` is not part of the catalog.
        """

        return [self._records[dependency] for dependency in self._records[name].dependency_names]

    def transitive_dependency_names(self, name: str) -> list[str]:
        """Return the names of every workspace package reachable from ``name``.

        Direct dependencies come first in declared order, followed by their own
        dependencies level by level. Each name appears once, ``name`` itself is
        never included, and dependency cycles are tolerated.

        Raises:
            KeyError: If ``name`` is not part of the catalog.
        """

        seen: set[str] = {name}
        ordered: list[str] = []
        queue: deque[str] = deque(self._records[name].dependency_names)
        while queue:
            current = queue.popleft()
            if current in seen:
                continue
            seen.add(current)
            ordered.append(current)
            queue.extend(self._records[current].dependency_names)
        return ordered


@dataclass(frozen=True, slots=True)
class _RawPackage:
    name: str
    path: Path
    dependencies: tuple[str, ...]
    version: str | None
    private: bool


def load_catalog(root: Path | None = None, *, config: LinkConfig | None = None) -> PackageCatalog:
    """Load every buildable package of the workspace.

    Args:
        root: Workspace root. Located with :func:`locate_workspace_root` when omitted.
        config: Configuration naming the package directories and dependency fields.

    Returns:
        PackageCatalog: Catalog of the discovered packages.

    Raises:
        DiscoveryError: If the workspace root cannot be located or package names collide.
    """

    workspace_root = (root or locate_workspace_root()).resolve()
    if not workspace_root.is_dir():
        raise DiscoveryError(f"Workspace root {workspace_root} is not a directory")
    settings = (config or LinkConfig()).selection

    raw_packages = [
        package
        for package_dir in settings.package_dirs
        for package in _scan_package_dir(workspace_root / package_dir, settings.dependency_fields)
    ]
    known = {package.name for package in raw_packages}
    return PackageCatalog(
        (
            PackageRecord(
                name=package.name,
                path=package.path,
                dependency_names=tuple(dep for dep in package.dependencies if dep in known and dep != package.name),
                version=package.version,
                private=package.private,
            )
            for package in raw_packages
        ),
        root=workspace_root,
    )


def _scan_package_dir(base: Path, dependency_fields: Sequence[str]) -> Iterator[_RawPackage]:
    if not base.is_dir():
        return
    for child in sorted(base.iterdir()):
        if not child.is_dir() or child.name in ALWAYS_EXCLUDE_DIRS:
            continue
        if child.name.startswith("@"):
            for scoped in sorted(child.iterdir()):
                if scoped.is_dir() and (package := _read_package(scoped, dependency_fields)) is not None:
                    yield package
            continue
        if (package := _read_package(child, dependency_fields)) is not None:
            yield package


def _read_package(directory: Path, dependency_fields: Sequence[str]) -> _RawPackage | None:
    manifest = directory / PACKAGE_MANIFEST
    if not manifest.is_file():
        return None
    try:
        payload = read_object(manifest)
    except JsonDocumentError as exc:
        raise DiscoveryError(str(exc)) from exc
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    version = payload.get("version")
    return _RawPackage(
        name=name,
        path=directory,
        dependencies=_dependency_names(payload, dependency_fields),
        version=version if isinstance(version, str) else None,
        private=payload.get("private") is True,
    )


def _dependency_names(payload: Mapping[str, Any], fields: Sequence[str]) -> tuple[str, ...]:
    names: list[str] = []
    for field in fields:
        section = payload.get(field)
        if not isinstance(section, Mapping):
            continue
        names.extend(name for name in section if name not in names)
    return tuple(names)


__all__ = ["PackageCatalog", "PackageRecord", "load_catalog"]
