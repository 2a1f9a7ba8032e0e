# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide which workspace packages are installed into a new project."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

from .catalog import PackageCatalog
from .changes import ChangeSetResolver
from .config import SelectionSettings
from .errors import EntryPackageNotFoundError


class SelectionMode(Enum):
    """Enumerate the supported package selection modes."""

    DEFAULT = "default"
    ALL = "all"
    CHANGED = "changed"
    EXPLICIT = "explicit"

    @classmethod
    def parse(cls, raw: str) -> SelectionMode:
        """Return the mode named by ``raw``; anything else is an explicit package list."""

        value = raw.strip()
        for member in (cls.DEFAULT, cls.ALL, cls.CHANGED):
            if member.value == value:
                return member
        return cls.EXPLICIT


def split_package_list(raw: str) -> list[str]:
    """Split a comma-separated package list, trimming whitespace and dropping blanks."""

    return [entry.strip() for entry in raw.split(",") if entry.strip()]


def ordered_union(*groups: Iterable[str]) -> list[str]:
    """Concatenate ``groups`` keeping the first occurrence of every name."""

    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for name in group:
            if name not in seen:
                seen.add(name)
                merged.append(name)
    return merged


class PackageSelector:
    """Combine the entry package's dependency floor with mode-specific extras."""

    def __init__(
        self,
        catalog: PackageCatalog,
        *,
        resolver: ChangeSetResolver | None = None,
        settings: SelectionSettings | None = None,
    ) -> None:
        """Create a selector over ``catalog``.

        Args:
            catalog: Workspace package catalog.
            resolver: Change-set resolver used by :attr:`SelectionMode.CHANGED`.
            settings: Entry package, exclusions and default refs.
        """

        self._catalog = catalog
        self._resolver = resolver
        self._settings = settings or SelectionSettings()

    def default_packages(self) -> list[str]:
        """Return the transitive workspace dependencies of the entry package.

        Excluded template and fixture packages never appear, even when reachable.

        Raises:
            EntryPackageNotFoundError: If the entry package is not in the catalog.
        """

        entry = self._settings.entry_package
        if self._catalog.lookup(entry) is None:
            raise EntryPackageNotFoundError(entry)
        excluded = set(self._settings.excluded_packages)
        return [name for name in self._catalog.transitive_dependency_names(entry) if name not in excluded]

    def select(
        self,
        mode: SelectionMode,
        *,
        explicit: str | Sequence[str] | None = None,
        base_ref: str | None = None,
        target_ref: str | None = None,
    ) -> list[str]:
        """Return the ordered, de-duplicated package names to install.

        The default floor always comes first; the active mode only adds names.

        Args:
            mode: Selection mode to apply.
            explicit: Comma-separated string or sequence of names for explicit mode.
            base_ref: Base reference for changed mode.
            target_ref: Target reference for changed mode.

        Returns:
            list[str]: Package names, floor first, extras after.

        Raises:
            EntryPackageNotFoundError: If the entry package is not in the catalog.
            VcsQueryError: If the changed-file query fails in changed mode.
        """

        floor = self.default_packages()
        extras = self._extra_packages(mode, explicit=explicit, base_ref=base_ref, target_ref=target_ref)
        return ordered_union(floor, extras)

    def select_from_string(
        self,
        packages: str,
        *,
        base_ref: str | None = None,
        target_ref: str | None = None,
    ) -> list[str]:
        """Parse a ``--packages`` style value and run :meth:`select`."""

        mode = SelectionMode.parse(packages)
        explicit = packages if mode is SelectionMode.EXPLICIT else None
        return self.select(mode, explicit=explicit, base_ref=base_ref, target_ref=target_ref)

    def _extra_packages(
        self,
        mode: SelectionMode,
        *,
        explicit: str | Sequence[str] | None,
        base_ref: str | None,
        target_ref: str | None,
    ) -> list[str]:
        if mode is SelectionMode.DEFAULT:
            return []
        if mode is SelectionMode.ALL:
            excluded = set(self._settings.excluded_packages)
            return [name for name in self._catalog.names() if name and name not in excluded]
        if mode is SelectionMode.CHANGED:
            if self._resolver is None:
                raise ValueError("changed mode requires a ChangeSetResolver")
            changed = self._resolver.resolve(
                base_ref or self._settings.changed_base,
                target_ref or self._settings.changed_ref,
                self._catalog,
            )
            return sorted(changed)
        if explicit is None:
            return []
        if isinstance(explicit, str):
            return split_package_list(explicit)
        return [name.strip() for name in explicit if name.strip()]


__all__ = ["PackageSelector", "SelectionMode", "ordered_union", "split_package_list"]
