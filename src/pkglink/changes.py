# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map files changed between two git refs back to the workspace packages owning them."""

from __future__ import annotations

import os
import posixpath
from collections.abc import Callable, Sequence
from pathlib import Path

from .catalog import PackageCatalog
from .errors import VcsQueryError
from .process import CommandOptions, CommandRunner, run_command

ChangedFilesQuery = Callable[[str, str], Sequence[str]]


class GitChangedFiles:
    """List root-relative paths changed between two refs using ``git diff``.

    ``--relative`` reports paths relative to the root and drops changes outside it,
    which keeps a workspace nested inside a larger repository aligned with its
    package paths.
    """

    def __init__(self, root: Path, *, runner: CommandRunner | None = None) -> None:
        """Create a query bound to the repository at ``root``.

        Args:
            root: Repository (workspace) root the diff runs in.
            runner: Optional command runner used to execute git.
        """

        self._root = root
        self._runner = runner or run_command

    def __call__(self, base_ref: str, target_ref: str) -> list[str]:
        """Return the paths changed on ``target_ref`` since it diverged from ``base_ref``.

        Raises:
            VcsQueryError: If git is unavailable or rejects the refs.
        """

        cmd = ["git", "diff", "--name-only", "--relative", f"{base_ref}...{target_ref}", "--"]
        options = CommandOptions(cwd=self._root, capture_output=True, check=False)
        try:
            completed = self._runner(cmd, options)
        except OSError as exc:
            raise VcsQueryError(f"Unable to run git: {exc}") from exc
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip() or "<no output>"
            raise VcsQueryError(f"git diff {base_ref}...{target_ref} failed: {stderr}")
        return [line.strip() for line in (completed.stdout or "").splitlines() if line.strip()]


class ChangeSetResolver:
    """Resolve the set of package names touched between two refs."""

    def __init__(self, changed_files: ChangedFilesQuery) -> None:
        self._changed_files = changed_files

    def resolve(self, base_ref: str, target_ref: str, catalog: PackageCatalog) -> frozenset[str]:
        """Return the names of the packages owning at least one changed file.

        Every changed file is checked against every package (files x packages).
        A file under nested package directories marks all of them as changed.

        Args:
            base_ref: Reference the change set is measured from.
            target_ref: Reference the change set is measured to.
            catalog: Catalog of workspace packages.

        Returns:
            frozenset[str]: Names of the changed packages.

        Raises:
            VcsQueryError: If the changed-file query fails.
        """

        changed = self._changed_files(base_ref, target_ref)
        package_paths = [(record.name, _workspace_relative(record.path, catalog.root)) for record in catalog.records()]
        owners: set[str] = set()
        for changed_file in changed:
            for name, package_path in package_paths:
                if _is_inside(changed_file, package_path):
                    owners.add(name)
        return frozenset(owners)


def _workspace_relative(path: Path, root: Path) -> str:
    return Path(os.path.relpath(path, root)).as_posix()


def _is_inside(changed_file: str, package_path: str) -> bool:
    relative = posixpath.relpath(changed_file.replace("\\", "/"), package_path)
    if relative == ".":
        return False
    return not relative.startswith("..") and not posixpath.isabs(relative)


__all__ = ["ChangeSetResolver", "ChangedFilesQuery", "GitChangedFiles"]
