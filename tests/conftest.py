# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from pkglink.catalog import PackageCatalog, load_catalog
from pkglink.process import CommandOptions, SubprocessExecutionError

PACKAGES: dict[str, dict[str, Any]] = {
    "expo": {
        "version": "47.0.0",
        "dependencies": {"expo-modules-core": "~1.0.0", "expo-asset": "~8.6.0", "react": "18.1.0"},
    },
    "expo-modules-core": {"version": "1.0.0"},
    "expo-asset": {"version": "8.6.0", "dependencies": {"expo-constants": "~14.0.0"}},
    "expo-constants": {"version": "14.0.0", "peerDependencies": {"expo-modules-core": "*"}},
    "expo-camera": {"version": "13.0.0", "dependencies": {"expo-modules-core": "~1.0.0"}},
    "expo-router": {"version": "1.0.0"},
    "expo-module-template": {"version": "0.0.1", "private": True},
    "@expo/config-plugins": {"version": "5.0.0"},
}


def write_json(path: Path, payload: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Return the root of a small Expo-like monorepo."""

    root = tmp_path / "repo"
    write_json(root / "package.json", {"private": True, "workspaces": ["packages/*"]})
    for name, manifest in PACKAGES.items():
        write_json(root / "packages" / name / "package.json", {"name": name, **manifest})
    write_json(root / "packages" / "node_modules" / "stray" / "package.json", {"name": "stray"})
    (root / "packages" / "unnamed").mkdir(parents=True)
    write_json(root / "packages" / "unnamed" / "package.json", {"version": "1.0.0"})
    for template in ("expo-template-blank", "expo-template-bare-minimum"):
        write_json(root / "templates" / template / "package.json", {"name": template, "version": "47.0.0"})
    return root


@pytest.fixture
def linked_workspace(workspace: Path) -> Path:
    """Return the monorepo with ``packages/expo-linked`` symlinked to a directory outside it."""

    target = workspace.parent / "elsewhere" / "expo-linked"
    write_json(target / "package.json", {"name": "expo-linked", "version": "1.0.0"})
    (workspace / "packages" / "expo-linked").symlink_to(target, target_is_directory=True)
    return workspace


@pytest.fixture
def catalog(workspace: Path) -> PackageCatalog:
    return load_catalog(workspace)


@dataclass
class FakeCompleted:
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class RecordingRunner:
    """Stand-in for the external collaborators that records every command.

    ``init`` creates the project directory with a manifest, ``pack`` drops an
    archive into the pack destination and ``git diff`` reports ``changed``.
    A command containing the ``fail_on`` token fails.
    """

    def __init__(
        self,
        *,
        changed: Sequence[str] = (),
        fail_on: str | None = None,
        pack_creates_archive: bool = True,
        project_manifest: Mapping[str, Any] | None = None,
    ) -> None:
        self.calls: list[tuple[tuple[str, ...], Path | None]] = []
        self.changed = list(changed)
        self.fail_on = fail_on
        self.pack_creates_archive = pack_creates_archive
        self.project_manifest = dict(
            project_manifest
            or {
                "name": "placeholder",
                "dependencies": {"expo": "~47.0.0", "expo-status-bar": "~1.4.0", "react": "18.1.0"},
            }
        )
        self.archives_seen: list[Path] = []

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [args for args, _ in self.calls]

    def __call__(self, args: Sequence[str], options: CommandOptions) -> FakeCompleted:
        argv = tuple(args)
        cwd = options.cwd
        self.calls.append((argv, cwd))
        if self.fail_on is not None and self.fail_on in argv:
            if options.check:
                raise SubprocessExecutionError(argv, 1, "", f"{self.fail_on} exploded")
            return FakeCompleted(returncode=128, stderr=f"fatal: {self.fail_on} exploded")
        if argv[:2] == ("git", "diff"):
            return FakeCompleted(stdout="".join(f"{path}\n" for path in self.changed))
        if "init" in argv and cwd is not None:
            project = cwd / argv[argv.index("init") + 1]
            write_json(project / "package.json", self.project_manifest)
            write_json(project / "app.json", {"expo": {"name": project.name, "ios": {"supportsTablet": True}}})
        elif "pack" in argv and cwd is not None and self.pack_creates_archive:
            destination = Path(argv[argv.index("--pack-destination") + 1])
            (destination / f"{cwd.name}-47.0.0.tgz").write_bytes(b"archive")
        elif "prebuild" in argv:
            archive = Path(argv[argv.index("--template") + 1])
            assert archive.exists()
            self.archives_seen.append(archive)
        return FakeCompleted()


@pytest.fixture
def recording_runner() -> type[RecordingRunner]:
    """Return the recording runner class so tests can configure instances."""

    return RecordingRunner
