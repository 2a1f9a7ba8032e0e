# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for project scaffolding and the template archive lifecycle."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pkglink.config import CommandSettings
from pkglink.errors import MissingNameError, TemplateArchiveNotFoundError
from pkglink.process import SubprocessExecutionError
from pkglink.scaffold import ProjectScaffolder, archive_pattern, packed_template

BARE = "expo-template-bare-minimum"


@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


def _leftover_archives(directory: Path) -> list[Path]:
    return list(directory.glob(archive_pattern(BARE)))


@pytest.mark.parametrize("name", ["", "   ", None])
def test_scaffold_rejects_blank_name_before_running_anything(
    workspace: Path, working_dir: Path, recording_runner, name: str | None
) -> None:
    runner = recording_runner()
    scaffolder = ProjectScaffolder(workspace, runner=runner, use_emoji=False)

    with pytest.raises(MissingNameError, match="--name"):
        scaffolder.scaffold(name, working_dir)  # type: ignore[arg-type]

    assert runner.calls == []
    assert list(working_dir.iterdir()) == []


def test_scaffold_runs_init_with_blank_template(workspace: Path, working_dir: Path, recording_runner) -> None:
    runner = recording_runner()
    scaffolder = ProjectScaffolder(workspace, runner=runner, use_emoji=False)

    project_dir = scaffolder.scaffold("demo", working_dir)

    assert project_dir == working_dir / "demo"
    args, cwd = runner.calls[0]
    assert args == (
        "npx",
        "expo",
        "init",
        "demo",
        "-t",
        str(workspace / "templates" / "expo-template-blank"),
        "--no-install",
    )
    assert cwd == working_dir


def test_prebuild_merges_identifiers_and_removes_archive(
    workspace: Path, working_dir: Path, recording_runner
) -> None:
    runner = recording_runner()
    scaffolder = ProjectScaffolder(workspace, runner=runner, use_emoji=False)
    project_dir = scaffolder.scaffold("demo", working_dir)

    scaffolder.prebuild("demo", project_dir, working_dir, ["expo-camera"])

    app_config = json.loads((project_dir / "app.json").read_text(encoding="utf-8"))
    assert app_config["expo"]["android"] == {"package": "dev.expo.demo"}
    assert app_config["expo"]["ios"] == {"supportsTablet": True, "bundleIdentifier": "dev.expo.demo"}
    assert app_config["expo"]["name"] == "demo"

    pack_args, pack_cwd = runner.calls[1]
    assert pack_args == ("npm", "pack", "--pack-destination", str(working_dir))
    assert pack_cwd == workspace / "templates" / BARE

    prebuild_args, prebuild_cwd = runner.calls[2]
    assert prebuild_args[:4] == ("npx", "expo", "prebuild", "--template")
    assert prebuild_args[-1] == "--no-install"
    assert prebuild_cwd == project_dir
    assert runner.archives_seen == [working_dir / f"{BARE}-47.0.0.tgz"]
    assert _leftover_archives(working_dir) == []


def test_prebuild_failure_still_removes_archive(workspace: Path, working_dir: Path, recording_runner) -> None:
    runner = recording_runner(fail_on="prebuild")
    scaffolder = ProjectScaffolder(workspace, runner=runner, use_emoji=False)
    project_dir = scaffolder.scaffold("demo", working_dir)

    with pytest.raises(SubprocessExecutionError, match="exploded"):
        scaffolder.prebuild("demo", project_dir, working_dir, [])

    assert _leftover_archives(working_dir) == []
    assert project_dir.exists()


def test_missing_archive_raises(workspace: Path, working_dir: Path, recording_runner) -> None:
    runner = recording_runner(pack_creates_archive=False)
    scaffolder = ProjectScaffolder(workspace, runner=runner, use_emoji=False)
    project_dir = scaffolder.scaffold("demo", working_dir)

    with pytest.raises(TemplateArchiveNotFoundError, match=BARE):
        scaffolder.prebuild("demo", project_dir, working_dir, [])

    assert not any("prebuild" in args for args in runner.commands)


def test_packed_template_cleans_up_when_block_raises(workspace: Path, working_dir: Path, recording_runner) -> None:
    runner = recording_runner()
    template_dir = workspace / "templates" / BARE

    with pytest.raises(RuntimeError, match="boom"):
        with packed_template(template_dir, working_dir, runner=runner) as archive:
            assert archive.exists()
            raise RuntimeError("boom")

    assert _leftover_archives(working_dir) == []


def test_cleanup_failure_does_not_mask_pending_error(
    workspace: Path, working_dir: Path, recording_runner, monkeypatch: pytest.MonkeyPatch
) -> None:
    runner = recording_runner()
    template_dir = workspace / "templates" / BARE

    def refuse_unlink(self: Path, missing_ok: bool = False) -> None:
        raise PermissionError("read-only")

    with pytest.raises(RuntimeError, match="prebuild exploded"):
        with packed_template(template_dir, working_dir, runner=runner, use_emoji=False):
            monkeypatch.setattr(Path, "unlink", refuse_unlink)
            raise RuntimeError("prebuild exploded")


def test_custom_commands_are_used(workspace: Path, working_dir: Path, recording_runner) -> None:
    runner = recording_runner()
    commands = CommandSettings(templating=("node", "cli.js"), pack=("pnpm", "pack"))
    scaffolder = ProjectScaffolder(workspace, commands=commands, runner=runner, use_emoji=False)
    project_dir = scaffolder.scaffold("demo", working_dir)

    scaffolder.prebuild("demo", project_dir, working_dir, [])

    assert runner.commands[0][:3] == ("node", "cli.js", "init")
    assert runner.commands[1][:2] == ("pnpm", "pack")
    assert runner.commands[2][:3] == ("node", "cli.js", "prebuild")
