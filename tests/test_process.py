# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from pkglink.process import CommandOptions, SubprocessExecutionError, run_command


class _Recorder:
    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        self.kwargs: dict[str, object] = {}
        self.args: list[str] = []

    def __call__(self, args, **kwargs):
        self.args = list(args)
        self.kwargs = kwargs
        return subprocess.CompletedProcess(args=args, returncode=self.returncode, stdout="out", stderr="bad ref\n")


def test_run_command_resolves_executable_and_passes_options(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    recorder = _Recorder(0)
    monkeypatch.setattr("shutil.which", lambda cmd: f"/usr/bin/{cmd}")
    monkeypatch.setattr(subprocess, "run", recorder)

    completed = run_command(["git", "status"], CommandOptions(cwd=tmp_path, capture_output=True))

    assert completed.returncode == 0
    assert recorder.args == ["/usr/bin/git", "status"]
    assert recorder.kwargs["cwd"] == str(tmp_path)
    assert recorder.kwargs["capture_output"] is True
    assert recorder.kwargs["check"] is False


def test_run_command_raises_on_failure_when_checking(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("shutil.which", lambda cmd: f"/usr/bin/{cmd}")
    monkeypatch.setattr(subprocess, "run", _Recorder(2))

    with pytest.raises(SubprocessExecutionError, match="exited with status 2. stderr: bad ref") as excinfo:
        run_command(["git", "diff"])

    assert excinfo.value.returncode == 2
    assert excinfo.value.command == ("/usr/bin/git", "diff")


def test_run_command_returns_failures_without_check(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("shutil.which", lambda cmd: f"/usr/bin/{cmd}")
    monkeypatch.setattr(subprocess, "run", _Recorder(1))

    assert run_command(["git", "diff"], CommandOptions(check=False)).returncode == 1


def test_missing_executable_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("shutil.which", lambda cmd: None)

    with pytest.raises(FileNotFoundError, match="not found on PATH"):
        run_command(["definitely-not-installed"])


def test_empty_command_is_rejected() -> None:
    with pytest.raises(ValueError, match="at least one argument"):
        run_command([])
