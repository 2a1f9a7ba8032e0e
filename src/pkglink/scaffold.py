# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Create and prebuild a project from the workspace's local templates."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from .config import CommandSettings, TemplateSettings
from .constants import APP_CONFIG_DOCUMENT
from .errors import MissingNameError, TemplateArchiveNotFoundError
from .json_file import merge_into
from .logging import info, warn
from .process import CommandOptions, CommandRunner, run_command


def require_name(name: str | None) -> str:
    """Return ``name`` stripped of surrounding whitespace.

    Raises:
        MissingNameError: If ``name`` is ``None`` or blank.
    """

    if name is None or not name.strip():
        raise MissingNameError()
    return name.strip()


def archive_pattern(template_name: str) -> str:
    """Return the glob matching archives produced by packing ``template_name``."""

    return f"{template_name}-*.tgz"


@contextmanager
def packed_template(
    template_dir: Path,
    destination: Path,
    *,
    template_name: str | None = None,
    runner: CommandRunner = run_command,
    pack_command: Sequence[str] = ("npm", "pack"),
    use_emoji: bool = True,
) -> Iterator[Path]:
    """Pack ``template_dir`` into ``destination`` and yield the archive path.

    Every archive matching the expected name is removed when the block exits,
    whether it exits normally or by raising. A failed removal is reported as a
    warning and never replaces the exception raised inside the block.

    Args:
        template_dir: Directory of the template package to pack.
        destination: Directory receiving the archive.
        template_name: Package name used in the archive filename; defaults to
            the template directory name.
        runner: Command runner used to execute the packer.
        pack_command: Packer command prefix.
        use_emoji: Whether warnings include emoji glyphs.

    Yields:
        Path: The packed archive.

    Raises:
        TemplateArchiveNotFoundError: If no archive matching the expected name exists after packing.
    """

    name = template_name or template_dir.name
    pattern = archive_pattern(name)
    try:
        runner(
            [*pack_command, "--pack-destination", str(destination)],
            CommandOptions(cwd=template_dir, capture_output=True),
        )
        archives = sorted(destination.glob(pattern), key=lambda candidate: candidate.stat().st_mtime)
        if not archives:
            raise TemplateArchiveNotFoundError(name, pattern)
        yield archives[-1]
    finally:
        for leftover in destination.glob(pattern):
            try:
                leftover.unlink(missing_ok=True)
            except OSError as exc:
                warn(f"Unable to remove template archive {leftover}: {exc}", use_emoji=use_emoji)


class ProjectScaffolder:
    """Drive the templating CLI to materialise and prebuild a project."""

    def __init__(
        self,
        workspace_root: Path,
        *,
        templates: TemplateSettings | None = None,
        commands: CommandSettings | None = None,
        runner: CommandRunner | None = None,
        use_emoji: bool = True,
    ) -> None:
        self._root = workspace_root
        self._templates = templates or TemplateSettings()
        self._commands = commands or CommandSettings()
        self._runner = runner or run_command
        self._use_emoji = use_emoji

    def template_path(self, template: str) -> Path:
        """Return the directory of the local ``template``."""

        return self._root / self._templates.directory / template

    def scaffold(self, name: str, working_dir: Path) -> Path:
        """Create project ``name`` inside ``working_dir`` from the blank template.

        Args:
            name: Project name; also the created directory name.
            working_dir: Directory in which the project is created.

        Returns:
            Path: ``working_dir / name``.

        Raises:
            MissingNameError: If ``name`` is blank.
            SubprocessExecutionError: If the templating CLI fails.
        """

        project_name = require_name(name)
        template_dir = self.template_path(self._templates.blank)
        self._runner(
            [*self._commands.templating, "init", project_name, "-t", str(template_dir), "--no-install"],
            CommandOptions(cwd=working_dir),
        )
        return working_dir / project_name

    def prebuild(
        self,
        name: str,
        project_dir: Path,
        working_dir: Path,
        extra_package_names: Sequence[str],
    ) -> None:
        """Expand the native project skeleton of ``project_dir`` from the bare template.

        Platform identifiers are merged into ``app.json`` first. The bare
        template is then packed into ``working_dir`` and handed to the
        templating CLI's prebuild step; the archive is removed afterwards.

        Args:
            name: Project name used to derive platform identifiers.
            project_dir: Directory of the scaffolded project.
            working_dir: Directory receiving the temporary template archive.
            extra_package_names: Packages that will be linked into the project.

        Raises:
            MissingNameError: If ``name`` is blank.
            TemplateArchiveNotFoundError: If packing produced no archive.
            SubprocessExecutionError: If packing or the prebuild step fails.
        """

        project_name = require_name(name)
        self.write_app_identifiers(project_name, project_dir)
        info(
            f"Prebuilding {project_name} for {len(extra_package_names)} linked package(s)",
            use_emoji=self._use_emoji,
        )
        with packed_template(
            self.template_path(self._templates.bare),
            working_dir,
            template_name=self._templates.bare,
            runner=self._runner,
            pack_command=self._commands.pack,
            use_emoji=self._use_emoji,
        ) as archive:
            self._runner(
                [*self._commands.templating, "prebuild", "--template", str(archive), "--no-install"],
                CommandOptions(cwd=project_dir),
            )

    def write_app_identifiers(self, name: str, project_dir: Path) -> str:
        """Merge the Android package and iOS bundle identifier into ``app.json``.

        Returns:
            str: The application identifier that was written.
        """

        app_id = f"{self._templates.app_id_prefix}.{name}"
        merge_into(
            project_dir / APP_CONFIG_DOCUMENT,
            {
                "expo": {
                    "android": {"package": app_id},
                    "ios": {"bundleIdentifier": app_id},
                },
            },
        )
        return app_id


__all__ = ["ProjectScaffolder", "archive_pattern", "packed_template", "require_name"]
