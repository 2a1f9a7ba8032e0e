# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequential pipeline creating a bare project wired to local workspace packages."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .catalog import PackageCatalog, load_catalog
from .changes import ChangedFilesQuery, ChangeSetResolver, GitChangedFiles
from .config import LinkConfig, load_config
from .errors import PkgLinkError, StageError
from .json_file import JsonDocumentError
from .logging import bullet_list, info, section
from .manifest import ManifestRewriter
from .process import CommandOptions, CommandRunner, SubprocessExecutionError, run_command
from .scaffold import ProjectScaffolder, require_name
from .selection import PackageSelector
from .workspace import locate_workspace_root


@dataclass(slots=True)
class PipelineOptions:
    """Normalised inputs for one pipeline run."""

    name: str
    packages: str = "default"
    working_directory: Path = Path()
    changed_base: str | None = None
    changed_ref: str | None = None


class PipelineResult(BaseModel):
    """Outcome of a successful pipeline run."""

    model_config = ConfigDict(validate_assignment=True)

    project_dir: Path
    packages: list[str] = Field(default_factory=list)
    linked: dict[str, str] = Field(default_factory=dict)


@contextmanager
def stage(label: str) -> Iterator[None]:
    """Attribute process, document and filesystem failures raised inside the block to ``label``."""

    try:
        yield
    except PkgLinkError:
        raise
    except (SubprocessExecutionError, JsonDocumentError, OSError) as exc:
        raise StageError(label, exc) from exc


class BareProjectPipeline:
    """Run selection, scaffolding, prebuild, manifest rewrite and install in order."""

    def __init__(
        self,
        *,
        workspace_root: Path | None = None,
        config: LinkConfig | None = None,
        runner: CommandRunner | None = None,
        changed_files: ChangedFilesQuery | None = None,
        use_emoji: bool = True,
    ) -> None:
        """Create a pipeline.

        Args:
            workspace_root: Monorepo root; located from the current directory when omitted.
            config: Configuration; loaded from the workspace root when omitted.
            runner: Command runner shared by every external collaborator.
            changed_files: Changed-file query; ``git diff`` at the root when omitted.
            use_emoji: Whether console output includes emoji glyphs.
        """

        self._workspace_root = workspace_root
        self._config = config
        self._runner = runner or run_command
        self._changed_files = changed_files
        self._use_emoji = use_emoji

    def load(self) -> tuple[Path, LinkConfig, PackageCatalog]:
        """Locate the workspace and load its configuration and package catalog.

        Raises:
            DiscoveryError: If the workspace root cannot be located.
            ConfigError: If the configuration is invalid.
        """

        root = (self._workspace_root or locate_workspace_root()).resolve()
        config = self._config or load_config(root)
        return root, config, load_catalog(root, config=config)

    def selector(self, root: Path, config: LinkConfig, catalog: PackageCatalog) -> PackageSelector:
        """Return a selector wired to the configured changed-file query."""

        changed_files = self._changed_files or GitChangedFiles(root, runner=self._runner)
        return PackageSelector(
            catalog,
            resolver=ChangeSetResolver(changed_files),
            settings=config.selection,
        )

    def select(self, packages: str, *, base_ref: str | None = None, target_ref: str | None = None) -> list[str]:
        """Return the packages a run with ``packages`` would link, without creating anything."""

        root, config, catalog = self.load()
        return self.selector(root, config, catalog).select_from_string(
            packages,
            base_ref=base_ref,
            target_ref=target_ref,
        )

    def run(self, options: PipelineOptions) -> PipelineResult:
        """Create the project described by ``options``.

        Stages run strictly in sequence and the first failure aborts the run.
        Work done by completed stages, such as the project directory, is kept.

        Args:
            options: Pipeline inputs.

        Returns:
            PipelineResult: Project directory and the linked packages.

        Raises:
            MissingNameError: If the project name is blank; raised before any other work.
            PkgLinkError: If any stage fails.
        """

        name = require_name(options.name)
        working_dir = options.working_directory.resolve()
        root, config, catalog = self.load()
        scaffolder = ProjectScaffolder(
            root,
            templates=config.templates,
            commands=config.commands,
            runner=self._runner,
            use_emoji=self._use_emoji,
        )

        section("Selecting packages")
        packages = self.selector(root, config, catalog).select_from_string(
            options.packages,
            base_ref=options.changed_base,
            target_ref=options.changed_ref,
        )
        info(f"{len(packages)} package(s) selected", use_emoji=self._use_emoji)

        section("Creating project")
        with stage("scaffold"):
            project_dir = scaffolder.scaffold(name, working_dir)

        section("Prebuilding project")
        with stage("prebuild"):
            scaffolder.prebuild(name, project_dir, working_dir, packages)

        section("Packages to be installed")
        with stage("manifest rewrite"):
            linked = ManifestRewriter(catalog).rewrite(project_dir, packages)
        bullet_list(linked)

        section("Installing packages")
        with stage("install"):
            self._runner(list(config.commands.install), CommandOptions(cwd=project_dir))

        return PipelineResult(project_dir=project_dir, packages=packages, linked=linked)


__all__ = ["BareProjectPipeline", "PipelineOptions", "PipelineResult", "stage"]
