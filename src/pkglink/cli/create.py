# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command creating a bare project from local templates and packages."""

from __future__ import annotations

import typer

from ..errors import PkgLinkError
from ..logging import fail, ok
from ..pipeline import BareProjectPipeline, PipelineOptions
from ._models import (
    CHANGED_BASE_OPTION,
    CHANGED_REF_OPTION,
    EMOJI_OPTION,
    NAME_OPTION,
    PACKAGES_OPTION,
    ROOT_OPTION,
    WORKING_DIRECTORY_OPTION,
    CreateOptions,
    build_create_options,
)


def create_bare_project(
    name: NAME_OPTION = None,
    packages: PACKAGES_OPTION = "default",
    working_directory: WORKING_DIRECTORY_OPTION = None,
    changed_base: CHANGED_BASE_OPTION = None,
    changed_ref: CHANGED_REF_OPTION = None,
    root: ROOT_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Creates a new bare project from local template and packages."""

    options = build_create_options(name, packages, working_directory, changed_base, changed_ref, root, emoji)
    _run_create(options)


def _run_create(options: CreateOptions) -> None:
    """Run the pipeline, translating failures into a non-zero exit.

    Raises:
        typer.Exit: With code 1 when any stage fails.
    """

    pipeline = BareProjectPipeline(workspace_root=options.root, use_emoji=options.use_emoji)
    try:
        result = pipeline.run(
            PipelineOptions(
                name=options.name or "",
                packages=options.packages,
                working_directory=options.working_directory,
                changed_base=options.changed_base,
                changed_ref=options.changed_ref,
            ),
        )
    except PkgLinkError as exc:
        fail(str(exc), use_emoji=options.use_emoji)
        raise typer.Exit(code=1) from exc
    ok(
        f"Created {result.project_dir} with {len(result.linked)} local package(s).",
        use_emoji=options.use_emoji,
    )


def register(app: typer.Typer) -> None:
    """Attach ``create-bare-project`` and its ``cbp`` alias to ``app``."""

    app.command("create-bare-project")(create_bare_project)
    app.command("cbp", hidden=True)(create_bare_project)


__all__ = ["create_bare_project", "register"]
