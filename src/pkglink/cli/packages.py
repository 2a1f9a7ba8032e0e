# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command previewing the workspace packages a project would be linked to."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from ..errors import PkgLinkError
from ..logging import bullet_list, fail, info
from ..pipeline import BareProjectPipeline
from ._models import CHANGED_BASE_OPTION, CHANGED_REF_OPTION, EMOJI_OPTION, PACKAGES_OPTION, ROOT_OPTION

CATALOG_OPTION = Annotated[
    bool,
    typer.Option("--catalog", help="List every workspace package with its path instead of a selection."),
]


def list_packages(
    packages: PACKAGES_OPTION = "default",
    changed_base: CHANGED_BASE_OPTION = None,
    changed_ref: CHANGED_REF_OPTION = None,
    root: ROOT_OPTION = None,
    catalog: CATALOG_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print the packages `create-bare-project` would link for a selection."""

    pipeline = BareProjectPipeline(workspace_root=root, use_emoji=emoji)
    try:
        if catalog:
            workspace_root, _config, package_catalog = pipeline.load()
            info(f"{len(package_catalog)} package(s) under {workspace_root}", use_emoji=emoji)
            bullet_list(
                f"{record.name} ({Path(os.path.relpath(record.path, workspace_root)).as_posix()})"
                for record in package_catalog.records()
            )
            return
        selected = pipeline.select(packages, base_ref=changed_base, target_ref=changed_ref)
    except PkgLinkError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=1) from exc
    info(f"{len(selected)} package(s) selected with `{packages}`", use_emoji=emoji)
    bullet_list(selected)


def register(app: typer.Typer) -> None:
    """Attach ``list-packages`` to ``app``."""

    app.command("list-packages")(list_packages)


__all__ = ["list_packages", "register"]
