# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option declarations shared by the pkglink commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

NAME_OPTION = Annotated[
    str | None,
    typer.Option("--name", "-n", help="Name of the project to create."),
]
PACKAGES_OPTION = Annotated[
    str,
    typer.Option(
        "--packages",
        "-p",
        help="Extra packages to install. May be `all`, `default`, `changed`, or a comma-separated list of package names.",
    ),
]
WORKING_DIRECTORY_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--working-directory",
        "-w",
        help="Working directory to create the project in. Defaults to the current directory.",
        show_default=False,
    ),
]
CHANGED_BASE_OPTION = Annotated[
    str | None,
    typer.Option("--changed-base", help="Git base for `-p changed` mode (default: configured, `master`)."),
]
CHANGED_REF_OPTION = Annotated[
    str | None,
    typer.Option("--changed-ref", help="Git ref for `-p changed` mode (default: configured, `HEAD`)."),
]
ROOT_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--root",
        "-r",
        help="Workspace root. Located from the current directory when omitted.",
        show_default=False,
    ),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


@dataclass(slots=True)
class CreateOptions:
    """Normalised CLI inputs for the create-bare-project workflow."""

    name: str | None
    packages: str
    working_directory: Path
    changed_base: str | None
    changed_ref: str | None
    root: Path | None
    use_emoji: bool


def build_create_options(
    name: str | None,
    packages: str,
    working_directory: Path | None,
    changed_base: str | None,
    changed_ref: str | None,
    root: Path | None,
    emoji: bool,
) -> CreateOptions:
    """Construct ``CreateOptions`` from Typer parameters."""

    return CreateOptions(
        name=name,
        packages=packages,
        working_directory=(working_directory or Path.cwd()).resolve(),
        changed_base=changed_base,
        changed_ref=changed_ref,
        root=root.resolve() if root is not None else None,
        use_emoji=emoji,
    )


__all__ = [
    "CHANGED_BASE_OPTION",
    "CHANGED_REF_OPTION",
    "CreateOptions",
    "EMOJI_OPTION",
    "NAME_OPTION",
    "PACKAGES_OPTION",
    "ROOT_OPTION",
    "WORKING_DIRECTORY_OPTION",
    "build_create_options",
]
