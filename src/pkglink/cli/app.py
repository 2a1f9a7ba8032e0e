# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the pkglink commands."""

from __future__ import annotations

import typer

from . import create, packages

app = typer.Typer(
    name="pkglink",
    help="Create projects wired to local monorepo packages.",
    add_completion=False,
    no_args_is_help=True,
)
create.register(app)
packages.register(app)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
