#!/usr/bin/env python3
"""
Main CLI Application for proctor

This module contains the main Typer app and entry point for the proctor CLI.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import sys
from typing import Annotated

import typer
from rich.traceback import install

from proctor import __version__
from .commands import create, describe, destroy, list_classrooms
from .constants import ExitCode
from .utils import console

install(show_locals=False)

app = typer.Typer(
    name="proctor",
    help="🎓 proctor - provision and tear down ephemeral AWS classrooms",
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
)

app.command()(create)
app.command()(destroy)
app.command("list")(list_classrooms)
app.command()(describe)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """
    🎓 proctor

    Creates, lists, describes and destroys classrooms: groups of identical
    AWS hosts sharing one SSH key.
    """
    if version:
        typer.echo(f"proctor {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


def cli_main() -> None:
    """Entry point for the CLI application."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Operation cancelled by user[/yellow]")
        sys.exit(ExitCode.FAILURE)
    except Exception as e:
        console.print(f"💥 [bold red]Unexpected error: {e}[/bold red]")
        console.print_exception()
        sys.exit(ExitCode.FAILURE)


if __name__ == "__main__":
    cli_main()
