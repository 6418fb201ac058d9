#!/usr/bin/env python3
"""
Utility functions for proctor CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
from typing import Any, Callable, Dict, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from proctor.core.config import ConfigLoader, ProctorConfig
from proctor.core.errors import ErrorHandler, ProctorError, handle_error, set_error_handler
from proctor.orchestration.classroom_orchestrator import ProgressLogger
from .constants import EXIT_CODES_BY_CATEGORY, ExitCode


# Initialize Rich console
console = Console(stderr=True)

T = TypeVar("T")


def setup_logging(verbose: bool = False) -> None:
    """Setup Rich logging configuration and unified error handler."""
    log_level = logging.DEBUG if verbose else logging.INFO

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    error_handler = ErrorHandler(console=console, verbose=verbose)
    set_error_handler(error_handler)


class ConsoleLogger(ProgressLogger):
    """Progress lines on a Rich console."""

    INDENT = "  "

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def println(self, indentation: int, message: str) -> None:
        self.console.print(self.INDENT * indentation + message, highlight=False)

    def green(self, text: str) -> str:
        return f"[green]{escape(text)}[/green]"


def load_cli_config(
    config_file: Optional[str], overrides: Dict[str, Any]
) -> ProctorConfig:
    """Resolve configuration, exiting with INVALID_ARGS on errors."""
    try:
        return ConfigLoader.load_config(config_file=config_file, overrides=overrides)
    except ProctorError as e:
        handle_error(e)
        raise typer.Exit(ExitCode.INVALID_ARGS)


def run_workflow(func: Callable[[], T], verbose: bool = False) -> T:
    """
    Run one orchestrator workflow and map failures to exit codes.

    ProctorError categories decide the exit code; anything else is an
    unexpected failure.
    """
    try:
        return func()
    except ProctorError as e:
        handle_error(e, show_traceback=verbose)
        raise typer.Exit(EXIT_CODES_BY_CATEGORY.get(e.category, ExitCode.FAILURE))
    except Exception as e:
        handle_error(e, show_traceback=verbose)
        raise typer.Exit(ExitCode.FAILURE)
