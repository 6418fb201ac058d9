#!/usr/bin/env python3
"""
Validation functions for proctor CLI

Checks run before any configuration is loaded or provider client is built,
so bad input never reaches AWS.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import typer
from rich.markup import escape

from proctor.core.errors import ValidationError
from proctor.orchestration.classroom_orchestrator import validate_name

from .constants import ExitCode, VALID_FORMATS
from .utils import console


def validate_classroom_name(name: str) -> str:
    """
    Validate a classroom name.

    Raises:
        typer.Exit: If the name is not accepted
    """
    try:
        validate_name(name)
    except ValidationError as e:
        console.print(f"❌ [red]{escape(str(e))}[/red]", highlight=False)
        console.print(
            "💡 Names start with a letter and contain only letters, digits and '-'"
        )
        raise typer.Exit(ExitCode.INVALID_ARGS)
    return name


def validate_output_format(output_format: str) -> str:
    """
    Validate an output format.

    Raises:
        typer.Exit: If the format is not supported
    """
    if output_format not in VALID_FORMATS:
        console.print(f"❌ Invalid format: [red]{escape(output_format)}[/red]")
        console.print(f"💡 Supported values: [green]{', '.join(VALID_FORMATS)}[/green]")
        raise typer.Exit(ExitCode.INVALID_ARGS)
    return output_format
