#!/usr/bin/env python3
"""
Create command for proctor CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from typing import Annotated

import typer
from rich.panel import Panel

from proctor.orchestration import ClassroomOrchestrator

from ..constants import DEFAULT_NUMBER
from ..utils import ConsoleLogger, console, load_cli_config, run_workflow, setup_logging
from ..validators import validate_classroom_name
from .options import (
    BoxNameOption,
    BucketOption,
    ConfigFileOption,
    NameOption,
    RegionOption,
    VerboseOption,
)


def create(
    name: NameOption,
    number: Annotated[
        int,
        typer.Option("--number", "-c", min=1, help="Number of hosts in the classroom"),
    ] = DEFAULT_NUMBER,
    config_file: ConfigFileOption = None,
    region: RegionOption = None,
    bucket: BucketOption = None,
    box_name: BoxNameOption = None,
    verbose: VerboseOption = False,
) -> None:
    """
    🏗️  Create a classroom.

    Creates an SSH key pair, uploads the private key to S3 and launches the
    CloudFormation stack. Returns as soon as the stack is accepted; use
    describe to follow provisioning.
    """
    setup_logging(verbose)
    validate_classroom_name(name)

    config = load_cli_config(
        config_file, {"region": region, "bucket": bucket, "box_name": box_name}
    )

    console.print(
        Panel(
            f"🏗️  [bold cyan]Creating classroom[/bold cyan] [yellow]{name}[/yellow]\n"
            f"Hosts: [yellow]{number}[/yellow]  Region: [yellow]{config.region}[/yellow]",
            title="Classroom Create",
            border_style="blue",
        )
    )

    def create_workflow():
        with ClassroomOrchestrator.from_config(config, ConsoleLogger()) as orchestrator:
            orchestrator.create_classroom(name, number)

    run_workflow(create_workflow, verbose)
    console.print("✅ [bold green]Classroom creation started[/bold green]")
