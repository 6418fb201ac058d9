#!/usr/bin/env python3
"""
Destroy command for proctor CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from proctor.orchestration import ClassroomOrchestrator

from ..utils import ConsoleLogger, console, load_cli_config, run_workflow, setup_logging
from ..validators import validate_classroom_name
from .options import BucketOption, ConfigFileOption, NameOption, RegionOption, VerboseOption


def destroy(
    name: NameOption,
    config_file: ConfigFileOption = None,
    region: RegionOption = None,
    bucket: BucketOption = None,
    verbose: VerboseOption = False,
) -> None:
    """
    🧹 Destroy a classroom.

    Deletes the stack, then the key pair, then the stored private key. Stops
    at the first failure; already deleted resources stay deleted.
    """
    setup_logging(verbose)
    validate_classroom_name(name)

    config = load_cli_config(config_file, {"region": region, "bucket": bucket})

    def destroy_workflow():
        with ClassroomOrchestrator.from_config(config, ConsoleLogger()) as orchestrator:
            orchestrator.destroy_classroom(name)

    run_workflow(destroy_workflow, verbose)
    console.print(f"✅ [bold green]Classroom {name} deleted[/bold green]")
