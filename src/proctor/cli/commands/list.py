#!/usr/bin/env python3
"""
List command for proctor CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import typer

from proctor.orchestration import ClassroomOrchestrator

from ..constants import DEFAULT_FORMAT
from ..utils import ConsoleLogger, load_cli_config, run_workflow, setup_logging
from ..validators import validate_output_format
from .options import (
    BucketOption,
    ConfigFileOption,
    FormatOption,
    RegionOption,
    VerboseOption,
)


def list_classrooms(
    output_format: FormatOption = DEFAULT_FORMAT,
    config_file: ConfigFileOption = None,
    region: RegionOption = None,
    bucket: BucketOption = None,
    verbose: VerboseOption = False,
) -> None:
    """
    📋 List existing classrooms.
    """
    setup_logging(verbose)
    validate_output_format(output_format)

    config = load_cli_config(config_file, {"region": region, "bucket": bucket})

    def list_workflow():
        with ClassroomOrchestrator.from_config(config, ConsoleLogger()) as orchestrator:
            return orchestrator.list_classrooms(output_format)

    output = run_workflow(list_workflow, verbose)
    typer.echo(output)
