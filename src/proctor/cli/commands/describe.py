#!/usr/bin/env python3
"""
Describe command for proctor CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import typer

from proctor.orchestration import ClassroomOrchestrator

from ..constants import DEFAULT_FORMAT
from ..utils import ConsoleLogger, load_cli_config, run_workflow, setup_logging
from ..validators import validate_classroom_name, validate_output_format
from .options import (
    BucketOption,
    ConfigFileOption,
    FormatOption,
    NameOption,
    RegionOption,
    VerboseOption,
)


def describe(
    name: NameOption,
    output_format: FormatOption = DEFAULT_FORMAT,
    config_file: ConfigFileOption = None,
    region: RegionOption = None,
    bucket: BucketOption = None,
    verbose: VerboseOption = False,
) -> None:
    """
    🔍 Describe a classroom: stack status, size, key URL and hosts.
    """
    setup_logging(verbose)
    validate_classroom_name(name)
    validate_output_format(output_format)

    config = load_cli_config(config_file, {"region": region, "bucket": bucket})

    def describe_workflow():
        with ClassroomOrchestrator.from_config(config, ConsoleLogger()) as orchestrator:
            return orchestrator.describe_classroom(name, output_format)

    output = run_workflow(describe_workflow, verbose)
    typer.echo(output)
