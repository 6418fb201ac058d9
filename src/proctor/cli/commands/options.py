#!/usr/bin/env python3
"""
Option declarations shared by every classroom command.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from typing import Annotated, Optional

import typer


NameOption = Annotated[
    str, typer.Option("--name", "-n", help="Classroom name (letters, digits and '-')")
]
FormatOption = Annotated[
    str, typer.Option("--format", "-f", help="Output format: json or plain")
]
ConfigFileOption = Annotated[
    Optional[str],
    typer.Option(
        "--config-file",
        help="JSON file with configuration overrides",
        envvar="PROCTOR_CONFIG_FILE",
    ),
]
RegionOption = Annotated[
    Optional[str], typer.Option("--region", help="AWS region for the classroom")
]
BucketOption = Annotated[
    Optional[str], typer.Option("--bucket", help="S3 bucket holding private keys")
]
BoxNameOption = Annotated[
    Optional[str], typer.Option("--box-name", help="Vagrant box providing the AMI")
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
]

