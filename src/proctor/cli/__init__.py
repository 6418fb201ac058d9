#!/usr/bin/env python3
"""
CLI Package for proctor

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .app import app, cli_main
from .constants import ExitCode, VALID_FORMATS, DEFAULT_FORMAT, DEFAULT_NUMBER
from .utils import (
    ConsoleLogger,
    setup_logging,
    load_cli_config,
    run_workflow,
)
from .validators import validate_classroom_name, validate_output_format

__all__ = [
    "app",
    "cli_main",
    "ExitCode",
    "VALID_FORMATS",
    "DEFAULT_FORMAT",
    "DEFAULT_NUMBER",
    "ConsoleLogger",
    "setup_logging",
    "load_cli_config",
    "run_workflow",
    "validate_classroom_name",
    "validate_output_format",
]
