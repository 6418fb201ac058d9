#!/usr/bin/env python3
"""
Constants and configuration for proctor CLI

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from proctor.core.errors import ErrorCategory


# Exit codes
class ExitCode:
    """Exit codes for CLI commands."""

    SUCCESS = 0
    FAILURE = 1
    PROVIDER_FAILURE = 2
    MALFORMED_STACK = 3
    INVALID_ARGS = 4


EXIT_CODES_BY_CATEGORY = {
    ErrorCategory.VALIDATION: ExitCode.INVALID_ARGS,
    ErrorCategory.CONFIGURATION: ExitCode.INVALID_ARGS,
    ErrorCategory.PROVIDER: ExitCode.PROVIDER_FAILURE,
    ErrorCategory.PROVIDER_CONTRACT: ExitCode.PROVIDER_FAILURE,
    ErrorCategory.MALFORMED_STACK: ExitCode.MALFORMED_STACK,
    ErrorCategory.RUNTIME: ExitCode.FAILURE,
}

# Valid values for validation
VALID_FORMATS = ["json", "plain"]

# Default values
DEFAULT_FORMAT = "plain"
DEFAULT_NUMBER = 1
