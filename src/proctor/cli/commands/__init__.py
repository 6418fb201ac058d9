#!/usr/bin/env python3
"""
CLI Commands Package for proctor

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .create import create
from .destroy import destroy
from .list import list_classrooms
from .describe import describe

__all__ = ["create", "destroy", "list_classrooms", "describe"]
