"""
proctor - provision and tear down ephemeral AWS classroom environments.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

__version__ = "1.0.0"
