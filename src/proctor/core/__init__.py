"""
Core services: configuration and error handling.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""
