"""
Orchestration layer for classroom workflows.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .classroom_orchestrator import ClassroomOrchestrator, ProgressLogger

__all__ = ["ClassroomOrchestrator", "ProgressLogger"]
