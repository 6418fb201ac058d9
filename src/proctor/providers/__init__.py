"""
Provider layer.

Thin adapters over external services, consumed by the orchestrator through
the capability interfaces in base.py.

Architecture:
- ImageCatalog / CloudProvider: abstract capability interfaces
- AtlasClient: Vagrant box catalog lookup (httpx)
- AWSClient: EC2 key pairs, S3 objects, CloudFormation stacks (boto3)

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from .base import CloudProvider, ImageCatalog, StackDescription
from .atlas import AtlasClient
from .aws import AWSClient

__all__ = [
    "CloudProvider",
    "ImageCatalog",
    "StackDescription",
    "AtlasClient",
    "AWSClient",
]
