#!/usr/bin/env python3
"""
Capability interfaces for the provider layer.

The orchestrator depends only on these abstract classes, so any provider
offering key pairs, blob storage and templated stacks can be substituted,
and tests can pass recording fakes.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, NamedTuple


class StackDescription(NamedTuple):
    """Current state of a stack as reported by the provider."""

    status: str
    stack_id: str
    parameters: Dict[str, str]


class ImageCatalog(ABC):
    """Resolves a box family to its latest machine image in each region."""

    @abstractmethod
    def get_latest_amis(self, box_name: str) -> Dict[str, str]:
        """
        Look up the newest images for a box.

        Args:
            box_name: Box family, e.g. "cloudfoundry/bosh-lite"

        Returns:
            Mapping of region name to image id
        """
        pass

    def close(self) -> None:
        """Release any connections held by the catalog."""


class CloudProvider(ABC):
    """
    Key pairs, object storage and stack orchestration.

    Each method is a single provider round trip. No retries, no caching.
    """

    @abstractmethod
    def create_key(self, name: str) -> str:
        """Create a key pair and return its private key material."""
        pass

    @abstractmethod
    def delete_key(self, name: str) -> None:
        pass

    @abstractmethod
    def list_keys(self, prefix: str) -> List[str]:
        """Return names of key pairs starting with prefix."""
        pass

    @abstractmethod
    def store_object(
        self, name: str, data: bytes, download_file_name: str, content_type: str
    ) -> None:
        """Upload data under key name with a download filename and MIME type."""
        pass

    @abstractmethod
    def delete_object(self, name: str) -> None:
        pass

    @abstractmethod
    def url_for_object(self, name: str) -> str:
        """Deterministic URL for an object key. Makes no provider call."""
        pass

    @abstractmethod
    def create_stack(
        self, name: str, template: str, parameters: Dict[str, str]
    ) -> str:
        """Launch a stack and return its id."""
        pass

    @abstractmethod
    def delete_stack(self, name: str) -> None:
        pass

    @abstractmethod
    def describe_stack(self, name: str) -> StackDescription:
        pass

    @abstractmethod
    def get_hosts_from_stack_id(self, stack_id: str) -> Dict[str, str]:
        """Return host label to address for every live host in the stack."""
        pass
