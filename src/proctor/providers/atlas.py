#!/usr/bin/env python3
"""
Vagrant box catalog client.

Resolves the newest AWS machine images for a box family. The catalog only
publishes a download URL per provider, so the box archive is fetched and the
per-region AMIs are read from the Vagrantfile packaged inside it:

    aws.region_config "us-east-1", ami: "ami-0123abcd"

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import io
import logging
import re
import tarfile
from typing import Dict, Optional

import httpx

from proctor.core.errors import (
    ProviderContractError,
    ProviderError,
    create_error_context,
)
from .base import ImageCatalog

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
REGION_CONFIG_PATTERN = re.compile(
    r"""region_config\s+["']([\w-]+)["']\s*,\s*:?ami\s*(?::|=>)\s*["']([\w-]+)["']"""
)


def parse_region_amis(vagrantfile: str) -> Dict[str, str]:
    """Extract region -> AMI declarations from a Vagrantfile."""
    return dict(REGION_CONFIG_PATTERN.findall(vagrantfile))


class AtlasClient(ImageCatalog):
    """
    ImageCatalog backed by the Vagrant Cloud (formerly Atlas) box API.

    Args:
        base_url: Catalog root, e.g. "https://app.vagrantup.com"
        client: Optional preconfigured httpx.Client
        timeout: Request timeout in seconds when no client is given
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        """Close the HTTP client if this catalog created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "AtlasClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_latest_amis(self, box_name: str) -> Dict[str, str]:
        download_url = self._aws_download_url(box_name)
        logger.debug("Downloading box %s from %s", box_name, download_url)
        archive = self._get(download_url, box_name).content

        vagrantfile = self._read_vagrantfile(archive, box_name)
        amis = parse_region_amis(vagrantfile)
        if not amis:
            raise ProviderContractError(
                f"box '{box_name}' does not declare any AWS region AMIs",
                context=self._context(box_name),
            )
        logger.debug("Box %s provides AMIs in %s", box_name, ", ".join(sorted(amis)))
        return amis

    def _aws_download_url(self, box_name: str) -> str:
        response = self._get(f"{self.base_url}/api/v1/box/{box_name}", box_name)
        try:
            metadata = response.json()
        except ValueError as e:
            raise ProviderContractError(
                f"box '{box_name}' metadata is not valid JSON: {e}",
                context=self._context(box_name),
                cause=e,
            ) from e
        if not isinstance(metadata, dict):
            raise ProviderContractError(
                f"box '{box_name}' metadata is not a JSON object",
                context=self._context(box_name),
            )

        current = metadata.get("current_version")
        providers = current.get("providers") if isinstance(current, dict) else None
        for provider in providers if isinstance(providers, list) else []:
            if not isinstance(provider, dict):
                continue
            if provider.get("name") == "aws" and provider.get("download_url"):
                return provider["download_url"]

        raise ProviderContractError(
            f"box '{box_name}' has no current version for the aws provider",
            context=self._context(box_name),
        )

    def _get(self, url: str, box_name: str) -> httpx.Response:
        try:
            response = self.client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError(
                f"error fetching {url}: {e}",
                context=self._context(box_name),
                cause=e,
            ) from e
        return response

    def _read_vagrantfile(self, archive: bytes, box_name: str) -> str:
        try:
            with tarfile.open(fileobj=io.BytesIO(archive), mode="r:*") as tar:
                for member in tar.getmembers():
                    if member.isfile() and member.name.lstrip("./") == "Vagrantfile":
                        return tar.extractfile(member).read().decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProviderContractError(
                f"box '{box_name}' has a Vagrantfile that is not valid UTF-8",
                context=self._context(box_name),
                cause=e,
            ) from e
        except tarfile.TarError as e:
            raise ProviderContractError(
                f"box '{box_name}' is not a valid archive: {e}",
                context=self._context(box_name),
                cause=e,
            ) from e

        raise ProviderContractError(
            f"box '{box_name}' does not contain a Vagrantfile",
            context=self._context(box_name),
        )

    @staticmethod
    def _context(box_name: str):
        return create_error_context(
            "get_latest_amis", component="AtlasClient", resource=box_name
        )
