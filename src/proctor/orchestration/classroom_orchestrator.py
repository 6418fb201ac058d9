#!/usr/bin/env python3
"""
Classroom Orchestrator - Coordinates classroom lifecycle workflows.

A classroom is three provider resources sharing one name, "classroom-<name>":
an EC2 key pair, the private key stored under "keys/classroom-<name>", and a
CloudFormation stack of identical hosts.

Workflows run step by step and stop at the first error. Nothing is rolled
back: a failed create or destroy leaves the completed steps in place.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List

from proctor.core.config import ProctorConfig
from proctor.core.errors import (
    MalformedStackError,
    ProviderError,
    ValidationError,
    create_error_context,
)
from proctor.providers.atlas import AtlasClient
from proctor.providers.aws import AWSClient
from proctor.providers.base import CloudProvider, ImageCatalog

logger = logging.getLogger(__name__)

CLASSROOM_PREFIX = "classroom-"
KEY_OBJECT_PREFIX = "keys/"
KEY_DOWNLOAD_FILE_NAME = "bosh101_ssh_key.pem"
KEY_CONTENT_TYPE = "application/x-pem-file"
NAME_PATTERN = r"^[a-zA-Z][-a-zA-Z0-9]*$"
OUTPUT_FORMATS = ("json", "plain")

_NAME_REGEX = re.compile(NAME_PATTERN)
_COUNT_REGEX = re.compile(r"[+-]?[0-9]+")


def prefix(classroom_name: str) -> str:
    """Provider-facing name for a classroom."""
    return CLASSROOM_PREFIX + classroom_name


def key_object_name(prefixed_name: str) -> str:
    return KEY_OBJECT_PREFIX + prefixed_name


def validate_name(name: str) -> None:
    """Reject classroom names the providers would not accept."""
    if not isinstance(name, str) or not _NAME_REGEX.fullmatch(name):
        raise ValidationError(
            f"invalid name: must match pattern {NAME_PATTERN}",
            context=create_error_context("validate_name", classroom=str(name)),
            suggestions=["Start with a letter; use only letters, digits and '-'"],
        )


def validate_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        raise ValidationError(
            "expected format to be either 'json' or 'plain'",
            context=create_error_context(
                "validate_format", additional_info={"format": output_format}
            ),
        )


class ProgressLogger(ABC):
    """Receives the human-readable progress lines of a workflow."""

    @abstractmethod
    def println(self, indentation: int, message: str) -> None:
        pass

    @abstractmethod
    def green(self, text: str) -> str:
        """Return text highlighted for the target output."""
        pass


class ClassroomOrchestrator:
    """
    Orchestrates the classroom workflows.

    Responsibilities:
    - Create: image lookup, key pair, key upload, stack launch
    - Destroy: stack, key pair, stored key (reverse creation order)
    - List and describe existing classrooms as JSON or plain text
    """

    def __init__(
        self,
        atlas_client: ImageCatalog,
        aws_client: CloudProvider,
        log: ProgressLogger,
        box_name: str,
        region: str,
        template: str,
    ):
        """
        Initialize classroom orchestrator.

        Args:
            atlas_client: Resolves box names to per-region images
            aws_client: Key pair, object storage and stack operations
            log: Progress line sink
            box_name: Box family whose image every host boots
            region: Region the classroom is created in
            template: Stack template body
        """
        self.atlas_client = atlas_client
        self.aws_client = aws_client
        self.log = log
        self.box_name = box_name
        self.region = region
        self.template = template

    @classmethod
    def from_config(
        cls, config: ProctorConfig, log: ProgressLogger
    ) -> "ClassroomOrchestrator":
        """Compose the orchestrator with the real AWS and catalog clients."""
        bucket = config.require_bucket()
        return cls(
            atlas_client=AtlasClient(config.atlas_url),
            aws_client=AWSClient.from_session(
                region=config.region, bucket=bucket, profile=config.profile
            ),
            log=log,
            box_name=config.box_name,
            region=config.region,
            template=config.load_template(),
        )

    def close(self) -> None:
        """Release the clients' network resources."""
        self.atlas_client.close()

    def __enter__(self) -> "ClassroomOrchestrator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create_classroom(self, name: str, number: int) -> None:
        """
        Create a classroom of `number` hosts.

        Returns once the stack creation request is accepted; the stack may
        still be provisioning.

        Raises:
            ValidationError: Bad name or count, or no image for the region
            ProviderContractError: The key pair came back inconsistent
            ProviderError: Any provider call failed
        """
        validate_name(name)
        if isinstance(number, bool) or not isinstance(number, int) or number < 1:
            raise ValidationError(
                f"invalid number of hosts: {number!r}, must be at least 1",
                context=create_error_context("create_classroom", classroom=name),
            )

        self.log.println(
            0, f"Looking up latest AMI for {self.log.green(self.box_name)}"
        )
        ami_map = self.atlas_client.get_latest_amis(self.box_name)
        ami = ami_map.get(self.region)
        if ami is None:
            raise ValidationError(
                f"Couldn't find AMI in region {self.region}",
                context=create_error_context(
                    "create_classroom", phase="image_lookup", classroom=name
                ),
                suggestions=[f"Regions with images: {', '.join(sorted(ami_map)) or 'none'}"],
            )
        self.log.println(0, f"Found {self.log.green(ami)}")

        prefixed_name = prefix(name)
        self.log.println(0, f"Creating SSH Keypair {self.log.green(prefixed_name)}")
        private_key = self.aws_client.create_key(prefixed_name)

        object_name = key_object_name(prefixed_name)
        object_url = self.aws_client.url_for_object(object_name)
        self.log.println(0, f"Uploading private key to {self.log.green(object_url)}")
        self.aws_client.store_object(
            object_name,
            private_key.encode("utf-8"),
            KEY_DOWNLOAD_FILE_NAME,
            KEY_CONTENT_TYPE,
        )

        self.log.println(
            0, f"Creating CloudFormation stack {self.log.green(prefixed_name)}"
        )
        stack_id = self.aws_client.create_stack(
            prefixed_name,
            self.template,
            {
                "AMI": ami,
                "KeyName": prefixed_name,
                "InstanceCount": str(number),
            },
        )
        logger.debug("Stack %s accepted as %s", prefixed_name, stack_id)

    def destroy_classroom(self, name: str) -> None:
        """Delete stack, key pair and stored key, stopping at the first error."""
        validate_name(name)
        prefixed_name = prefix(name)

        self.log.println(
            0, f"Deleting CloudFormation stack {self.log.green(prefixed_name)}"
        )
        self.aws_client.delete_stack(prefixed_name)

        self.log.println(0, "Deleting classroom keypair...")
        self.aws_client.delete_key(prefixed_name)

        self.log.println(0, "Deleting private key from S3...")
        self.aws_client.delete_object(key_object_name(prefixed_name))

    def list_classrooms(self, output_format: str) -> str:
        """Names of all classrooms, as a JSON array or one per line."""
        validate_format(output_format)

        keys = self.aws_client.list_keys(CLASSROOM_PREFIX)
        names = [k[len(CLASSROOM_PREFIX):] for k in keys if k.startswith(CLASSROOM_PREFIX)]

        if output_format == "json":
            return json.dumps(names, indent=4)
        return "\n".join(names)

    def describe_classroom(self, name: str, output_format: str) -> str:
        """
        Status, size, key URL and hosts of one classroom.

        Raises:
            ValidationError: Bad name or format
            MalformedStackError: InstanceCount is missing or not an integer
            ProviderError: Stack or host lookup failed
        """
        validate_name(name)
        validate_format(output_format)
        prefixed_name = prefix(name)

        stack = self.aws_client.describe_stack(prefixed_name)
        key_url = self.aws_client.url_for_object(key_object_name(prefixed_name))
        number = self._instance_count(stack.parameters, name)

        try:
            hosts = self.aws_client.get_hosts_from_stack_id(stack.stack_id)
        except ProviderError as e:
            raise ProviderError(
                f"error fetching hosts for stack: {e}",
                context=create_error_context(
                    "describe_classroom",
                    phase="host_lookup",
                    classroom=name,
                    resource=stack.stack_id,
                ),
                cause=e,
            ) from e

        description = {
            "status": stack.status,
            "number": number,
            "ssh_key": key_url,
            "hosts": dict(sorted(hosts.items())),
        }
        if output_format == "json":
            return json.dumps(description, indent=4)
        return render_plain_description(description)

    @staticmethod
    def _instance_count(parameters: Dict[str, str], name: str) -> int:
        raw = parameters.get("InstanceCount")
        if isinstance(raw, str) and _COUNT_REGEX.fullmatch(raw):
            return int(raw)
        raise MalformedStackError(
            "malformed CloudFormation stack: missing or invalid parameter "
            "'InstanceCount'",
            context=create_error_context(
                "describe_classroom",
                classroom=name,
                additional_info={"InstanceCount": raw},
            ),
        )


def render_plain_description(description: Dict) -> str:
    """Fixed-order text block; hosts one per line as label<TAB>address."""
    hosts: List[str] = [
        f"{label}\t{address}" for label, address in description["hosts"].items()
    ]
    return "\n".join(
        [
            f"status: {description['status']}",
            f"number: {description['number']}",
            f"ssh_key: {description['ssh_key']}",
            "hosts:",
            "\n".join(hosts),
        ]
    )
