#!/usr/bin/env python3
"""
AWS provider adapter.

Implements CloudProvider on top of boto3 EC2, S3 and CloudFormation clients.
Each method maps to one AWS API call. botocore failures are re-raised as
ProviderError with the AWS message intact; responses that break the API
contract (wrong key name, empty key, ambiguous stack) raise
ProviderContractError.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import functools
import logging
from typing import Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from proctor.core.errors import (
    ProviderContractError,
    ProviderError,
    create_error_context,
)
from .base import CloudProvider, StackDescription

logger = logging.getLogger(__name__)

STACK_ID_TAG = "aws:cloudformation:stack-id"
LIVE_INSTANCE_STATES = ["pending", "running"]


def _aws_call(operation: str):
    """Translate botocore failures raised inside an adapter method."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, name, *args, **kwargs):
            logger.debug("AWS %s(%s)", operation, name)
            try:
                return func(self, name, *args, **kwargs)
            except (ClientError, BotoCoreError) as e:
                raise ProviderError(
                    str(e),
                    context=create_error_context(
                        operation, component="AWSClient", resource=name
                    ),
                    cause=e,
                ) from e

        return wrapper

    return decorator


class AWSClient(CloudProvider):
    """
    CloudProvider backed by AWS.

    Args:
        ec2: boto3 EC2 client
        s3: boto3 S3 client
        cloudformation: boto3 CloudFormation client
        bucket: S3 bucket holding classroom private keys
    """

    def __init__(self, ec2, s3, cloudformation, bucket: str):
        self.ec2 = ec2
        self.s3 = s3
        self.cloudformation = cloudformation
        self.bucket = bucket

    @classmethod
    def from_session(
        cls, region: str, bucket: str, profile: Optional[str] = None
    ) -> "AWSClient":
        """Build the three service clients from one boto3 session."""
        session = boto3.Session(profile_name=profile or None, region_name=region)
        return cls(
            ec2=session.client("ec2"),
            s3=session.client("s3"),
            cloudformation=session.client("cloudformation"),
            bucket=bucket,
        )

    # Key pairs

    @_aws_call("CreateKeyPair")
    def create_key(self, name: str) -> str:
        out = self.ec2.create_key_pair(KeyName=name)

        key_name = out.get("KeyName")
        if key_name is None:
            raise ProviderContractError(
                "CreateKeyPair returned invalid data",
                context=create_error_context("CreateKeyPair", resource=name),
            )
        if key_name != name:
            raise ProviderContractError(
                f"tried to create key named '{name}' but generated key "
                f"was called '{key_name}'",
                context=create_error_context("CreateKeyPair", resource=name),
            )

        material = out.get("KeyMaterial")
        if not material:
            raise ProviderContractError(
                "CreateKeyPair returned an empty key",
                context=create_error_context("CreateKeyPair", resource=name),
            )
        return material

    @_aws_call("DeleteKeyPair")
    def delete_key(self, name: str) -> None:
        self.ec2.delete_key_pair(KeyName=name)

    @_aws_call("DescribeKeyPairs")
    def list_keys(self, prefix: str) -> List[str]:
        out = self.ec2.describe_key_pairs(
            Filters=[{"Name": "key-name", "Values": [prefix + "*"]}]
        )
        names = [
            pair["KeyName"]
            for pair in out.get("KeyPairs", [])
            if pair.get("KeyName", "").startswith(prefix)
        ]
        return sorted(names)

    # Object storage

    @_aws_call("PutObject")
    def store_object(
        self, name: str, data: bytes, download_file_name: str, content_type: str
    ) -> None:
        self.s3.put_object(
            Bucket=self.bucket,
            Key=name,
            Body=data,
            ContentType=content_type,
            ContentDisposition=f'attachment; filename="{download_file_name}"',
        )

    @_aws_call("DeleteObject")
    def delete_object(self, name: str) -> None:
        self.s3.delete_object(Bucket=self.bucket, Key=name)

    def url_for_object(self, name: str) -> str:
        return f"https://s3.amazonaws.com/{self.bucket}/{name}"

    # Stacks

    @_aws_call("CreateStack")
    def create_stack(
        self, name: str, template: str, parameters: Dict[str, str]
    ) -> str:
        out = self.cloudformation.create_stack(
            StackName=name,
            TemplateBody=template,
            Parameters=[
                {"ParameterKey": key, "ParameterValue": value}
                for key, value in parameters.items()
            ],
        )
        return out["StackId"]

    @_aws_call("DeleteStack")
    def delete_stack(self, name: str) -> None:
        self.cloudformation.delete_stack(StackName=name)

    @_aws_call("DescribeStacks")
    def describe_stack(self, name: str) -> StackDescription:
        stacks = self.cloudformation.describe_stacks(StackName=name).get("Stacks", [])
        if len(stacks) != 1:
            raise ProviderContractError(
                f"expected exactly one stack named '{name}', found {len(stacks)}",
                context=create_error_context("DescribeStacks", resource=name),
            )

        stack = stacks[0]
        parameters = {
            p["ParameterKey"]: p.get("ParameterValue", "")
            for p in stack.get("Parameters", [])
        }
        return StackDescription(
            status=stack["StackStatus"],
            stack_id=stack["StackId"],
            parameters=parameters,
        )

    @_aws_call("DescribeInstances")
    def get_hosts_from_stack_id(self, stack_id: str) -> Dict[str, str]:
        paginator = self.ec2.get_paginator("describe_instances")
        pages = paginator.paginate(
            Filters=[
                {"Name": f"tag:{STACK_ID_TAG}", "Values": [stack_id]},
                {"Name": "instance-state-name", "Values": LIVE_INSTANCE_STATES},
            ]
        )

        hosts = {}
        for page in pages:
            for reservation in page.get("Reservations", []):
                for instance in reservation.get("Instances", []):
                    address = instance.get("PublicIpAddress") or instance.get(
                        "PrivateIpAddress"
                    )
                    if not address:
                        logger.debug(
                            "Instance %s has no address yet, skipping",
                            instance.get("InstanceId"),
                        )
                        continue
                    hosts[instance["InstanceId"]] = address
        return hosts
