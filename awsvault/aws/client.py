"""Shared boto3 client construction for the AWS adapters."""

from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import ConnectTimeoutError, ReadTimeoutError

from awsvault.base.config import AWSConfig

# botocore errors that mean the call ran out of time rather than failed.
TIMEOUT_ERRORS = (ConnectTimeoutError, ReadTimeoutError)


def build_client(service_name: str, config: AWSConfig) -> Any:
    """Create a boto3 client with retries disabled.

    Args:
        service_name: boto3 service identifier (e.g. 's3').
        config: Validated AWS configuration.

    Returns:
        A low-level boto3 client.
    """
    options: dict[str, Any] = {"retries": {"total_max_attempts": 1}}
    if config.timeout is not None:
        options["connect_timeout"] = config.timeout
        options["read_timeout"] = config.timeout
    return boto3.client(
        service_name,
        aws_access_key_id=config.aws_access_key_id,
        aws_secret_access_key=config.aws_secret_access_key,
        region_name=config.region_name,
        config=Config(**options),
    )
