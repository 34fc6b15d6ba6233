"""
Pydantic models for provider config and per-command inputs.

Validates everything a command needs before any client is built, so a
missing flag is reported without touching the network.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator


class AWSConfig(BaseModel):
    """Configuration for AWS service clients.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_DEFAULT_REGION).
    3. If neither is set, fields are left as None so boto3 can fall back to its
       own credential chain (instance metadata, ~/.aws/credentials, etc.).

    ``timeout`` is applied as both the connect and read timeout of the
    underlying botocore client when set.
    """

    model_config = ConfigDict(extra="forbid")

    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    region_name: str | None = Field(default=None, description="AWS region (e.g. 'us-east-1')")
    timeout: float | None = Field(
        default=None, gt=0, allow_inf_nan=False, description="Per-call timeout in seconds"
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing credentials."""
        env_map = {
            "aws_access_key_id": "AWS_ACCESS_KEY_ID",
            "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
            "region_name": "AWS_DEFAULT_REGION",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        return values


class TransferRequest(BaseModel):
    """A single-file upload or download against one bucket."""

    bucket_name: str = Field(min_length=1, description="S3 bucket name")
    file_path: str = Field(min_length=1, description="Local file path, also the key suffix")
    subdirectory: str = Field(default="", description="Key prefix inside the bucket")

    @property
    def object_key(self) -> str:
        # Plain concatenation: an empty subdirectory still yields a leading "/".
        return self.subdirectory + "/" + self.file_path


class SecretSpec(BaseModel):
    """Everything the upsert procedure needs to create or update one secret.

    ``secret_value`` holds the raw contents of the JSON file; it is passed
    through unchanged and never parsed.
    """

    name: str = Field(min_length=1, description="Secret name")
    region: str = Field(min_length=1, description="AWS region")
    description: str = Field(min_length=1, description="Secret description")
    secret_value: str = Field(description="Raw secret string")
    timeout: float = Field(default=30.0, gt=0, allow_inf_nan=False, description="Deadline in seconds")
    update_requested: bool = Field(default=False, description="Update if the secret exists")

    def client_config(self) -> dict[str, Any]:
        """Return the raw config dict for a Secrets Manager client."""
        return {"region_name": self.region, "timeout": self.timeout}


# Map provider names to their config models for dynamic validation
CONFIG_REGISTRY: dict[str, type[BaseModel]] = {
    "aws": AWSConfig,
}


def validate_config(cloud_provider: str, config: dict) -> BaseModel:
    """Validate and return a typed config model for the given provider.

    Args:
        cloud_provider: The cloud provider name (only 'aws' is registered).
        config: Raw configuration dictionary.

    Returns:
        A validated Pydantic config model.

    Raises:
        ValueError: If the provider is unknown.
        pydantic.ValidationError: If the config is invalid.
    """
    model = CONFIG_REGISTRY.get(cloud_provider)
    if model is None:
        raise ValueError(f"No config model registered for provider: {cloud_provider}")
    return model(**config)


__all__ = [
    "AWSConfig",
    "TransferRequest",
    "SecretSpec",
    "CONFIG_REGISTRY",
    "validate_config",
]
