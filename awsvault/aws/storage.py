"""AWS S3 implementation of the Storage blueprint."""

from typing import NoReturn

from botocore.exceptions import BotoCoreError, ClientError

from awsvault.aws.client import TIMEOUT_ERRORS, build_client
from awsvault.base import CloudStorageBlueprint
from awsvault.base.config import AWSConfig
from awsvault.base.exceptions import (
    BucketNotFoundError,
    ObjectNotFoundError,
    OperationTimeoutError,
    StorageError,
)

_ERROR_MAP = {
    "NoSuchBucket": BucketNotFoundError,
    "NoSuchKey": ObjectNotFoundError,
    "404": ObjectNotFoundError,
}


def _handle_error(e: Exception, message: str) -> NoReturn:
    """Raise a mapped exception or a generic StorageError."""
    if isinstance(e, TIMEOUT_ERRORS):
        raise OperationTimeoutError(f"{message} Timed out: {e}") from e
    exc_class = None
    if isinstance(e, ClientError):
        exc_class = _ERROR_MAP.get(e.response["Error"]["Code"])
    raise (exc_class or StorageError)(f"{message} {e}") from e


class Storage(CloudStorageBlueprint):
    """AWS S3 implementation for single-object storage operations.

    Attributes:
        client: boto3 S3 client for interacting with the AWS S3 API.
    """

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the AWS S3 client.

        Args:
            config: AWS configuration object containing credentials and region.
                   Unset fields fall through to boto3's default chain.
        """
        self.client = build_client("s3", config)

    def put_object(self, bucket_name: str, object_name: str, data: bytes) -> None:
        """Upload bytes to an S3 bucket in a single request.

        Args:
            bucket_name: The name of the target bucket.
            object_name: The S3 object key.
            data: The object contents.

        Raises:
            BucketNotFoundError: If the bucket does not exist.
            OperationTimeoutError: If the call timed out.
            StorageError: If upload fails for any other reason.
        """
        try:
            self.client.put_object(Bucket=bucket_name, Key=object_name, Body=data)
        except (ClientError, BotoCoreError) as e:
            _handle_error(e, f"Failed to upload '{object_name}' to '{bucket_name}'.")

    def get_object(self, bucket_name: str, object_name: str) -> bytes:
        """Get the contents of an S3 object as bytes.

        Args:
            bucket_name: The name of the bucket containing the object.
            object_name: The S3 object key to retrieve.

        Returns:
            The object contents as bytes.

        Raises:
            ObjectNotFoundError: If the object does not exist.
            BucketNotFoundError: If the bucket does not exist.
            OperationTimeoutError: If the call timed out.
            StorageError: If retrieval fails for any other reason.
        """
        try:
            response = self.client.get_object(Bucket=bucket_name, Key=object_name)
            return response["Body"].read()  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            _handle_error(e, f"Failed to download '{object_name}' from '{bucket_name}'.")
