"""aws-vault — S3 file transfer and Secrets Manager upserts from the command line.

The library half can be used directly::

    from awsvault import universal_factory, upsert_secret

    secrets = universal_factory("secret_manager", "aws", {"region_name": "us-east-1"})
"""

from .base import (
    SecretManagerBlueprint,
    SecretExistence,
    CloudStorageBlueprint,
)
from .factory import universal_factory
from .transfer import upload_file, download_file
from .upsert import Deadline, UpsertAction, UpsertResult, upsert_secret

__all__ = [
    "SecretManagerBlueprint",
    "SecretExistence",
    "CloudStorageBlueprint",
    "universal_factory",
    "upload_file",
    "download_file",
    "Deadline",
    "UpsertAction",
    "UpsertResult",
    "upsert_secret",
]
