"""
aws-vault exception hierarchy.

Every failure the CLI can report inherits from :class:`AwsVaultError`.
Each service has a top-level error and sub-exceptions for the failure
modes callers need to tell apart (not-found, already-exists, etc.).
"""


# ── Base ──────────────────────────────────────────────────────────────
class AwsVaultError(Exception):
    """Root exception for all aws-vault errors."""


class ConfigurationError(AwsVaultError):
    """Required input is missing or invalid."""


class LocalFileError(AwsVaultError):
    """Reading or writing a local file failed."""


class OperationTimeoutError(AwsVaultError):
    """The operation did not finish before its deadline."""


# ── Secret Manager ────────────────────────────────────────────────────
class SecretManagerError(AwsVaultError):
    """Base exception for secret manager operations."""


class SecretNotFoundError(SecretManagerError):
    """Secret not found."""


class SecretAlreadyExistsError(SecretManagerError):
    """Secret already exists."""


# ── Storage ───────────────────────────────────────────────────────────
class StorageError(AwsVaultError):
    """Base exception for object storage operations."""


class BucketNotFoundError(StorageError):
    """Bucket not found."""


class ObjectNotFoundError(StorageError):
    """Object not found."""
