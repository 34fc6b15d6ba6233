"""AWS Secrets Manager implementation of the SecretManager blueprint."""

from typing import NoReturn

from botocore.exceptions import BotoCoreError, ClientError

from awsvault.aws.client import TIMEOUT_ERRORS, build_client
from awsvault.base import SecretExistence, SecretManagerBlueprint
from awsvault.base.config import AWSConfig
from awsvault.base.exceptions import (
    OperationTimeoutError,
    SecretAlreadyExistsError,
    SecretManagerError,
    SecretNotFoundError,
)
from awsvault.base.logger import vault_logger

_NOT_FOUND = "ResourceNotFoundException"

_ERROR_MAP = {
    _NOT_FOUND: SecretNotFoundError,
    "ResourceExistsException": SecretAlreadyExistsError,
}


def _handle_error(e: Exception, message: str) -> NoReturn:
    """Raise a mapped exception or a generic SecretManagerError."""
    if isinstance(e, TIMEOUT_ERRORS):
        raise OperationTimeoutError(f"{message} Timed out: {e}") from e
    exc_class = None
    if isinstance(e, ClientError):
        exc_class = _ERROR_MAP.get(e.response["Error"]["Code"])
    raise (exc_class or SecretManagerError)(f"{message} {e}") from e


class SecretManager(SecretManagerBlueprint):
    """AWS Secrets Manager implementation for secret management.

    Attributes:
        client: boto3 Secrets Manager client.
        config: The configuration the client was built from.
    """

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the AWS Secrets Manager client.

        Args:
            config: AWS configuration object; ``region_name`` selects the
                endpoint and ``timeout`` bounds each call.
        """
        self.config = config
        self.client = build_client("secretsmanager", config)

    def with_timeout(self, seconds: float) -> "SecretManager":
        """Return a manager on a fresh client whose connect and read timeouts are ``seconds``."""
        return SecretManager(self.config.model_copy(update={"timeout": seconds}))

    def describe_secret(self, name: str) -> SecretExistence:
        """Check whether a secret exists in AWS Secrets Manager.

        Only the structured ``ResourceNotFoundException`` code counts as
        not-found; everything else is an error.

        Args:
            name: The name of the secret.

        Returns:
            ``SecretExistence.EXISTS`` or ``SecretExistence.NOT_FOUND``.

        Raises:
            OperationTimeoutError: If the call timed out.
            SecretManagerError: If the describe call fails for any other reason.
        """
        try:
            self.client.describe_secret(SecretId=name)
        except ClientError as e:
            if e.response["Error"]["Code"] == _NOT_FOUND:
                vault_logger.debug(
                    f"Secret '{name}' not found", service="secret_manager", operation="describe_secret"
                )
                return SecretExistence.NOT_FOUND
            raise SecretManagerError(f"Failed to describe secret '{name}': {e}") from e
        except BotoCoreError as e:
            _handle_error(e, f"Failed to describe secret '{name}'.")
        return SecretExistence.EXISTS

    def create_secret(self, name: str, description: str, value: str) -> str:
        """Create a new secret in AWS Secrets Manager.

        Args:
            name: The name of the secret to create.
            description: Description stored with the secret.
            value: The secret string to store.

        Returns:
            The ARN of the new secret.

        Raises:
            SecretAlreadyExistsError: If a secret with the given name already exists.
            OperationTimeoutError: If the call timed out.
            SecretManagerError: If creation fails for any other reason.
        """
        try:
            response = self.client.create_secret(
                Name=name, Description=description, SecretString=value
            )
        except (ClientError, BotoCoreError) as e:
            _handle_error(e, f"Failed to create secret '{name}'.")
        return response["ARN"]  # type: ignore[no-any-return]

    def update_secret(self, name: str, description: str, value: str) -> None:
        """Update an existing secret in AWS Secrets Manager.

        Args:
            name: The name of the secret to update.
            description: The new description.
            value: The new secret string.

        Raises:
            SecretNotFoundError: If the secret does not exist.
            OperationTimeoutError: If the call timed out.
            SecretManagerError: If update fails for any other reason.
        """
        try:
            self.client.update_secret(
                SecretId=name, Description=description, SecretString=value
            )
        except (ClientError, BotoCoreError) as e:
            _handle_error(e, f"Failed to update secret '{name}'.")
