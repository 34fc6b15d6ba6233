"""Secret Manager service blueprint."""

from abc import ABC, abstractmethod
from enum import Enum


class SecretExistence(str, Enum):
    """Outcome of a successful describe call.

    Any other outcome is raised as a
    :class:`~awsvault.base.exceptions.SecretManagerError`.
    """

    EXISTS = "exists"
    NOT_FOUND = "not_found"


class SecretManagerBlueprint(ABC):
    """Abstract interface for secret management services.

    Maps to AWS Secrets Manager.
    """

    def with_timeout(self, seconds: float) -> "SecretManagerBlueprint":
        """Return a manager whose next calls give up after ``seconds``.

        Providers without a per-call timeout return themselves.
        """
        return self

    @abstractmethod
    def describe_secret(self, name: str) -> SecretExistence:
        """Report whether a secret with the given name exists.

        Args:
            name: Secret name or identifier.

        Returns:
            ``EXISTS`` or ``NOT_FOUND``.

        Raises:
            SecretManagerError: For every failure other than not-found.
        """
        pass

    @abstractmethod
    def create_secret(self, name: str, description: str, value: str) -> str:
        """Create a new secret.

        Args:
            name: Secret name.
            description: Human-readable description.
            value: Secret string.

        Returns:
            The ARN of the created secret.
        """
        pass

    @abstractmethod
    def update_secret(self, name: str, description: str, value: str) -> None:
        """Replace an existing secret's description and value.

        Args:
            name: Secret name.
            description: New description.
            value: New secret string.
        """
        pass
