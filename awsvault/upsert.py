"""
Create-or-update decision for a single secret.

:func:`upsert_secret` describes the secret once, then issues at most one
mutation:

* not found          -> create (whatever ``update_requested`` says)
* exists, no update  -> nothing, reported as ``SKIPPED``
* exists, update     -> update

Any error from the capability propagates unchanged. Nothing is retried.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from awsvault.base import SecretExistence, SecretManagerBlueprint
from awsvault.base.config import SecretSpec
from awsvault.base.exceptions import OperationTimeoutError
from awsvault.base.logger import vault_logger


class UpsertAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class UpsertResult:
    action: UpsertAction
    arn: str | None = None


class Deadline:
    """Wall-clock budget shared by every call of one command."""

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    def expired(self) -> bool:
        return self.remaining() <= 0

    def check(self, operation: str) -> float:
        """Return the seconds left, or raise :class:`OperationTimeoutError` if none are."""
        remaining = self.remaining()
        if remaining <= 0:
            raise OperationTimeoutError(
                f"{operation} not started: deadline of {self.seconds:g}s exceeded"
            )
        return remaining


def _bounded_call(
    manager: SecretManagerBlueprint, deadline: Deadline, operation: str, *args: Any
) -> Any:
    """Run one capability call with only the time left on ``deadline``.

    A call that returns after the deadline is reported as timed out, the
    same as one the client aborted.
    """
    remaining = deadline.check(operation)
    result = getattr(manager.with_timeout(remaining), operation)(*args)
    if deadline.expired():
        raise OperationTimeoutError(
            f"{operation} did not finish within the {deadline.seconds:g}s deadline"
        )
    return result


def upsert_secret(
    manager: SecretManagerBlueprint,
    spec: SecretSpec,
    deadline: Deadline | None = None,
) -> UpsertResult:
    """Create the secret, update it, or leave it alone.

    Args:
        manager: Secrets capability to call through.
        spec: Name, description, value and intent for the secret.
        deadline: Budget for the whole sequence; defaults to ``spec.timeout``.

    Returns:
        What was done, with the ARN when a secret was created.

    Raises:
        OperationTimeoutError: If the deadline expires before or during a call.
        SecretManagerError: If describe, create or update fails.
    """
    if deadline is None:
        deadline = Deadline(spec.timeout)
    log = {"service": "secret_manager"}

    existence = _bounded_call(manager, deadline, "describe_secret", spec.name)

    if existence is SecretExistence.EXISTS:
        if not spec.update_requested:
            vault_logger.info(
                f"Secret '{spec.name}' exists and no update was requested",
                operation="describe_secret",
                **log,
            )
            return UpsertResult(UpsertAction.SKIPPED)

        _bounded_call(
            manager, deadline, "update_secret", spec.name, spec.description, spec.secret_value
        )
        vault_logger.info(f"Updated secret '{spec.name}'", operation="update_secret", **log)
        return UpsertResult(UpsertAction.UPDATED)

    vault_logger.info(
        f"Secret '{spec.name}' does not exist, creating it", operation="describe_secret", **log
    )
    arn = _bounded_call(
        manager, deadline, "create_secret", spec.name, spec.description, spec.secret_value
    )
    vault_logger.info(f"Created secret '{spec.name}'", operation="create_secret", **log)
    return UpsertResult(UpsertAction.CREATED, arn)
