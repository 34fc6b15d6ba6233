"""AWS service factory.

Maps service names to their AWS SDK implementations.
``SERVICE_REGISTRY`` is consumed by :func:`awsvault.factory.universal_factory`.
"""

from awsvault.aws.secret_manager import SecretManager
from awsvault.aws.storage import Storage


# Service registry for AWS
SERVICE_REGISTRY: dict[str, type] = {
    "secret_manager": SecretManager,
    "storage": Storage,
}
