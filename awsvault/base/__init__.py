"""Abstract service blueprints and core utilities.

Every cloud service inherits from one of the blueprints defined here.
Import them to type-hint your own code or to plug in a fake provider.
"""

from .secret_manager import SecretManagerBlueprint, SecretExistence
from .storage import CloudStorageBlueprint
from .supported_services import existing_services, existing_cloud_providers


__all__ = [
    "SecretManagerBlueprint",
    "SecretExistence",
    "CloudStorageBlueprint",
    "existing_services",
    "existing_cloud_providers",
]
