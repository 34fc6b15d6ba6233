"""Universal service factory.

Provides :func:`universal_factory`, the single entry-point for creating
cloud service clients.  The function dispatches to the provider-specific
registry based on ``cloud_provider`` and returns a typed instance via
``@overload`` signatures so IDEs can autocomplete methods.
"""

from typing import overload, Literal, Any

from awsvault.base import (
    SecretManagerBlueprint,
    CloudStorageBlueprint,
    existing_services,
    existing_cloud_providers,
)
from awsvault.base.config import validate_config
from awsvault.aws.factory import SERVICE_REGISTRY as AWS_SERVICES


# Nested factory registry: cloud_provider -> service registry
_FACTORY_REGISTRY: dict[str, dict[str, type]] = {
    "aws": AWS_SERVICES,
}


@overload
def universal_factory(
    service_name: Literal["secret_manager"], cloud_provider: existing_cloud_providers, config: dict
) -> SecretManagerBlueprint: ...


@overload
def universal_factory(
    service_name: Literal["storage"], cloud_provider: existing_cloud_providers, config: dict
) -> CloudStorageBlueprint: ...


def universal_factory(
    service_name: existing_services,
    cloud_provider: existing_cloud_providers,
    config: dict,
) -> Any:
    """
    Universal factory function to create service instances based on cloud provider and service name.
    Args:
        service_name: The name of the service ('secret_manager' or 'storage').
        cloud_provider: The cloud provider ('aws').
        config: Configuration dictionary to initialize the service instance.
    Returns:
        An instance of the requested service class.
    Raises:
        ValueError: If the cloud provider or service is not supported.
        pydantic.ValidationError: If the config is invalid.
    """
    if cloud_provider not in _FACTORY_REGISTRY:
        raise ValueError(f"Unsupported cloud provider: {cloud_provider}")

    provider_services = _FACTORY_REGISTRY[cloud_provider]

    if service_name not in provider_services:
        raise ValueError(
            f"Unsupported service '{service_name}' for provider '{cloud_provider}'"
        )

    service_class = provider_services[service_name]
    configObj = validate_config(cloud_provider, config)
    return service_class(configObj)
