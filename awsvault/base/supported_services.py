from typing import Literal


existing_services = Literal[
    "secret_manager",
    "storage",
]


existing_cloud_providers = Literal["aws"]
