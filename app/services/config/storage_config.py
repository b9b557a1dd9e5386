from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class StorageResourceNames:
    """Names of the storage resources the app ensures at startup."""

    product_images_container: str = "product-images"
    order_queue: str = "order-processing"
    inventory_queue: str = "inventory-management"
    customer_table: str = "CustomerProfiles"
    contracts_share: str = "contracts"


@dataclass(frozen=True)
class StorageConfig:
    connection_string: str
    resources: StorageResourceNames = field(default_factory=StorageResourceNames)

    # "ConnectionStrings:AzureStorage" as an environment variable, then the SDK's usual name.
    CONNECTION_STRING_ENVS: ClassVar[tuple[str, ...]] = (
        "ConnectionStrings__AzureStorage",
        "AZURE_STORAGE_CONNECTION_STRING",
    )

    def __repr__(self) -> str:
        return f"StorageConfig(connection_string='***', resources={self.resources!r})"

    @staticmethod
    def from_env() -> "StorageConfig":
        for name in StorageConfig.CONNECTION_STRING_ENVS:
            value = (os.getenv(name) or "").strip()
            if value:
                return StorageConfig(connection_string=value)

        raise ValueError(
            "Missing required environment variable: " + " (or ".join(StorageConfig.CONNECTION_STRING_ENVS) + ")"
        )
