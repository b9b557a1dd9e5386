from __future__ import annotations

import logging
from typing import Any

from azure.core.exceptions import ResourceNotFoundError
from azure.data.tables import UpdateMode

from app.models.customers import CustomerProfile
from app.services.storage_errors import StorageNotFoundError, StorageServiceError

logger = logging.getLogger(__name__)


class CustomerProfileService:
    PARTITION_KEY: str = "Customer"

    def __init__(self, table: Any) -> None:
        self._table = table

    async def list_profiles(self) -> list[CustomerProfile]:
        try:
            entities = self._table.query_entities(
                "PartitionKey eq @pk",
                parameters={"pk": self.PARTITION_KEY},
            )
            return [CustomerProfile.from_entity(e) async for e in entities]
        except Exception as exc:
            logger.exception("Table list_profiles failed")
            raise StorageServiceError("Failed to list customer profiles") from exc

    async def get_profile(self, *, customer_id: str) -> CustomerProfile:
        try:
            entity = await self._table.get_entity(partition_key=self.PARTITION_KEY, row_key=customer_id)
        except ResourceNotFoundError as exc:
            raise StorageNotFoundError(f"Customer profile not found: {customer_id}") from exc
        except Exception as exc:
            logger.exception("Table get_profile failed")
            raise StorageServiceError(f"Failed to read customer profile (id={customer_id})") from exc

        return CustomerProfile.from_entity(entity)

    async def save_profile(self, profile: CustomerProfile) -> CustomerProfile:
        try:
            await self._table.upsert_entity(
                profile.to_entity(partition_key=self.PARTITION_KEY),
                mode=UpdateMode.REPLACE,
            )
            return profile
        except Exception as exc:
            logger.exception("Table save_profile failed")
            raise StorageServiceError(f"Failed to save customer profile (id={profile.customer_id})") from exc

    async def delete_profile(self, *, customer_id: str) -> None:
        """Delete a profile; a missing one raises StorageNotFoundError like blobs and files do."""

        try:
            # delete_entity succeeds silently on a missing row, so look it up first.
            await self._table.get_entity(partition_key=self.PARTITION_KEY, row_key=customer_id)
            await self._table.delete_entity(partition_key=self.PARTITION_KEY, row_key=customer_id)
        except ResourceNotFoundError as exc:
            raise StorageNotFoundError(f"Customer profile not found: {customer_id}") from exc
        except Exception as exc:
            logger.exception("Table delete_profile failed")
            raise StorageServiceError(f"Failed to delete customer profile (id={customer_id})") from exc
