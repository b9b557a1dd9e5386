from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from azure.core.exceptions import ResourceExistsError

from app.services.config import StorageResourceNames
from app.services.storage_clients import StorageClients
from app.services.storage_errors import StorageServiceError

logger = logging.getLogger(__name__)


class StorageSetupError(StorageServiceError):
    pass


class StorageSetupService:
    """Ensures the storage resources the app depends on exist.

    Every step has create-if-absent semantics: an existing resource counts as
    success. Steps run sequentially and the first failure aborts the rest, so a
    misconfigured storage account stops the app before it serves requests.
    """

    # Container is readable anonymously at blob level (product images are linked from pages).
    PRODUCT_IMAGES_PUBLIC_ACCESS: str = "blob"

    def __init__(self, *, clients: StorageClients, resources: StorageResourceNames) -> None:
        self._clients = clients
        self._resources = resources

    async def ensure_resources(self) -> dict[str, bool]:
        """Public entry point: ensure container, queues, table and share exist.

        Returns:
            Mapping of resource label to False when the service reported the resource already
            existed, True when the create call succeeded. Azure answers creating an existing
            queue with matching metadata without an error, so such a queue reports True too.
        """

        res = self._resources
        ensured: dict[str, bool] = {}

        container = self._clients.blob.get_container_client(res.product_images_container)
        ensured[f"Blob Container '{res.product_images_container}'"] = await self._ensure(
            kind="Blob Container",
            name=res.product_images_container,
            create=lambda: container.create_container(public_access=self.PRODUCT_IMAGES_PUBLIC_ACCESS),
        )

        for queue_name in (res.order_queue, res.inventory_queue):
            queue = self._clients.queue.get_queue_client(queue_name)
            ensured[f"Queue '{queue_name}'"] = await self._ensure(
                kind="Queue",
                name=queue_name,
                create=queue.create_queue,
            )

        table = self._clients.table.get_table_client(res.customer_table)
        ensured[f"Table '{res.customer_table}'"] = await self._ensure(
            kind="Table",
            name=res.customer_table,
            create=table.create_table,
        )

        share = self._clients.share.get_share_client(res.contracts_share)
        ensured[f"File Share '{res.contracts_share}'"] = await self._ensure(
            kind="File Share",
            name=res.contracts_share,
            create=share.create_share,
        )

        return ensured

    @staticmethod
    async def _ensure(*, kind: str, name: str, create: Callable[[], Awaitable[Any]]) -> bool:
        try:
            await create()
            created = True
        except ResourceExistsError:
            created = False
        except Exception as exc:
            logger.exception("Failed to ensure Azure %s '%s'", kind, name)
            raise StorageSetupError(f"Failed to ensure Azure {kind} '{name}' exists") from exc

        logger.info("Azure %s '%s' ensured to exist.", kind, name)
        return created
