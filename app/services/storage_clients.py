from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import aiohttp
from azure.core.pipeline.transport import AioHttpTransport
from azure.data.tables.aio import TableServiceClient
from azure.storage.blob.aio import BlobServiceClient
from azure.storage.fileshare.aio import ShareServiceClient
from azure.storage.queue.aio import QueueServiceClient

from app.services.config import StorageConfig

logger = logging.getLogger(__name__)


@dataclass
class StorageClients:
    """The four Azure Storage service clients, created once and shared for the process lifetime."""

    blob: Any
    queue: Any
    table: Any
    share: Any

    @staticmethod
    def from_config(config: StorageConfig, *, session: aiohttp.ClientSession) -> "StorageClients":
        conn_str = config.connection_string

        def _transport() -> AioHttpTransport:
            # The app owns the session; clients must not close it.
            return AioHttpTransport(session=session, session_owner=False)

        clients = StorageClients(
            blob=BlobServiceClient.from_connection_string(conn_str, transport=_transport()),
            queue=QueueServiceClient.from_connection_string(conn_str, transport=_transport()),
            table=TableServiceClient.from_connection_string(conn_str, transport=_transport()),
            share=ShareServiceClient.from_connection_string(conn_str, transport=_transport()),
        )
        logger.info("Azure Storage clients created (blob, queue, table, file share)")
        return clients

    async def close(self) -> None:
        for client in (self.blob, self.queue, self.table, self.share):
            await client.close()
