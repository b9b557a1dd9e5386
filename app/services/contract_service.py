from __future__ import annotations

import logging
from typing import Any

from azure.core.exceptions import ResourceNotFoundError

from app.models.contracts import ContractFile
from app.services.storage_errors import StorageNotFoundError, StorageServiceError

logger = logging.getLogger(__name__)


class ContractService:
    """Contract documents kept in the root directory of the contracts file share."""

    def __init__(self, share: Any) -> None:
        self._share = share

    async def list_contracts(self) -> list[ContractFile]:
        try:
            root = self._share.get_directory_client()
            return [
                ContractFile.from_share_item(item)
                async for item in root.list_directories_and_files()
                if not item.get("is_directory")
            ]
        except Exception as exc:
            logger.exception("File share list_contracts failed")
            raise StorageServiceError("Failed to list contracts") from exc

    async def upload_contract(self, *, name: str, data: bytes) -> int:
        if not name or "/" in name:
            raise ValueError("'name' must be a plain file name")

        try:
            await self._share.get_file_client(name).upload_file(data)
            return len(data)
        except Exception as exc:
            logger.exception("File share upload_contract failed")
            raise StorageServiceError(f"Failed to upload contract (name={name})") from exc

    async def download_contract(self, *, name: str) -> bytes:
        try:
            downloader = await self._share.get_file_client(name).download_file()
            return await downloader.readall()
        except ResourceNotFoundError as exc:
            raise StorageNotFoundError(f"Contract not found: {name}") from exc
        except Exception as exc:
            logger.exception("File share download_contract failed")
            raise StorageServiceError(f"Failed to download contract (name={name})") from exc

    async def delete_contract(self, *, name: str) -> None:
        try:
            await self._share.get_file_client(name).delete_file()
        except ResourceNotFoundError as exc:
            raise StorageNotFoundError(f"Contract not found: {name}") from exc
        except Exception as exc:
            logger.exception("File share delete_contract failed")
            raise StorageServiceError(f"Failed to delete contract (name={name})") from exc
