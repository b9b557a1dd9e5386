from __future__ import annotations

import logging
import mimetypes
from typing import Any, Optional

from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import ContentSettings

from app.models.products import ProductImage
from app.services.storage_errors import StorageNotFoundError, StorageServiceError

logger = logging.getLogger(__name__)


class ProductImageService:
    """Product images stored as blobs in the public product images container."""

    def __init__(self, container: Any) -> None:
        self._container = container

    async def list_images(self, *, prefix: Optional[str] = None) -> list[ProductImage]:
        try:
            images: list[ProductImage] = []
            async for props in self._container.list_blobs(name_starts_with=prefix or None):
                url = self._container.get_blob_client(props.name).url
                images.append(ProductImage.from_blob_properties(props, url=url))
            return images
        except Exception as exc:
            logger.exception("Blob list_images failed")
            raise StorageServiceError("Failed to list product images") from exc

    async def upload_image(self, *, name: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Upload (or overwrite) a product image.

        Returns:
            The public URL of the uploaded blob.
        """

        if not name:
            raise ValueError("'name' must be provided")

        effective_content_type = content_type
        if not effective_content_type:
            guessed, _ = mimetypes.guess_type(name)
            effective_content_type = guessed or "application/octet-stream"

        try:
            blob = await self._container.upload_blob(
                name,
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=effective_content_type),
            )
            return blob.url
        except Exception as exc:
            logger.exception("Blob upload_image failed")
            raise StorageServiceError(f"Failed to upload product image (name={name})") from exc

    async def delete_image(self, *, name: str) -> None:
        try:
            await self._container.delete_blob(name)
        except ResourceNotFoundError as exc:
            raise StorageNotFoundError(f"Product image not found: {name}") from exc
        except Exception as exc:
            logger.exception("Blob delete_image failed")
            raise StorageServiceError(f"Failed to delete product image (name={name})") from exc
