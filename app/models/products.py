from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class ProductImage(BaseModel):
    name: str = Field(..., description="Blob name inside the product images container")
    url: str
    size: Optional[int] = None
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    content_type: Optional[str] = None

    @staticmethod
    def from_blob_properties(props: Any, *, url: str) -> "ProductImage":
        content_settings = getattr(props, "content_settings", None)
        return ProductImage(
            name=str(props.name),
            url=url,
            size=getattr(props, "size", None),
            last_modified=getattr(props, "last_modified", None),
            etag=getattr(props, "etag", None),
            content_type=getattr(content_settings, "content_type", None),
        )


class ProductImageListResponse(BaseModel):
    count: int
    images: list[ProductImage]


class ProductImageUploadResponse(BaseModel):
    name: str
    url: str


class DeleteResponse(BaseModel):
    name: str
    deleted: bool
