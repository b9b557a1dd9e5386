from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from starlette import status

from app.models.products import DeleteResponse, ProductImageListResponse, ProductImageUploadResponse
from app.services.dependencies import get_product_image_service
from app.services.product_image_service import ProductImageService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("/images", response_model=ProductImageListResponse)
async def list_images(
    prefix: Optional[str] = Query(default=None),
    svc: ProductImageService = Depends(get_product_image_service),
) -> ProductImageListResponse:
    images = await svc.list_images(prefix=prefix)
    return ProductImageListResponse(count=len(images), images=images)


@router.put("/images/{name:path}", response_model=ProductImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    request: Request,
    name: str = Path(..., description="Blob name"),
    svc: ProductImageService = Depends(get_product_image_service),
) -> ProductImageUploadResponse:
    body = await request.body()
    if not body:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must contain the image")

    url = await svc.upload_image(name=name, data=body, content_type=request.headers.get("content-type"))
    return ProductImageUploadResponse(name=name, url=url)


@router.delete("/images/{name:path}", response_model=DeleteResponse)
async def delete_image(
    name: str = Path(..., description="Blob name"),
    svc: ProductImageService = Depends(get_product_image_service),
) -> DeleteResponse:
    await svc.delete_image(name=name)
    return DeleteResponse(name=name, deleted=True)
