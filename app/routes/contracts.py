from __future__ import annotations

import mimetypes
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Path, Request
from fastapi.responses import Response
from starlette import status

from app.models.contracts import ContractListResponse, ContractUploadResponse
from app.models.products import DeleteResponse
from app.services.contract_service import ContractService
from app.services.dependencies import get_contract_service

router = APIRouter(prefix="/api/contracts", tags=["contracts"])


def _content_disposition(name: str) -> str:
    # Header values are latin-1; non-ASCII names travel in the RFC 5987 filename* parameter.
    fallback = name.encode("ascii", "replace").decode("ascii").replace("?", "_")
    fallback = fallback.replace("\\", "_").replace('"', "_")
    encoded = quote(name, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


@router.get("", response_model=ContractListResponse)
async def list_contracts(
    svc: ContractService = Depends(get_contract_service),
) -> ContractListResponse:
    contracts = await svc.list_contracts()
    return ContractListResponse(count=len(contracts), contracts=contracts)


@router.put("/{name}", response_model=ContractUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_contract(
    request: Request,
    name: str = Path(..., description="File name in the share root"),
    svc: ContractService = Depends(get_contract_service),
) -> ContractUploadResponse:
    body = await request.body()
    if not body:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must contain the contract")

    size = await svc.upload_contract(name=name, data=body)
    return ContractUploadResponse(name=name, size=size)


@router.get("/{name}")
async def download_contract(
    name: str = Path(..., description="File name in the share root"),
    svc: ContractService = Depends(get_contract_service),
) -> Response:
    data = await svc.download_contract(name=name)
    media_type, _ = mimetypes.guess_type(name)
    return Response(
        content=data,
        media_type=media_type or "application/octet-stream",
        headers={"Content-Disposition": _content_disposition(name)},
    )


@router.delete("/{name}", response_model=DeleteResponse)
async def delete_contract(
    name: str = Path(..., description="File name in the share root"),
    svc: ContractService = Depends(get_contract_service),
) -> DeleteResponse:
    await svc.delete_contract(name=name)
    return DeleteResponse(name=name, deleted=True)
