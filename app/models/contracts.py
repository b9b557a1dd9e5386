from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class ContractFile(BaseModel):
    name: str
    size: Optional[int] = None

    @staticmethod
    def from_share_item(item: Any) -> "ContractFile":
        return ContractFile(name=str(item["name"]), size=item.get("size"))


class ContractListResponse(BaseModel):
    count: int
    contracts: list[ContractFile]


class ContractUploadResponse(BaseModel):
    name: str
    size: int
