from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field


class CustomerProfileData(BaseModel):
    """Request body for saving a profile; only input is validated."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone_number: Optional[str] = None


class CustomerProfile(BaseModel):
    # The table is shared storage: rows written by other tools may lack any of these columns.
    customer_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @staticmethod
    def from_data(customer_id: str, data: CustomerProfileData) -> "CustomerProfile":
        return CustomerProfile(customer_id=customer_id, **data.model_dump())

    @staticmethod
    def from_entity(entity: Mapping[str, Any]) -> "CustomerProfile":
        def _text(column: str) -> Optional[str]:
            value = entity.get(column)
            return None if value is None else str(value)

        return CustomerProfile(
            customer_id=str(entity["RowKey"]),
            first_name=_text("FirstName"),
            last_name=_text("LastName"),
            email=_text("Email"),
            phone_number=_text("PhoneNumber"),
        )

    def to_entity(self, *, partition_key: str) -> dict[str, Any]:
        entity: dict[str, Any] = {"PartitionKey": partition_key, "RowKey": self.customer_id}
        columns = {
            "FirstName": self.first_name,
            "LastName": self.last_name,
            "Email": self.email,
            "PhoneNumber": self.phone_number,
        }
        entity.update({k: v for k, v in columns.items() if v})
        return entity


class CustomerProfileListResponse(BaseModel):
    count: int
    customers: list[CustomerProfile]
