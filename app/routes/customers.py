from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from app.models.customers import CustomerProfile, CustomerProfileData, CustomerProfileListResponse
from app.models.products import DeleteResponse
from app.services.customer_profile_service import CustomerProfileService
from app.services.dependencies import get_customer_profile_service

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=CustomerProfileListResponse)
async def list_customers(
    svc: CustomerProfileService = Depends(get_customer_profile_service),
) -> CustomerProfileListResponse:
    customers = await svc.list_profiles()
    return CustomerProfileListResponse(count=len(customers), customers=customers)


@router.get("/{customer_id}", response_model=CustomerProfile)
async def get_customer(
    customer_id: str = Path(..., min_length=1),
    svc: CustomerProfileService = Depends(get_customer_profile_service),
) -> CustomerProfile:
    return await svc.get_profile(customer_id=customer_id)


@router.put("/{customer_id}", response_model=CustomerProfile)
async def save_customer(
    payload: CustomerProfileData,
    customer_id: str = Path(..., min_length=1),
    svc: CustomerProfileService = Depends(get_customer_profile_service),
) -> CustomerProfile:
    profile = CustomerProfile.from_data(customer_id, payload)
    return await svc.save_profile(profile)


@router.delete("/{customer_id}", response_model=DeleteResponse)
async def delete_customer(
    customer_id: str = Path(..., min_length=1),
    svc: CustomerProfileService = Depends(get_customer_profile_service),
) -> DeleteResponse:
    await svc.delete_profile(customer_id=customer_id)
    return DeleteResponse(name=customer_id, deleted=True)
