"""Customer Routes — registration, profile, history and activation."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from filmrental.api.dependencies import get_customer_service
from filmrental.schemas.account import (
    CustomerCreate, CustomerProfileResponse, CustomerResponse, CustomerUpdate,
)
from filmrental.schemas.payment import PaymentResponse
from filmrental.schemas.rental import RentalResponse
from filmrental.services.customer_service import CustomerService

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.post(
    "", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED,
)
async def register_customer(
    body: CustomerCreate, service: CustomerService = Depends(get_customer_service),
):
    return await service.register_customer(
        body.first_name, body.last_name, body.email, body.store_id,
    )


@router.get("/{customer_id}/profile", response_model=CustomerProfileResponse)
async def get_profile(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    profile = await service.get_customer_profile(customer_id)
    return CustomerProfileResponse.model_validate(profile)


@router.get("/{customer_id}/rentals", response_model=list[RentalResponse])
async def get_rental_history(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    return await service.get_rental_history(customer_id)


@router.get("/{customer_id}/payments", response_model=list[PaymentResponse])
async def get_payment_history(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    return await service.get_payment_history(customer_id)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: UUID,
    body: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    return await service.update_customer_info(
        customer_id,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        store_id=body.store_id,
    )


@router.patch("/{customer_id}/deactivate", response_model=CustomerResponse)
async def deactivate_customer(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    return await service.deactivate_customer(customer_id)


@router.patch("/{customer_id}/activate", response_model=CustomerResponse)
async def activate_customer(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    return await service.activate_customer(customer_id)
