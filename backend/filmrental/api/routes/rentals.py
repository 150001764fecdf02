"""Rental Routes — rent, return, extend, delete, late fee and listings."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from filmrental.api.dependencies import get_rental_service
from filmrental.schemas.rental import (
    LateFeeResponse, RentalCreate, RentalExtend, RentalResponse, RentalStateResponse,
)
from filmrental.services.rental_service import RentalService

router = APIRouter(prefix="/api/v1/rentals", tags=["rentals"])


@router.post(
    "", response_model=RentalResponse, status_code=status.HTTP_201_CREATED,
)
async def create_rental(
    body: RentalCreate, service: RentalService = Depends(get_rental_service),
):
    return await service.rent_film(
        body.customer_id, body.film_id, body.store_id, body.staff_id,
    )


@router.get("", response_model=list[RentalResponse])
async def list_rentals(service: RentalService = Depends(get_rental_service)):
    return await service.get_all_rentals()


@router.get("/active", response_model=list[RentalResponse])
async def list_active_rentals(service: RentalService = Depends(get_rental_service)):
    return await service.get_active_rentals()


@router.get("/overdue", response_model=list[RentalResponse])
async def list_overdue_rentals(service: RentalService = Depends(get_rental_service)):
    return await service.get_overdue_rentals()


@router.get("/customer/{customer_id}", response_model=list[RentalResponse])
async def list_customer_rentals(
    customer_id: UUID, service: RentalService = Depends(get_rental_service),
):
    return await service.get_rentals_by_customer(customer_id)


@router.post("/{rental_id}/return", response_model=RentalResponse)
async def return_rental(
    rental_id: UUID, service: RentalService = Depends(get_rental_service),
):
    return await service.return_film(rental_id)


@router.patch("/{rental_id}/extend", response_model=RentalResponse)
async def extend_rental(
    rental_id: UUID,
    body: RentalExtend,
    service: RentalService = Depends(get_rental_service),
):
    return await service.extend_rental(rental_id, body.extra_days)


@router.get("/{rental_id}/late-fee", response_model=LateFeeResponse)
async def get_late_fee(
    rental_id: UUID, service: RentalService = Depends(get_rental_service),
):
    fee = await service.calculate_late_fee(rental_id)
    return LateFeeResponse(rental_id=rental_id, late_fee=fee)


@router.get("/{rental_id}/state", response_model=RentalStateResponse)
async def get_rental_state(
    rental_id: UUID, service: RentalService = Depends(get_rental_service),
):
    state = await service.get_rental_state(rental_id)
    return RentalStateResponse(rental_id=rental_id, state=state)


@router.delete("/{rental_id}")
async def delete_rental(
    rental_id: UUID, service: RentalService = Depends(get_rental_service),
):
    await service.delete_rental(rental_id)
    return {"message": "Rental deleted successfully"}
