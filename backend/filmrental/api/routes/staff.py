"""Staff Routes — registration, lookup and activation."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from filmrental.api.dependencies import get_staff_service
from filmrental.schemas.account import StaffCreate, StaffResponse, StaffUpdate
from filmrental.services.staff_service import StaffService

router = APIRouter(prefix="/api/v1/staff", tags=["staff"])


@router.post(
    "", response_model=StaffResponse, status_code=status.HTTP_201_CREATED,
)
async def register_staff(
    body: StaffCreate, service: StaffService = Depends(get_staff_service),
):
    return await service.register_staff(
        body.first_name, body.last_name, body.email, body.username, body.store_id,
    )


@router.get("/active", response_model=list[StaffResponse])
async def list_active_staff(service: StaffService = Depends(get_staff_service)):
    return await service.get_active_staff()


@router.get("/store/{store_id}", response_model=list[StaffResponse])
async def list_store_staff(
    store_id: UUID, service: StaffService = Depends(get_staff_service),
):
    return await service.get_staff_by_store(store_id)


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: UUID, service: StaffService = Depends(get_staff_service),
):
    return await service.get_staff_by_id(staff_id)


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: UUID,
    body: StaffUpdate,
    service: StaffService = Depends(get_staff_service),
):
    return await service.update_staff_info(
        staff_id,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
    )


@router.patch("/{staff_id}/deactivate", response_model=StaffResponse)
async def deactivate_staff(
    staff_id: UUID, service: StaffService = Depends(get_staff_service),
):
    return await service.deactivate_staff(staff_id)


@router.patch("/{staff_id}/activate", response_model=StaffResponse)
async def activate_staff(
    staff_id: UUID, service: StaffService = Depends(get_staff_service),
):
    return await service.activate_staff(staff_id)
