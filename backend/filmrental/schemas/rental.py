"""Rental Schemas — rent/extend requests and rental responses."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from filmrental.core.domain_types import RentalState


class RentalCreate(BaseModel):
    customer_id: UUID
    film_id: UUID
    store_id: UUID
    staff_id: UUID


class RentalExtend(BaseModel):
    extra_days: int = Field(ge=1)


class RentalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    rental_date: datetime
    return_date: datetime
    inventory_id: UUID
    customer_id: UUID
    staff_id: UUID
    status: str


class LateFeeResponse(BaseModel):
    rental_id: UUID
    late_fee: Decimal


class RentalStateResponse(BaseModel):
    rental_id: UUID
    state: RentalState
