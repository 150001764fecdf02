"""Payment Schemas — payment requests, ledger rows, totals and receipts."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from filmrental.schemas.rental import RentalResponse


class PaymentCreate(BaseModel):
    rental_id: UUID
    customer_id: UUID
    staff_id: UUID


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    amount: Decimal
    payment_date: datetime
    rental_id: UUID
    customer_id: UUID
    staff_id: UUID


class CustomerTotalResponse(BaseModel):
    customer_id: UUID
    total: Decimal


class RevenueResponse(BaseModel):
    start_date: datetime
    end_date: datetime
    revenue: Decimal


class ReceiptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment: PaymentResponse
    rental: RentalResponse
    customer_name: str
    film_title: str
