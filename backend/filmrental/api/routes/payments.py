"""Payment Routes — record payments and query the ledger."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import AwareDatetime

from filmrental.api.dependencies import get_payment_service
from filmrental.schemas.payment import (
    CustomerTotalResponse, PaymentCreate, PaymentResponse, ReceiptResponse,
    RevenueResponse,
)
from filmrental.services.payment_service import PaymentService

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.post(
    "", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_payment(
    body: PaymentCreate, service: PaymentService = Depends(get_payment_service),
):
    return await service.process_rental_payment(
        body.rental_id, body.customer_id, body.staff_id,
    )


@router.get("/customer/{customer_id}", response_model=list[PaymentResponse])
async def list_customer_payments(
    customer_id: UUID, service: PaymentService = Depends(get_payment_service),
):
    return await service.get_payments_by_customer(customer_id)


@router.get("/customer/{customer_id}/total", response_model=CustomerTotalResponse)
async def get_customer_total(
    customer_id: UUID, service: PaymentService = Depends(get_payment_service),
):
    total = await service.get_total_paid_by_customer(customer_id)
    return CustomerTotalResponse(customer_id=customer_id, total=total)


@router.get("/date-range", response_model=list[PaymentResponse])
async def list_payments_in_range(
    start_date: AwareDatetime = Query(...),
    end_date: AwareDatetime = Query(...),
    service: PaymentService = Depends(get_payment_service),
):
    return await service.get_payments_by_date_range(start_date, end_date)


@router.get("/revenue", response_model=RevenueResponse)
async def get_revenue(
    start_date: AwareDatetime = Query(...),
    end_date: AwareDatetime = Query(...),
    service: PaymentService = Depends(get_payment_service),
):
    revenue = await service.get_revenue_by_date_range(start_date, end_date)
    return RevenueResponse(
        start_date=start_date, end_date=end_date, revenue=revenue,
    )


@router.get("/{payment_id}/receipt", response_model=ReceiptResponse)
async def get_receipt(
    payment_id: UUID, service: PaymentService = Depends(get_payment_service),
):
    receipt = await service.get_payment_receipt(payment_id)
    return ReceiptResponse.model_validate(receipt)
