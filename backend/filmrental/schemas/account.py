"""Account Schemas — customer and staff registration, updates and responses.

Invariants:
    - Names 1-45 chars, stripped; emails validated by pattern
    - Update models are partial: None means "leave unchanged"
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class _Names(BaseModel):
    @field_validator("first_name", "last_name", check_fields=False)
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class CustomerCreate(_Names):
    first_name: str = Field(min_length=1, max_length=45)
    last_name: str = Field(min_length=1, max_length=45)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    store_id: UUID


class CustomerUpdate(_Names):
    first_name: str | None = Field(None, min_length=1, max_length=45)
    last_name: str | None = Field(None, min_length=1, max_length=45)
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    store_id: UUID | None = None


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: str
    store_id: UUID
    active: bool
    created_at: datetime


class CustomerProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    customer: CustomerResponse
    active_rentals: int
    total_rentals: int
    total_spent: Decimal


class StaffCreate(_Names):
    first_name: str = Field(min_length=1, max_length=45)
    last_name: str = Field(min_length=1, max_length=45)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    username: str = Field(min_length=3, max_length=16, pattern=r"^[A-Za-z0-9_.-]+$")
    store_id: UUID


class StaffUpdate(_Names):
    first_name: str | None = Field(None, min_length=1, max_length=45)
    last_name: str | None = Field(None, min_length=1, max_length=45)
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)


class StaffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    email: str
    username: str
    store_id: UUID
    active: bool
