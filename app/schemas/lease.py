from datetime import date, datetime
from pydantic import BaseModel, Field


class LeaseCreate(BaseModel):
    landlord_name: str = Field(min_length=1, max_length=200)
    landlord_email: str | None = None
    tenant_name: str = Field(min_length=1, max_length=200)
    tenant_email: str | None = None
    property_name: str = Field(min_length=1, max_length=200)
    unit_name: str = Field(min_length=1, max_length=100)
    unit_type: str = Field(min_length=1, max_length=50)
    start_date: date
    end_date: date | None = None
    rent_amount: float = Field(gt=0)
    billing_day_of_month: int = Field(default=1, ge=1, le=31)


class LeaseRead(BaseModel):
    id: int
    landlord_name: str
    landlord_email: str | None
    tenant_name: str
    tenant_email: str | None
    property_name: str
    unit_name: str
    unit_type: str
    start_date: date
    end_date: date | None
    rent_amount: float
    billing_day_of_month: int
    tenant_signed_at: datetime | None
    landlord_signed_at: datetime | None
    created_at: datetime

    class Config:
        from_attributes = True
