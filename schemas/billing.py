"""
Billing value types - validated snapshot of a student and their payments.

Rows from the database (or any loosely shaped dict) are converted into these
before they reach services.ledger, so the evaluator only ever sees clean data.
"""
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional


def clamp_payment_day(day) -> int:
    """Unset/0 means the 1st; anything else is clamped into 1..31"""
    if not day:
        return 1
    return max(1, min(int(day), 31))


def as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if value == "":
        return None
    return value


class StudentBilling(BaseModel):
    id: Optional[int] = None
    enrollment_date: Optional[date] = None
    tuition_fee: int = Field(0, ge=0)
    payment_day: int = 1

    class Config:
        from_attributes = True

    @field_validator("enrollment_date", mode="before")
    @classmethod
    def _enrollment_date(cls, v):
        return as_date(v)

    @field_validator("tuition_fee", mode="before")
    @classmethod
    def _fee_default(cls, v):
        return 0 if v is None else v

    @field_validator("payment_day", mode="before")
    @classmethod
    def _clamp_day(cls, v):
        return clamp_payment_day(v)


class PaymentRecord(BaseModel):
    student_id: Optional[int] = None
    payment_date: date
    amount: int = 0

    class Config:
        from_attributes = True

    @field_validator("payment_date", mode="before")
    @classmethod
    def _payment_date(cls, v):
        return as_date(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_default(cls, v):
        return 0 if v is None else v
