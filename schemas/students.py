from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional

from schemas.billing import as_date, clamp_payment_day


# 1. Admission form
class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    grade: str = ""
    school_name: Optional[str] = None
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None
    enrollment_date: Optional[date] = None
    tuition_fee: int = Field(0, ge=0)  # 0 -> grade default
    payment_day: int = 1

    @field_validator("enrollment_date", mode="before")
    @classmethod
    def _enrollment_date(cls, v):
        # blank form field -> no enrollment date
        return as_date(v)

    @field_validator("payment_day", mode="before")
    @classmethod
    def _clamp_day(cls, v):
        return clamp_payment_day(v)


# 2. Billing edit dialog (fee + due day only)
class BillingUpdate(BaseModel):
    tuition_fee: int = Field(..., ge=0)
    payment_day: int = 1

    @field_validator("payment_day", mode="before")
    @classmethod
    def _clamp_day(cls, v):
        return clamp_payment_day(v)


class StudentOut(BaseModel):
    id: int
    name: str
    grade: Optional[str] = ""
    school_name: Optional[str] = None
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None
    enrollment_date: Optional[date] = None
    tuition_fee: int
    payment_day: int

    class Config:
        from_attributes = True


class BillingInfoOut(BaseModel):
    student_id: int
    tuition_fee: int
    payment_day: int
    standard_fee: int
    suggested: bool  # tuition_fee was pre-filled from the grade default
