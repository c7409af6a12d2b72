from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional


class SettleRequest(BaseModel):
    payment_date: Optional[date] = None   # defaults to today
    amount: Optional[int] = Field(None, ge=0)  # defaults to the student's fee
    method: str = "card"
    memo: Optional[str] = None


class PaymentOut(BaseModel):
    id: int
    student_id: int
    payment_date: date
    amount: int
    method: Optional[str] = None
    memo: Optional[str] = None
    billing_month: str

    class Config:
        from_attributes = True


class RosterRow(BaseModel):
    id: int
    name: str
    grade: Optional[str] = ""
    school_name: Optional[str] = None
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None
    tuition_fee: int
    payment_day: int
    is_paid: bool
    paid_date: Optional[date] = None
    total_unpaid: int


class Roster(BaseModel):
    year: int
    month: int
    prev: str
    next: str
    total_collected: int
    unpaid_count: int
    students: List[RosterRow]


class ArrearsOut(BaseModel):
    student_id: int
    year: int
    month: int
    is_paid: bool
    total_unpaid: int
    unpaid_months: List[str]
