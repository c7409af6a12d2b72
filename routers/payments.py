"""
Payment Manager Router - monthly settlement and arrears
Roster for a viewed month, per-student arrears and one-click settlement
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from database import get_db
from models.students import Student
from models.payments import Payment, billing_month_of
from routers.students import get_student_or_404
from schemas.billing import StudentBilling, PaymentRecord
from schemas.payments import SettleRequest, PaymentOut, Roster, ArrearsOut
from services.ledger import (
    BillingPeriod,
    compute_arrears,
    find_payment_for_month,
    is_settled_for_month,
    unpaid_periods,
)
from utils.timezone_helpers import academy_today
from collections import defaultdict
from typing import List, Optional
import datetime
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/payments", tags=["Payment Manager"])

# Viewed year range; prev/next labels must stay inside datetime's 1..9999
MIN_YEAR = 1900
MAX_YEAR = 9998


# =====================
# HELPER FUNCTIONS
# =====================

def resolve_period(year: Optional[int], month: Optional[int], today: datetime.date) -> BillingPeriod:
    """Viewed month; missing parts fall back to today's"""
    if year is None:
        year = today.year
    if month is None:
        month = today.month
    return BillingPeriod(year, month)


def find_settlement(db: Session, student_id: int, billing_month: str) -> Optional[Payment]:
    return db.query(Payment).filter(
        Payment.student_id == student_id,
        Payment.billing_month == billing_month
    ).first()


def payment_records(payments) -> List[PaymentRecord]:
    return [PaymentRecord.model_validate(p) for p in payments]


# =====================
# ROSTER API
# =====================

@router.get("/roster", response_model=Roster)
def get_roster(
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    search: str = "",
    today: datetime.date = Depends(academy_today),
    db: Session = Depends(get_db),
):
    """
    Paid / unpaid badge for the viewed month plus the cumulative amount owed
    - total_collected: sum of fees of students paid in this month
    - unpaid_count: students without a payment in this month
    """
    period = resolve_period(year, month, today)

    query = db.query(Student).filter(Student.status == True)
    if search:
        query = query.filter(Student.name.ilike(f"%{search}%"))
    students = query.order_by(Student.name).all()

    # One query for the whole ledger, grouped per student
    by_student = defaultdict(list)
    if students:
        ids = [s.id for s in students]
        for p in db.query(Payment).filter(Payment.student_id.in_(ids)).all():
            by_student[p.student_id].append(PaymentRecord.model_validate(p))

    rows = []
    for s in students:
        billing = StudentBilling.model_validate(s)
        payments = by_student[s.id]
        paid = find_payment_for_month(billing, payments, period.year, period.month)
        rows.append({
            "id": s.id,
            "name": s.name,
            "grade": s.grade,
            "school_name": s.school_name,
            "parent_name": s.parent_name,
            "parent_phone": s.parent_phone,
            "tuition_fee": billing.tuition_fee,
            "payment_day": billing.payment_day,
            "is_paid": paid is not None,
            "paid_date": paid.payment_date if paid else None,
            "total_unpaid": compute_arrears(billing, payments, period.year, period.month, today),
        })

    return {
        "year": period.year,
        "month": period.month,
        "prev": period.shift(-1).label,
        "next": period.next().label,
        "total_collected": sum(r["tuition_fee"] for r in rows if r["is_paid"]),
        "unpaid_count": sum(1 for r in rows if not r["is_paid"]),
        "students": rows,
    }


# =====================
# PER-STUDENT APIs
# =====================

@router.get("/students/{student_id}/arrears", response_model=ArrearsOut)
def get_student_arrears(
    student_id: int,
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    today: datetime.date = Depends(academy_today),
    db: Session = Depends(get_db),
):
    student = get_student_or_404(db, student_id)
    period = resolve_period(year, month, today)

    billing = StudentBilling.model_validate(student)
    payments = payment_records(student.payments)
    owed = unpaid_periods(billing, payments, period.year, period.month, today)

    return {
        "student_id": student.id,
        "year": period.year,
        "month": period.month,
        "is_paid": is_settled_for_month(billing, payments, period.year, period.month),
        "total_unpaid": compute_arrears(billing, payments, period.year, period.month, today),
        "unpaid_months": [p.label for p in owed],
    }


@router.get("/students/{student_id}/history", response_model=List[PaymentOut])
def get_student_history(student_id: int, db: Session = Depends(get_db)):
    get_student_or_404(db, student_id)
    return db.query(Payment).filter(
        Payment.student_id == student_id
    ).order_by(Payment.payment_date.desc(), Payment.id.desc()).all()


# =====================
# SETTLEMENT APIs
# =====================

@router.post("/{student_id}/settle", response_model=PaymentOut, status_code=201)
def settle_month(
    student_id: int,
    req: SettleRequest,
    today: datetime.date = Depends(academy_today),
    db: Session = Depends(get_db),
):
    """
    Record this month's tuition for a student.
    The payment's own date decides which month it settles; a month already
    holding a payment is rejected with 409.
    """
    student = get_student_or_404(db, student_id)
    pay_date = req.payment_date or today
    billing_month = billing_month_of(pay_date)

    if find_settlement(db, student_id, billing_month):
        logger.warning("Student %s already settled for %s", student_id, billing_month)
        raise HTTPException(status_code=409, detail=f"{billing_month} is already paid")

    payment = Payment(
        student_id=student_id,
        payment_date=pay_date,
        amount=req.amount if req.amount is not None else (student.tuition_fee or 0),
        method=req.method,
        memo=req.memo or f"Tuition for {billing_month}",
        billing_month=billing_month,
    )
    db.add(payment)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent settlement of the same month
        db.rollback()
        logger.warning("Student %s already settled for %s", student_id, billing_month)
        raise HTTPException(status_code=409, detail=f"{billing_month} is already paid")
    db.refresh(payment)

    logger.info("Student %s settled %s (%s, %s)", student_id, billing_month, payment.amount, payment.method)
    return payment


@router.delete("/{payment_id}")
def delete_payment(payment_id: int, db: Session = Depends(get_db)):
    """Remove a payment recorded by mistake"""
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    billing_month, student_id = payment.billing_month, payment.student_id
    db.delete(payment)
    db.commit()
    logger.info("Payment %s (%s, student %s) deleted", payment_id, billing_month, student_id)
    return {"message": "Deleted"}
