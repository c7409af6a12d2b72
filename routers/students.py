from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from database import get_db
from models.students import Student
from routers.settings import load_settings
from schemas.students import StudentCreate, StudentOut, BillingUpdate, BillingInfoOut
from services.fee_defaults import standard_fee
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/students", tags=["Students"])


def get_student_or_404(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id, Student.status == True).first()
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


# ===============================
#   STUDENT CRUD
# ===============================

@router.get("", response_model=List[StudentOut])
def list_students(search: str = "", db: Session = Depends(get_db)):
    query = db.query(Student).filter(Student.status == True)
    if search:
        query = query.filter(Student.name.ilike(f"%{search}%"))
    return query.order_by(Student.name).all()


@router.post("", response_model=StudentOut, status_code=201)
def add_student(data: StudentCreate, db: Session = Depends(get_db)):
    fee = data.tuition_fee
    if fee == 0:
        # Unset fee -> default for the grade tier
        fee = standard_fee(data.grade, load_settings(db))

    student = Student(**data.model_dump(exclude={"tuition_fee"}), tuition_fee=fee)
    db.add(student)
    db.commit()
    db.refresh(student)
    logger.info("Student %s added (fee=%s, day=%s)", student.id, fee, student.payment_day)
    return student


@router.get("/{student_id}", response_model=StudentOut)
def get_student(student_id: int, db: Session = Depends(get_db)):
    return get_student_or_404(db, student_id)


@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    """Soft delete, payment history stays"""
    student = get_student_or_404(db, student_id)
    student.status = False
    db.commit()
    logger.info("Student %s deactivated", student_id)
    return {"message": "Deleted"}


# ===============================
#   BILLING INFO (fee / due day)
# ===============================

@router.get("/{student_id}/billing", response_model=BillingInfoOut)
def get_billing_info(student_id: int, db: Session = Depends(get_db)):
    """Values for the edit dialog; a 0 fee is pre-filled with the grade default"""
    student = get_student_or_404(db, student_id)
    default_fee = standard_fee(student.grade, load_settings(db))
    current = student.tuition_fee or 0
    return {
        "student_id": student.id,
        "tuition_fee": current or default_fee,
        "payment_day": student.payment_day or 1,
        "standard_fee": default_fee,
        "suggested": current == 0 and default_fee > 0,
    }


@router.put("/{student_id}/billing", response_model=StudentOut)
def update_billing_info(student_id: int, data: BillingUpdate, db: Session = Depends(get_db)):
    student = get_student_or_404(db, student_id)
    student.tuition_fee = data.tuition_fee
    student.payment_day = data.payment_day
    db.commit()
    db.refresh(student)
    logger.info("Student %s billing set to fee=%s day=%s", student_id, data.tuition_fee, data.payment_day)
    return student
