from sqlalchemy import Column, Integer, String, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
import datetime


def billing_month_of(day: datetime.date) -> str:
    """Calendar month key of a payment date: 2024-02-12 -> '2024-02'"""
    return f"{day.year:04d}-{day.month:02d}"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)

    payment_date = Column(Date, nullable=False, default=datetime.date.today)
    amount = Column(Integer, default=0)              # not checked against the fee
    method = Column(String(20), default="card")     # card, cash, transfer
    memo = Column(String(255), nullable=True)

    # "YYYY-MM" of payment_date, one settlement per student per month
    billing_month = Column(String(7), nullable=False)

    __table_args__ = (
        UniqueConstraint('student_id', 'billing_month', name='uq_payment_student_month'),
    )

    student = relationship("Student", back_populates="payments")
