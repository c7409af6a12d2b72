from sqlalchemy import Column, Integer, String, Date, Boolean
from sqlalchemy.orm import relationship
from database import Base

class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)

    # --- ACADEMIC INFO ---
    grade = Column(String(20), default="")          # e.g. "초5", "중2", "고1"
    school_name = Column(String(100), nullable=True)

    # --- PARENT CONTACT ---
    parent_name = Column(String(100), nullable=True)
    parent_phone = Column(String(20), nullable=True)

    # --- BILLING ---
    enrollment_date = Column(Date, nullable=True)   # first billing month
    tuition_fee = Column(Integer, default=0)        # flat monthly amount, 0 = unset
    payment_day = Column(Integer, default=1)        # nominal due day (1-31)

    status = Column(Boolean, default=True)

    # --- RELATIONSHIPS ---
    payments = relationship("Payment", back_populates="student", cascade="all, delete-orphan")
