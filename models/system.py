from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from database import Base

# Known keys, with the value used when a row is missing
DEFAULT_SETTINGS = {
    "academy_name": "",
    "academy_phone": "",
    "fee_elementary": "0",
    "fee_middle": "0",
    "fee_high": "0",
}

class AcademySetting(Base):
    __tablename__ = "academy_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(50), nullable=False, unique=True, index=True)
    value = Column(Text, nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
