from pydantic import BaseModel, Field
from typing import Optional


class AcademySettingsUpdate(BaseModel):
    academy_name: Optional[str] = None
    academy_phone: Optional[str] = None
    fee_elementary: Optional[int] = Field(None, ge=0)
    fee_middle: Optional[int] = Field(None, ge=0)
    fee_high: Optional[int] = Field(None, ge=0)

    class Config:
        extra = "forbid"
