from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database import get_db
from models.system import AcademySetting, DEFAULT_SETTINGS
from schemas.settings import AcademySettingsUpdate
from typing import Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/settings", tags=["Academy Settings"])


def load_settings(db: Session) -> Dict[str, str]:
    """All known keys; rows override the defaults"""
    values = dict(DEFAULT_SETTINGS)
    for row in db.query(AcademySetting).all():
        if row.value is not None:
            values[row.key] = row.value
    return values


@router.get("")
def get_settings(db: Session = Depends(get_db)):
    return load_settings(db)


@router.put("")
def update_settings(data: AcademySettingsUpdate, db: Session = Depends(get_db)):
    """Upsert only the keys that were sent"""
    updates = data.model_dump(exclude_none=True)
    for key, value in updates.items():
        row = db.query(AcademySetting).filter(AcademySetting.key == key).first()
        if row:
            row.value = str(value)
        else:
            db.add(AcademySetting(key=key, value=str(value)))
    db.commit()
    logger.info("Academy settings updated: %s", ", ".join(sorted(updates)) or "nothing")
    return load_settings(db)
