"""
Storage helpers for profiles and readings.

Thin CRUD over the ORM models. Missing rows come back as None / False;
callers decide whether that is an error.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session

from former.models.reading import Reading
from former.models.user import Sex, UnitSystem, UserProfile

logger = logging.getLogger(__name__)

# Used when a profile is created without the field
PROFILE_DEFAULTS: dict[str, Any] = {
    "email": None,
    "name": "Explorer",
    "sex": Sex.F,
    "height_cm": 165.0,
    "unit_system": UnitSystem.METRIC,
    "start_weight_kg": 80.0,
    "target_weight_kg": 65.0,
}


def get_user(db: Session, user_id: str) -> Optional[UserProfile]:
    return db.get(UserProfile, user_id)


def upsert_user(db: Session, user_id: Optional[str] = None, **fields: Any) -> UserProfile:
    """
    Create the profile if it does not exist yet, otherwise apply `fields`
    as a partial update.
    """
    user = get_user(db, user_id) if user_id else None

    if user is None:
        values = {**PROFILE_DEFAULTS, **fields}
        user = UserProfile(id=user_id or str(uuid.uuid4()), **values)
        db.add(user)
        logger.info("Created profile %s", user.id)
    else:
        for field, value in fields.items():
            setattr(user, field, value)
        logger.info("Updated profile %s (%s)", user.id, ", ".join(fields) or "no fields")

    db.commit()
    db.refresh(user)
    return user


def list_readings(db: Session, user_id: str) -> list[Reading]:
    return (
        db.query(Reading)
        .filter(Reading.user_id == user_id)
        .order_by(Reading.taken_at.asc())
        .all()
    )


def get_reading(db: Session, reading_id: int) -> Optional[Reading]:
    return db.get(Reading, reading_id)


def create_reading(db: Session, user_id: str, **fields: Any) -> Reading:
    reading = Reading(user_id=user_id, **fields)
    db.add(reading)
    db.commit()
    db.refresh(reading)
    logger.info("Logged reading %s for user %s at %s", reading.id, user_id, reading.taken_at)
    return reading


def update_reading(db: Session, reading_id: int, **fields: Any) -> Optional[Reading]:
    reading = get_reading(db, reading_id)
    if reading is None:
        return None

    for field, value in fields.items():
        setattr(reading, field, value)

    db.commit()
    db.refresh(reading)
    return reading


def delete_reading(db: Session, reading_id: int) -> bool:
    reading = get_reading(db, reading_id)
    if reading is None:
        return False

    db.delete(reading)
    db.commit()
    logger.info("Deleted reading %s", reading_id)
    return True
