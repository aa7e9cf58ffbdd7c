# former/api/v1/readings.py

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from former.core import store
from former.core.db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["readings"])


# ---------- Pydantic schemas ----------

def _as_naive_utc(value: datetime | None) -> datetime | None:
    # Stored timestamps are naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ReadingFields(BaseModel):
    # Core composition
    body_fat_pct: float | None = None
    subcut_fat_pct: float | None = None
    visceral_fat_idx: float | None = None

    body_water_pct: float | None = None

    # Muscle & bone
    skeletal_muscle_pct: float | None = None
    muscle_mass_kg: float | None = None
    bone_mass_kg: float | None = None

    protein_pct: float | None = None

    bmr_kcal: int | None = None
    metabolic_age: int | None = None

    notes: str | None = None


class ReadingIn(ReadingFields):
    taken_at: datetime = Field(..., description="ISO8601 timestamp of measurement")
    weight_kg: float

    @field_validator("taken_at")
    @classmethod
    def normalize_taken_at(cls, value):
        return _as_naive_utc(value)

    @field_validator("weight_kg")
    @classmethod
    def validate_weight_positive(cls, value):
        if value <= 0:
            raise ValueError("weight_kg must be greater than 0")
        return value


class ReadingUpdate(ReadingFields):
    taken_at: datetime | None = None
    weight_kg: float | None = None

    # Validators only run on fields present in the body, so None here is an explicit null
    @field_validator("taken_at")
    @classmethod
    def normalize_taken_at(cls, value):
        if value is None:
            raise ValueError("taken_at cannot be null")
        return _as_naive_utc(value)

    @field_validator("weight_kg")
    @classmethod
    def validate_weight_positive(cls, value):
        if value is None:
            raise ValueError("weight_kg cannot be null")
        if value <= 0:
            raise ValueError("weight_kg must be greater than 0 when provided")
        return value


class ReadingOut(ReadingFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    taken_at: datetime
    weight_kg: float


# ---------- Endpoints ----------

def _require_user(db: Session, user_id: str):
    user = store.get_user(db, user_id)
    if user is None:
        logger.warning("Unknown user %s", user_id)
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user


@router.get("/users/{user_id}/readings", response_model=list[ReadingOut])
def list_user_readings(user_id: str, db: Session = Depends(get_db)):
    """
    All readings for a user, oldest first.
    """
    _require_user(db, user_id)
    return store.list_readings(db, user_id)


@router.post("/users/{user_id}/readings", response_model=ReadingOut, status_code=201)
def log_reading(user_id: str, payload: ReadingIn, db: Session = Depends(get_db)):
    _require_user(db, user_id)
    return store.create_reading(db, user_id, **payload.model_dump())


@router.patch("/readings/{reading_id}", response_model=ReadingOut)
def patch_reading(reading_id: int, payload: ReadingUpdate, db: Session = Depends(get_db)):
    """
    Partial update: only fields present in the body are written.
    """
    reading = store.update_reading(db, reading_id, **payload.model_dump(exclude_unset=True))
    if reading is None:
        logger.warning("Reading %s not found for update", reading_id)
        raise HTTPException(status_code=404, detail=f"Reading {reading_id} not found")
    return reading


@router.delete("/readings/{reading_id}")
def remove_reading(reading_id: int, db: Session = Depends(get_db)):
    if not store.delete_reading(db, reading_id):
        logger.warning("Reading %s not found for delete", reading_id)
        raise HTTPException(status_code=404, detail=f"Reading {reading_id} not found")
    return {"status": "ok", "deleted": reading_id}
