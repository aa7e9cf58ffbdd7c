from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.orm import Session

from former.core import store
from former.core.db import get_db
from former.models.user import Sex, UnitSystem

router = APIRouter(tags=["users"])


class UserIn(BaseModel):
    email: str | None = None
    name: str | None = None
    sex: Sex | None = None
    height_cm: float | None = None
    unit_system: UnitSystem | None = None
    start_weight_kg: float | None = None
    target_weight_kg: float | None = None

    # Only email may be cleared; validators run on fields present in the body
    @field_validator("name", "sex", "unit_system")
    @classmethod
    def validate_not_null(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        return value

    @field_validator("height_cm", "start_weight_kg", "target_weight_kg")
    @classmethod
    def validate_positive(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        if value <= 0:
            raise ValueError("must be greater than 0 when provided")
        return value


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None
    name: str
    sex: Sex
    height_cm: float
    unit_system: UnitSystem
    start_weight_kg: float
    target_weight_kg: float


@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = store.get_user(db, user_id)
    if user is None:
        raise HTTPException(404, f"User {user_id} not found")
    return user


@router.put("/users/{user_id}", response_model=UserOut)
def put_user(user_id: str, payload: UserIn, db: Session = Depends(get_db)):
    """
    Create the profile on first call (missing fields take defaults),
    afterwards update only the fields sent.
    """
    return store.upsert_user(db, user_id, **payload.model_dump(exclude_unset=True))
