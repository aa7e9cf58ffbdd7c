from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from former.core.config import settings
from former.core.db import get_db
from former.models import Reading, UserProfile

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Liveness plus row counts, so an empty or unseeded database is visible."""
    users = db.scalar(select(func.count()).select_from(UserProfile))
    readings = db.scalar(select(func.count()).select_from(Reading))
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "seed_demo_data": settings.SEED_DEMO_DATA,
        "users": users,
        "readings": readings,
    }
