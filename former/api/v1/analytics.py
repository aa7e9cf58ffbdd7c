from datetime import date as DateType

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from former.core import store
from former.core.analytics import Analytics, compute_analytics
from former.core.config import settings
from former.core.db import get_db

router = APIRouter(tags=["analytics"])


@router.get("/users/{user_id}/analytics", response_model=Analytics)
def get_user_analytics(user_id: str, today: str | None = None, db: Session = Depends(get_db)):
    """
    Dashboard analytics recomputed from the user's current readings.
    `today` (YYYY-MM-DD) pins the trailing log-count window; defaults to the server date.
    """
    as_of = None
    if today is not None:
        try:
            as_of = DateType.fromisoformat(today)
        except ValueError:
            raise HTTPException(400, f"Invalid date format: {today}, expected YYYY-MM-DD")

    user = store.get_user(db, user_id)
    if user is None:
        raise HTTPException(404, f"User {user_id} not found")

    return compute_analytics(
        user,
        store.list_readings(db, user_id),
        today=as_of,
        first_day=settings.WEEK_START_DAY,
        window_days=settings.RECENT_LOG_WINDOW_DAYS,
    )
