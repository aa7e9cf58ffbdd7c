import logging
from datetime import datetime, time, timedelta, date as DateType
from typing import Optional

from sqlalchemy.orm import Session

from former.core.metrics import lb_to_kg
from former.core.store import create_reading, upsert_user
from former.models.user import Sex, UnitSystem, UserProfile

logger = logging.getLogger(__name__)

DEMO_USER_ID = "demo-user"
DEMO_WEEKS = 12


def seed_demo_data(db: Session, today: Optional[DateType] = None) -> UserProfile:
    """
    Create the demo profile (182 lb -> 150 lb goal) and 12 weekly readings
    ending roughly this week. No-op if any profile already exists.
    """
    existing = db.query(UserProfile).first()
    if existing is not None:
        return existing

    user = upsert_user(
        db,
        DEMO_USER_ID,
        name="Emily",
        email="emily@example.com",
        sex=Sex.F,
        height_cm=168.0,
        unit_system=UnitSystem.IMPERIAL,
        start_weight_kg=lb_to_kg(182),
        target_weight_kg=lb_to_kg(150),
    )

    start = datetime.combine(today or DateType.today(), time(7, 30)) - timedelta(weeks=DEMO_WEEKS)
    weight_lb = 182.0
    body_fat = 32.0
    muscle_lb = 65.0
    hydration_base = 52.0

    for week in range(DEMO_WEEKS):
        if week < 4:
            weight_lb -= 2.1
        elif week < 8:
            weight_lb -= 1.9
        else:
            weight_lb -= 1.4
        body_fat -= 0.4 if week % 2 == 0 else 0.3
        if week % 3 == 0:
            muscle_lb -= 0.1

        create_reading(
            db,
            user.id,
            taken_at=start + timedelta(days=week * 7 + 2),
            weight_kg=lb_to_kg(weight_lb),
            body_fat_pct=body_fat,
            subcut_fat_pct=body_fat * 0.7,
            visceral_fat_idx=9 - week * 0.1,
            body_water_pct=hydration_base + (-1.5 if week % 4 == 0 else 0.8),
            skeletal_muscle_pct=40 - week * 0.1,
            muscle_mass_kg=lb_to_kg(muscle_lb),
            bone_mass_kg=lb_to_kg(7.5),
            protein_pct=17 + week * 0.05,
            bmr_kcal=1480 - week * 5,
            metabolic_age=32 - week // 4,
            notes="Long walk and strength session." if week % 3 == 0 else "Steady routines.",
        )

    logger.info("Seeded demo profile %s with %d readings", user.id, DEMO_WEEKS)
    return user
