from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from former.core.db import Base, get_db
from former.core.metrics import lb_to_kg
from former.main import app
from former.models import Reading, Sex, UnitSystem, UserProfile


@pytest.fixture
def demo_user():
    return UserProfile(
        id="demo",
        name="Emily",
        email="emily@example.com",
        sex=Sex.F,
        height_cm=168.0,
        unit_system=UnitSystem.IMPERIAL,
        start_weight_kg=lb_to_kg(182),
        target_weight_kg=lb_to_kg(150),
    )


@pytest.fixture
def build_reading():
    """Factory for transient Reading rows with sensible defaults."""

    def _build(**overrides):
        fields = {
            "user_id": "demo",
            "taken_at": datetime(2024, 3, 6, 7, 30),
            "weight_kg": lb_to_kg(180),
            "body_fat_pct": 30.0,
            "subcut_fat_pct": 20.0,
            "visceral_fat_idx": 8.0,
            "body_water_pct": 52.0,
            "skeletal_muscle_pct": 38.0,
            "muscle_mass_kg": lb_to_kg(65),
            "bone_mass_kg": lb_to_kg(7),
            "protein_pct": 18.0,
            "bmr_kcal": 1480,
            "metabolic_age": 31,
            "notes": "",
        }
        fields.update(overrides)
        return Reading(**fields)

    return _build


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
