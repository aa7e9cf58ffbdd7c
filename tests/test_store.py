from datetime import date, datetime

import pytest

from former.core import store
from former.core.analytics import compute_analytics
from former.core.metrics import lb_to_kg
from former.core.seed import DEMO_USER_ID, seed_demo_data
from former.models import Reading, Sex, UnitSystem


def test_upsert_creates_with_defaults(db_session):
    user = store.upsert_user(db_session, "u1", name="Sam")
    assert user.id == "u1"
    assert user.name == "Sam"
    assert user.sex == Sex.F
    assert user.unit_system == UnitSystem.METRIC
    assert user.start_weight_kg == 80.0
    assert user.target_weight_kg == 65.0


def test_upsert_updates_only_given_fields(db_session):
    store.upsert_user(db_session, "u1", name="Sam", height_cm=180.0)
    user = store.upsert_user(db_session, "u1", target_weight_kg=72.0)
    assert user.name == "Sam"
    assert user.height_cm == 180.0
    assert user.target_weight_kg == 72.0


def test_upsert_without_id_generates_one(db_session):
    user = store.upsert_user(db_session, name="Anon")
    assert user.id
    assert store.get_user(db_session, user.id) is user


def test_reading_crud(db_session):
    store.upsert_user(db_session, "u1")
    late = store.create_reading(db_session, "u1", taken_at=datetime(2024, 3, 8, 7), weight_kg=79.5)
    early = store.create_reading(db_session, "u1", taken_at=datetime(2024, 3, 1, 7), weight_kg=80.0)

    assert [r.id for r in store.list_readings(db_session, "u1")] == [early.id, late.id]

    updated = store.update_reading(db_session, late.id, notes="after run", weight_kg=79.2)
    assert updated.notes == "after run"
    assert updated.weight_kg == 79.2
    assert updated.taken_at == datetime(2024, 3, 8, 7)

    assert store.delete_reading(db_session, early.id) is True
    assert [r.id for r in store.list_readings(db_session, "u1")] == [late.id]


def test_missing_rows(db_session):
    assert store.get_user(db_session, "nobody") is None
    assert store.update_reading(db_session, 999, weight_kg=70.0) is None
    assert store.delete_reading(db_session, 999) is False


def test_list_readings_is_per_user(db_session):
    store.upsert_user(db_session, "a")
    store.upsert_user(db_session, "b")
    store.create_reading(db_session, "a", taken_at=datetime(2024, 3, 1), weight_kg=70.0)
    store.create_reading(db_session, "b", taken_at=datetime(2024, 3, 1), weight_kg=90.0)
    assert [r.weight_kg for r in store.list_readings(db_session, "a")] == [70.0]


class TestSeed:
    def test_seeds_demo_profile_and_twelve_weeks(self, db_session):
        user = seed_demo_data(db_session, today=date(2024, 3, 10))
        assert user.id == DEMO_USER_ID
        assert user.unit_system == UnitSystem.IMPERIAL
        assert user.start_weight_kg == pytest.approx(lb_to_kg(182))

        readings = store.list_readings(db_session, user.id)
        assert len(readings) == 12
        assert readings[0].weight_kg == pytest.approx(lb_to_kg(182 - 2.1))
        assert readings[-1].weight_kg == pytest.approx(lb_to_kg(182 - 4 * 2.1 - 4 * 1.9 - 4 * 1.4))

    def test_is_idempotent(self, db_session):
        first = seed_demo_data(db_session)
        second = seed_demo_data(db_session)
        assert first.id == second.id
        assert db_session.query(Reading).count() == 12

    def test_seeded_data_feeds_analytics(self, db_session):
        user = seed_demo_data(db_session, today=date(2024, 3, 10))
        result = compute_analytics(user, store.list_readings(db_session, user.id), today=date(2024, 3, 10))
        assert result.weekly_change_label == "Down 1.4 lb vs last week"
        assert result.progress_percent == pytest.approx((4 * 2.1 + 4 * 1.9 + 4 * 1.4) / 32)
        assert result.fat_loss_pct > 0
