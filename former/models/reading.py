# former/models/reading.py

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from former.core.db import Base


class Reading(Base):
    """
    One body-composition measurement logged by a user.
    All masses are kilograms; unit system only affects display.
    """

    __tablename__ = "readings"
    __table_args__ = (Index("idx_readings_user_time", "user_id", "taken_at"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), ForeignKey("user_profiles.id"), nullable=False)

    # When the measurement happened (used for ordering and week buckets)
    taken_at = Column(DateTime, nullable=False)

    weight_kg = Column(Float, nullable=False)

    # Core composition
    body_fat_pct = Column(Float)
    subcut_fat_pct = Column(Float)
    visceral_fat_idx = Column(Float)     # scale "index" (e.g. 9)

    body_water_pct = Column(Float)

    # Muscle & bone
    skeletal_muscle_pct = Column(Float)
    muscle_mass_kg = Column(Float)
    bone_mass_kg = Column(Float)

    protein_pct = Column(Float)

    bmr_kcal = Column(Integer)
    metabolic_age = Column(Integer)

    notes = Column(Text)

    user = relationship("UserProfile", back_populates="readings")

    def __repr__(self):
        return f"<Reading(id={self.id}, user_id={self.user_id}, taken_at={self.taken_at})>"
