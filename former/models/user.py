import enum

from sqlalchemy import Column, Enum as SQLEnum, Float, String
from sqlalchemy.orm import relationship

from former.core.db import Base


class Sex(str, enum.Enum):
    F = "F"
    M = "M"
    OTHER = "Other"


class UnitSystem(str, enum.Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String(64), primary_key=True)
    email = Column(String(255))
    name = Column(String(255), nullable=False)
    sex = Column(SQLEnum(Sex), nullable=False, default=Sex.F)
    height_cm = Column(Float, nullable=False)

    # Display preference only; weights are always stored in kg
    unit_system = Column(SQLEnum(UnitSystem), nullable=False, default=UnitSystem.METRIC)

    start_weight_kg = Column(Float, nullable=False)
    target_weight_kg = Column(Float, nullable=False)

    readings = relationship(
        "Reading",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Reading.taken_at",
    )

    def __repr__(self):
        return f"<UserProfile(id={self.id}, name={self.name})>"
