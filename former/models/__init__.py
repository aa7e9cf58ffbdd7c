from former.models.user import Sex, UnitSystem, UserProfile
from former.models.reading import Reading

__all__ = [
    "Sex",
    "UnitSystem",
    "UserProfile",
    "Reading",
]
