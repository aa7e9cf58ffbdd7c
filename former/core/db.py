from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from former.core.config import settings

Base = declarative_base()

engine = None
SessionLocal = None

if settings.DATABASE_URL:
    connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
    engine = create_engine(settings.DATABASE_URL, future=True, connect_args=connect_args)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
