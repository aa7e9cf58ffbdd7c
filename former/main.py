import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from former.core.config import settings
from former.core.db import Base, SessionLocal, engine
from former.core.seed import seed_demo_data
from former.api.v1.health import router as health_router
from former.api.v1.users import router as users_router
from former.api.v1.readings import router as readings_router
from former.api.v1.analytics import router as analytics_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def init_db():
    if not engine:
        return
    Base.metadata.create_all(bind=engine)
    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("FORMER API ready (environment=%s)", settings.ENVIRONMENT)
    yield


app = FastAPI(title="FORMER", version="1.0.0", lifespan=lifespan)

app.include_router(health_router, prefix="/v1")
app.include_router(users_router, prefix="/v1")
app.include_router(readings_router, prefix="/v1")
app.include_router(analytics_router, prefix="/v1")
