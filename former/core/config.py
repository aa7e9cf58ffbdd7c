from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./former.db"
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"

    # Week buckets start on this weekday (Monday=0 ... Sunday=6)
    WEEK_START_DAY: int = 6

    # Trailing calendar-day window used for the "logged this week" count
    RECENT_LOG_WINDOW_DAYS: int = 7

    # Create the demo profile + 12 weeks of readings on startup if the DB is empty
    SEED_DEMO_DATA: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


settings = Settings()
