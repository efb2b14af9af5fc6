from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "liftbook"
    # Full SQLAlchemy URL; wins over the DB_* parts when set (tests use sqlite)
    DB_URL: str | None = None

    # Auth (tokens are issued by the auth service; we only verify them)
    SECRET_KEY: str = "dev-secret-change-me"       # set a strong one in prod
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    LOG_LEVEL: str = "INFO"

    # Week buckets for streaks are cut at local midnight in this zone
    TIMEZONE: str = "UTC"
    # Sessions per week a week needs to count towards the consistency streak
    CONSISTENCY_MIN_SESSIONS: int = 3
    # Defaults to the catalog bundled in liftbook/data
    ACHIEVEMENT_CATALOG_PATH: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

@lru_cache
def get_settings() -> Settings:
    return Settings()
