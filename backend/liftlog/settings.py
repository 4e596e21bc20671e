from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    API_VERSION: str = "dev"
    ALLOW_ORIGINS: str = "*"

    # Full URL wins over the DB_* parts (sqlite for local runs and tests)
    DB_URL: str | None = None
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "liftlog"

    # Training defaults
    DEFAULT_BAR_WEIGHT: float = 45.0
    DEFAULT_UNIT: str = "lb"
    REST_EXTEND_SECONDS: int = 30

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
