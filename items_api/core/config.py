from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    PROJECT_NAME: str = "Items service"
    API_PREFIX: str = ""

    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database connection
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "appdb"
    DB_POOL_SIZE: int = 10

    DATABASE_URL: str | None = None

    # Startup retry against a database that may come up after us
    DB_CONNECT_ATTEMPTS: int = 15
    DB_CONNECT_DELAY: float = 5.0

    LOG_LEVEL: str = "INFO"
    SQLALCHEMY_LOG_LEVEL: str = "WARNING"
    UVICORN_ACCESS_LOG: bool = False
    REQUEST_LOGS_ENABLED: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def sqlalchemy_database_uri(self) -> str:
        """Build the SQLAlchemy database URI."""
        if self.DATABASE_URL is not None:
            return str(self.DATABASE_URL)
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return cached settings object to avoid re-parsing env vars."""
    return Settings()
