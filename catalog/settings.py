from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    ENVIRONMENT: str = "development"

    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///./catalog.db"
    DB_ECHO: bool = False
    DB_INIT_RETRY_INTERVAL: int = 2
    DB_INIT_MAX_RETRIES: int = 5

    # Catalog settings
    CATALOG_URL_PREFIX: str = "/catalog"

    # Fold the dependent-books check into the DELETE statement itself
    ATOMIC_DELETE_GUARD: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/catalog_errors.log"


app_settings = Settings()
