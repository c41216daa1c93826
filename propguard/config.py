from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"
    PROPGUARD_DB_URL: str = "sqlite+aiosqlite:///./propguard.db"

    # sqlite only: how long a writer waits on a locked database before failing
    SQLITE_BUSY_TIMEOUT_S: float = 30.0

    # --- Minimal B2B Auth (API key) ---
    # Send: X-API-Key: <key>
    # User identity itself comes from the auth gateway as X-User-Id.
    API_KEY: str | None = None

    # --- Identity resolution ---
    DEFAULT_COUNTRY: str = "US"

    # --- Community alerts ---
    ALERT_MESSAGE_MAX_LEN: int = 200


settings = Settings()
