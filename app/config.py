from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False

    SERVICE_NAME: str = "shelf-composition"
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # SHELF DEFAULTS
    # =================================================================
    SHELF_DEFAULT_LIMIT: int = 12
    # Seeds the in-memory RANDOM filter rule; leave unset for real randomness
    SHELF_RANDOM_SEED: int | None = None

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level(self) -> str:
        """Effective log level, forced to DEBUG when debug mode is on."""
        if self.debug:
            return "DEBUG"
        return self.LOG_LEVEL.upper()


settings = Settings()
