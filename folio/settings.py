from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    CONTENT_ROOT: str = "data"
    SERIES_CATALOG_FILE: str = ""

    # Rendering
    READING_WORDS_PER_MINUTE: int = 200
    TOC_DEPTH: str = "1-6"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def content_path(self) -> Path:
        return Path(self.CONTENT_ROOT)

    @property
    def series_catalog_path(self) -> Path | None:
        if not self.SERIES_CATALOG_FILE:
            return None
        return Path(self.SERIES_CATALOG_FILE)


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
