from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "Survey Participant API"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000

    data_dir: str = "storage"
    upload_dir: str | None = None
    client_dir: str = "client"
    # e.g. "https://example.com"; empty means root-relative upload URLs
    base_url: str = ""

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    max_upload_files: int = 20
    max_json_body_bytes: int = 2 * 1024 * 1024

    @property
    def data_root(self) -> Path:
        return Path(self.data_dir)

    @property
    def upload_root(self) -> Path:
        if self.upload_dir:
            return Path(self.upload_dir)
        return self.data_root / "uploads"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
