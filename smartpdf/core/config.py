from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SmartPDF Compressor"
    app_version: str = "0.1.0"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    temp_dir: Optional[Path] = None
    public_dir: Optional[Path] = None

    pdf_services_client_id: Optional[str] = None
    pdf_services_client_secret: Optional[str] = None

    max_upload_bytes: int = 100 * 1024 * 1024

    allow_origins: list[str] = Field(
        default_factory=lambda: ["https://konskall.github.io", "http://localhost:3000"]
    )

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    def resolved_temp_dir(self) -> Path:
        return (self.temp_dir or (self.base_dir / "uploads")).resolve()

    def resolved_public_dir(self) -> Path:
        return (self.public_dir or (self.base_dir / "public")).resolve()

    def ensure_temp_dir(self) -> Path:
        """Create the scratch directory for uploads if it is missing."""
        directory = self.resolved_temp_dir()
        directory.mkdir(parents=True, exist_ok=True)
        self.temp_dir = directory
        return directory


@lru_cache()
def get_settings() -> Settings:
    return Settings()
