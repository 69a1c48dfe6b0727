from functools import lru_cache
from pathlib import Path
from typing import Optional

import reportlab
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _bundled_font_path() -> Path:
    return Path(reportlab.__file__).resolve().parent / "fonts" / "Vera.ttf"


class Settings(BaseSettings):
    """Service settings, loaded from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "PDF Watermark API"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Bitstream Vera by default, which has Latin glyphs only. Thai names need a
    # font that covers them, e.g. FONT_PATH=/srv/fonts/Sarabun-Regular.ttf.
    font_path: Optional[Path] = None
    default_line1: str = "CONFIDENTIAL"

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    # base64 inflates documents by about a third
    max_body_bytes: int = 50 * 1024 * 1024

    def configure_paths(self) -> None:
        """Fill in the default font location when none was configured."""
        self.font_path = Path(self.font_path or _bundled_font_path()).expanduser()


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
