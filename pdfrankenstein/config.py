"""Application configuration loaded from the environment."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for the external tools and staging area."""

    # External programs
    qpdf_bin: str = "qpdf"
    pdftocairo_bin: str = "pdftocairo"
    inkscape_bin: str = "inkscape"

    # Thumbnails are scaled so their longest side is this many pixels
    thumbnail_size: int = 200

    # Resolution hint stamped on the locked background image
    background_dpi: int = 300

    # Parent directory for per-session staging directories (system temp if unset)
    staging_root: Optional[str] = None

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "PDFRANKENSTEIN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("thumbnail_size", "background_dpi")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
