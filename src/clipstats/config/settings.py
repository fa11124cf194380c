"""
Application settings and configuration management.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from clipstats import __version__
from clipstats.models.metrics import (
    DEFAULT_FALLBACK_PATHS,
    DEFAULT_USER_AGENT,
    ExtractionConfig,
)

_PACKAGE_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="clipstats")
    app_version: str = Field(default=__version__)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # HTTP server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)
    cors_origins: Annotated[list[str], NoDecode] = Field(default=["*"])
    static_dir: Path = Field(default=_PACKAGE_STATIC_DIR)

    # Browser discovery
    browser_executable_path: Path | None = Field(default=None)
    browser_fallback_paths: Annotated[list[Path], NoDecode] = Field(
        default=list(DEFAULT_FALLBACK_PATHS)
    )
    use_bundled_browser: bool = Field(default=True)

    # Extraction timing
    navigation_timeout_seconds: float = Field(default=60.0, gt=0)
    fragment_timeout_seconds: float = Field(default=15.0, gt=0)
    extraction_timeout_seconds: float = Field(default=120.0, gt=0)

    # Page identity
    viewport_width: int = Field(default=1200, gt=0)
    viewport_height: int = Field(default=2000, gt=0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("browser_fallback_paths", mode="before")
    @classmethod
    def parse_fallback_paths(cls, v: str | list[str | Path]) -> list[Path]:
        """Parse fallback paths from a comma-separated string or list."""
        if isinstance(v, str):
            return [Path(p.strip()) for p in v.split(",") if p.strip()]
        return [Path(p) for p in v]

    @field_validator("browser_executable_path", mode="before")
    @classmethod
    def empty_path_is_none(cls, v: str | Path | None) -> Path | None:
        """Treat an empty override as unset."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return Path(v)

    @field_validator("static_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Ensure directory paths are Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    def extraction_config(self) -> ExtractionConfig:
        """Build the immutable configuration handed to ExtractionService."""
        return ExtractionConfig(
            executable_path_override=self.browser_executable_path,
            fallback_paths=tuple(self.browser_fallback_paths),
            use_bundled_browser=self.use_bundled_browser,
            navigation_timeout_seconds=self.navigation_timeout_seconds,
            fragment_timeout_seconds=self.fragment_timeout_seconds,
            extraction_timeout_seconds=self.extraction_timeout_seconds,
            viewport_width=self.viewport_width,
            viewport_height=self.viewport_height,
            user_agent=self.user_agent,
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Global settings instance
settings = get_settings()
