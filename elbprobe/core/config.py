# Application settings and environment variable loading (Pydantic BaseSettings)

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from elbprobe import __version__


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Server binding
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Display only, never used to gate behaviour
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "APP_ENV", "NODE_ENV"),
    )

    # Request log files land here as <YYYY-MM-DD>.log
    log_dir: Path = Field(default=Path("logs"))
    log_level: str = Field(default="INFO")

    app_version: str = Field(default=__version__)

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


def get_settings() -> Settings:
    """Build settings from the current environment. Call once at startup."""
    return Settings()
