"""
Oilseed Investment Strategy Report - Configuration

Loads settings from environment variables with sensible defaults.
"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    @property
    def project_root(self) -> Path:
        """Return project root directory."""
        return PROJECT_ROOT

    # Application
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Report output
    OUTPUT_DIR: Path = Field(default=PROJECT_ROOT / "reports")
    REPORT_FILENAME: str = Field(default="Oilseed_Investment_Strategy.pdf")

    # Dashboard fixtures (market, strategy and risk JSON documents)
    DATA_DIR: Path = Field(default=PROJECT_ROOT / "data")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
