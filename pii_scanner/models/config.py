"""Configuration models."""

import os
import tempfile
from typing import Annotated, List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _default_workers() -> int:
    return os.cpu_count() or 4


def _split_csv(value):
    """Accept either a list or a comma-separated string (as stored in user settings)."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


def normalize_extensions(value) -> List[str]:
    """Lowercase extensions and make sure each starts with a dot."""
    value = _split_csv(value)
    return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PII_SCANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scanning
    max_workers: int = Field(default_factory=_default_workers, ge=1, description="Max concurrent files")
    included_extensions: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [".docx", ".xlsx", ".pdf", ".txt", ".csv", ".log", ".json"],
        description="File extensions to scan",
    )
    excluded_folders: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["Windows", "System32", "Program Files", "AppData"],
        description="Folder names skipped during enumeration",
    )
    excluded_extensions: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [".exe", ".dll", ".sys", ".tmp"],
        description="File extensions never scanned",
    )

    # Results
    top_risky_files_limit: int = Field(20, ge=1, description="Size of the top risky files ranking")
    reports_root: str = Field(
        default_factory=lambda: os.path.join(tempfile.gettempdir(), "PiiScanner"),
        description="Directory under which per-scan reports are written",
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_file: Optional[str] = Field("pii_scanner.log", description="Log file path")

    # Security
    enable_pii_redaction: bool = Field(True, description="Redact PII in logs")

    @field_validator("included_extensions", "excluded_extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value):
        return normalize_extensions(value)

    @field_validator("excluded_folders", mode="before")
    @classmethod
    def _normalize_folders(cls, value):
        return _split_csv(value)


# Global settings instance
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reset_settings() -> None:
    """Drop the cached settings (useful for testing)."""
    global settings
    settings = None
