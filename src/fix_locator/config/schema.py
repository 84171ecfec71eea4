"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LocatorConfig(BaseModel):
    """Code location configuration."""

    min_text_anchor_length: int = Field(3, ge=1, le=50)
    text_window: int = Field(5, ge=0, le=50, description="Lines scanned around a text hit")
    class_window: int = Field(10, ge=0, le=100, description="Lines scanned around a class hit")
    comment_lookback: int = Field(10, ge=0, le=100, description="Lines scanned for open comments")


class FinderConfig(BaseModel):
    """Candidate file search configuration."""

    source_extensions: list[str] = [".ts", ".tsx", ".js", ".jsx", ".vue", ".svelte"]
    excluded_paths: list[str] = ["node_modules"]
    max_ranked_files: int = Field(10, ge=1, le=100)
    auto_select_max_results: int = Field(3, ge=1, le=20)
    preview_context_lines: int = Field(1, ge=0, le=10)

    @field_validator("source_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Ensure every extension starts with a dot."""
        for ext in v:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"Invalid file extension: {ext}. Expected: .ext")
        return [ext.lower() for ext in v]


class PreferencesConfig(BaseModel):
    """Persisted preference storage configuration."""

    path: Path = Path("~/.config/fix-locator/preferences.json")
    repo_key: str = Field("domain-repos", min_length=1)
    search_type_key: str = Field("search-types", min_length=1)


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("/var/log/fix-locator/fix-locator.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class FixLocatorConfig(BaseSettings):
    """Root configuration for fix-locator."""

    locator: LocatorConfig = LocatorConfig()
    finder: FinderConfig = FinderConfig()
    preferences: PreferencesConfig = PreferencesConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="FIX_LOCATOR_",
        env_nested_delimiter="__",
    )
