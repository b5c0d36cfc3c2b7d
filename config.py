"""Configuration for the process environment reader"""
from pathlib import Path
from typing import Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Settings loaded from PROCENV_* environment variables"""

    model_config = SettingsConfigDict(env_prefix="PROCENV_", case_sensitive=False)

    # Subprocess settings
    root_directory: Path = Field(default_factory=Path.cwd, description="Working directory for diagnostic commands")
    procstat_command: str = Field(default="procstat", min_length=1, description="procstat executable")
    ps_command: str = Field(default="ps", min_length=1, description="ps executable")

    # Platform override (linux, osx, windows); detected when unset
    platform_override: Optional[str] = Field(default=None, description="Force a platform family")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    # Service identification
    service_name: str = Field(default="process-env-reader", description="Service name")

    @field_validator("root_directory")
    @classmethod
    def validate_root_directory(cls, v):
        if not v.is_dir():
            raise ValueError(f"root_directory does not exist: {v}")
        return v

    @field_validator("platform_override", mode="before")
    @classmethod
    def normalize_platform_override(cls, v):
        if v is None or v == "":
            return None
        value = str(v).strip().lower()
        if value not in ("linux", "osx", "windows"):
            raise ValueError(f"Unknown platform override: {v}")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_file")
    @classmethod
    def ensure_log_directory(cls, v):
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v
