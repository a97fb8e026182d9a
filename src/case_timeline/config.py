"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Timeline engine configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Email thread reduction
    email_char_budget: int = Field(1000, ge=0)  # 0 = unlimited
    truncation_marker: str = "..."
    boundary_snap_distance: int = Field(100, ge=0)

    # Preview text
    preview_max_length: int = Field(400, gt=0)
    preview_placeholder: str = "Click to view content..."

    # Per-item UI state defaults
    history_expanded_default: bool = False
    item_expanded_default: bool = True

    # Data fetch
    page_size: int = Field(20, gt=0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
