"""
MRI Configuration Module
========================

Centralized configuration management using Pydantic Settings.

Loads configuration from:
    1. Environment variables
    2. .env file (if present)
    3. Default values

Usage:
    from mri.config import settings

    print(settings.log_level)
    print(settings.driver_weight_tolerance)

Author: MRI Team
Version: 1.0.0
"""

from functools import lru_cache
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Naming convention: UPPER_SNAKE_CASE in env, lower_snake_case in code.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # =========================================================================
    # Application Settings
    # =========================================================================

    app_name: str = Field(default="MRI", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    # =========================================================================
    # Scoring Precision
    # =========================================================================

    driver_weight_tolerance: float = Field(
        default=1e-6,
        gt=0.0,
        description="Allowed deviation of the driver weight sum from 1.0"
    )
    score_decimal_places: int = Field(
        default=1,
        ge=0,
        description="Fractional digits kept on presented percentages"
    )

    # =========================================================================
    # Default Driver Weights
    # =========================================================================

    driver_weight_sitting: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Weight for sustained sitting"
    )
    driver_weight_movement: float = Field(
        default=0.20,
        ge=0.0,
        le=1.0,
        description="Weight for lack of movement"
    )
    driver_weight_upper_limb: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Weight for upper limb strain"
    )
    driver_weight_neck: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Weight for neck posture"
    )
    driver_weight_work_organisation: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Weight for work organisation (breaks, pacing)"
    )
    driver_weight_workstation: float = Field(
        default=0.10,
        ge=0.0,
        le=1.0,
        description="Weight for workstation setup"
    )

    @property
    def default_driver_weights(self) -> Dict[str, float]:
        """Default driver weights keyed by driver id, in display order."""
        return {
            "sitting": self.driver_weight_sitting,
            "movement": self.driver_weight_movement,
            "upper_limb": self.driver_weight_upper_limb,
            "neck": self.driver_weight_neck,
            "work_organisation": self.driver_weight_work_organisation,
            "workstation": self.driver_weight_workstation,
        }

    # =========================================================================
    # Risk Bands
    # =========================================================================

    risk_threshold_high: float = Field(
        default=60.0,
        ge=0.0,
        le=100.0,
        description="Overall score at or above which risk is high"
    )
    risk_threshold_medium: float = Field(
        default=30.0,
        ge=0.0,
        le=100.0,
        description="Overall score at or above which risk is medium"
    )

    # =========================================================================
    # History
    # =========================================================================

    history_max_records: int = Field(
        default=1000,
        gt=0,
        description="Snapshots kept per organization site in memory"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once.

    Returns:
        Settings instance
    """
    return Settings()


# Convenience alias
settings = get_settings()
