"""Mini README: Centralised configuration for GastoZero.

Structure:
    * GastoZeroSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor shared by the CLI and the web app.

Usage:
    Variables use the ``GASTOZERO_`` prefix (for example
    ``GASTOZERO_DATA_DIRECTORY=~/gastos``) and may live in a ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class GastoZeroSettings(BaseSettings):
    """Runtime configuration for the tracker."""

    environment: str = Field(
        "development",
        description="Environment label; \"production\" disables auto-reload unless the CLI overrides it.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted incomes and expenses documents.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web interface listens on.",
        ge=1,
        le=65535,
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING...).",
    )

    class Config:
        env_prefix = "GASTOZERO_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories and make sure the data directory exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        """Accept level names in any casing."""

        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level


@lru_cache()
def get_settings() -> GastoZeroSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return GastoZeroSettings()
