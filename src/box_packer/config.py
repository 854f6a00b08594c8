"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import os

# Load .env only when present (e.g. local dev); does not override existing env
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


class PackerSettings(BaseModel):
    """Settings shared by the CLI and the HTTP API."""

    log_level: str = Field(default="WARNING", description="Logging level name")
    redistribute: bool = Field(default=True, description="Even out box weights after packing")
    max_redistribution_passes: int = Field(
        default=1000,
        ge=0,
        description="Cap on accepted weight moves, 0 for no cap",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def get_settings() -> PackerSettings:
    """
    Build settings from BOX_PACKER_* environment variables.

    Malformed values raise pydantic's ValidationError naming the setting.
    """
    return PackerSettings(
        log_level=_env("BOX_PACKER_LOG_LEVEL", "WARNING"),
        redistribute=_env("BOX_PACKER_REDISTRIBUTE", "true"),
        max_redistribution_passes=_env("BOX_PACKER_MAX_REDISTRIBUTION_PASSES", "1000"),
    )
