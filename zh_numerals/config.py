"""
Runtime configuration from environment variables.

A `.env` file in the working directory is loaded first (python-dotenv), so
local overrides never need to be exported by hand. Real environment
variables win over `.env` entries.

    ZH_NUMERALS_STYLE       default glyph style: standard | financial
    ZH_NUMERALS_LOG_LEVEL   logging level name, e.g. INFO
    ZH_NUMERALS_MAX_INPUT   max characters per HTTP request body
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .glyphs import GlyphStyle

ENV_PREFIX = "ZH_NUMERALS_"


class Settings(BaseModel):
    """Validated settings. Bad values fail loudly at load time."""

    style: GlyphStyle = GlyphStyle.STANDARD
    log_level: str = "WARNING"
    max_input: int = Field(default=1_048_576, gt=0)

    @field_validator("style", mode="before")
    @classmethod
    def _lower_style(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from `ZH_NUMERALS_*` environment variables.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    if dotenv:
        load_dotenv()

    raw: dict[str, str] = {}
    for field_name in Settings.model_fields:
        value = os.environ.get(ENV_PREFIX + field_name.upper())
        if value is not None:
            raw[field_name] = value
    return Settings(**raw)
