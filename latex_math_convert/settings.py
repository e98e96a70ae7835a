from __future__ import annotations

import codecs
import os
from typing import Tuple

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "LATEX_MATH_CONVERT_"

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".md", ".markdown")

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConverterSettings(BaseModel):
    """Runtime options shared by the walker, the I/O layer and the CLI."""

    extensions: Tuple[str, ...] = Field(default=DEFAULT_EXTENSIONS, min_length=1)
    encoding: str = Field(default="utf-8", min_length=1)
    log_level: str = "INFO"

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        normalized = []
        for ext in value:
            ext = str(ext).strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in normalized:
                normalized.append(ext)
        return tuple(normalized)

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError as e:
            raise ValueError(f"unknown encoding: {value}") from e

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls) -> "ConverterSettings":
        """Build settings from ``LATEX_MATH_CONVERT_*`` environment variables.

        Unset or empty variables keep their defaults.
        """

        values = {}
        for name in ("extensions", "encoding", "log_level"):
            raw = (os.getenv(ENV_PREFIX + name.upper()) or "").strip()
            if raw:
                values[name] = raw
        return cls(**values)
