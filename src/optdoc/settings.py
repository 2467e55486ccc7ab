"""Generator settings and settings-file loading."""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from .constants import DEFAULT_COMMENT_MARKER
from .errors import SettingsError


class MissingOptionsPolicy(StrEnum):
    ERROR = "error"
    HELP_ONLY = "help-only"


class OutputFormat(StrEnum):
    SHELL = "shell"
    MARKDOWN = "markdown"
    HTML = "html"


class GeneratorSettings(BaseModel):
    comment_marker: str = DEFAULT_COMMENT_MARKER
    missing_options: MissingOptionsPolicy = MissingOptionsPolicy.ERROR
    output_format: OutputFormat = OutputFormat.SHELL

    @field_validator("comment_marker")
    @classmethod
    def _marker_must_be_visible(cls, value: str) -> str:
        if value == "" or any(ch.isspace() for ch in value):
            raise ValueError("comment_marker must be non-empty and contain no whitespace")
        return value


def load_settings(path: Path | None) -> GeneratorSettings:
    """Load settings from a JSON file. Returns defaults when path is None."""
    if path is None:
        return GeneratorSettings()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Failed to read settings file: {path}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Settings file is not valid JSON: {path}: {exc}") from exc
    try:
        return GeneratorSettings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings in {path}: {exc}") from exc
