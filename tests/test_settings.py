from __future__ import annotations

import json
from pathlib import Path

import pytest

from optdoc.errors import SettingsError
from optdoc.settings import (
    GeneratorSettings,
    MissingOptionsPolicy,
    OutputFormat,
    load_settings,
)


def test_load_settings_defaults_without_path() -> None:
    settings = load_settings(None)

    assert settings.comment_marker == "#"
    assert settings.missing_options is MissingOptionsPolicy.ERROR
    assert settings.output_format is OutputFormat.SHELL


def test_load_settings_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "optdoc.json"
    path.write_text(
        json.dumps({"comment_marker": "//", "missing_options": "help-only", "output_format": "html"}),
        encoding="utf-8",
    )

    assert load_settings(path) == GeneratorSettings(
        comment_marker="//",
        missing_options=MissingOptionsPolicy.HELP_ONLY,
        output_format=OutputFormat.HTML,
    )


def test_load_settings_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "optdoc.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsError, match="not valid JSON"):
        load_settings(path)


def test_load_settings_rejects_unknown_format(tmp_path: Path) -> None:
    path = tmp_path / "optdoc.json"
    path.write_text(json.dumps({"output_format": "pdf"}), encoding="utf-8")

    with pytest.raises(SettingsError, match="Invalid settings"):
        load_settings(path)


def test_load_settings_rejects_blank_marker(tmp_path: Path) -> None:
    path = tmp_path / "optdoc.json"
    path.write_text(json.dumps({"comment_marker": " "}), encoding="utf-8")

    with pytest.raises(SettingsError):
        load_settings(path)


def test_load_settings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="Failed to read"):
        load_settings(tmp_path / "absent.json")
