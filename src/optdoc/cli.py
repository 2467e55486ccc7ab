"""CLI entry and generation pipeline wiring."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .constants import ERROR_PREFIX, OUTPUT_FORMATS, SOURCE_ENCODING, WARNING_PREFIX
from .docs import render_html, render_markdown
from .emitter import render_script
from .errors import MissingOptionsSectionError, OptdocError, SettingsError
from .extractor import extract_option_block
from .logging_utils import log_event, setup_logging
from .models import OptionBlock
from .path_mapping import map_path
from .settings import GeneratorSettings, MissingOptionsPolicy, OutputFormat, load_settings


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    app_root_abs = Path(__file__).resolve().parent
    cwd = Path.cwd()

    try:
        log_file = _resolve(args.log_file, app_root_abs, cwd)
        setup_logging(str(log_file) if log_file is not None else None)

        source_path = _resolve(args.script, app_root_abs, cwd)
        config_path = _resolve(args.config, app_root_abs, cwd)
        output_path = _resolve(args.output, app_root_abs, cwd)
        settings = _apply_overrides(load_settings(config_path), args)

        log_event(
            "app_start",
            source_file=str(source_path),
            output_format=settings.output_format.value,
            config_file=str(config_path) if config_path else None,
            log_file=str(log_file) if log_file else None,
        )

        try:
            lines = source_path.read_text(encoding=SOURCE_ENCODING).splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise OptdocError(f"Failed to read source file: {source_path}: {exc}") from exc

        block = extract_with_policy(lines, settings)
        rendered = render(block, settings, title=args.title or source_path.name)

        if output_path is None:
            sys.stdout.write(rendered)
        else:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered, encoding="utf-8")
        log_event(
            "app_stop",
            reason="done",
            output_file=str(output_path) if output_path else None,
        )
        return 0
    except OptdocError as exc:
        log_event("app_error", level=logging.ERROR, error_type=type(exc).__name__, error=str(exc))
        print(render_error(str(exc)), file=sys.stderr)
        return 1


def extract_with_policy(lines: list[str], settings: GeneratorSettings) -> OptionBlock:
    """Extract a block, applying the missing-options policy from settings."""
    try:
        return extract_option_block(lines, comment_marker=settings.comment_marker)
    except MissingOptionsSectionError as exc:
        if settings.missing_options is not MissingOptionsPolicy.HELP_ONLY:
            raise
        print(f"{WARNING_PREFIX} {exc} Generating help only.", file=sys.stderr)
        return OptionBlock.help_only(exc.help_text)


def render(block: OptionBlock, settings: GeneratorSettings, *, title: str) -> str:
    if settings.output_format is OutputFormat.SHELL:
        return render_script(block)
    if settings.output_format is OutputFormat.MARKDOWN:
        rendered = render_markdown(block, title=title)
    else:
        rendered = render_html(block, title=title)
    log_event(
        "docs_rendered",
        output_format=settings.output_format.value,
        option_count=len(block.options),
    )
    return rendered


def render_error(message: str) -> str:
    return f"{ERROR_PREFIX} {message}"


def _apply_overrides(settings: GeneratorSettings, args: argparse.Namespace) -> GeneratorSettings:
    updates: dict[str, object] = {}
    if args.format is not None:
        updates["output_format"] = OutputFormat(args.format)
    if args.allow_missing_options:
        updates["missing_options"] = MissingOptionsPolicy.HELP_ONLY
    if args.comment_marker is not None:
        updates["comment_marker"] = args.comment_marker
    if not updates:
        return settings
    try:
        return GeneratorSettings.model_validate({**settings.model_dump(), **updates})
    except ValidationError as exc:
        raise SettingsError(f"Invalid command-line settings: {exc}") from exc


def _resolve(raw: str | None, app_root_abs: Path, cwd: Path) -> Path | None:
    if raw is None:
        return None
    return map_path(raw, app_root_abs=app_root_abs, base_dir=cwd)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="optdoc",
        description=(
            "Generate bash option parsing, or documentation, "
            "from a script's leading comment block."
        ),
    )
    parser.add_argument(
        "script",
        help="Script whose leading comment block declares the options.",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: shell, or the config file's output_format).",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write output to this path instead of stdout.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional JSON settings file.",
    )
    parser.add_argument(
        "--allow-missing-options",
        action="store_true",
        help="Emit help-only output when the comment block has no Options: section.",
    )
    parser.add_argument(
        "--comment-marker",
        default=None,
        help="Comment marker that starts help lines (default: #).",
    )
    parser.add_argument(
        "--title",
        default=None,
        help="Title for markdown/html output (default: the script's file name).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write structured logs to this file.",
    )
    return parser
