"""Leading comment block extraction.

The help block is the first contiguous run of comment lines, ended by the
first blank line. Non-comment lines inside the run are skipped without ending
it. Once a line reading `Options:` has been seen, each further comment line is
tried, in order, as an option header, a `Default:` line, or a continuation of
the current option's description. Lines matching none of these stay in the
help text and otherwise have no effect.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .constants import (
    DEFAULT_COMMENT_MARKER,
    DEFAULT_LINE_PATTERN,
    OPTION_HEADER_PATTERN,
    OPTIONS_SECTION_PATTERN,
)
from .errors import DuplicateShortOptionError, MissingOptionsSectionError
from .logging_utils import log_event
from .models import ClassifiedLine, LineKind, Option, OptionBlock

_OPTIONS_SECTION_RE = re.compile(OPTIONS_SECTION_PATTERN)
_OPTION_HEADER_RE = re.compile(OPTION_HEADER_PATTERN, flags=re.ASCII)
_DEFAULT_LINE_RE = re.compile(DEFAULT_LINE_PATTERN)


def classify_line(
    raw_line: str,
    *,
    comment_marker: str = DEFAULT_COMMENT_MARKER,
    in_options: bool = False,
    indent_width: int | None = None,
) -> ClassifiedLine:
    """Classify one source line given the extractor's current state."""
    line = raw_line.rstrip("\r\n")
    if line.strip() == "":
        return ClassifiedLine(LineKind.BLANK)

    text = strip_comment_marker(line, comment_marker)
    if text is None:
        return ClassifiedLine(LineKind.NON_COMMENT)

    if not in_options:
        if _OPTIONS_SECTION_RE.match(text):
            return ClassifiedLine(LineKind.OPTIONS_START, text)
        return ClassifiedLine(LineKind.TEXT, text)

    header = _OPTION_HEADER_RE.match(text)
    if header is not None:
        return ClassifiedLine(
            LineKind.OPTION_HEADER,
            text,
            short=header.group("short"),
            long=header.group("long"),
            argument=header.group("argument"),
            description=header.group("description"),
            indent_width=len(header.group("prefix")),
        )

    default = _DEFAULT_LINE_RE.match(text)
    if default is not None:
        return ClassifiedLine(LineKind.DEFAULT, text, default_value=default.group("value"))

    if indent_width is not None and text[:indent_width] == " " * indent_width:
        return ClassifiedLine(LineKind.CONTINUATION, text, continuation=text[indent_width:])

    return ClassifiedLine(LineKind.TEXT, text)


def strip_comment_marker(line: str, comment_marker: str) -> str | None:
    """Return the line without its marker and one following space.

    Returns None when the line is not a comment line: the marker must be
    followed by a space or end the line.
    """
    if not line.startswith(comment_marker):
        return None
    rest = line[len(comment_marker):]
    if rest == "":
        return rest
    if rest.startswith(" "):
        return rest[1:]
    return None


def extract_option_block(
    lines: Iterable[str],
    *,
    comment_marker: str = DEFAULT_COMMENT_MARKER,
) -> OptionBlock:
    """Extract the help text and declared options from source lines.

    Raises MissingOptionsSectionError when no `Options:` line was found, and
    DuplicateShortOptionError when two options share a short name.
    """
    help_lines: list[str] = []
    options: list[Option] = []
    current: Option | None = None
    indent_width: int | None = None
    in_block = False
    in_options = False

    for raw_line in lines:
        classified = classify_line(
            raw_line,
            comment_marker=comment_marker,
            in_options=in_options,
            indent_width=indent_width,
        )

        if not in_block:
            if not classified.contributes_to_help:
                continue
            in_block = True
        elif classified.kind is LineKind.BLANK:
            break

        if not classified.contributes_to_help:
            continue
        help_lines.append(classified.text + "\n")

        if classified.kind is LineKind.OPTIONS_START:
            in_options = True
        elif classified.kind is LineKind.OPTION_HEADER:
            if any(option.short == classified.short for option in options):
                raise DuplicateShortOptionError(classified.short)
            current = Option(
                short=classified.short,
                long=classified.long,
                argument=classified.argument,
                description=classified.description,
            )
            options.append(current)
            indent_width = classified.indent_width
        elif classified.kind is LineKind.DEFAULT:
            if current is not None:
                current.value = classified.default_value
        elif classified.kind is LineKind.CONTINUATION:
            if current is not None:
                current.description += "\n" + classified.continuation

    help_text = "".join(help_lines)
    if not in_options:
        log_event("options_section_missing", level=logging.WARNING, help_lines=len(help_lines))
        raise MissingOptionsSectionError(help_text)

    log_event(
        "extract_done",
        help_lines=len(help_lines),
        option_count=len(options),
        options=[option.short for option in options],
    )
    return OptionBlock(help=help_text, options=options)
