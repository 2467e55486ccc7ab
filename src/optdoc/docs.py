"""Markdown and HTML documentation for an option block."""

from __future__ import annotations

import html
import re

from .constants import OPTIONS_SECTION_PATTERN
from .models import Option, OptionBlock

_OPTIONS_SECTION_RE = re.compile(OPTIONS_SECTION_PATTERN)
_COLUMNS = ("Short", "Long", "Argument", "Default", "Description")


def help_prose(block: OptionBlock) -> str:
    """Return the help text that precedes the `Options:` line."""
    prose: list[str] = []
    for line in block.help.splitlines():
        if block.has_options_section and _OPTIONS_SECTION_RE.match(line):
            break
        prose.append(line)
    while prose and prose[-1].strip() == "":
        prose.pop()
    return "\n".join(prose)


def render_markdown(block: OptionBlock, *, title: str) -> str:
    lines = [f"# {title}", ""]

    prose = help_prose(block)
    if prose:
        lines.extend(["```text", prose, "```", ""])

    if block.options:
        lines.append("## Options")
        lines.append("")
        lines.append("| " + " | ".join(_COLUMNS) + " |")
        lines.append("|" + "|".join("---" for _ in _COLUMNS) + "|")
        for option in block.options:
            cells = [_markdown_cell(cell) for cell in _option_cells(option)]
            lines.append("| " + " | ".join(cells) + " |")
        lines.append("")

    return "\n".join(lines)


def render_html(block: OptionBlock, *, title: str) -> str:
    escaped_title = html.escape(title)
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{escaped_title}</title>",
        "</head>",
        "<body>",
        f"<h1>{escaped_title}</h1>",
    ]

    prose = help_prose(block)
    if prose:
        parts.append(f"<pre>{html.escape(prose)}</pre>")

    if block.options:
        parts.append("<h2>Options</h2>")
        parts.append("<table>")
        header = "".join(f"<th>{name}</th>" for name in _COLUMNS)
        parts.append(f"<tr>{header}</tr>")
        for option in block.options:
            row = "".join(f"<td>{_html_cell(cell)}</td>" for cell in _option_cells(option))
            parts.append(f"<tr>{row}</tr>")
        parts.append("</table>")

    parts.extend(["</body>", "</html>", ""])
    return "\n".join(parts)


def _option_cells(option: Option) -> tuple[str, str, str, str, str]:
    return (
        f"-{option.short}",
        f"--{option.long}",
        option.argument or "",
        option.value or "",
        option.description,
    )


def _markdown_cell(text: str) -> str:
    escaped = text.replace("|", "\\|")
    return escaped.replace("\n", "<br>")


def _html_cell(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")
