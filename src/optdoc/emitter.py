"""Bash code generation from an option block.

Statements come out in dependency order: help variable, option table
declaration and entries, the accessor function, the getopt call, and the
dispatch loop that consumes the normalized argument vector.
"""

from __future__ import annotations

from collections.abc import Sequence

from .constants import (
    ACCESSOR_FUNCTION_TEXT,
    END_OF_OPTIONS,
    FIELD_VALUE,
    GETOPT_RESULT_VARIABLE,
    HELP_HEREDOC_DELIMITER,
    HELP_OPTION_SHORT,
    HELP_VARIABLE,
    INDENT,
    OPTION_TABLE,
    SWITCH_ON,
)
from .logging_utils import log_event
from .models import Option, OptionBlock
from .shell_quote import quote_literal

_NEXT_ARGUMENT = '"$2"'


def build_getopt_lists(options: Sequence[Option]) -> tuple[str, str]:
    """Return the getopt short and long option strings.

    Short names are concatenated for `getopt -o`, long names comma-joined for
    `getopt -l`. Value options carry a trailing colon in both lists.
    """
    shorts: list[str] = []
    longs: list[str] = []
    for option in options:
        suffix = "" if option.is_switch else ":"
        shorts.append(option.short + suffix)
        longs.append(option.long + suffix)
    return "".join(shorts), ",".join(longs)


def emit_statements(block: OptionBlock) -> list[str]:
    statements = [
        f"{HELP_VARIABLE}={quote_literal(block.help)}",
        f"declare -gA {OPTION_TABLE}=()",
    ]
    for option in block.options:
        for field_name, text in option.populated_fields():
            statements.append(_table_assignment(option.short + field_name, quote_literal(text)))

    statements.append(ACCESSOR_FUNCTION_TEXT)

    short_list, long_list = build_getopt_lists(block.options)
    statements.append(
        f"{GETOPT_RESULT_VARIABLE}=$(getopt -o {quote_literal(short_list)} "
        f'-l {quote_literal(long_list)} -n "$0" -- "$@") || exit 1'
    )
    statements.append(f'eval set -- "${GETOPT_RESULT_VARIABLE}"')
    statements.append(_dispatch_loop(block))

    log_event("emit_done", option_count=len(block.options), statement_count=len(statements))
    return statements


def render_script(block: OptionBlock) -> str:
    return "\n".join(emit_statements(block)) + "\n"


def _table_assignment(key: str, literal: str) -> str:
    return f"{OPTION_TABLE}[{key}]={literal}"


def _dispatch_loop(block: OptionBlock) -> str:
    arm_indent = INDENT * 2
    body_indent = INDENT * 3
    lines = [
        "while [ $# -gt 0 ]; do",
        f'{INDENT}case "$1" in',
    ]
    for option in block.options:
        lines.append(f"{arm_indent}-{option.short}|--{option.long})")
        lines.extend(_dispatch_arm_body(option, block.help, body_indent))
        lines.append(f"{body_indent};;")

    lines.extend(
        [
            f"{arm_indent}{END_OF_OPTIONS})",
            f"{body_indent}shift",
            f"{body_indent}break",
            f"{body_indent};;",
            f"{arm_indent}*)",
            f"{body_indent}exit 1",
            f"{body_indent};;",
            f"{INDENT}esac",
            "done",
        ]
    )
    return "\n".join(lines)


def _dispatch_arm_body(option: Option, help_text: str, indent: str) -> list[str]:
    value_key = option.short + FIELD_VALUE
    if option.short == HELP_OPTION_SHORT:
        delimiter = _heredoc_delimiter(help_text)
        body = help_text if help_text == "" or help_text.endswith("\n") else help_text + "\n"
        # Here-document bodies are not indented; they are printed as-is.
        return [
            f"{indent}cat <<'{delimiter}'",
            body + delimiter,
            f"{indent}exit 0",
        ]
    if option.is_switch:
        return [
            f"{indent}{_table_assignment(value_key, SWITCH_ON)}",
            f"{indent}shift",
        ]
    return [
        f"{indent}{_table_assignment(value_key, _NEXT_ARGUMENT)}",
        f"{indent}shift 2",
    ]


def _heredoc_delimiter(help_text: str) -> str:
    delimiter = HELP_HEREDOC_DELIMITER
    help_lines = set(help_text.split("\n"))
    while delimiter in help_lines:
        delimiter += "_"
    return delimiter
