"""Tests for bash code generation."""

from __future__ import annotations

from optdoc.constants import ACCESSOR_FUNCTION_TEXT
from optdoc.emitter import build_getopt_lists, emit_statements, render_script
from optdoc.extractor import extract_option_block
from optdoc.models import Option, OptionBlock


def _switch(short: str, long: str) -> Option:
    return Option(short=short, long=long, description=f"The {long} switch.")


def _valued(short: str, long: str, argument: str = "x") -> Option:
    return Option(short=short, long=long, argument=argument, description=f"The {long} value.")


def test_getopt_lists_mark_value_options_with_colons() -> None:
    options = [_valued("a", "Aa"), _switch("b", "Bb"), _valued("c", "cee-dee", "path")]

    assert build_getopt_lists(options) == ("a:bc:", "Aa:,Bb,cee-dee:")


def test_short_list_is_concatenated_not_comma_joined() -> None:
    short_list, long_list = build_getopt_lists([_switch("x", "ex"), _switch("y", "why")])

    assert short_list == "xy"
    assert "," not in short_list
    assert long_list == "ex,why"


def test_getopt_lists_for_no_options_are_empty() -> None:
    assert build_getopt_lists([]) == ("", "")


def test_statement_order(example_lines: list[str]) -> None:
    statements = emit_statements(extract_option_block(example_lines))

    assert statements[0].startswith("HELP=$'Usage: demo [options] args...\\n")
    assert statements[1] == "declare -gA OPTIONS=()"
    accessor_index = statements.index(ACCESSOR_FUNCTION_TEXT)
    assert all(stmt.startswith("OPTIONS[") for stmt in statements[2:accessor_index])
    assert statements[accessor_index + 1] == (
        "OPTDOC_ARGV=$(getopt -o $'a:b' -l $'Aa:,Bb' -n \"$0\" -- \"$@\") || exit 1"
    )
    assert statements[accessor_index + 2] == 'eval set -- "$OPTDOC_ARGV"'
    assert statements[-1].startswith("while [ $# -gt 0 ]; do")


def test_table_entries_skip_absent_fields(example_lines: list[str]) -> None:
    statements = emit_statements(extract_option_block(example_lines))

    entries = [stmt for stmt in statements if stmt.startswith("OPTIONS[")]
    assert entries == [
        "OPTIONS[ashort]=$'a'",
        "OPTIONS[along]=$'Aa'",
        "OPTIONS[aargument]=$'x'",
        "OPTIONS[adescription]=$'The -a (or --Aa) option takes a parameter \"x\".'",
        "OPTIONS[avalue]=$'Default value for a'",
        "OPTIONS[bshort]=$'b'",
        "OPTIONS[blong]=$'Bb'",
        "OPTIONS[bdescription]=$'The -b/--Bb switch does not take any parameters, "
        "but it does\\nhave a rather long description.'",
    ]


def test_help_is_escaped() -> None:
    block = OptionBlock(help="It's a \\ test.\nSecond line.\n", options=[])
    assert emit_statements(block)[0] == "HELP=$'It\\'s a \\\\ test.\\nSecond line.\\n'"


def test_dispatch_arms_for_switch_and_value_options(example_lines: list[str]) -> None:
    loop = emit_statements(extract_option_block(example_lines))[-1]

    assert loop == "\n".join(
        [
            "while [ $# -gt 0 ]; do",
            '    case "$1" in',
            "        -a|--Aa)",
            '            OPTIONS[avalue]="$2"',
            "            shift 2",
            "            ;;",
            "        -b|--Bb)",
            "            OPTIONS[bvalue]=true",
            "            shift",
            "            ;;",
            "        --)",
            "            shift",
            "            break",
            "            ;;",
            "        *)",
            "            exit 1",
            "            ;;",
            "    esac",
            "done",
        ]
    )


def test_help_arm_prints_raw_help_and_exits() -> None:
    help_text = "Usage: tool\nIt's \\raw\\.\n"
    block = OptionBlock(help=help_text, options=[_switch("h", "help")])

    loop = emit_statements(block)[-1]

    assert "        -h|--help)\n            cat <<'__OPTDOC_HELP__'\n" in loop
    assert "\nUsage: tool\nIt's \\raw\\.\n__OPTDOC_HELP__\n            exit 0\n" in loop
    assert "OPTIONS[hvalue]" not in loop


def test_help_heredoc_delimiter_avoids_help_lines() -> None:
    block = OptionBlock(help="__OPTDOC_HELP__\n", options=[_switch("h", "help")])

    loop = emit_statements(block)[-1]

    assert "cat <<'__OPTDOC_HELP___'" in loop
    assert "\n__OPTDOC_HELP__\n__OPTDOC_HELP___\n" in loop


def test_render_script_ends_with_single_newline(example_lines: list[str]) -> None:
    script = render_script(extract_option_block(example_lines))

    assert script.endswith("done\n")
    assert not script.endswith("\n\n")
    assert ACCESSOR_FUNCTION_TEXT in script


def test_help_only_block_still_emits_parser() -> None:
    statements = emit_statements(OptionBlock.help_only("Just help.\n"))

    assert "OPTDOC_ARGV=$(getopt -o $'' -l $'' -n \"$0\" -- \"$@\") || exit 1" in statements
    assert not any(stmt.startswith("OPTIONS[") for stmt in statements)
