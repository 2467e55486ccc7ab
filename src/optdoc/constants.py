"""Centralized constants for optdoc."""

from __future__ import annotations

APP_NAME = "optdoc"

# Comment block recognition
DEFAULT_COMMENT_MARKER = "#"
OPTIONS_SECTION_PATTERN = r"^\s*Options:"
OPTION_HEADER_PATTERN = (
    r"^(?P<prefix>\s*-(?P<short>\w)\s+--(?P<long>[A-Za-z0-9-]+)\s+"
    r"(?:(?P<argument>[a-z]\w*)\s+)?)(?P<description>\S.*)$"
)
DEFAULT_LINE_PATTERN = r"^\s*Default:\s*(?P<value>\S.*)$"

# Option record fields, in emission order
OPTION_FIELDS = ("short", "long", "argument", "description", "value")
FIELD_VALUE = "value"
FIELD_ARGUMENT = "argument"

HELP_OPTION_SHORT = "h"
SWITCH_ON = "true"
SWITCH_OFF = "false"
END_OF_OPTIONS = "--"

# Names used in the generated bash
HELP_VARIABLE = "HELP"
OPTION_TABLE = "OPTIONS"
ACCESSOR_FUNCTION = "opt"
GETOPT_RESULT_VARIABLE = "OPTDOC_ARGV"
HELP_HEREDOC_DELIMITER = "__OPTDOC_HELP__"
INDENT = "    "

# Emitted verbatim after the table assignments.
ACCESSOR_FUNCTION_TEXT = """\
opt() {
    local IFS=' '
    case $# in
        0)
            local -a keys
            mapfile -t keys < <(printf '%s\\n' "${!OPTIONS[@]}" | LC_ALL=C sort)
            printf '%s\\n' "${keys[*]}"
            ;;
        1)
            if [ -n "${OPTIONS[${1}value]+set}" ]; then
                printf '%s\\n' "${OPTIONS[${1}value]}"
            elif [ -z "${OPTIONS[${1}argument]+set}" ]; then
                printf '%s\\n' false
            fi
            ;;
        2)
            printf '%s\\n' "${OPTIONS[${1}${2}]-}"
            ;;
        *)
            local key="${1}${2}"
            shift 2
            OPTIONS[$key]="$*"
            ;;
    esac
}"""

# CLI
OUTPUT_FORMATS = ("shell", "markdown", "html")
ERROR_PREFIX = "ERROR:"
WARNING_PREFIX = "WARNING:"
SOURCE_ENCODING = "utf-8"
