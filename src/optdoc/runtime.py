"""In-process option state and argument parsing.

OptionState holds the same flattened `short+field` table the generated bash
keeps in its associative array, and parse_arguments runs the same
tokenize-then-dispatch sequence. Python callers that embed an option block
use these directly instead of generated code.
"""

from __future__ import annotations

import getopt
from collections.abc import Sequence
from dataclasses import dataclass

from .constants import (
    END_OF_OPTIONS,
    FIELD_ARGUMENT,
    FIELD_VALUE,
    HELP_OPTION_SHORT,
    SWITCH_OFF,
    SWITCH_ON,
)
from .emitter import build_getopt_lists
from .errors import OptionDispatchError, OptionParseError
from .models import Option, OptionBlock


class OptionState:
    """Typed view over the flattened option table."""

    def __init__(self, table: dict[str, str] | None = None) -> None:
        self._table: dict[str, str] = dict(table or {})

    @classmethod
    def from_block(cls, block: OptionBlock) -> OptionState:
        table: dict[str, str] = {}
        for option in block.options:
            for field_name, text in option.populated_fields():
                table[option.short + field_name] = text
        return cls(table)

    def keys(self) -> list[str]:
        return sorted(self._table)

    def value(self, short: str) -> str | None:
        """Return the current value, "false" for an unset switch, else None."""
        current = self._table.get(short + FIELD_VALUE)
        if current is not None:
            return current
        if short + FIELD_ARGUMENT not in self._table:
            return SWITCH_OFF
        return None

    def get(self, short: str, field_name: str) -> str:
        return self._table.get(short + field_name, "")

    def set(self, short: str, field_name: str, *values: str) -> None:
        if not values:
            raise ValueError("set() needs at least one value.")
        self._table[short + field_name] = " ".join(values)

    def query(self, *args: str) -> str | None:
        """Mirror the generated accessor: return what it would print.

        None means nothing is printed (an unset value option, or an update).
        """
        if len(args) == 0:
            return " ".join(self.keys())
        if len(args) == 1:
            return self.value(args[0])
        if len(args) == 2:
            return self.get(args[0], args[1])
        self.set(args[0], args[1], *args[2:])
        return None

    def as_dict(self) -> dict[str, str]:
        return dict(self._table)


@dataclass
class ParsedArguments:
    state: OptionState
    positionals: list[str]
    help_requested: bool = False


def tokenize(block: OptionBlock, argv: Sequence[str]) -> list[str]:
    """Return argv reordered the way getopt(1) prints it.

    Options come first, each value option followed by its argument, then
    `--` and the positional arguments.
    """
    short_list, long_list = build_getopt_lists(block.options)
    long_names = [_long_for_getopt(name) for name in long_list.split(",") if name]
    try:
        parsed_options, positionals = getopt.gnu_getopt(list(argv), short_list, long_names)
    except getopt.GetoptError as exc:
        raise OptionParseError(str(exc)) from exc

    vector: list[str] = []
    for flag, argument in parsed_options:
        vector.append(flag)
        if _takes_argument(block, flag):
            vector.append(argument)
    vector.append(END_OF_OPTIONS)
    vector.extend(positionals)
    return vector


def parse_arguments(block: OptionBlock, argv: Sequence[str]) -> ParsedArguments:
    state = OptionState.from_block(block)
    tokens = tokenize(block, argv)

    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == END_OF_OPTIONS:
            return ParsedArguments(state=state, positionals=tokens[index + 1:])

        option = _match_option(block, token)
        if option is None:
            raise OptionDispatchError(token)
        if option.short == HELP_OPTION_SHORT:
            return ParsedArguments(state=state, positionals=[], help_requested=True)
        if option.is_switch:
            state.set(option.short, FIELD_VALUE, SWITCH_ON)
            index += 1
        else:
            state.set(option.short, FIELD_VALUE, tokens[index + 1])
            index += 2

    return ParsedArguments(state=state, positionals=[])


def _long_for_getopt(name: str) -> str:
    # getopt(1) marks value options with ':', the getopt module with '='.
    if name.endswith(":"):
        return name[:-1] + "="
    return name


def _match_option(block: OptionBlock, token: str) -> Option | None:
    if token.startswith("--"):
        long = token[2:]
        return next((option for option in block.options if option.long == long), None)
    if len(token) == 2 and token.startswith("-"):
        return block.find(token[1])
    return None


def _takes_argument(block: OptionBlock, flag: str) -> bool:
    option = _match_option(block, flag)
    return option is not None and not option.is_switch
