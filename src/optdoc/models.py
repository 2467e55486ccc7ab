"""Domain models for optdoc."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel

from .constants import OPTION_FIELDS


class Option(BaseModel):
    short: str
    long: str
    argument: str | None = None  # None = switch option
    description: str
    value: str | None = None  # initial value from a Default: line

    @property
    def is_switch(self) -> bool:
        return self.argument is None

    def populated_fields(self) -> Iterator[tuple[str, str]]:
        """Yield (field, text) pairs in emission order, skipping absent fields."""
        for field_name in OPTION_FIELDS:
            text = getattr(self, field_name)
            if text is not None:
                yield field_name, text


class OptionBlock(BaseModel):
    help: str
    options: list[Option] = []
    has_options_section: bool = True

    @classmethod
    def help_only(cls, help_text: str) -> OptionBlock:
        return cls(help=help_text, options=[], has_options_section=False)

    def find(self, short: str) -> Option | None:
        for option in self.options:
            if option.short == short:
                return option
        return None


class LineKind(StrEnum):
    BLANK = "blank"  # ends the help block
    NON_COMMENT = "non_comment"  # skipped, block continues
    TEXT = "text"  # comment prose, or an unmatched line in the options section
    OPTIONS_START = "options_start"
    OPTION_HEADER = "option_header"
    DEFAULT = "default"
    CONTINUATION = "continuation"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str = ""  # marker-stripped text; empty for BLANK and NON_COMMENT
    short: str | None = None
    long: str | None = None
    argument: str | None = None
    description: str | None = None
    indent_width: int | None = None
    default_value: str | None = None
    continuation: str | None = None

    @property
    def contributes_to_help(self) -> bool:
        return self.kind not in (LineKind.BLANK, LineKind.NON_COMMENT)
