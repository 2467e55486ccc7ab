"""Typed exceptions for optdoc."""

from __future__ import annotations


class OptdocError(Exception):
    """Base class for all optdoc errors."""


class ExtractionError(OptdocError):
    """Raised when a comment block cannot be turned into an option model."""


class MissingOptionsSectionError(ExtractionError):
    def __init__(self, help_text: str) -> None:
        super().__init__("No 'Options:' section found in the leading comment block.")
        self.help_text = help_text


class DuplicateShortOptionError(ExtractionError):
    def __init__(self, short: str) -> None:
        super().__init__(f"Short option '-{short}' is declared more than once.")
        self.short = short


class SettingsError(OptdocError):
    """Raised when the settings file cannot be read or validated."""


class PathMappingError(OptdocError):
    """Raised when a path argument cannot be safely mapped."""


class OptionParseError(OptdocError):
    """Raised when an argument vector is rejected by the tokenizer."""


class OptionDispatchError(OptdocError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Unexpected token after tokenizing: '{token}'.")
        self.token = token
