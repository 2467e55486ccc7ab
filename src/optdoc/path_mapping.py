"""Path mapping for CLI path arguments.

Accepted forms: absolute paths, `~` (home), `@` (app root), and relative
paths when a base directory is given.
"""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path

from .errors import PathMappingError

_SEPARATOR_RUN_RE = re.compile(r"[\\/]+")


def map_path(
    raw: str,
    *,
    app_root_abs: Path,
    base_dir: Path | None = None,
) -> Path:
    """Map a user-provided path string to an absolute resolved Path.

    Resolution rules (applied in order):
    1. Normalize NFD -> NFC.
    2. Reject empty input and NUL chars.
    3. If starts with ~, expand home dir.
    4. If starts with @, map to app_root_abs.
    5. If relative + base_dir given, join onto base_dir.
    6. If relative + no base_dir, raise PathMappingError.
    7. Resolve dot segments via Path.resolve(strict=False).
    """
    if not app_root_abs.is_absolute():
        raise PathMappingError("app_root_abs must be an absolute path.")

    normalized = unicodedata.normalize("NFC", raw)
    if normalized.strip() == "":
        raise PathMappingError("Path is empty.")
    if "\0" in normalized:
        raise PathMappingError("Path contains NUL (\\0) character.")

    if normalized.startswith("~"):
        try:
            mapped = Path(_SEPARATOR_RUN_RE.sub("/", normalized)).expanduser()
        except RuntimeError as exc:
            raise PathMappingError(f"Failed to expand user home in path: {raw}") from exc
    elif normalized.startswith("@"):
        mapped = _map_app_root_path(normalized, app_root_abs)
    else:
        mapped = Path(normalized)

    if not mapped.is_absolute():
        if base_dir is None:
            raise PathMappingError(
                "Relative path requires an explicit base directory. "
                "Use ~ (home), @ (app root), or an absolute path."
            )
        mapped = base_dir / mapped

    return mapped.resolve()


def _map_app_root_path(path_text: str, app_root_abs: Path) -> Path:
    remainder = path_text[1:].lstrip("/\\")
    if not remainder:
        return app_root_abs
    segments = [s for s in _SEPARATOR_RUN_RE.split(remainder) if s]
    return app_root_abs.joinpath(*segments)
