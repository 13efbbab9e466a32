"""
Parser for tracker.env settings files.

Reads KEY=value lines without shell execution. Values that look like
shell substitution or chaining are refused, and callers can restrict the
file to the keys they understand.
"""

import re
from pathlib import Path
from typing import Iterable, Optional

FORBIDDEN_PATTERNS = {
    r'`': "backtick",
    r'\$\(': "command substitution",
    r'\$\{': "variable expansion",
    r';': "command chaining",
    r'&&': "command chaining",
    r'\|\|': "command chaining",
    r'\|': "pipe",
}

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


class EnvFileError(ValueError):
    """A settings file line could not be accepted."""

    def __init__(self, filepath: Path, lineno: int, message: str):
        self.filepath = filepath
        self.lineno = lineno
        super().__init__(f"{filepath}:{lineno}: {message}")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def load_env(filepath: Path, allowed_keys: Optional[Iterable[str]] = None) -> dict[str, str]:
    """
    Parse a settings file into a dict.

    Args:
        filepath: File to read
        allowed_keys: If given, any other key is rejected

    Raises:
        FileNotFoundError: if file doesn't exist
        EnvFileError: on bad syntax, unknown key, duplicate key or forbidden value
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {path}")

    allowed = set(allowed_keys) if allowed_keys is not None else None
    result = {}

    for lineno, line in enumerate(path.read_text().splitlines(), 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        key, sep, value = line.partition('=')
        if not sep:
            raise EnvFileError(path, lineno, "Invalid syntax (no '=')")

        key = key.strip()
        if not KEY_PATTERN.match(key):
            raise EnvFileError(path, lineno, f"Invalid key '{key}'")
        if allowed is not None and key not in allowed:
            raise EnvFileError(
                path, lineno,
                f"Unknown key '{key}' (expected one of: {', '.join(sorted(allowed))})",
            )
        if key in result:
            raise EnvFileError(path, lineno, f"Duplicate key '{key}'")

        value = _unquote(value.strip())
        for pattern, what in FORBIDDEN_PATTERNS.items():
            if re.search(pattern, value):
                raise EnvFileError(path, lineno, f"Forbidden pattern in value of {key} ({what})")

        result[key] = value

    return result
