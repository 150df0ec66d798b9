"""String helpers for embedding values in AppleScript source."""

from __future__ import annotations

_APPLESCRIPT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
}

_ASCII_FOLD = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def escape_for_applescript(value: str) -> str:
    """Escape ``value`` so that ``"<result>"`` is an AppleScript literal for it.

    Each character is mapped independently, so escaping never reinterprets
    sequences produced by an earlier pass.
    """

    return "".join(_APPLESCRIPT_ESCAPES.get(char, char) for char in value)


def quote_applescript(value: str) -> str:
    return f'"{escape_for_applescript(value)}"'


def ascii_lower(value: str) -> str:
    """Fold A-Z only, mirroring the ``toLowerCase`` handler run by the host."""

    return value.translate(_ASCII_FOLD)


def applescript_bool(value: bool) -> str:
    return "true" if value else "false"
