"""Printable width measurement and terminal size lookup."""

import os
import re

from wcwidth import wcswidth, wcwidth

__all__ = [
    "DEFAULT_COLUMNS",
    "display_width",
    "strip_ansi",
    "terminal_width",
]

DEFAULT_COLUMNS = 80

# CSI sequences: colors, cursor visibility, erase commands
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def display_width(text: str) -> int:
    """Number of terminal columns text occupies, ignoring escape sequences.

    Wide (East-Asian) characters count as two columns and zero-width marks as none.
    Other non-printable characters are counted as zero rather than failing.
    """
    plain = strip_ansi(text)
    width = wcswidth(plain)
    if width < 0:
        width = sum(max(0, wcwidth(ch)) for ch in plain)
    return width


def terminal_width(stream=None) -> int:
    """Return the column count of the terminal behind stream, or 80."""
    try:
        fd = stream.fileno() if stream is not None else 1
        columns = os.get_terminal_size(fd).columns
    except (OSError, ValueError, AttributeError):
        return DEFAULT_COLUMNS
    return columns or DEFAULT_COLUMNS
