"""ANSI escape sequences for colors and cursor control."""

from enum import IntEnum

__all__ = [
    "HIDE_CURSOR",
    "SHOW_CURSOR",
    "Color",
    "Palette",
]

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


class Color(IntEnum):
    """The basic 8-color terminal palette."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


class Palette:
    """Builds SGR color sequences, or empty strings when colors are disabled."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def _sgr(self, *codes: int) -> str:
        if not self.enabled:
            return ""
        return f"\x1b[{';'.join(str(c) for c in codes)}m"

    def fg(self, color: Color) -> str:
        return self._sgr(30 + color)

    def bright(self, color: Color) -> str:
        return self._sgr(1, 30 + color)

    def bg(self, color: Color, background: Color) -> str:
        return self._sgr(30 + color, 40 + background)

    def bright_bg(self, color: Color, background: Color) -> str:
        return self._sgr(1, 30 + color, 40 + background)

    def reset(self) -> str:
        return "\x1b[0m" if self.enabled else ""
