"""Differential single-line renderer."""

import logging

from flexbar.color import HIDE_CURSOR, SHOW_CURSOR
from flexbar.width import display_width

__all__ = ["Renderer"]

logger = logging.getLogger(__name__)


class Renderer:
    """Repaints one terminal line in place, writing only when the text changed.

    The line is rewound with backspaces and blanked with spaces before each paint,
    so a shorter line never leaves stale characters behind. Only the snapshot of
    the last paint is kept.
    """

    def __init__(self, stream):
        self.stream = stream
        self.last_text = ""
        self.last_width = 0

    def _erase(self, cover: int = 0) -> str:
        """Rewind to the start of the last paint and blank at least cover columns."""
        cover = max(cover, self.last_width)
        rewind = "\b" * self.last_width
        back = "\b" * cover
        return f"{rewind}{HIDE_CURSOR}{' ' * cover}{back}"

    def _write(self, data: str):
        try:
            self.stream.write(data)
            self.stream.flush()
        except (OSError, ValueError) as e:
            logger.debug("Terminal write failed: %s", e)

    def draw(self, text: str, force: bool = False) -> bool:
        """Paint text unless it is what is already on screen. Returns True if written."""
        if text == self.last_text and not force:
            return False
        width = display_width(text)
        self._write(self._erase(width) + text)
        self.last_text = text
        self.last_width = width
        return True

    def reset(self):
        """Forget the last paint so the next draw repaints fully."""
        self.last_text = ""
        self.last_width = 0

    def clear(self):
        """Erase the line and forget it."""
        self._write(self._erase())
        self.reset()

    def interject(self, line: str):
        """Print line above the bar as normal scrolling output."""
        self._write(f"{self._erase()}{line}\n")
        self.reset()

    def println(self, line: str):
        """Print line with no bar on screen."""
        self._write(f"{line}\n")

    def close(self, keep: bool = True):
        """Show the cursor again, either below the last paint or in place of it."""
        if keep:
            self._write(f"{SHOW_CURSOR}\n")
        else:
            self._write(self._erase() + SHOW_CURSOR)
        self.reset()
