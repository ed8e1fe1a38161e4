"""flexbar - Self-adjusting single-line terminal progress bar.

The bar packs its readouts into whatever width the terminal has, dropping the
least important ones when space runs out, and redraws in place from a background
thread while producers advance the counter from any thread.
"""

from flexbar.config import BarConfig
from flexbar.layout import fit, join
from flexbar.progress import ProgressBar
from flexbar.segments import Sample, Segment, build_segments
from flexbar.stats import format_float, format_int, format_time
from flexbar.width import display_width, terminal_width

__version__ = "0.1.0"

__all__ = [
    "BarConfig",
    "ProgressBar",
    "Sample",
    "Segment",
    "__version__",
    "build_segments",
    "display_width",
    "fit",
    "format_float",
    "format_int",
    "format_time",
    "join",
    "terminal_width",
]
