"""Segments of the progress line and the formatters that produce them.

A formatter is a function of one Sample (plus a Palette for colors) and returns one
Segment. Formatters mark a segment hidden only when its readout does not apply, e.g.
a percentage without a target. Deciding what to drop for lack of space is left to
the layout fitter.
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Callable

from wcwidth import wcswidth, wcwidth

from flexbar.color import Color, Palette
from flexbar.stats import format_clock, format_int, format_rate, format_time
from flexbar.width import display_width

__all__ = [
    "BLOCKS",
    "Sample",
    "Segment",
    "avg_rate",
    "bar",
    "build_segments",
    "counts",
    "cur_rate",
    "elapsed",
    "est_total",
    "percentage",
    "remaining",
    "title",
]

# Partial fill glyphs, 8 levels between empty and full
BLOCKS = " ▏▎▍▌▋▊▉█"
EMPTY_CELL = "·"
LEFT_CAP = "▌"
RIGHT_CAP = "▐"
ZWJ = "\u200d"


@dataclass
class Segment:
    """One piece of the rendered line.

    width is the number of terminal columns text occupies, not counting escape
    sequences. Lower priority segments are dropped first when space runs out and
    align orders the survivors left to right. An elastic segment carries a stretch
    callable that rebuilds it at a requested width.
    """

    text: str = ""
    width: int = 0
    priority: int = 0
    align: int = 0
    hidden: bool = False
    elastic: bool = False
    stretch: Callable[[int], "Segment"] | None = field(default=None, repr=False, compare=False)

    @classmethod
    def plain(cls, text: str, priority: int, align: int = 0) -> "Segment":
        return cls(text=text, width=display_width(text), priority=priority, align=align)

    @classmethod
    def off(cls) -> "Segment":
        """A segment that does not apply to the current state."""
        return cls(hidden=True)


@dataclass(frozen=True)
class Sample:
    """Snapshot of a bar's state taken once per render cycle.

    elapsed is wall time since start. progress_elapsed is the time from start until
    the counter was last seen to change, which keeps rates and estimates steady while
    the producer is idle. window_duration and window_delta come from the rolling
    rate sampler.
    """

    current: int
    target: int = 0
    label: str = ""
    elapsed: float = 0.0
    progress_elapsed: float = 0.0
    window_duration: float = 0.0
    window_delta: int = 0

    @property
    def indeterminate(self) -> bool:
        return self.target <= 0

    @property
    def ratio(self) -> float:
        if self.indeterminate:
            return 0.0
        return min(1.0, max(0.0, self.current / self.target))

    @property
    def in_progress(self) -> bool:
        """True when a target is known and 0 < ratio < 1."""
        return not self.indeterminate and 0.0 < self.ratio < 1.0


def counts(sample: Sample, palette: Palette) -> Segment:
    if sample.indeterminate:
        text = format_int(sample.current)
    else:
        total = format_int(sample.target)
        text = f"{format_int(sample.current):>{len(total)}}/{total}"
    return Segment.plain(text, priority=4)


def percentage(sample: Sample, palette: Palette) -> Segment:
    if sample.indeterminate:
        return Segment.off()
    return Segment.plain(f"{sample.ratio * 100:>3.0f}%", priority=11)


def avg_rate(sample: Sample, palette: Palette) -> Segment:
    rate = format_rate(sample.current, sample.progress_elapsed) or "---"
    return Segment.plain(f"{rate:>5}/s avg", priority=8)


def cur_rate(sample: Sample, palette: Palette) -> Segment:
    if not sample.indeterminate and not sample.in_progress:
        return Segment.off()
    rate = format_rate(sample.window_delta, sample.window_duration) or "---"
    return Segment.plain(f"{rate + '/s':>7}", priority=8)


def title(sample: Sample, palette: Palette) -> Segment:
    # A determinate bar paints the label inside itself
    if not sample.label or not sample.indeterminate:
        return Segment.off()
    return Segment.plain(sample.label, priority=12)


def elapsed(sample: Sample, palette: Palette) -> Segment:
    return Segment.plain("+" + format_time(sample.elapsed), priority=7, align=2)


def est_total(sample: Sample, palette: Palette) -> Segment:
    if not sample.in_progress:
        return Segment.off()
    total = sample.progress_elapsed / sample.ratio
    return Segment.plain(format_clock(total), priority=8, align=2)


def remaining(sample: Sample, palette: Palette) -> Segment:
    if not sample.in_progress:
        return Segment.off()
    total = sample.progress_elapsed / sample.ratio
    return Segment.plain("-" + format_clock(total * (1 - sample.ratio)), priority=9, align=2)


def _label_cells(label: str, limit: int) -> list[str]:
    """Split label into one string per terminal cell, at most limit cells.

    Characters are grouped into clusters the same way display_width() measures
    them: combining marks, variation selectors and anything after a zero-width
    joiner stay with the cluster before them, and each cluster takes as many
    cells as it adds to the wcswidth() of the label so far. A cluster wider than
    one cell is followed by empty placeholders. Clusters that do not fit whole
    are dropped.
    """
    clusters: list[list] = []  # [text, cells]
    used = ""
    width = 0
    for ch in label:
        grown = wcswidth(used + ch)
        if grown < width:
            continue  # control character
        delta = grown - width
        if not clusters and delta == 0:
            continue
        joins = bool(clusters) and (delta == 0 or wcwidth(ch) <= 0 or used.endswith(ZWJ))
        if width + delta > limit:
            if joins:
                clusters.pop()
            break
        if joins:
            clusters[-1][0] += ch
            clusters[-1][1] += delta
        else:
            clusters.append([ch, delta])
        used += ch
        width = grown

    # A dangling joiner would swallow the bar glyph drawn after it
    if clusters:
        clusters[-1][0] = clusters[-1][0].rstrip(ZWJ)

    cells: list[str] = []
    for text, w in clusters:
        cells.append(text)
        cells.extend([""] * (w - 1))
    return cells


def _empty_tint(palette: Palette, offset: int, fraction: float) -> str:
    """Color for an unfilled cell; the one right after the fill edge fades with it."""
    if offset == 1:
        if fraction < 0.33:
            return palette.bright(Color.WHITE)
        if fraction < 0.66:
            return ""
        return palette.bright(Color.BLACK)
    return palette.bright(Color.WHITE)


def bar(sample: Sample, palette: Palette, width: int = 0, min_width: int = 7) -> Segment:
    """The elastic bar glyph, exactly max(width, min_width) columns wide."""
    if sample.indeterminate:
        return Segment.off()

    inner = max(width, min_width) - 2  # end caps
    fill = sample.ratio * inner
    whole = int(fill)
    fraction = fill - whole
    part = int(fraction * (len(BLOCKS) - 1))
    label = _label_cells(sample.label, inner)
    reset = palette.reset()

    parts = [palette.bright(Color.WHITE), LEFT_CAP, reset]
    for i in range(inner):
        if i < len(label):
            if not label[i]:
                continue  # covered by the wide character before it
            if i < whole:
                style = palette.bright_bg(Color.WHITE, Color.BLUE)
            else:
                style = palette.fg(Color.CYAN)
            parts.append(style + label[i] + reset)
        elif i < whole:
            parts.append(palette.fg(Color.BLUE) + BLOCKS[-1] + reset)
        elif i == whole:
            parts.append(palette.fg(Color.BLUE) + BLOCKS[part] + reset)
        else:
            parts.append(_empty_tint(palette, i - whole, fraction) + EMPTY_CELL + reset)
    parts += [palette.bright(Color.WHITE), RIGHT_CAP, reset]

    text = "".join(parts)
    return Segment(
        text=text,
        width=display_width(text),
        priority=10,
        align=1,
        elastic=True,
        stretch=partial(bar, sample, palette, min_width=min_width),
    )


# Emission order; ties in align keep this order
FORMATTERS = [percentage, counts, cur_rate, avg_rate, title]
TRAILING = [elapsed, est_total, remaining]


def build_segments(sample: Sample, palette: Palette, min_bar_width: int = 7) -> list[Segment]:
    """Produce the full segment lineup for one render cycle."""
    segments = [fmt(sample, palette) for fmt in FORMATTERS]
    segments.append(bar(sample, palette, min_width=min_bar_width))
    segments.extend(fmt(sample, palette) for fmt in TRAILING)
    return segments
