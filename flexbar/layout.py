"""Fit a segment lineup into a fixed number of terminal columns."""

from flexbar.segments import Segment
from flexbar.width import display_width

__all__ = ["fit", "join", "used_width"]


def used_width(segments: list[Segment], separator_width: int) -> int:
    """Columns taken by the visible segments and the separators between them."""
    visible = [seg for seg in segments if not seg.hidden]
    if not visible:
        return 0
    return sum(seg.width for seg in visible) + separator_width * (len(visible) - 1)


def _stretch(segments: list[Segment], available: int) -> int:
    """Rebuild the visible elastic segment to absorb available; return the new slack."""
    for i, seg in enumerate(segments):
        if seg.hidden or not seg.elastic or seg.stretch is None:
            continue
        resized = seg.stretch(seg.width + available)
        segments[i] = resized
        available -= resized.width - seg.width
        break
    return available


def fit(segments: list[Segment], width: int, separator: str = " ") -> list[Segment]:
    """Choose which segments appear and at what size, in left-to-right order.

    The elastic segment (the bar) is stretched to take all leftover width. When the
    line does not fit, the visible segment with the lowest priority is hidden, the
    first one encountered winning ties, and the elastic segment is re-stretched.
    This repeats until the line fits or nothing is left. The bar refuses to shrink
    below its own floor, so narrow terminals lose auxiliary segments first.

    The input list is not modified. Hidden segments are left out of the result.
    """
    segments = list(segments)
    sep = display_width(separator)

    available = width - used_width(segments, sep)
    available = _stretch(segments, available)

    while available < 0:
        victim = None
        for i, seg in enumerate(segments):
            if seg.hidden:
                continue
            if victim is None or seg.priority < segments[victim].priority:
                victim = i
        if victim is None:
            break
        segments[victim] = Segment(hidden=True)
        available = width - used_width(segments, sep)
        available = _stretch(segments, available)

    visible = [seg for seg in segments if not seg.hidden]
    # sorted() is stable: equal align keeps emission order
    return sorted(visible, key=lambda seg: seg.align)


def join(segments: list[Segment], separator: str = " ") -> str:
    return separator.join(seg.text for seg in segments)
