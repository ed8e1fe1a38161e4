"""Number and duration formatting, plus throughput sampling."""

from dataclasses import dataclass

__all__ = [
    "RateSampler",
    "format_clock",
    "format_float",
    "format_int",
    "format_rate",
    "format_time",
]

SUFFIXES = ["K", "M", "G", "T", "P"]


def format_int(value: int) -> str:
    """Abbreviate a count with decimal suffixes, e.g. 12345 -> 12K."""
    suffix = ""
    for unit in SUFFIXES:
        if abs(value) <= 1000:
            break
        # Integer division truncating toward zero, exact for any size
        value = value // 1000 if value >= 0 else -(-value // 1000)
        suffix = unit
    return f"{value}{suffix}"


def format_float(value: float) -> str:
    """Abbreviate a rate with decimal suffixes, keeping about three significant digits."""
    suffix = ""
    for unit in SUFFIXES:
        if abs(value) < 1000:
            break
        value /= 1000
        suffix = unit
    if abs(value) < 1:
        return f"{value:.2f}{suffix}"
    if abs(value) < 10:
        return f"{value:.1f}{suffix}"
    return f"{value:.0f}{suffix}"


def format_rate(delta: float, duration: float) -> str | None:
    """Format delta/duration, or None when either is zero."""
    if delta <= 0 or duration <= 0:
        return None
    return format_float(delta / duration)


def format_time(seconds: float) -> str:
    """Format seconds as compact human-readable time."""
    if seconds < 0:
        return "--"
    seconds = round(seconds)
    if seconds < 120:
        return f"{seconds}s"
    elif seconds < 3600:
        m = seconds // 60
        s = seconds % 60
        if s == 0:
            return f"{m}m"
        return f"{m}m{s}s"
    elif seconds < 172800:  # 48 hours
        h = seconds // 3600
        m = (seconds % 3600) // 60
        if m == 0:
            return f"{h}h"
        return f"{h}h{m}m"
    else:
        d = seconds // 86400
        h = (seconds % 86400) // 3600
        if h == 0:
            return f"{d}d"
        return f"{d}d{h}h"


def format_clock(seconds: float) -> str:
    """Format seconds as HH:MM:SS (hours are not wrapped)."""
    total = max(0, round(seconds))
    h, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


@dataclass
class RateSampler:
    """Throughput over a rolling window.

    A new (duration, delta) pair is taken only once more than `window` seconds have
    passed since the previous sample point, so that very short intervals do not
    produce noisy rates. Between samples the last pair is reported unchanged.
    """

    start_time: float
    window: float = 0.5
    duration: float = 0.0
    delta: int = 0

    def __post_init__(self):
        self._last_value = 0
        self._last_time = self.start_time

    def update(self, value: int, now: float) -> tuple[float, int]:
        dt = now - self._last_time
        if dt > self.window:
            self.duration = dt
            self.delta = value - self._last_value
            self._last_value = value
            self._last_time = now
        return self.duration, self.delta
