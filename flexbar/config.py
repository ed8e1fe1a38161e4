"""Construction-time configuration for a progress bar."""

from dataclasses import dataclass

__all__ = ["BarConfig"]


@dataclass(frozen=True)
class BarConfig:
    """Options fixed for the lifetime of one bar.

    Attributes:
        separator: Text placed between adjacent segments
        tick_interval: Seconds between redraws when nothing else wakes the loop
        min_bar_width: Floor for the bar glyph including its end caps
        color_enabled: Emit ANSI colors (cursor control is always emitted)
        margin: Columns kept free at the right edge so the cursor never wraps
        sample_window: Minimum seconds between instantaneous rate samples
        keep_on_finish: Leave the last bar on screen instead of erasing it
    """

    separator: str = " "
    tick_interval: float = 0.05
    min_bar_width: int = 7
    color_enabled: bool = True
    margin: int = 1
    sample_window: float = 0.5
    keep_on_finish: bool = True

    def __post_init__(self):
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
        if self.min_bar_width < 3:
            raise ValueError(f"min_bar_width must be at least 3, got {self.min_bar_width}")
        if self.margin < 0:
            raise ValueError(f"margin cannot be negative, got {self.margin}")
        if self.sample_window < 0:
            raise ValueError(f"sample_window cannot be negative, got {self.sample_window}")
