"""Live single-line progress bar redrawn by a background thread."""

import logging
import queue
import signal
import sys
import threading
import time
from dataclasses import dataclass, field

from flexbar.color import Palette
from flexbar.config import BarConfig
from flexbar.layout import fit, join
from flexbar.render import Renderer
from flexbar.segments import Sample, build_segments
from flexbar.stats import RateSampler
from flexbar.width import DEFAULT_COLUMNS, terminal_width

__all__ = ["ProgressBar"]

logger = logging.getLogger(__name__)

RUNNING = "running"
FINISHING = "finishing"
FINISHED = "finished"


@dataclass
class _LineRequest:
    text: str
    done: threading.Event = field(default_factory=threading.Event)


class ProgressBar:
    """Progress bar on the current terminal line, updated every tick_interval.

    Producers call advance() from any number of threads; it only takes a tiny
    counter lock and never waits for drawing. A single render thread samples the
    state, lays out the segments for the current terminal width and repaints the
    line when it changed. It is also the only writer to the stream while the bar
    is active: log_line() hands its text to that thread so that output never
    interleaves with a half-drawn bar.

    The thread wakes on the tick, a log line, a resize or finish(). Within one
    wake-up finish takes precedence (this is the last pass), then pending log
    lines, then the resize, then the redraw itself.

    Terminal resizes are picked up through SIGWINCH only when the bar is created
    on the main thread of a Unix process, where Python allows installing signal
    handlers. Elsewhere call notify_resize() to have the width measured again.

    Usage:
        with ProgressBar(len(items), "Crunching") as bar:
            for item in items:
                crunch(item)
                bar.advance()
    """

    def __init__(
        self,
        target: int = 0,
        label: str = "",
        config: BarConfig | None = None,
        *,
        stream=None,
        columns=None,
    ):
        self.config = config or BarConfig()
        self.stream = stream if stream is not None else sys.stdout
        self._columns = columns or (lambda: terminal_width(self.stream))
        self._target = max(0, int(target))
        self._label = label
        self._current = 0
        self._count_lock = threading.Lock()
        self.start_time = time.perf_counter()

        self._state = RUNNING
        self._state_lock = threading.Lock()
        self._wake = threading.Event()
        self._done = threading.Event()
        self._lines: queue.SimpleQueue[_LineRequest] = queue.SimpleQueue()
        self._resize_pending = False

        self._palette = Palette(self.config.color_enabled)
        self._renderer = Renderer(self.stream)
        self._sampler = RateSampler(self.start_time, self.config.sample_window)
        self._seen = 0
        self._seen_time = self.start_time
        self._width = self._get_width()

        self._previous_handler = None
        self._handler_installed = False
        self._install_resize_handler()

        self._thread = threading.Thread(target=self._run, name="flexbar", daemon=True)
        self._thread.start()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.finish()

    @property
    def current(self) -> int:
        return self._current

    @property
    def target(self) -> int:
        return self._target

    @property
    def label(self) -> str:
        return self._label

    @property
    def finished(self) -> bool:
        """True once finish() has been called or the render thread has stopped."""
        return self._state != RUNNING

    def advance(self, n: int = 1):
        with self._count_lock:
            self._current += n

    def next(self):
        self.advance(1)

    def set_label(self, text: str):
        self._label = str(text)

    def log_line(self, text: str):
        """Print text as a normal line above the bar.

        Returns once the line and the repainted bar have been written. After
        finish() the line is written directly below the final bar.
        """
        request = _LineRequest(str(text))
        with self._state_lock:
            queued = self._state == RUNNING
            if queued:
                self._lines.put(request)
        if queued:
            self._wake.set()
            request.done.wait()
        else:
            self._done.wait()
            self._renderer.println(request.text)

    def notify_resize(self):
        """Re-measure the terminal before the next redraw."""
        self._resize_pending = True
        self._wake.set()

    def finish(self):
        """Stop the bar and restore the terminal. Safe to call more than once.

        Every caller blocks until the render thread has drawn the final state
        and exited.
        """
        with self._state_lock:
            first = self._state == RUNNING
            if first:
                self._state = FINISHING
        if first:
            self._wake.set()
        self._done.wait()
        self._restore_resize_handler()

    def _install_resize_handler(self):
        """Listen for SIGWINCH where signals can be installed (Unix main thread)."""
        if not hasattr(signal, "SIGWINCH"):
            return
        if threading.current_thread() is not threading.main_thread():
            return
        try:
            previous = signal.signal(signal.SIGWINCH, self._on_sigwinch)
        except (OSError, ValueError) as e:
            logger.debug("Cannot watch terminal resizes: %s", e)
            return
        # Skip over a finished bar whose handler was never restored
        stale = getattr(previous, "__self__", None)
        if isinstance(stale, ProgressBar) and stale._done.is_set():
            previous = stale._previous_handler
        self._previous_handler = previous
        self._handler_installed = True

    def _restore_resize_handler(self):
        if not self._handler_installed:
            return
        if threading.current_thread() is not threading.main_thread():
            return
        if signal.getsignal(signal.SIGWINCH) == self._on_sigwinch:
            signal.signal(signal.SIGWINCH, self._previous_handler or signal.SIG_DFL)
        self._handler_installed = False

    def _on_sigwinch(self, signum, frame):
        # Only a flag: taking locks here could deadlock the interrupted main thread.
        # The render thread picks it up on its next tick.
        self._resize_pending = True
        previous = self._previous_handler
        if self._done.is_set():
            # finish() ran off the main thread; handlers always run on it
            self._restore_resize_handler()
        if callable(previous):
            previous(signum, frame)

    def _get_width(self) -> int:
        """Columns available to the line, after the right margin."""
        try:
            columns = self._columns()
        except (OSError, ValueError) as e:
            logger.debug("Terminal width query failed: %s", e)
            columns = DEFAULT_COLUMNS
        columns = columns or DEFAULT_COLUMNS
        return max(0, columns - self.config.margin)

    def _sample(self) -> Sample:
        now = time.perf_counter()
        current = self._current
        if current != self._seen:
            self._seen = current
            self._seen_time = now
        duration, delta = self._sampler.update(current, now)
        return Sample(
            current=current,
            target=self._target,
            label=self._label,
            elapsed=now - self.start_time,
            progress_elapsed=self._seen_time - self.start_time,
            window_duration=duration,
            window_delta=delta,
        )

    def render_line(self) -> str:
        """Lay out the current state for the current width."""
        sample = self._sample()
        segments = build_segments(sample, self._palette, self.config.min_bar_width)
        separator = self.config.separator
        return join(fit(segments, self._width, separator), separator)

    def _cycle(self):
        requests: list[_LineRequest] = []
        try:
            while True:
                try:
                    requests.append(self._lines.get_nowait())
                except queue.Empty:
                    break
            for request in requests:
                self._renderer.interject(request.text)
            if self._resize_pending:
                self._resize_pending = False
                self._renderer.clear()
                self._width = self._get_width()
            self._renderer.draw(self.render_line())
        finally:
            for request in requests:
                request.done.set()

    def _run(self):
        """Background thread: redraw every tick until finish() is seen."""
        try:
            while True:
                self._wake.wait(self.config.tick_interval)
                self._wake.clear()
                stopping = self._state != RUNNING
                self._cycle()
                if stopping:
                    break
        except Exception as e:
            logger.exception("Render thread exception: %s", e)
        finally:
            with self._state_lock:
                self._state = FINISHED
            # Lines that could not be drawn through the bar are still printed
            while True:
                try:
                    request = self._lines.get_nowait()
                except queue.Empty:
                    break
                self._renderer.interject(request.text)
                request.done.set()
            self._renderer.close(keep=self.config.keep_on_finish)
            self._done.set()
