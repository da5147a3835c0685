"""
UI components for cpx.
Handles the progress counter, the single-line progress bar, and colored
diagnostics on stderr.

Author: Carlos Andrade <carlos@perezandrade.com>
"""

import sys
import threading
from typing import Optional, TextIO, Tuple

from .utils import BAR_WIDTH


# ANSI escape codes for styling
class Colors:
    RESET = "\033[0m"
    YELLOW = "\033[33m"
    RED = "\033[31m"


def _paint(text: str, color: str, stream: TextIO) -> str:
    """Wrap text in a color only when writing to a terminal."""
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def warn(message: str, stream: Optional[TextIO] = None):
    """Report a non-fatal, per-entry problem during the copy pass."""
    stream = stream or sys.stderr
    # Start on a fresh line so the warning doesn't land on the progress bar
    print("\n" + _paint(f"Warning: {message}", Colors.YELLOW, stream), file=stream)


def error(message: str, stream: Optional[TextIO] = None):
    """Report a fatal problem."""
    stream = stream or sys.stderr
    print(_paint(f"Error: {message}", Colors.RED, stream), file=stream)


class ProgressState:
    """Counts of files found by the scan pass and files copied so far.

    One instance lives for a whole copy operation. The scan pass only
    grows ``total``; the copy pass only grows ``copied``.
    """

    def __init__(self):
        self.total = 0
        self.copied = 0
        # Copies run on one thread; the lock is for a parallel copier
        self._lock = threading.Lock()

    def increment_total(self):
        with self._lock:
            self.total += 1

    def increment_copied(self):
        with self._lock:
            self.copied += 1

    def snapshot(self) -> Tuple[int, int]:
        """Return (total, copied) as one consistent pair."""
        with self._lock:
            return self.total, self.copied


class ProgressBar:
    """A fixed-width ASCII bar redrawn in place after every copied file.

    Renders as ``[=====>     ]  12.50% (1/8 files)``.
    """

    def __init__(self, state: ProgressState, stream: Optional[TextIO] = None, width: int = BAR_WIDTH):
        self.state = state
        self.width = width
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def format(self, total: int, copied: int) -> str:
        """Build one frame of the bar, without the leading carriage return."""
        percent = copied / total * 100.0
        pos = int(percent / 100.0 * self.width)

        cells = []
        for i in range(self.width):
            if i < pos:
                cells.append("=")
            elif i == pos:
                cells.append(">")
            else:
                cells.append(" ")
        return f"[{''.join(cells)}] {percent:6.2f}% ({copied}/{total} files)"

    def render(self, total: int, copied: int):
        """Overwrite the current line with the bar for (total, copied)."""
        if total == 0:
            return
        self.stream.write("\r" + self.format(total, copied))
        self.stream.flush()

    def update(self):
        """Redraw from the current counter state."""
        self.render(*self.state.snapshot())

    def complete_item(self):
        """Mark one file as copied and redraw."""
        self.state.increment_copied()
        self.update()

    def finish(self):
        """End the progress line and print the completion marker."""
        self.stream.write("\nDone.\n")
        self.stream.flush()
