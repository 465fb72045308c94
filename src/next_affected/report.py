"""Terminal output — affected pages listing and the progress line.

Routes go to stdout so they can be piped; progress and diagnostics go to
stderr.  Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Iterable


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"


def supports_color(stream: TextIO) -> bool:
    """Return True if *stream* is a terminal that accepts ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def _style(text: str, *codes: str, color: bool) -> str:
    if not color:
        return text
    return f"{''.join(codes)}{text}{_RESET}"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def print_affected_pages(routes: Iterable[str], stream: TextIO | None = None) -> None:
    """Print the affected routes, one per line, or a "none found" note."""
    stream = stream or sys.stdout
    color = supports_color(stream)
    routes = list(routes)

    if not routes:
        print("\n" + _style("No affected pages found.", _DIM, color=color), file=stream)
        return

    lines = ["", _style("Affected Pages:", _BOLD, color=color)]
    lines.extend(_style(route, _GREEN, color=color) for route in routes)
    print("\n".join(lines), file=stream)


def print_warning(message: str, stream: TextIO | None = None) -> None:
    """Print a one-line warning to stderr."""
    stream = stream or sys.stderr
    marker = _style("!", _YELLOW, color=supports_color(stream))
    print(f"  {marker} {message}", file=stream)


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

class ProgressLine:
    """A single status line rewritten in place with ``\\r``.

    Usage::

        progress = ProgressLine()
        progress.update(f"Processed modules: {done}/{total}")
        progress.finish()

    """

    __slots__ = ("_active", "_stream")

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stderr
        self._active = False

    def update(self, text: str) -> None:
        """Replace the current line with *text*."""
        self._stream.write(f"\r{text}")
        self._stream.flush()
        self._active = True

    def finish(self, text: str | None = None) -> None:
        """Optionally write a final *text*, then end the line."""
        if text is not None:
            self.update(text)
        if self._active:
            self._stream.write("\n")
            self._stream.flush()
            self._active = False
