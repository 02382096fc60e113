"""Styled status messages and a terminal progress spinner."""

from __future__ import annotations

import itertools
import os
import sys
import threading

_RESET = "\x1b[0m"
_COLORS = {"red": "31", "green": "32", "blue": "34"}


def no_emoji() -> bool:
    """Return True when the NO_EMOJI environment variable is set."""
    return "NO_EMOJI" in os.environ


def style(text, color: str | None = None, bold: bool = False) -> str:
    """Wrap ``text`` in ANSI escape codes for the given colour and weight."""
    codes = []
    if bold:
        codes.append("1")
    if color is not None:
        try:
            codes.append(_COLORS[color])
        except KeyError:
            raise ValueError(f"unknown colour: {color!r}") from None
    text = str(text)
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


def warn(message: str) -> None:
    """Print a warning line in red."""
    mark = "!" if no_emoji() else "⚠️ "
    print(f"{style(mark, 'red')} {style(message, 'red')}")


def success(message: str) -> None:
    """Print a success line in green."""
    mark = "✓" if no_emoji() else "✅"
    print(f"{style(mark, 'green')} {style(message, 'green')}")


class Spinner:
    """A spinner with a message, drawn only when the stream is a terminal."""

    FRAMES = "⠁⠂⠄⡀⢀⠠⠐⠈"

    def __init__(self, message: str, interval: float = 0.1, stream=None):
        self._stream = stream if stream is not None else sys.stderr
        self._message = message
        self._interval = interval
        self._lock = threading.Lock()
        self._stop = threading.Event()
        isatty = getattr(self._stream, "isatty", None)
        self._active = bool(isatty and isatty())
        self._thread: threading.Thread | None = None
        if self._active:
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()

    def set_message(self, message: str) -> None:
        with self._lock:
            self._message = message

    def _spin(self) -> None:
        for frame in itertools.cycle(self.FRAMES):
            if self._stop.wait(self._interval):
                return
            with self._lock:
                self._stream.write(f"\r\x1b[2K{frame} {self._message}")
                self._stream.flush()

    def finish_and_clear(self) -> None:
        """Stop spinning and erase the spinner line."""
        if self._stop.is_set():
            return
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
        if self._active:
            self._stream.write("\r\x1b[2K")
            self._stream.flush()

    def __enter__(self) -> "Spinner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish_and_clear()