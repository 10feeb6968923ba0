"""
Raw keyboard input for the terminal front end.

``KeyReader`` puts the terminal in cbreak mode and returns decoded key
presses, waiting at most a given timeout so the caller's loop keeps ticking.
"""

import codecs
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List


class Key(Enum):
    """Keys the front end reacts to."""
    ESC = "esc"
    TAB = "tab"
    BACKSPACE = "backspace"
    ENTER = "enter"
    UP = "up"
    DOWN = "down"
    CHAR = "char"
    OTHER = "other"


@dataclass(frozen=True)
class KeyPress:
    key: Key
    char: str = ""


_SIMPLE_KEYS = {
    "\t": Key.TAB,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}

_ARROWS = {"A": Key.UP, "B": Key.DOWN}


def decode_keys(data: str) -> List[KeyPress]:
    """
    Split raw terminal input into key presses.

    Handles ANSI arrow sequences (``ESC [ A`` and ``ESC O A`` forms); other
    escape sequences are consumed whole and reported as ``Key.OTHER``. A lone
    escape byte is the Esc key.
    """
    keys = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\x1b":
            if i + 2 < len(data) and data[i + 1] in "[O":
                j = i + 2
                # parameter bytes run until a final byte in the @..~ range
                while j < len(data) and not ("@" <= data[j] <= "~"):
                    j += 1
                final = data[j] if j < len(data) else ""
                if j == i + 2 and final in _ARROWS:
                    keys.append(KeyPress(_ARROWS[final]))
                else:
                    keys.append(KeyPress(Key.OTHER))
                i = j + 1
                continue
            keys.append(KeyPress(Key.ESC))
        elif ch in _SIMPLE_KEYS:
            keys.append(KeyPress(_SIMPLE_KEYS[ch]))
        elif ch.isprintable():
            keys.append(KeyPress(Key.CHAR, ch))
        else:
            keys.append(KeyPress(Key.OTHER))
        i += 1
    return keys


def decode_windows_key(first: str, second: str = "") -> KeyPress:
    """Decode a key read with ``msvcrt.getwch``; arrows arrive as two characters."""
    if first in ("\x00", "\xe0"):
        return KeyPress({"H": Key.UP, "P": Key.DOWN}.get(second, Key.OTHER))
    if first == "\x1b":
        return KeyPress(Key.ESC)
    if first in _SIMPLE_KEYS:
        return KeyPress(_SIMPLE_KEYS[first])
    if first.isprintable():
        return KeyPress(Key.CHAR, first)
    return KeyPress(Key.OTHER)


class KeyReader:
    """Context manager reading key presses from the controlling terminal."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._saved_attrs = None
        self._windows = sys.platform.startswith("win")
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

    def __enter__(self) -> 'KeyReader':
        if not self._windows:
            import termios
            import tty

            fd = self.stream.fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved_attrs is not None:
            import termios

            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def read(self, timeout: float) -> List[KeyPress]:
        """Wait up to ``timeout`` seconds and return whatever keys arrived."""
        if self._windows:
            return self._read_windows(timeout)
        return self._read_posix(timeout)

    def _read_posix(self, timeout: float) -> List[KeyPress]:
        import select

        fd = self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return []
        return self.feed(os.read(fd, 64))

    def feed(self, data: bytes) -> List[KeyPress]:
        """Decode raw terminal bytes; a character split across reads waits for its tail."""
        return decode_keys(self._decoder.decode(data))

    def _read_windows(self, timeout: float) -> List[KeyPress]:
        import msvcrt
        import time

        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= deadline:
                return []
            time.sleep(0.01)

        keys = []
        while msvcrt.kbhit():
            first = msvcrt.getwch()
            second = msvcrt.getwch() if first in ("\x00", "\xe0") else ""
            keys.append(decode_windows_key(first, second))
        return keys
