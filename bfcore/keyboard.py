"""Single keypress capture for realtime input mode."""

import os
import select
import sys
import time

POLL_INTERVAL = 0.25  # seconds between checks for a pending key


def _read_key_windows() -> str:
    import msvcrt
    while not msvcrt.kbhit():
        time.sleep(POLL_INTERVAL)
    return msvcrt.getwch()


def _read_key_posix(stream) -> str:
    import termios
    import tty
    fd = stream.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        # cbreak: no line buffering, no echo
        tty.setcbreak(fd)
        while not select.select([fd], [], [], POLL_INTERVAL)[0]:
            pass
        return os.read(fd, 1).decode('latin-1')
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def read_keypress(stream=None) -> str:
    """Block until one key is pressed and return it without echoing.

    When the stream is not a terminal (piped input, tests) a single
    character is read from it instead; end of stream gives ''.
    """
    stream = stream if stream is not None else sys.stdin
    if not stream.isatty():
        return stream.read(1)
    if os.name == 'nt':
        return _read_key_windows()
    return _read_key_posix(stream)
