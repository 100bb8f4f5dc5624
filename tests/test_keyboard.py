import io
import os
import threading
import time

import pytest

from bfcore import keyboard


def test_non_terminal_stream_reads_one_character():
    stream = io.StringIO("xy")
    assert keyboard.read_keypress(stream) == "x"
    assert keyboard.read_keypress(stream) == "y"
    assert keyboard.read_keypress(stream) == ""


@pytest.mark.skipif(os.name != "posix", reason="needs a pseudo-terminal")
def test_terminal_reads_single_keypress():
    import pty
    import termios

    master, slave = pty.openpty()
    stream = os.fdopen(slave, "r")
    before = termios.tcgetattr(slave)

    def type_keys():
        # Arrive after the first poll so the wait loop runs
        time.sleep(keyboard.POLL_INTERVAL + 0.1)
        os.write(master, b"xy")

    typist = threading.Thread(target=type_keys)
    typist.start()
    try:
        assert stream.isatty()
        assert keyboard.read_keypress(stream) == "x"
        # Terminal settings are restored afterwards
        assert termios.tcgetattr(slave) == before
    finally:
        typist.join()
        stream.close()
        os.close(master)
