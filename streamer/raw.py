"""
streamer.raw
~~~~~~~~~~~~
"""

import logging
import termios
import threading
from contextlib import contextmanager

logger = logging.getLogger(__name__)

class RawModeError(Exception):
    pass

def set_raw_terminal(terminal):
    """Put the terminal input into raw mode.

    The returned restore function may be called any number of times, from any
    thread, but the terminal mode is restored only once. A failure to restore is
    logged and not raised, it must not mask the outcome of the stream.
    """
    try:
        mode = terminal.enter_raw()
    except (termios.error, OSError) as error:
        raise RawModeError(f'unable to set raw mode: {error}') from error

    lock = threading.Lock()
    is_restored = False

    def restore():
        nonlocal is_restored

        with lock:
            if is_restored:
                return

            is_restored = True

            try:
                terminal.restore(mode)
            except (termios.error, OSError) as error:
                logger.error(f'Failed to restore terminal: {error}')

    return restore

@contextmanager
def raw_terminal(terminal):
    restore = set_raw_terminal(terminal)

    try:
        yield restore
    finally:
        restore()
