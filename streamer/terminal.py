"""
streamer.terminal
~~~~~~~~~~~~~~~~~
"""

import os
import sys
import tty
import signal
import termios
import logging
from collections import namedtuple

Dimensions = namedtuple('Dimensions', ['rows', 'columns'])

class LocalTerminal:
    """The local input and output devices."""

    def __init__(self, input=None, output=None):
        self.logger = logging.getLogger(__name__)

        self.input = input if input is not None else sys.stdin
        self.output = output if output is not None else sys.stdout

        self.is_terminal = _isatty(self.input)

    def read(self, size):
        stream = _binary(self.input)

        # A single underlying read, so keystrokes are forwarded as they arrive in raw mode.
        if hasattr(stream, 'read1'):
            return stream.read1(size)

        return stream.read(size)

    def write(self, data):
        stream = _binary(self.output)

        stream.write(data)
        stream.flush()

    def size(self):
        """Get the output terminal size, (0, 0) if it is not available."""
        try:
            size = os.get_terminal_size(self.output.fileno())
        except (AttributeError, ValueError, OSError):
            return Dimensions(0, 0)

        return Dimensions(size.lines, size.columns)

    def enter_raw(self):
        """Put the input into raw mode, returning the mode to restore."""
        if not self.is_terminal:
            return None

        fd = self.input.fileno()

        mode = termios.tcgetattr(fd)

        tty.setraw(fd)

        return mode

    def restore(self, mode):
        if mode is None:
            return

        termios.tcsetattr(self.input.fileno(), termios.TCSADRAIN, mode)

    def on_resize(self, handler):
        """Call handler on each terminal size change, returns a function to unsubscribe."""
        if not hasattr(signal, 'SIGWINCH'):
            self.logger.warning('Terminal size changes are not supported on this platform')

            return lambda: None

        try:
            previous_handler = signal.signal(signal.SIGWINCH, lambda _number, _frame: handler())
        except ValueError as error:
            # Signal handlers can only be installed from the main thread.
            self.logger.warning(f'Unable to monitor terminal size changes: {error}')

            return lambda: None

        def unsubscribe():
            signal.signal(signal.SIGWINCH, previous_handler if previous_handler is not None else signal.SIG_DFL)

        return unsubscribe

def _binary(stream):
    return getattr(stream, 'buffer', stream)

def _isatty(stream):
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False
