"""
streamer.process
~~~~~~~~~~~~~~~~
"""

import os
import logging
from ptyprocess import PtyProcess

from .session import AttachStream, TransportError

class ProcessAttachStream(AttachStream):
    """Attach stream to a local process running in a pseudo-terminal."""

    def __init__(self, process):
        self.logger = logging.getLogger(__name__)

        self.process = process

    @classmethod
    def spawn(cls, argv, dimensions=(24, 80), env=None):
        environment = os.environ.copy() if env is None else env

        process = PtyProcess.spawn(argv, env=environment, dimensions=tuple(dimensions))

        return cls(process)

    @property
    def session_id(self):
        return str(self.process.pid)

    def read(self, size):
        try:
            return self.process.read(size)
        except EOFError:
            return b''
        except OSError as error:
            raise TransportError(f'read failed: {error}') from error

    def write(self, data):
        data = memoryview(data)

        try:
            while data:
                count = self.process.write(bytes(data))

                data = data[count:]
        except OSError as error:
            raise TransportError(f'write failed: {error}') from error

    def close_write(self):
        try:
            self.process.sendeof()
        except OSError as error:
            raise TransportError(f'close write failed: {error}') from error

    def close(self):
        if self.process.closed:
            return

        self.logger.debug('Terminating host process')

        self.process.close(force=True)

    def resize(self, session_id, rows, columns):
        self.process.setwinsize(rows, columns)

    def exit_status(self):
        if self.process.isalive():
            return None

        return self.process.exitstatus
