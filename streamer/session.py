"""
streamer.session
~~~~~~~~~~~~~~~~
"""

import socket
import logging

class EmptySessionIdError(ValueError):
    def __init__(self):
        super().__init__('empty session id')

class TransportError(IOError):
    pass

class Session:
    """An attach operation, created by the caller before streaming starts."""

    def __init__(self, session_id, attach_stream):
        self.session_id = session_id
        self.attach_stream = attach_stream

    def validate(self):
        if not self.session_id:
            raise EmptySessionIdError

class AttachStream:
    """Duplex byte connection to the stdio of a remote process."""

    def read(self, size):
        """Read at most size bytes, an empty result indicates the remote is closed."""
        raise NotImplementedError

    def write(self, data):
        """Write all bytes."""
        raise NotImplementedError

    def close_write(self):
        """Signal the remote that no more input is coming, the read side stays open."""
        raise NotImplementedError

    def close(self):
        raise NotImplementedError

class SocketAttachStream(AttachStream):
    """Attach stream over a connected stream socket, such as a hijacked HTTP connection."""

    def __init__(self, sock):
        self.logger = logging.getLogger(__name__)

        self.sock = sock
        self.is_closed = False

    def read(self, size):
        try:
            return self.sock.recv(size)
        except OSError as error:
            # A read racing close, the stream has ended.
            if self.is_closed:
                return b''

            raise TransportError(f'read failed: {error}') from error

    def write(self, data):
        try:
            self.sock.sendall(data)
        except OSError as error:
            raise TransportError(f'write failed: {error}') from error

    def close_write(self):
        try:
            self.sock.shutdown(socket.SHUT_WR)
        except OSError as error:
            raise TransportError(f'close write failed: {error}') from error

    def close(self):
        if self.is_closed:
            return

        self.is_closed = True

        # Shutdown first, a recv blocked on another thread is not woken by close alone.
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError as error:
            self.logger.debug(f'Socket shutdown failed: {error}')

        self.sock.close()
