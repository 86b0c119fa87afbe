"""
streamer.multiplexer
~~~~~~~~~~~~~~~~~~~~
"""

import logging
from concurrent import futures
from concurrent.futures import Future

from .escape import DetachRequestedError
from .tasks import StreamCancelledError, spawn

BUFFER_SIZE = 32 * 1024

def copy(write, read, buffer_size=BUFFER_SIZE):
    """Copy from read to write until EOF, returning the number of bytes copied."""
    count = 0

    while True:
        data = read(buffer_size)

        if not data:
            return count

        write(data)

        count += len(data)

class StreamMultiplexer:
    """Copies local input to the attach stream and the attach stream to local output."""

    def __init__(self, input, output, buffer_size=BUFFER_SIZE):
        self.logger = logging.getLogger(__name__)

        self.input = input
        self.output = output
        self.buffer_size = buffer_size

    def run(self, attach_stream, cancel=None, restore=None):
        """Stream until the remote output ends, the user detaches or cancel is triggered.

        The remote output ending is authoritative, once the remote stops sending
        the session is over. The local input ending is not, there may be trailing
        output still to come.
        """
        if restore is None:
            restore = lambda: None

        # A future that never completes stands in for a missing cancel token.
        cancelled = cancel.future if cancel is not None else Future()

        out_done = self._stream_out(attach_stream, restore)
        (in_done, detached) = self._stream_in(attach_stream, restore)

        (done, _) = futures.wait([out_done, in_done, detached, cancelled],
                                 return_when=futures.FIRST_COMPLETED)

        if out_done in done:
            return out_done.result()

        if in_done in done:
            (done, _) = futures.wait([out_done, cancelled], return_when=futures.FIRST_COMPLETED)

            if out_done in done:
                return out_done.result()

            raise StreamCancelledError

        if detached in done:
            return detached.result()

        raise StreamCancelledError

    def _stream_in(self, attach_stream, restore):
        done = Future()
        detached = Future()

        def stream_in():
            try:
                copy(attach_stream.write, self.input.read, self.buffer_size)
            except DetachRequestedError as error:
                restore()

                detached.set_exception(error)
                return
            except Exception as error:
                self.logger.error(f'Input stream error: {error}')

            restore()

            try:
                attach_stream.close_write()
            except Exception as error:
                self.logger.error(f'Close write error: {error}')

            done.set_result(None)

        spawn(stream_in, name='stream-in')

        return (done, detached)

    def _stream_out(self, attach_stream, restore):
        def stream_out():
            try:
                copy(self.output.write, attach_stream.read, self.buffer_size)
            except Exception as error:
                self.logger.error(f'Output stream error: {error}')

                raise
            finally:
                restore()

        return spawn(stream_out, name='stream-out')
