"""
streamer.streamer
~~~~~~~~~~~~~~~~~
"""

import logging

from .session import Session
from .terminal import LocalTerminal
from .raw import raw_terminal
from .escape import EscapeProxy, DetachRequestedError, get_detach_keys
from .resize import ResizeSynchronizer
from .multiplexer import StreamMultiplexer
from .tasks import spawn

logger = logging.getLogger(__name__)

def ignore_detach(session, error):
    """Detach policy that takes no action, the caller decides what detaching means."""
    logger.info(f'Detach requested for session {session.session_id}')

class SessionStreamer:
    """Attaches the local terminal to a session."""

    def __init__(self, terminal=None, detach_keys=None, on_detach=ignore_detach):
        self.logger = logging.getLogger(__name__)

        self.terminal = terminal if terminal is not None else LocalTerminal()
        self.detach_keys = detach_keys if detach_keys is not None else get_detach_keys()
        self.on_detach = on_detach

    def stream(self, session_id, attach_stream, resize, cancel=None):
        """Stream until the session ends, raising the error that ended it.

        The attach stream is closed, and the terminal restored, before this returns.
        """
        session = Session(session_id, attach_stream)

        session.validate()

        try:
            self._stream(session, resize, cancel)
        except DetachRequestedError as error:
            self.on_detach(session, error)

            raise
        except Exception as error:
            self.logger.error(f'Stream error: {error}')

            raise
        finally:
            self._close(session)

    def _stream(self, session, resize, cancel):
        multiplexer = StreamMultiplexer(self._get_input(), self.terminal)

        synchronizer = None

        with raw_terminal(self.terminal) as restore:
            result = spawn(multiplexer.run, session.attach_stream, cancel, restore,
                           name=f'stream-{session.session_id}')

            try:
                if self.terminal.is_terminal:
                    synchronizer = ResizeSynchronizer(self.terminal, session.session_id, resize)

                    synchronizer.start()

                result.result()
            finally:
                if synchronizer:
                    synchronizer.stop()

    def _get_input(self):
        if self.terminal.is_terminal and self.detach_keys:
            return EscapeProxy(self.terminal, self.detach_keys)

        return self.terminal

    def _close(self, session):
        try:
            session.attach_stream.close()
        except Exception as error:
            self.logger.error(f'Close attach stream error: {error}')
