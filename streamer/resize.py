"""
streamer.resize
~~~~~~~~~~~~~~~
"""

import time
import queue
import logging
import threading

# Retries after a failed initial resize, the remote may not be ready to accept a
# resize request immediately after attaching.
RESIZE_RETRIES = 5
RESIZE_RETRY_DELAY = 0.01

class TtySizeUnavailableError(Exception):
    def __init__(self):
        super().__init__('tty size is 0')

class ResizeSynchronizer:
    """Keeps the remote terminal size in sync with the local terminal."""

    def __init__(self, terminal, session_id, resize, retries=RESIZE_RETRIES,
                 retry_delay=RESIZE_RETRY_DELAY):
        self.logger = logging.getLogger(__name__)

        self.terminal = terminal
        self.session_id = session_id
        self.resize = resize

        self.retries = retries
        self.retry_delay = retry_delay

        self.events = None
        self.listener = None
        self.unsubscribe = None

    def start(self):
        """Resize the remote terminal and monitor for local size changes."""
        self.init_tty_size()

        self.events = queue.SimpleQueue()

        self.listener = threading.Thread(target=self._listen, args=(self.events,),
                                         name=f'resize-{self.session_id}', daemon=True)

        self.listener.start()

        self.unsubscribe = self.terminal.on_resize(lambda: self.events.put(True))

    def stop(self):
        if self.unsubscribe:
            self.unsubscribe()

            self.unsubscribe = None

        if self.events:
            self.events.put(None)

            self.events = None

        self.listener = None

    def resize_tty(self):
        (rows, columns) = self.terminal.size()

        if rows == 0 and columns == 0:
            raise TtySizeUnavailableError

        self.resize(self.session_id, rows, columns)

    def init_tty_size(self):
        """Resize the remote terminal, retrying in the background on failure.

        Returns the retry thread, or None if the initial resize succeeded.
        """
        try:
            self.resize_tty()
        except Exception as error:
            self.logger.warning(f'Failed to resize tty: {error}')
        else:
            return None

        thread = threading.Thread(target=self._retry, name=f'resize-retry-{self.session_id}',
                                  daemon=True)

        thread.start()

        return thread

    def _retry(self):
        for attempt in range(self.retries):
            time.sleep(self.retry_delay)

            try:
                self.resize_tty()
            except Exception as error:
                self.logger.debug(f'Resize attempt {attempt + 1} failed: {error}')
            else:
                return True

        self.logger.warning('Failed to resize tty, using default size')

        return False

    def _listen(self, events):
        while events.get() is not None:
            try:
                self.resize_tty()
            except Exception as error:
                self.logger.debug(f'Failed to resize tty: {error}')
