"""
streamer.tasks
~~~~~~~~~~~~~~
"""

import threading
from concurrent.futures import Future, CancelledError

class StreamCancelledError(CancelledError):
    pass

class CancelToken:
    """A one-shot cancellation signal shared by everything in a single stream call."""

    def __init__(self):
        self.future = Future()

        self._lock = threading.Lock()

    def cancel(self):
        """Cancel, returns False if already cancelled."""
        with self._lock:
            if self.future.done():
                return False

            self.future.set_result(None)

            return True

    def cancel_after(self, delay):
        """Cancel after delay seconds."""
        timer = threading.Timer(delay, self.cancel)

        timer.daemon = True
        timer.start()

        return timer

def spawn(function, *args, name=None):
    """Run function on a daemon thread, the returned future holds its result.

    Daemon threads are used so a task blocked on I/O that will never complete does
    not prevent the interpreter from exiting.
    """
    future = Future()

    future.set_running_or_notify_cancel()

    def run():
        try:
            result = function(*args)
        except BaseException as error:
            future.set_exception(error)
        else:
            future.set_result(result)

    thread = threading.Thread(target=run, name=name, daemon=True)

    thread.start()

    return future
