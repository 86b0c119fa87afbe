import sys
import signal
import logging

from .args import parse_args
from .process import ProcessAttachStream
from .streamer import SessionStreamer
from .escape import DetachRequestedError
from .tasks import CancelToken, StreamCancelledError

logger = logging.getLogger('streamer.main')

def main():
    args = parse_args(sys.argv[1:])

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    streamer = SessionStreamer(detach_keys=args.detach_keys)

    dimensions = streamer.terminal.size()

    if dimensions.rows == 0 and dimensions.columns == 0:
        dimensions = (24, 80)

    attach_stream = ProcessAttachStream.spawn([args.command, *args.command_args], dimensions)

    cancel = CancelToken()

    def signal_handler(_number, _frame):
        logger.info('Stopping stream...')

        cancel.cancel()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGHUP, signal_handler)

    try:
        streamer.stream(attach_stream.session_id, attach_stream, attach_stream.resize, cancel)
    except DetachRequestedError:
        return 0
    except StreamCancelledError:
        return 130
    except Exception:
        return 1

    # The process exit status, if it exited before the stream was closed.
    return attach_stream.exit_status() or 0

if __name__ == '__main__':
    sys.exit(main())
