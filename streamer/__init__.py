from .session import Session, AttachStream, SocketAttachStream, EmptySessionIdError, TransportError
from .terminal import LocalTerminal, Dimensions
from .raw import RawModeError, set_raw_terminal, raw_terminal
from .escape import DetachRequestedError, EscapeProxy, parse_detach_keys
from .resize import ResizeSynchronizer, TtySizeUnavailableError
from .multiplexer import StreamMultiplexer
from .streamer import SessionStreamer, ignore_detach
from .tasks import CancelToken, StreamCancelledError
