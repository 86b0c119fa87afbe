"""
streamer.escape
~~~~~~~~~~~~~~~
"""

import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_DETACH_KEYS = 'ctrl-p,ctrl-q'

CONTROL_KEY_MAP = {
    '@': 0x00,
    '[': 0x1b,
    '\\': 0x1c,
    ']': 0x1d,
    '^': 0x1e,
    '_': 0x1f
}

class DetachRequestedError(Exception):
    def __init__(self):
        super().__init__('read escape sequence')

def parse_detach_keys(keys):
    """Parse a comma separated detach key sequence, such as "ctrl-p,ctrl-q"."""
    sequence = bytearray()

    if not keys:
        return bytes(sequence)

    for key in keys.split(','):
        if len(key) == 1:
            sequence.append(ord(key))
            continue

        code = _parse_control_key(key)

        if code is None:
            raise ValueError(f'invalid detach key: {key}')

        sequence.append(code)

    return bytes(sequence)

def get_detach_keys():
    value = os.environ.get('STREAMER_DETACH_KEYS')

    if value is not None:
        try:
            return parse_detach_keys(value)
        except ValueError as error:
            logger.warning(f'Unsupported STREAMER_DETACH_KEYS option: {error}')

    return parse_detach_keys(DEFAULT_DETACH_KEYS)

def _parse_control_key(key):
    if not key.startswith('ctrl-') or len(key) != 6:
        return None

    character = key[5]

    if 'a' <= character <= 'z':
        return ord(character) - ord('a') + 1

    return CONTROL_KEY_MAP.get(character)

class EscapeProxy:
    """Reader that raises DetachRequestedError when the detach key sequence is typed.

    Only single byte reads are considered keystrokes, larger reads (such as a paste)
    are passed through unchanged. Keys matching the start of the sequence are held
    back and forwarded with the next read if the sequence is not completed.
    """

    def __init__(self, reader, keys):
        self.reader = reader
        self.keys = keys

        self.position = 0
        self.pending = b''

    def read(self, size):
        if self.pending:
            return self._take(size)

        while True:
            data = self.reader.read(size)

            if not self.keys:
                return data

            if len(data) != 1:
                return self._preserve(data, size)

            if data[0] != self.keys[self.position]:
                return self._preserve(data, size)

            if self.position == len(self.keys) - 1:
                self.position = 0

                raise DetachRequestedError

            # Swallow the key and match the next keystroke.
            self.position += 1

    def _preserve(self, data, size):
        if self.position == 0:
            return data

        self.pending = self.keys[:self.position] + data
        self.position = 0

        return self._take(size)

    def _take(self, size):
        data = self.pending[:size]

        self.pending = self.pending[size:]

        return data
