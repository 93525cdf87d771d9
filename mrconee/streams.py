import io
import logging
import os
import struct

from bitstring import ConstBitStream, ReadError

from .meta import Endianess
from .exceptions import (
    IoException,
    RecordReadException,
    UnpackException,
)


logger = logging.getLogger(__name__)


class RecordStream(object):
    '''Sequential access to a file made of unformatted records, i.e. the layout
    the Fortran runtime uses for sequential binary files:

        | length (4 bytes) | payload (length bytes) | length (4 bytes) |

    Only the operations needed to decode are available: read the next record,
    peek at the size of the next record without consuming it and go back of
    one record.'''
    MARKER_SIZE = 4

    def __init__(self, obj, endianess=Endianess.LITTLE_ENDIAN):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._type = type(obj)
        self.obj = obj
        self.endianess = endianess
        self.history = []
        self._error = False
        self._saved = 0

        init_method = getattr(self, 'init_%s' % self.obj.__class__.__name__, None)

        if init_method is None:
            raise IoException(chain=[], message=f'cannot open a record stream from {self._type.__name__}')

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name})>'

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

        return False

    @property
    def name(self):
        return getattr(self.obj, 'name', '<bytes>')

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        try:
            self.obj = open(self.obj, 'rb')
        except OSError as e:
            raise IoException(chain=[], message=f'cannot open \'{self.obj}\': {e.strerror}') from e

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def close(self):
        self.obj.close()

    def has_error(self):
        return self._error

    def tell(self):
        return self.obj.tell()

    def _fail(self, message):
        self._error = True
        return RecordReadException(chain=[], message=message)

    def _read_marker(self):
        '''Returns the length marker at the current position, None at the end of the file.'''
        raw = self.obj.read(self.MARKER_SIZE)
        if len(raw) == 0:
            return None
        if len(raw) != self.MARKER_SIZE:
            raise self._fail(f'truncated record marker at offset {self.tell() - len(raw)}')

        length = struct.unpack(f'{self.endianess.prefix}i', raw)[0]
        if length < 0:
            raise self._fail(f'invalid record length {length} at offset {self.tell() - self.MARKER_SIZE}')

        return length

    def next_record_size(self):
        '''Size in bytes of the payload of the next record; the position is untouched.'''
        self.save()
        try:
            length = self._read_marker()
        finally:
            self.restore()

        if length is None:
            raise self._fail('no record left to peek at')

        return length

    def read_record(self):
        offset = self.tell()
        length = self._read_marker()
        if length is None:
            raise self._fail(f'end of file reached at offset {offset}')

        payload = self.obj.read(length)
        if len(payload) != length:
            raise self._fail(f'record at offset {offset} is truncated ({len(payload)} bytes out of {length})')

        length_end = self._read_marker()
        if length_end != length:
            raise self._fail(f'record at offset {offset} has mismatching markers ({length} and {length_end})')

        logger.debug('read record of %d bytes at offset %d' % (length, offset))
        self.history.append(offset)

        return payload

    def backspace(self):
        '''Go back of one record, so that the next read returns it again.'''
        if not self.history:
            raise self._fail('no record to go back to')

        self.obj.seek(self.history.pop())

    def save(self):
        self._saved = self.tell()

    def restore(self):
        self.obj.seek(self._saved)


class RecordCursor(object):
    '''Binary cursor over the payload of a single record: the fields ask for
    the exact number of bytes they need, in sequence.'''

    def __init__(self, payload: bytes, endianess=Endianess.LITTLE_ENDIAN):
        self._bits = ConstBitStream(bytes=payload)
        self.endianess = endianess

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.tell()}/{len(self)})>'

    def __len__(self):
        return self._bits.len // 8

    def tell(self):
        return self._bits.bytepos

    @property
    def remaining(self):
        return len(self) - self.tell()

    def read(self, size: int) -> bytes:
        if size == 0:
            return b''
        if size < 0:
            raise UnpackException(chain=[], message=f'negative size {size} requested at offset {self.tell()}')

        try:
            return self._bits.read(f'bytes:{size}')
        except ReadError as e:
            raise UnpackException(
                chain=[],
                message=f'requested {size} bytes at offset {self.tell()} but only {self.remaining} left',
            ) from e
