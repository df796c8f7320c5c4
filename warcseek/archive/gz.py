"""Record-at-time gzip framing: every warc record is its own gzip member,
so any record can be inflated on its own once its start offset is known."""

import gzip
import struct
import zlib

from warcseek.archive.errors import MalformedRecord, Unsupported
from warcseek.archive.log import debug

GZIP = 'record'
PLAIN = 'plain'

GZIP_MAGIC = b'\037\213'

AWAITING_UNIT = 'awaiting-unit'
DECODING_UNIT = 'decoding-unit'


class CountingByteSource(object):
    """Buffers reads from fileobj through one staging block and counts every
    byte handed out. position is that count, i.e. the raw offset of the next
    byte to be read. It starts at the file position of fileobj when that
    can be told, and at 0 for pipes."""

    BLOCK_SIZE = 8192

    def __init__(self, fileobj, block_size=BLOCK_SIZE):
        self.fileobj = fileobj
        self.block_size = block_size
        self.position = fileobj.tell() if self.seekable() else 0
        self._buf = b''
        self._buf_offset = 0

    def _refill(self):
        self._buf = self.fileobj.read(self.block_size) or b''
        self._buf_offset = 0
        return len(self._buf)

    def read(self, size=-1):
        """Returns up to size bytes of whatever is left in the staging block,
        refilling it first if it is empty. Returns b'' at end of input."""
        if self._buf_offset >= len(self._buf) and not self._refill():
            return b''
        start = self._buf_offset
        end = len(self._buf) if size < 0 else min(start + size, len(self._buf))
        self._buf_offset = end
        self.position += end - start
        return self._buf[start:end]

    def readinto(self, b):
        data = self.read(len(b))
        b[:len(data)] = data
        return len(data)

    def read_byte(self):
        """Returns the next byte as an int, or None at end of input."""
        if self._buf_offset >= len(self._buf) and not self._refill():
            return None
        c = self._buf[self._buf_offset]
        self._buf_offset += 1
        self.position += 1
        return c

    def unread(self, n):
        """Steps back over the last n bytes handed out of the current
        staging block."""
        if n < 0 or n > self._buf_offset:
            raise IndexError('cannot unread %d bytes' % n)
        self._buf_offset -= n
        self.position -= n

    def seekable(self):
        seekable = getattr(self.fileobj, 'seekable', None)
        if seekable is not None:
            return seekable()
        return hasattr(self.fileobj, 'seek')

    def seek(self, offset):
        self.fileobj.seek(offset)
        self._buf = b''
        self._buf_offset = 0
        self.position = offset


class RecordFramer(object):
    """Inflates exactly one gzip member per next_member() call.

    Starts in AWAITING_UNIT; next_member() moves to DECODING_UNIT and, once
    the member trailer has been read, back to AWAITING_UNIT with last set to
    the source position. A call that consumes no input at all means the
    archive is exhausted and returns None."""

    def __init__(self, source, mode=GZIP):
        if mode not in (GZIP, PLAIN):
            raise ValueError('unknown framing mode %r' % (mode,))
        self.source = source
        self.mode = mode
        self.reset()

    def reset(self):
        """Re-arm at the current source position, e.g. after a seek."""
        self.last = self.source.position
        self.state = AWAITING_UNIT

    def next_member(self):
        """Returns the decompressed bytes of the next member, or None at the
        end of the archive."""
        if self.mode == PLAIN:
            raise Unsupported('reading warc files that are not compressed '
                              'record-at-time is not implemented',
                              offset=self.source.position)

        start = self.source.position
        self.state = DECODING_UNIT
        try:
            data = self._inflate_member(start)
        except Exception:
            self.reset()
            raise

        if self.source.position == self.last:
            self.state = AWAITING_UNIT
            return None

        debug('member', start, self.source.position, len(data))
        self.last = self.source.position
        self.state = AWAITING_UNIT
        return data

    def _inflate_member(self, start):
        if not self._read_gzip_header(start):
            return b''

        decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
        out = []
        while not decompressor.eof:
            chunk = self.source.read()
            if chunk == b'':
                raise MalformedRecord('compressed member ended before the '
                                      'end-of-stream marker was reached',
                                      offset=start)
            try:
                out.append(decompressor.decompress(chunk))
            except zlib.error as e:
                raise MalformedRecord('corrupt compressed member: %s' % e,
                                      offset=start)

        if decompressor.unused_data:
            self.source.unread(len(decompressor.unused_data))

        data = b''.join(out)
        self._read_gzip_trailer(start, data)
        self._skip_padding()
        return data

    def _read_exact(self, size, start):
        parts = []
        remaining = size
        while remaining > 0:
            chunk = self.source.read(remaining)
            if chunk == b'':
                raise MalformedRecord('truncated gzip member', offset=start)
            parts.append(chunk)
            remaining -= len(chunk)
        return b''.join(parts)

    def _skip_cstring(self, start):
        while True:
            c = self.source.read_byte()
            if c is None:
                raise MalformedRecord('truncated gzip header', offset=start)
            if c == 0:
                break

    def _read_gzip_header(self, start):
        """Returns False if there is no input left at all."""
        first = self.source.read_byte()
        if first is None:
            return False

        magic = bytes((first,)) + self._read_exact(1, start)
        if magic != GZIP_MAGIC:
            raise MalformedRecord('not a gzip member (%r)' % magic,
                                  offset=start)

        (method, flag, _mtime) = struct.unpack(
                "<BBIxx", self._read_exact(8, start))
        if method != 8:
            raise MalformedRecord('unknown compression method %d' % method,
                                  offset=start)

        if flag & gzip.FEXTRA:
            # Read & discard the extra field, if present
            extra_len, = struct.unpack("<H", self._read_exact(2, start))
            self._read_exact(extra_len, start)

        if flag & gzip.FNAME:
            self._skip_cstring(start)

        if flag & gzip.FCOMMENT:
            self._skip_cstring(start)

        if flag & gzip.FHCRC:
            self._read_exact(2, start)

        return True

    def _read_gzip_trailer(self, start, data):
        crc32, isize = struct.unpack("<II", self._read_exact(8, start))
        if crc32 != zlib.crc32(data) & 0xffffffff:
            raise MalformedRecord('CRC check failed', offset=start)
        if isize != len(data) & 0xffffffff:
            raise MalformedRecord('incorrect length of data produced',
                                  offset=start)

    def _skip_padding(self):
        while True:
            c = self.source.read_byte()
            if c is None:
                break
            if c != 0:
                self.source.unread(1)
                break
