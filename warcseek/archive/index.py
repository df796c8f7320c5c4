"""Side indexes mapping records to the offsets of their gzip members.

Two independent on-disk formats, never to be mixed in one file:

ArchiveIndex, keyed by identifier, repeats
    [uint32 big-endian length][int64 big-endian offset][identifier bytes]
where length counts the offset and the identifier, i.e. 8 + len(identifier).

OffsetLog, positional, repeats
    [int64 little-endian offset]
one per record in write order, with no identifiers.
"""

import struct

from warcseek.archive.errors import (AlreadyExists, IndexTruncated,
                                     MalformedIndex, NoSuchEntry,
                                     OffsetOverflow)
from warcseek.archive.log import debug

MAX_OFFSET = 2 ** 63 - 1

_LENGTH = struct.Struct('>I')
_OFFSET = struct.Struct('>q')
_LOG_OFFSET = struct.Struct('<q')


def _check_offset(offset):
    if offset < 0 or offset > MAX_OFFSET:
        raise OffsetOverflow('offset %d does not fit in a signed 64 bit '
                             'integer' % offset)


class ArchiveIndex(object):
    """Persistent identifier -> offset mapping.

    The file is the source of truth: it is replayed in full on open into
    self.entries, and every put() appends to the file before touching the
    mapping. put() is not synchronized; lookups from several threads are
    fine once nothing writes any more.
    """

    def __init__(self, path):
        self.path = path
        self.entries = {}
        self.fh = open(path, 'a+b')
        try:
            self._replay()
        except Exception:
            self.fh.close()
            raise
        debug('index', path, len(self.entries))

    @classmethod
    def open(cls, path):
        return cls(path)

    def _read(self, size, what):
        data = self.fh.read(size)
        if len(data) != size:
            raise IndexTruncated('%s: short read of %s, wanted %d bytes got %d'
                                 % (self.path, what, size, len(data)))
        return data

    def _replay(self):
        self.fh.seek(0)
        while True:
            head = self.fh.read(_LENGTH.size)
            if head == b'':
                break
            if len(head) != _LENGTH.size:
                raise IndexTruncated('%s: short read of entry length'
                                     % self.path)
            length, = _LENGTH.unpack(head)
            if length <= _OFFSET.size:
                raise IndexTruncated('%s: entry length %d leaves no room for '
                                     'an identifier' % (self.path, length))
            offset, = _OFFSET.unpack(self._read(_OFFSET.size, 'offset'))
            key = self._read(length - _OFFSET.size, 'identifier')
            try:
                key = key.decode('utf-8')
            except UnicodeDecodeError:
                raise MalformedIndex('%s: identifier %r is not utf-8'
                                     % (self.path, key))
            self.entries[key] = offset

    def put(self, key, offset):
        """Records key -> offset. Existing keys are never overwritten."""
        if key in self.entries:
            raise AlreadyExists('index entry already exists', key)
        _check_offset(offset)

        raw_key = key.encode('utf-8')
        self.fh.write(_LENGTH.pack(_OFFSET.size + len(raw_key))
                      + _OFFSET.pack(offset) + raw_key)
        self.fh.flush()
        self.entries[key] = offset

    def lookup(self, key):
        try:
            return self.entries[key]
        except KeyError:
            raise NoSuchEntry('no such index entry', key)

    def __contains__(self, key):
        return key in self.entries

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def close(self):
        self.entries = {}
        self.fh.close()

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()


class OffsetLog(object):
    """Append-only list of record offsets in write order, as written by
    RecordWriter(offset_log=...). The n-th offset belongs to the n-th record
    written."""

    def __init__(self, path):
        self.path = path
        self.fh = open(path, 'a+b')

    def append(self, offset):
        _check_offset(offset)
        self.fh.write(_LOG_OFFSET.pack(offset))
        self.fh.flush()

    def offsets(self):
        self.fh.seek(0)
        while True:
            data = self.fh.read(_LOG_OFFSET.size)
            if data == b'':
                break
            if len(data) != _LOG_OFFSET.size:
                raise IndexTruncated('%s: trailing %d bytes are not an offset'
                                     % (self.path, len(data)))
            yield _LOG_OFFSET.unpack(data)[0]

    def __iter__(self):
        return self.offsets()

    def __len__(self):
        self.fh.seek(0, 2)
        return self.fh.tell() // _LOG_OFFSET.size

    def close(self):
        self.fh.close()

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()
