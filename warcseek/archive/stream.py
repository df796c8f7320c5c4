"""Read records from record-at-time compressed warc files"""

from warcseek.archive.errors import NotSeekable
from warcseek.archive.gz import GZIP, CountingByteSource, RecordFramer
from warcseek.archive.warc import WarcRecord


def open_archive(filename=None, file_handle=None, mode="rb", gzip=GZIP,
                 record_class=WarcRecord):
    """Can take a filename or a file_handle. gzip is the framing mode,
    'record' for one gzip member per record or 'plain' (unsupported)."""

    if file_handle is None:
        file_handle = open(filename, mode=mode)

    return RecordStream(file_handle, gzip=gzip, record_class=record_class)


class RecordStream(object):
    """A readable stream of warc records. Can be iterated over, or
    read_records can give more control and offset information. Each
    instance owns its decoder state; share the archive between threads by
    giving each one its own RecordStream over its own file handle.
    """

    def __init__(self, file_handle, gzip=GZIP, record_class=WarcRecord,
                 block_size=CountingByteSource.BLOCK_SIZE):
        self.fh = file_handle
        self.record_class = record_class
        self.source = CountingByteSource(file_handle, block_size=block_size)
        self.framer = RecordFramer(self.source, mode=gzip)
        self._seekable = self.source.seekable()

    def tell(self):
        """Offset of the next compressed unit"""
        return self.source.position

    def seek(self, offset):
        """Positions the stream at the start of the compressed unit at
        offset. Any other offset gives undefined results."""
        if not self._seekable:
            raise NotSeekable('random access needs a seekable file',
                              offset=offset)
        self.source.seek(offset)
        self.framer.reset()

    def read_raw(self):
        """Returns the undecoded bytes of the next record, or None at the
        end of the archive."""
        return self.framer.next_member()

    def read_record(self):
        """Returns the next record, or None at the end of the archive."""
        offset = self.tell()
        data = self.framer.next_member()
        if data is None:
            return None
        return self.record_class.decode(data, offset=offset)

    def read_raw_at(self, offset):
        self.seek(offset)
        return self.read_raw()

    def read_record_at(self, offset):
        """Decodes the record whose compressed unit starts at offset. The
        stream is left just after it, so reading on continues with the
        following record."""
        self.seek(offset)
        return self.read_record()

    def read_records(self, limit=None):
        """Yield a tuple of (offset, record) where offset is the start of
        the record's compressed unit."""
        nrecords = 0
        while limit is None or nrecords < limit:
            offset = self.tell()
            record = self.read_record()
            if record is None:
                break
            nrecords += 1
            yield (offset, record)

    def __iter__(self):
        while True:
            record = self.read_record()
            if record is None:
                break
            yield record

    def close(self):
        """Close the underlying file handle."""
        self.fh.close()

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()
