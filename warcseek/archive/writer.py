"""Write warc records as one gzip member each, reporting where each
member starts"""

from gzip import GzipFile

from warcseek.archive.errors import OffsetOverflow
from warcseek.archive.index import MAX_OFFSET
from warcseek.archive.log import debug


def open_writer(filename=None, file_handle=None, mode="ab", offset_log=None,
                **kwargs):
    """Can take a filename or a file_handle. Files opened by name are
    appended to, and offsets continue from the existing end of file."""
    if file_handle is None:
        file_handle = open(filename, mode=mode)

    return RecordWriter(file_handle, offset_log=offset_log, **kwargs)


class OffsetWriter(object):
    """Passes writes through to fileobj, counting the bytes written."""

    def __init__(self, fileobj, offset=0):
        self.fileobj = fileobj
        self.offset = offset

    def write(self, data):
        size = len(data)
        offset = self.offset + size
        if offset < self.offset or offset > MAX_OFFSET:
            raise OffsetOverflow('archive offset out of range after writing '
                                 '%d bytes' % size, offset=self.offset)
        self.fileobj.write(data)
        self.offset = offset
        return size

    def flush(self):
        self.fileobj.flush()


class RecordWriter(object):
    """Writes records as independent gzip members. write_record returns the
    offset the record's member starts at, which is what read_record_at and
    the indexes expect."""

    def __init__(self, file_handle, offset_log=None, compresslevel=9,
                 mtime=None, offset=None):
        if offset is None:
            offset = _tell(file_handle)
        self.fh = file_handle
        self.out = OffsetWriter(file_handle, offset)
        self.offset_log = offset_log
        self.compresslevel = compresslevel
        self.mtime = mtime

    @property
    def offset(self):
        return self.out.offset

    def write_record(self, record):
        """Writes the record without checking its headers and returns the
        offset of its gzip member."""
        offset = self.out.offset

        gz = GzipFile(fileobj=self.out, mode='wb',
                      compresslevel=self.compresslevel, mtime=self.mtime)
        record.write_to(gz)
        gz.close()
        self.out.flush()

        if self.offset_log is not None:
            self.offset_log.append(offset)

        debug('record', offset, self.out.offset - offset)
        return offset

    def close(self):
        self.fh.close()

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()


def _tell(file_handle):
    seekable = getattr(file_handle, 'seekable', None)
    if seekable is not None and seekable():
        return file_handle.tell()
    return 0
