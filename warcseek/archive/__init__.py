from .record import ArchiveRecord, NamedField
from .warc import WarcRecord, warc_datetime_str
from .stream import RecordStream, open_archive
from .writer import OffsetWriter, RecordWriter, open_writer
from .index import ArchiveIndex, OffsetLog
from .gz import CountingByteSource, RecordFramer, GZIP, PLAIN
from .errors import (WarcError, MalformedRecord, NotWarcRecord,
                     OffsetOverflow, NotSeekable, Unsupported,
                     IndexTruncated, MalformedIndex, AlreadyExists,
                     NoSuchEntry)
from . import record, warc, stream, writer, index, gz, errors

__all__= [
    'ArchiveRecord',
    'NamedField',
    'WarcRecord',
    'warc_datetime_str',
    'RecordStream',
    'open_archive',
    'OffsetWriter',
    'RecordWriter',
    'open_writer',
    'ArchiveIndex',
    'OffsetLog',
    'CountingByteSource',
    'RecordFramer',
    'GZIP',
    'PLAIN',
    'WarcError',
    'MalformedRecord',
    'NotWarcRecord',
    'OffsetOverflow',
    'NotSeekable',
    'Unsupported',
    'IndexTruncated',
    'MalformedIndex',
    'AlreadyExists',
    'NoSuchEntry',
    'record',
    'warc',
    'stream',
    'writer',
    'index',
    'gz',
    'errors',
]
