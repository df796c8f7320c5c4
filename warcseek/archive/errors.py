"""Errors raised while reading, writing and indexing warc archives"""


class WarcError(Exception):
    """Base class for warcseek errors. offset, when known, is the archive
    offset of the compressed unit the error concerns."""

    def __init__(self, message, offset=None):
        Exception.__init__(self, message)
        self.offset = offset

    def __str__(self):
        message = Exception.__str__(self)
        if self.offset is not None:
            return '%s (at offset %d)' % (message, self.offset)
        return message


class MalformedRecord(WarcError, ValueError):
    pass


class NotWarcRecord(MalformedRecord):
    pass


class OffsetOverflow(WarcError, OverflowError):
    pass


class NotSeekable(WarcError):
    pass


class Unsupported(WarcError, NotImplementedError):
    pass


class IndexTruncated(WarcError, EOFError):
    pass


class MalformedIndex(WarcError, ValueError):
    pass


class _KeyedError(WarcError, KeyError):
    def __init__(self, message, key):
        WarcError.__init__(self, message)
        self.key = key

    def __str__(self):
        return '%s: %r' % (self.args[0], self.key)


class AlreadyExists(_KeyedError):
    pass


class NoSuchEntry(_KeyedError):
    pass
