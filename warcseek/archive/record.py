"""a skeleton class for archive records"""

from collections import namedtuple
import re

strip = re.compile(br'[^\w\t \|\\\/]')

NamedField = namedtuple('NamedField', ['name', 'value'])


def add_headers(**kwargs):
    """a useful helper for defining header names in record formats"""

    def _add_headers(cls):
        for k, v in kwargs.items():
            setattr(cls, k, v)
        cls._HEADERS = list(kwargs.keys())
        return cls
    return _add_headers


def _as_bytes(name):
    if isinstance(name, str):
        return name.encode('latin1')
    return name


@add_headers(DATE=b'Date',
             CONTENT_LENGTH=b'Length',
             TYPE=b'Type',
             URL=b'Url')
class ArchiveRecord(object):
    """An archive record has an ordered list of headers and a block.
    record.headers is a list of NamedField (name, value) pairs of bytes,
    which may repeat a name. block is the raw payload bytes."""

    #pylint: disable-msg=e1101

    def __init__(self, headers=None, block=b''):
        self.headers = [NamedField(k, v) for (k, v) in headers] if headers else []
        self.block = block if block is not None else b''

    HEADERS = staticmethod(add_headers)

    @property
    def date(self):
        return self.get_header(self.DATE)

    @property
    def type(self):
        return self.get_header(self.TYPE)

    @property
    def url(self):
        return self.get_header(self.URL)

    @property
    def content_length(self):
        """The declared length if the header is all ascii digits, otherwise
        None."""
        value = self.get_header(self.CONTENT_LENGTH)
        if value is None:
            return None
        value = value.strip()
        if not value.isdigit():
            return None
        return int(value)

    def get_header(self, name):
        """Returns value of first header found matching name, case
        insensitively."""
        name = _as_bytes(name).lower()
        for k, v in self.headers:
            if name == k.lower():
                return v

    def set_header(self, name, value):
        name = _as_bytes(name)
        self.headers = [NamedField(k, v) for (k, v) in self.headers
                        if k.lower() != name.lower()]
        self.headers.append(NamedField(name, value))

    def __eq__(self, other):
        if not isinstance(other, ArchiveRecord):
            return NotImplemented
        return (list(self.headers) == list(other.headers)
                and self.block == other.block)

    def __repr__(self):
        return '<%s headers=%d block=%d bytes>' % (
            self.__class__.__name__, len(self.headers), len(self.block))

    def dump(self, content=True, out=None):
        def emit(*args):
            print(*args, file=out)

        emit('Headers:')
        for (h, v) in self.headers:
            emit('\t%s:%s' % (h.decode('latin1'), v.decode('latin1')))
        if content and self.block:
            emit('Block:')
            ln = min(1024, len(self.block))
            abbr_strp_content = strip.sub(lambda x: ('\\x%00X' % ord(x.group())).encode('ascii'), self.block[:ln])
            emit('\t' + abbr_strp_content.decode('ascii'))
            if ln < len(self.block):
                emit('\t...')
            emit()
        else:
            emit('Block: none')
            emit()
