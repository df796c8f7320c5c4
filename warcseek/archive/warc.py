"""An object to represent warc records, using the abstract record in
record.py"""

import uuid

from warcseek.archive.errors import MalformedRecord, NotWarcRecord
from warcseek.archive.record import ArchiveRecord, NamedField


@ArchiveRecord.HEADERS(
    DATE=b'WARC-Date',
    TYPE=b'WARC-Type',
    ID=b'WARC-Record-ID',
    CONCURRENT_TO=b'WARC-Concurrent-To',
    REFERS_TO=b'WARC-Refers-To',
    CONTENT_LENGTH=b'Content-Length',
    CONTENT_TYPE=b'Content-Type',
    URL=b'WARC-Target-URI',
    BLOCK_DIGEST=b'WARC-Block-Digest',
    PAYLOAD_DIGEST=b'WARC-Payload-Digest',
    IP_ADDRESS=b'WARC-IP-Address',
    FILENAME=b'WARC-Filename',
    WARCINFO_ID=b'WARC-Warcinfo-ID',
    PROFILE=b'WARC-Profile'
)
class WarcRecord(ArchiveRecord):

    # pylint: disable-msg=E1101

    VERSION = b"WARC/1.0"
    RESPONSE = b"response"
    RESOURCE = b"resource"
    REQUEST = b"request"
    REVISIT = b"revisit"
    METADATA = b"metadata"
    CONVERSION = b"conversion"
    WARCINFO = b"warcinfo"

    NL = b'\r\n'
    SEPARATOR = b'\r\n\r\n'
    TRAILER = b'\r\n\r\n'

    @property
    def id(self):
        return self.get_header(self.ID)

    @property
    def content_type(self):
        return self.get_header(self.CONTENT_TYPE)

    def write_to(self, out):
        """WARC Format:
            VERSION NL
            (Key: Value NL)*
            NL
            BLOCK NL
            NL

            headers are written exactly as given, in order. Nothing is
            added, dropped or checked for presence.
        """
        nl = self.NL
        out.write(self.VERSION)
        out.write(nl)
        for k, v in self.headers:
            out.write(k)
            out.write(b": ")
            out.write(v)
            out.write(nl)

        out.write(nl) # end of header blank nl
        if self.block:
            out.write(self.block)

        # end of record nl nl
        out.write(self.TRAILER)

    def encode(self):
        parts = [self.VERSION, self.NL]
        for k, v in self.headers:
            parts.extend((k, b": ", v, self.NL))
        parts.extend((self.NL, self.block, self.TRAILER))
        return b''.join(parts)

    @classmethod
    def decode(cls, data, offset=None):
        """Parses the bytes of one record. The block is everything after
        the first blank line, cut down to Content-Length when that header
        holds a non-negative integer. offset is only used to annotate
        errors."""
        header, sep, block = data.partition(cls.SEPARATOR)
        if not sep:
            raise MalformedRecord('no blank line between headers and block',
                                  offset=offset)

        lines = header.split(cls.NL)
        if lines[0] != cls.VERSION:
            raise NotWarcRecord('not a warc record: version line is %r'
                                % lines[0][:64], offset=offset)

        headers = []
        for line in lines[1:]:
            name, colon, value = line.partition(b':')
            if not colon:
                raise MalformedRecord('header line without colon: %r'
                                      % line[:64], offset=offset)
            headers.append(NamedField(name.strip(), value.strip()))

        record = cls(headers=headers, block=block)

        length = record.content_length
        if length is not None:
            if length > len(block):
                raise MalformedRecord(
                    'Content-Length %d exceeds block of %d bytes'
                    % (length, len(block)), offset=offset)
            record.block = block[:length]

        return record

    @staticmethod
    def random_warc_uuid():
        return "<urn:uuid:{}>".format(uuid.uuid4()).encode('ascii')


def warc_datetime_str(d):
    s = d.isoformat()
    if '.' in s:
        s = s[:s.find('.')]
    return (s + 'Z').encode('utf-8')
