# vim: set sw=4 et:

import os
import shutil
import tempfile
import unittest

from io import StringIO

from warcseek import warcdump, warcindex
from warcseek.archive import ArchiveIndex, OffsetLog, WarcRecord, open_writer


def make_record(record_id, block):
    headers = []
    if record_id is not None:
        headers.append((WarcRecord.ID, record_id))
    headers.append((WarcRecord.TYPE, WarcRecord.RESOURCE))
    headers.append((WarcRecord.CONTENT_LENGTH,
                    str(len(block)).encode('ascii')))
    return WarcRecord(headers=headers, block=block)


class ToolsTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.warc = os.path.join(self.tmpdir, 'test.warc.gz')
        self.index = os.path.join(self.tmpdir, 'test.index')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write_warc(self, records):
        with open_writer(self.warc) as w:
            return [w.write_record(r) for r in records]


class WarcDumpTest(ToolsTestCase):

    def test_dump_all(self):
        offsets = self.write_warc([make_record(b'urn:1', b'first'),
                                   make_record(b'urn:2', b'second')])
        out = StringIO()
        self.assertEqual(warcdump.main(['warcdump', self.warc], out=out), 0)
        text = out.getvalue()
        for offset in offsets:
            self.assertIn('archive record at %s:%d' % (self.warc, offset), text)
        self.assertIn('\tWARC-Record-ID:urn:2', text)
        self.assertIn('\tsecond', text)

    def test_dump_limit(self):
        self.write_warc([make_record(b'urn:1', b'first'),
                         make_record(b'urn:2', b'second')])
        out = StringIO()
        warcdump.main(['warcdump', '-l', '1', self.warc], out=out)
        self.assertEqual(out.getvalue().count('archive record at'), 1)

    def test_dump_offset(self):
        offsets = self.write_warc([make_record(b'urn:1', b'first'),
                                   make_record(b'urn:2', b'second')])
        out = StringIO()
        argv = ['warcdump', '-o', str(offsets[1]), self.warc]
        self.assertEqual(warcdump.main(argv, out=out), 0)
        self.assertIn('urn:2', out.getvalue())
        self.assertNotIn('urn:1', out.getvalue())

    def test_dump_key(self):
        offsets = self.write_warc([make_record(b'urn:1', b'first')])
        with ArchiveIndex(self.index) as ix:
            ix.put('one', offsets[0])
        out = StringIO()
        argv = ['warcdump', '-i', self.index, '-k', 'one', self.warc]
        self.assertEqual(warcdump.main(argv, out=out), 0)
        self.assertIn('urn:1', out.getvalue())

        out = StringIO()
        argv = ['warcdump', '-i', self.index, '-k', 'two', self.warc]
        self.assertEqual(warcdump.main(argv, out=out), 1)
        self.assertEqual(out.getvalue(), '')

    def test_key_needs_index(self):
        with self.assertRaises(SystemExit):
            warcdump.main(['warcdump', '-k', 'one', self.warc])

    def test_bad_archive(self):
        with open(self.warc, 'wb') as f:
            f.write(b'WARC/1.0\r\n\r\n')
        self.assertEqual(warcdump.main(['warcdump', self.warc],
                                       out=StringIO()), 1)


class WarcIndexTest(ToolsTestCase):

    def test_index(self):
        offsets = self.write_warc([make_record(b'urn:1', b'first'),
                                   make_record(None, b'anonymous'),
                                   make_record(b'urn:3', b'third')])
        positional = os.path.join(self.tmpdir, 'test.offsets')
        argv = ['warcindex', '-p', positional, self.index, self.warc]
        self.assertEqual(warcindex.main(argv), 0)

        with ArchiveIndex(self.index) as ix:
            self.assertEqual(len(ix), 2)
            self.assertEqual(ix.lookup('urn:1'), offsets[0])
            self.assertEqual(ix.lookup('urn:3'), offsets[2])

        with OffsetLog(positional) as log:
            self.assertEqual(list(log), offsets)

    def test_duplicate_ids(self):
        offsets = self.write_warc([make_record(b'urn:1', b'first'),
                                   make_record(b'urn:1', b'again')])
        positional = os.path.join(self.tmpdir, 'test.offsets')
        argv = ['warcindex', '-p', positional, self.index, self.warc]
        self.assertEqual(warcindex.main(argv), 1)
        with ArchiveIndex(self.index) as ix:
            self.assertEqual(len(ix), 1)
        # the log stops where the index does
        with OffsetLog(positional) as log:
            self.assertEqual(list(log), offsets[:1])

    def test_id_not_utf8(self):
        offsets = self.write_warc([make_record(b'\xff', b'first'),
                                   make_record(b'urn:2', b'second')])
        positional = os.path.join(self.tmpdir, 'test.offsets')
        argv = ['warcindex', '-p', positional, self.index, self.warc]
        self.assertEqual(warcindex.main(argv), 0)
        with ArchiveIndex(self.index) as ix:
            self.assertEqual(list(ix), ['urn:2'])
            self.assertEqual(ix.lookup('urn:2'), offsets[1])
        with OffsetLog(positional) as log:
            self.assertEqual(list(log), offsets)

    def test_usage(self):
        with self.assertRaises(SystemExit):
            warcindex.main(['warcindex', self.index])


if __name__ == '__main__':
    unittest.main()
