#!/usr/bin/env python
"""warcdump - dump warcs in a slightly more humane format"""

import sys

from optparse import OptionParser

from .archive import ArchiveIndex, RecordStream, WarcError, open_archive

parser = OptionParser(usage="%prog [options] warc warc warc")

parser.add_option("-l", "--limit", dest="limit", type="int",
                  help="dump at most LIMIT records per file")
parser.add_option("-o", "--offset", dest="offset", type="int",
                  help="dump only the record whose gzip member starts at OFFSET")
parser.add_option("-i", "--index", dest="index",
                  help="identifier index to resolve --key with")
parser.add_option("-k", "--key", dest="key",
                  help="dump only the record the index maps KEY to")

parser.set_defaults(limit=None, offset=None, index=None, key=None)


def main(argv, out=None):
    (options, input_files) = parser.parse_args(args=argv[1:])

    if out is None:
        out = sys.stdout

    if (options.index is None) != (options.key is None):
        parser.error("--index and --key go together")

    offset = options.offset
    if options.key is not None:
        if offset is not None:
            parser.error("--offset and --key are mutually exclusive")
        with ArchiveIndex(options.index) as index:
            try:
                offset = index.lookup(options.key)
            except WarcError as e:
                print("warcdump: %s" % e, file=sys.stderr)
                return 1

    try:
        if len(input_files) < 1:
            if offset is not None:
                parser.error("random access needs a warc file, not stdin")
            fh = RecordStream(sys.stdin.buffer)
            dump_archive(fh, "-", out, limit=options.limit)
        else:
            for name in input_files:
                with open_archive(name) as fh:
                    if offset is not None:
                        dump_record(fh, name, offset, out)
                    else:
                        dump_archive(fh, name, out, limit=options.limit)
    except WarcError as e:
        print("warcdump: %s" % e, file=sys.stderr)
        return 1

    return 0


def dump_record(fh, name, offset, out):
    record = fh.read_record_at(offset)
    if record is None:
        print("no record at %s:%d" % (name, offset), file=out)
    else:
        print("archive record at %s:%d" % (name, offset), file=out)
        record.dump(content=True, out=out)


def dump_archive(fh, name, out, limit=None):
    for (offset, record) in fh.read_records(limit=limit):
        print("archive record at %s:%d" % (name, offset), file=out)
        record.dump(content=True, out=out)


def run():
    sys.exit(main(sys.argv))


if __name__ == '__main__':
    run()
