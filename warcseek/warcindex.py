#!/usr/bin/env python
"""warcindex - record where each warc record starts, by WARC-Record-ID"""

import sys

from optparse import OptionParser

from .archive import (AlreadyExists, ArchiveIndex, OffsetLog, WarcError,
                      open_archive)

parser = OptionParser(usage="%prog [options] index warc")

parser.add_option("-p", "--positional", dest="positional",
                  help="also append every offset to the positional log "
                       "POSITIONAL")
parser.add_option("-l", "--limit", dest="limit", type="int")

parser.set_defaults(positional=None, limit=None)


def main(argv):
    (options, args) = parser.parse_args(args=argv[1:])

    if len(args) != 2:
        parser.error("need an index file and a warc file")

    index_name, warc_name = args

    log = OffsetLog(options.positional) if options.positional else None
    try:
        with ArchiveIndex(index_name) as index, open_archive(warc_name) as fh:
            for (offset, record) in fh.read_records(limit=options.limit):
                key = record_key(record, warc_name, offset)
                if key is not None:
                    index.put(key, offset)
                # one log entry per record, skipped ones included
                if log is not None:
                    log.append(offset)
    except AlreadyExists as e:
        print("warcindex: duplicate record id %r" % e.key, file=sys.stderr)
        return 1
    except WarcError as e:
        print("warcindex: %s" % e, file=sys.stderr)
        return 1
    finally:
        if log is not None:
            log.close()

    return 0


def record_key(record, warc_name, offset):
    record_id = record.id
    if record_id is None:
        print("warcindex: record at %s:%d has no id, skipped"
              % (warc_name, offset), file=sys.stderr)
        return None
    try:
        return record_id.decode('utf-8')
    except UnicodeDecodeError:
        print("warcindex: record at %s:%d has an id that is not utf-8 (%r), "
              "skipped" % (warc_name, offset, record_id), file=sys.stderr)
        return None


def run():
    sys.exit(main(sys.argv))


if __name__ == '__main__':
    run()
