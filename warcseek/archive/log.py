import os
import sys

__all__ = ['debug']

if __debug__ and os.environ.get('WARCSEEK_DEBUG'):
    def debug(*args):
        print('WARCSEEK', args, file=sys.stderr)
else:
    def debug(*args):
        pass
