import logging as L

import os
import sys

LOG_ENV = 'A2H_LOG'
LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s: %(message)s'
LOG_DATEFMT = '%H:%M:%S'

def initialize(environ=os.environ, stream=None):
    """ Sends log records to stderr, at the level named by $A2H_LOG """
    level = environ.get(LOG_ENV, 'WARNING').upper()

    root = L.getLogger()
    hdlr = L.StreamHandler(sys.stderr if stream is None else stream)
    fmt = L.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    root.addHandler(hdlr)
    hdlr.setFormatter(fmt)

    try:
        root.setLevel(level)
    except ValueError:
        root.setLevel(L.WARNING)
        root.warning('unknown log level in $%s: %s', LOG_ENV, level)
    return hdlr
