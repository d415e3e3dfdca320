"""
csi.py -- CSI parameter parsing

A CSI sequence looks like ESC [ <params> <final>, where <final> is a single
character in the range 0x40-0x7e and <params> is a list of decimal numbers
separated by ';'.
"""

CSI_END_LOW = '\x40'
CSI_END_HIGH = '\x7e'

def is_csi_end(c):
    return CSI_END_LOW <= c <= CSI_END_HIGH

def parse_values(params):
    """
    Splits a CSI parameter string into a list of integers.

    Empty fields count as 0. Parsing stops at the first character that is
    neither a digit nor ';', and a value that was still being accumulated at
    that point is dropped. An empty parameter string means 'reset' and parses
    as [0]. There is no limit on the number of values.
    """
    if len(params) == 0:
        return [0]

    values = []
    val = 0
    has_val = False
    for c in params:
        if c == ';':
            values.append(val)
            val = 0
            has_val = False
        elif '0' <= c <= '9':
            val = val * 10 + (ord(c) - ord('0'))
            has_val = True
        else:
            return values
    if has_val:
        values.append(val)
    return values
