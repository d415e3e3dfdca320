"""
a2h -- convert ANSI colored terminal output to HTML
"""

__version__ = '0.1'

from a2h.color import Color, ColorFormatError
from a2h.filter import A2hFilter, htmlify
from a2h.sgr import StyleState
