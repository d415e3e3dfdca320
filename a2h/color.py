"""
color.py -- terminal colors and their CSS representation

A color is one of three things: nothing at all (inherit the page default),
an index into the 8 color ANSI palette plus a bold flag choosing between the
standard and intense halves of the palette, or a plain 24 bit RGB value.

Index colors are kept as indexes until they are rendered, because SGR 1 and
21 change the brightness of an index color after it has been selected.
Gamma correction is likewise only applied when formatting for CSS.
"""

import math
import re

def rgb(r8, g8, b8):
    return r8 << 16 | g8 << 8 | b8

STANDARD_COLORS = (
    rgb(0, 0, 0),
    rgb(205, 0, 0),
    rgb(0, 205, 0),
    rgb(205, 205, 0),
    rgb(64, 64, 238),
    rgb(205, 0, 205),
    rgb(0, 205, 205),
    rgb(229, 229, 229),
    )

INTENSE_COLORS = (
    rgb(127, 127, 127),
    rgb(255, 0, 0),
    rgb(0, 255, 0),
    rgb(255, 255, 0),
    rgb(92, 92, 255),
    rgb(255, 0, 255),
    rgb(0, 255, 255),
    rgb(255, 255, 255),
    )

RE_HEX = re.compile('#?([0-9a-fA-F]{6})')

class ColorFormatError(ValueError):
    pass

def check_gamma(gamma_value):
    """ Raises ValueError unless gamma_value is a finite number above 0 """
    if not math.isfinite(gamma_value) or gamma_value <= 0:
        raise ValueError('invalid gamma: {}'.format(gamma_value))
    return gamma_value

def gamma(gamma_value, v):
    """ Gamma corrects a single 0-255 channel """
    if gamma_value == 1.0:
        return v
    x = (v / 255.0) ** gamma_value
    if x < 0.0:
        x = 0.0
    elif x > 1.0:
        x = 1.0
    return int(x * 255.0)

def gamma_rgb(gamma_value, rgb888):
    r8 = gamma(gamma_value, (rgb888 >> 16) & 255)
    g8 = gamma(gamma_value, (rgb888 >> 8) & 255)
    b8 = gamma(gamma_value, rgb888 & 255)
    return rgb(r8, g8, b8)

def rgb_to_hex(rgb888):
    return '#{:06x}'.format(rgb888)

def index_color(index, bold):
    if bold:
        return INTENSE_COLORS[index]
    return STANDARD_COLORS[index]

class Color(object):
    """
    A color as set by an SGR sequence.

    Color() is the 'none' color. Colors compare by value, so two index colors
    are only equal if their index and bold flag both match.
    """

    def __init__(self, index=None, bold=False, value=None):
        self.index = index
        self.bold = bold
        self.value = value

    @classmethod
    def rgb(cls, r8, g8, b8):
        return cls(value=rgb(r8, g8, b8))

    @classmethod
    def from_index(cls, index, bold=False):
        return cls(index=index % 8, bold=bool(bold))

    @classmethod
    def from_hex(cls, s):
        """ Parses an 'rrggbb' or '#rrggbb' literal. Raises ColorFormatError
        if it is anything else. """
        m = RE_HEX.fullmatch(s)
        if m is None:
            raise ColorFormatError('invalid color: {}'.format(s))
        return cls(value=int(m.group(1), 16))

    @classmethod
    def from_xterm256(cls, v):
        """
        Decodes an xterm 256 color palette entry.

          0-7      standard colors
          8-15     intense colors
          16-231   6x6x6 color cube
          232-255  grayscale ramp
        """
        if v < 0 or v > 255:
            raise ValueError('xterm color out of range: {}'.format(v))
        if v < 8:
            return cls.from_index(v, False)
        if v < 16:
            return cls.from_index(v - 8, True)
        if v >= 232:
            level = (v - 232) * 10 + 8
            return cls.rgb(level, level, level)

        v -= 16
        b = v % 6
        g = (v // 6) % 6
        r = (v // 36) % 6
        return cls.rgb(r * 255 // 5, g * 255 // 5, b * 255 // 5)

    def is_none(self):
        return self.index is None and self.value is None

    def is_index(self):
        return self.index is not None

    def is_rgb(self):
        return self.value is not None

    def apply_bold(self, bold):
        """ Returns this color with the palette reselected by 'bold'. Only index
        colors change. """
        if not self.is_index():
            return self
        return Color(index=self.index, bold=bool(bold))

    def or_default(self, default):
        if self.is_none():
            return default
        return self

    def to_rgb(self, default=None):
        """ Resolves this color to a 24 bit integer. The none color resolves
        to 'default', which must itself be concrete. """
        if self.is_rgb():
            return self.value
        if self.is_index():
            return index_color(self.index, self.bold)
        if default is None or default.is_none():
            raise ValueError('cannot resolve the none color without a default')
        return default.to_rgb()

    def apply_gamma(self, gamma_value):
        return Color(value=gamma_rgb(gamma_value, self.to_rgb()))

    def to_css_hex(self, gamma_value=1.0, default=None):
        return rgb_to_hex(gamma_rgb(gamma_value, self.to_rgb(default)))

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return (self.index, self.bold, self.value) == \
            (other.index, other.bold, other.value)

    def __ne__(self, other):
        eq = self.__eq__(other)
        if eq is NotImplemented:
            return eq
        return not eq

    def __hash__(self):
        return hash((self.index, self.bold, self.value))

    def __repr__(self):
        if self.is_rgb():
            return 'Color({})'.format(rgb_to_hex(self.value))
        if self.is_index():
            return 'Color(index={}, bold={})'.format(self.index, self.bold)
        return 'Color()'
