"""
sgr.py -- Select Graphic Rendition state

StyleState holds the colors and character attributes set by ESC [ ... m
sequences and knows how to describe them as an HTML span.
"""

import logging

L = logging.getLogger('a2h.sgr')

from a2h.color import Color

# names of the boolean attributes, in the order they are reset
ATTRS = (
    'bold',
    'faint',
    'italic',
    'underline',
    'blink',
    'negative',
    'conceal',
    'crossout',
    )

# SGR codes that only set or clear a single attribute
SET_ATTR = {
    2: ('faint', True),
    3: ('italic', True),
    4: ('underline', True),
    5: ('blink', True),
    7: ('negative', True),
    8: ('conceal', True),
    9: ('crossout', True),
    23: ('italic', False),
    24: ('underline', False),
    25: ('blink', False),
    27: ('negative', False),
    28: ('conceal', False),
    29: ('crossout', False),
    }

# inline styles, in the order they are written to the style attribute
STYLE_ATTRS = (
    ('bold', 'font-weight:bold;'),
    ('faint', 'opacity:0.5;'),
    ('italic', 'font-style:italic;'),
    ('underline', 'text-decoration:underline;'),
    ('crossout', 'text-decoration:line-through;'),
    )

def extended_color(values, i):
    """
    Reads the operands of SGR 38 and 48, starting at values[i].

    Returns (color, next_i). '5;n' selects xterm 256 color n, '2;r;g;b' a
    24 bit color. A known selector with too few operands gives the none color
    and consumes the rest of the list. An unknown selector gives the none
    color and consumes nothing.
    """
    remaining = len(values) - i
    if remaining >= 1 and values[i] == 5:
        if remaining < 2:
            L.debug('truncated xterm color: %r', values[i:])
            return Color(), len(values)
        try:
            return Color.from_xterm256(values[i + 1]), i + 2
        except ValueError:
            L.debug('xterm color out of range: %d', values[i + 1])
            return Color(), i + 2
    if remaining >= 1 and values[i] == 2:
        if remaining < 4:
            L.debug('truncated 24 bit color: %r', values[i:])
            return Color(), len(values)
        r8, g8, b8 = (min(v, 255) for v in values[i + 1:i + 4])
        return Color.rgb(r8, g8, b8), i + 4
    L.debug('bad extended color: %r', values[i:])
    return Color(), i

class StyleState(object):
    def __init__(self):
        self.reset()

    def reset(self):
        self.fg = Color()
        self.bg = Color()
        for attr in ATTRS:
            setattr(self, attr, False)

    def has_attr(self):
        if not self.fg.is_none() or not self.bg.is_none():
            return True
        return any(getattr(self, attr) for attr in ATTRS)

    def set_mode(self, values):
        """ Applies a list of SGR codes, in order """
        i = 0
        while i < len(values):
            code = values[i]
            i += 1
            if code == 0:
                self.reset()
            elif code == 1:
                self.bold = True
                self.fg = self.fg.apply_bold(True)
            elif code == 21:
                self.bold = False
                self.fg = self.fg.apply_bold(False)
            elif code == 22:
                self.bold = False
                self.faint = False
            elif code in SET_ATTR:
                attr, v = SET_ATTR[code]
                setattr(self, attr, v)
            elif 30 <= code <= 37:
                self.fg = Color.from_index(code - 30, self.bold)
            elif 40 <= code <= 47:
                self.bg = Color.from_index(code - 40, False)
            elif code == 38:
                self.fg, i = extended_color(values, i)
            elif code == 48:
                self.bg, i = extended_color(values, i)
            else:
                L.debug('ignoring SGR code %d', code)

    def effective_colors(self, page_fg, page_bg, gamma):
        """
        Returns the CSS foreground and background colors to draw with.

        Unset colors become the page colors, which are written as given.
        Colors set by the stream are gamma corrected. Negative swaps the two
        and conceal draws the text in the background color.
        """
        fg = page_fg.to_css_hex() if self.fg.is_none() \
            else self.fg.to_css_hex(gamma)
        bg = page_bg.to_css_hex() if self.bg.is_none() \
            else self.bg.to_css_hex(gamma)
        if self.negative:
            fg, bg = bg, fg
        if self.conceal:
            fg = bg
        return fg, bg

    def span(self, page_fg, page_bg, gamma):
        """ Returns the opening <span> tag for the current state """
        s = '<span '
        if self.blink:
            s += 'class="blink" '
        s += 'style="'
        for attr, css in STYLE_ATTRS:
            if getattr(self, attr):
                s += css

        fg, bg = self.effective_colors(page_fg, page_bg, gamma)
        if fg != page_fg.to_css_hex():
            s += 'color:{};'.format(fg)
        if bg != page_bg.to_css_hex():
            s += 'background-color:{};'.format(bg)
        return s + '">'

    def __repr__(self):
        on = [attr for attr in ATTRS if getattr(self, attr)]
        return 'StyleState(fg={!r}, bg={!r}, {})'.format(
            self.fg, self.bg, ','.join(on) or '-')
