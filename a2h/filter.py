"""
filter.py -- ANSI to HTML filter

A2hFilter turns lines of terminal output into HTML. Every row becomes a
<div>, and every run of text with the same colors and attributes inside it a
<span>. Output is handed to a writer, any callable taking a string, one
complete row at a time.

Only SGR sequences have a visible effect. Other CSI sequences, OSC strings,
charset selection and unknown escapes are consumed and dropped, and other
control characters are shown in caret notation (^A).
"""

import logging

L = logging.getLogger('a2h.filter')

import jinja2

from a2h import csi
from a2h.color import Color, check_gamma
from a2h.sgr import StyleState

ENTITY_MAP = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    }

BEL = '\x07'
ESC = '\x1b'

_env = jinja2.Environment(
    loader=jinja2.PackageLoader('a2h', 'templates'),
    autoescape=jinja2.select_autoescape(['html']),
    keep_trailing_newline=True,
    )

def render(template_name, **context):
    return _env.get_template(template_name).render(**context)

class A2hFilter(object):
    """
    Converts a stream of lines to HTML.

    One filter is used for a whole document: styling carries over from one
    line to the next, and the number of rows written is reported by the
    footer. Call write_header(), then process() for every input line, then
    write_footer().
    """

    def __init__(self, title='a2h', fg_color=None, bg_color=None,
                 font_size='9pt', gamma=1.0, writer=None):
        """
        title -- HTML page title
        fg_color, bg_color -- page colors, as Color instances or hex strings
        font_size -- CSS font size
        gamma -- gamma applied to colors set by the input
        writer -- default callable receiving the HTML
        """
        self.title = title
        self.fg_color = self._page_color(fg_color, Color.rgb(255, 255, 255))
        self.bg_color = self._page_color(bg_color, Color.rgb(0, 0, 0))
        self.font_size = font_size
        self.gamma = check_gamma(gamma)
        self.writer = writer

        self.state = StyleState()

        self.in_div = False
        self.in_span = False
        self.num_rows = 0
        self.line_buf = []

    @staticmethod
    def _page_color(c, default):
        if c is None:
            return default
        if not isinstance(c, Color):
            c = Color.from_hex(c)
        if c.is_none():
            raise ValueError('page colors must be concrete')
        return c

    @classmethod
    def from_options(cls, options, writer=None):
        return cls(
            title=options.title,
            fg_color=options.fg_color,
            bg_color=options.bg_color,
            font_size=options.font_size,
            gamma=options.gamma,
            writer=writer,
            )

    def reset(self):
        self.state.reset()

    # line buffer

    def add_to_line(self, s):
        self.line_buf.append(s)

    def flush_line(self, writer):
        writer(''.join(self.line_buf))
        self.line_buf = []

    def start_div(self):
        if not self.in_div:
            self.in_div = True
            self.add_to_line('<div>')
            self.num_rows += 1

    def end_div(self, writer):
        self.end_span()
        if self.in_div:
            self.in_div = False
            self.add_to_line('</div>\n')
            self.flush_line(writer)

    def end_span(self):
        if self.in_span:
            self.in_span = False
            self.add_to_line('</span>')

    # escape sequences

    def convert_csi(self, params):
        """ Handles the parameters of an ESC [ ... m sequence """
        self.state.set_mode(csi.parse_values(params))

        self.end_span()
        if not self.state.has_attr():
            return

        self.in_span = True
        self.add_to_line(self.state.span(self.fg_color, self.bg_color,
                                         self.gamma))

    def skip_osc(self, line, i):
        """ Returns the index just past the OSC string starting at i """
        while i < len(line):
            if line[i] == BEL:
                return i + 1
            if line[i] == ESC and line[i+1:i+2] == '\\':
                return i + 2
            i += 1
        return i

    def convert(self, line, writer):
        self.start_div()

        size = len(line)
        i = 0
        while i < size:
            c = line[i]

            if c in ENTITY_MAP:
                self.add_to_line(ENTITY_MAP[c])
                i += 1
                continue

            if c == BEL:
                i += 1
                continue

            if c == '\n' or c == '\r':
                if line[i:i+2] == '\r\n':
                    i += 1
                i += 1
                self.end_div(writer)
                if i < size:
                    self.start_div()
                    continue
                break

            if c == ESC:
                i += 1
                if i >= size:
                    break
                n = line[i]
                i += 1

                if n == '[':
                    start = i
                    while i < size and not csi.is_csi_end(line[i]):
                        i += 1
                    if i >= size:
                        L.debug('unterminated CSI sequence: %r', line[start:])
                        break
                    if line[i] == 'm':
                        self.convert_csi(line[start:i])
                    else:
                        L.debug('ignoring CSI command %r', line[i])
                    i += 1
                elif n == ']':
                    i = self.skip_osc(line, i)
                elif n == '(':
                    # charset selection, e.g. ESC ( B
                    i += 1
                elif n == 'c':
                    self.reset()
                    self.end_span()
                else:
                    L.debug('unhandled escape: %r', n)
                continue

            if c < ' ' and c != '\t':
                self.add_to_line('^' + chr(ord(c) + 0x40))
            else:
                self.add_to_line(c)
            i += 1

    # entry points

    def _writer(self, writer):
        if writer is None:
            writer = self.writer
        if writer is None:
            raise ValueError('no writer')
        return writer

    def process(self, line, writer=None):
        """ Converts one line of input. A row is only closed when the line
        contains a line terminator; otherwise it stays open for the next
        call. """
        self.convert(line, self._writer(writer))

    def flush(self, writer=None):
        """ Closes and writes the current row, if any """
        self.end_div(self._writer(writer))

    def write_header(self, writer=None):
        self._writer(writer)(render('header.html',
            title=self.title,
            fg_color=self.fg_color.to_css_hex(),
            bg_color=self.bg_color.to_css_hex(),
            font_size=self.font_size,
            ))

    def write_footer(self, writer=None):
        writer = self._writer(writer)
        self.flush(writer)
        writer(render('footer.html', num_rows=self.num_rows))

def htmlify(text, **kwargs):
    """ Converts a whole string and returns the rows, without the page header
    and footer. Keyword arguments are passed to A2hFilter. """
    out = []
    f = A2hFilter(writer=out.append, **kwargs)
    f.process(text)
    f.flush()
    return ''.join(out)
