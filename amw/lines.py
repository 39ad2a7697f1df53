# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Line cursor over a line source.  A source is a Unicode string, a UTF-8
byte string, a file-like object, or any iterable of lines.  The cursor
hands out one line at a time with trailing whitespace removed, keeps the
line number, and can push exactly one line back.
'''


# pylint: disable=C0301

import re

from . import erring
from . import grammar


BOM = grammar.LIT_GRAMMAR['bom']
INDENT = grammar.LIT_GRAMMAR['indent']

_newline_re = re.compile(grammar.RE_GRAMMAR['newline'])




def skip_spaces(line, pos, indent=INDENT, len=len):
    '''
    Return the position of the first non-space code point at or after `pos`,
    or the line length if there is none.
    '''
    len_line = len(line)
    while pos < len_line and line[pos] == indent:
        pos += 1
    return pos


def split_lines(s, newline_re=_newline_re):
    '''
    Split a string into lines on `\\r\\n`, `\\r`, and `\\n`.  A final line
    terminator does not produce an extra empty line.
    '''
    lines = newline_re.split(s)
    if lines[-1] == '':
        lines.pop()
    return lines




class LineCursor(object):
    '''
    Wrap a line source.  After each successful `read_line()`, `line` holds
    the current line without trailing whitespace, `indent` the count of its
    leading spaces, and `lineno` its 1-based line number.
    '''
    __slots__ = ['source_name', 'line', 'indent', 'lineno',
                 '_lines_iter', '_last_lineno', '_pushback', '_at_start']
    def __init__(self, source, source_name=None):
        if source_name is not None and not isinstance(source_name, str):
            raise TypeError('source_name must be a string')
        self.source_name = source_name or '<data>'
        if isinstance(source, bytes):
            try:
                source = source.decode('utf8')
            except Exception as e:
                raise erring.SourceDecodeError(e)
        if isinstance(source, str):
            self._lines_iter = iter(split_lines(source))
        elif hasattr(source, 'readline') or hasattr(source, '__iter__'):
            self._lines_iter = iter(source)
        else:
            raise erring.SourceDecodeError('unsupported line source {0!r}'.format(type(source)))
        self.line = ''
        self.indent = 0
        self.lineno = 0
        self._last_lineno = 0
        self._pushback = None
        self._at_start = True


    @property
    def pending_line(self):
        '''
        The pushed-back line, or `None`.
        '''
        if self._pushback is None:
            return None
        return self._pushback[0]


    def read_line(self, bom=BOM, len=len):
        '''
        Advance to the next line.  Return `False` at end of input.
        '''
        if self._pushback is not None:
            line, lineno = self._pushback
            self._pushback = None
        else:
            line = next(self._lines_iter, None)
            if line is None:
                return False
            if isinstance(line, bytes):
                try:
                    line = line.decode('utf8')
                except Exception as e:
                    raise erring.SourceDecodeError(e)
            elif not isinstance(line, str):
                raise erring.SourceDecodeError('line source produced {0!r}'.format(type(line)))
            if self._at_start:
                self._at_start = False
                if line[:1] == bom:
                    line = line[1:]
            line = line.rstrip()
            self._last_lineno += 1
            lineno = self._last_lineno
        self.line = line
        self.lineno = lineno
        self.indent = len(line) - len(line.lstrip(INDENT))
        return True


    def unread_line(self):
        '''
        Push the current line back so that the next `read_line()` returns it
        again.
        '''
        if self._pushback is not None:
            raise erring.Bug('Only one line can be pushed back')
        self._pushback = (self.line, self.lineno)
