# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint:  disable=C0103, C0301

import re

from . import erring
from . import tooling
from . import grammar


BACKSLASH = grammar.LIT_GRAMMAR['backslash']
SHORT_BACKSLASH_UNESCAPES = grammar.SHORT_BACKSLASH_UNESCAPES
HEX_ESCAPE_LENGTHS = grammar.HEX_ESCAPE_LENGTHS
MAX_OCTAL_ESCAPE_LENGTH = grammar.MAX_OCTAL_ESCAPE_LENGTH
MAX_CODE_POINT = grammar.PARAMS['max_code_point']

OCTAL_DIGITS = frozenset('01234567')
HEX_DIGITS = frozenset('0123456789abcdefABCDEF')




def unescape_line(line, quote, start_pos=0, lineno=None, colno_offset=0,
                  source_name='<data>',
                  backslash=BACKSLASH,
                  short_unescapes=SHORT_BACKSLASH_UNESCAPES,
                  hex_escape_lengths=HEX_ESCAPE_LENGTHS,
                  octal_digits=OCTAL_DIGITS, hex_digits=HEX_DIGITS,
                  len=len, chr=chr, int=int):
    '''
    Decode backslash escapes in `line`, starting at `start_pos` and stopping
    at the first unescaped `quote` or at the end of the line.

    Return `(text, end_pos)`.  If a closing quote was found, `end_pos` is its
    position; otherwise `end_pos == len(line)`.  Reaching the end of the line
    is not an error, since quoted strings may continue on following lines.

    `lineno` and `colno_offset` are only used for error positions:  the
    column of a code point is its position in `line` plus `colno_offset`.
    '''
    len_line = len(line)
    if start_pos >= len_line:
        return ('', start_pos)
    result = []
    pos = start_pos
    while pos < len_line:
        c = line[pos]
        if c == quote:
            break
        if c != backslash:
            result.append(c)
            pos += 1
            continue
        # Start of escape sequence
        pos += 1
        if pos >= len_line:
            # Trailing backslash stays in the text
            result.append(backslash)
            break
        c = line[pos]
        if c in short_unescapes:
            result.append(short_unescapes[c])
            pos += 1
        elif c == 'o':
            # 1 to 3 octal digits
            digits_start = pos + 1
            digits_end = digits_start
            while (digits_end < len_line and digits_end - digits_start < MAX_OCTAL_ESCAPE_LENGTH and
                    line[digits_end] in octal_digits):
                digits_end += 1
            if digits_end == digits_start:
                raise erring.ParseError('Incomplete octal value', lineno, digits_start + colno_offset, source_name)
            result.append(chr(int(line[digits_start:digits_end], 8)))
            pos = digits_end
        elif c in hex_escape_lengths:
            # Exactly 2, 4, or 8 hex digits
            digits_start = pos + 1
            digits_end = digits_start + hex_escape_lengths[c]
            for n in range(digits_start, digits_end):
                if n >= len_line:
                    raise erring.ParseError('Incomplete hexadecimal value', lineno, n + colno_offset, source_name)
                if line[n] not in hex_digits:
                    raise erring.ParseError('Bad hexadecimal value', lineno, n + colno_offset, source_name)
            code_point = int(line[digits_start:digits_end], 16)
            if code_point > MAX_CODE_POINT:
                raise erring.ParseError('Bad hexadecimal value', lineno, digits_start + colno_offset, source_name)
            result.append(chr(code_point))
            pos = digits_end
        else:
            # Not a recognized escape; keep it as is
            result.append(backslash)
            result.append(c)
            pos += 1
    return (''.join(result), pos)




class Escape(object):
    '''
    Replace code points in Unicode strings with their escaped equivalents
    when they cannot be represented literally inside a double-quoted string.
    '''
    def __init__(self):
        self._escape_unicode_dict = tooling.keydefaultdict(self._escape_unicode_char)
        self._escape_unicode_dict.update(grammar.SHORT_BACKSLASH_ESCAPES)

        pattern = r'\\|"|{0}'.format(grammar.RE_GRAMMAR['control'])
        self._backslash_doublequote_control_re = re.compile(pattern)


    @staticmethod
    def _escape_unicode_char(c, ord=ord):
        '''
        Escape a code point using `\\xHH` (8-bit), `\\uHHHH` (16-bit),
        or `\\UHHHHHHHH` (24-bit) notation.
        '''
        n = ord(c)
        if n < 256:
            return '\\x{0:02x}'.format(n)
        elif n < 65536:
            return '\\u{0:04x}'.format(n)
        return '\\U{0:08x}'.format(n)


    def escape_unicode(self, s):
        '''
        Within a string, replace the backslash, the double quote, and all
        control characters with escapes.
        '''
        d = self._escape_unicode_dict
        return self._backslash_doublequote_control_re.sub(lambda m: d[m.group(0)], s)
