# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint: disable=C0301

from . import erring
from . import grammar


MAX_UNSIGNED = grammar.PARAMS['max_unsigned']
MAX_SIGNED = grammar.PARAMS['max_signed']

DIGIT_SEPARATORS = frozenset(grammar.LIT_GRAMMAR['digit_separator'])
DECIMAL_POINT = grammar.LIT_GRAMMAR['decimal_point']
DEC_EXPONENT_LETTERS = frozenset(grammar.LIT_GRAMMAR['dec_exponent_letter'])
SIGN = frozenset(grammar.LIT_GRAMMAR['sign'])
RADIX_PREFIXES = grammar.RADIX_PREFIXES
COMMENT_DELIM = grammar.LIT_GRAMMAR['comment_delim']
ASSIGN_KEY_VAL = grammar.LIT_GRAMMAR['assign_key_val']

DIGIT_VALUES = {c: int(c, 16) for c in '0123456789abcdefABCDEF'}

_float_infinities = frozenset([float('inf'), float('-inf')])




def _parse_unsigned(line, pos, radix, lineno, source_name,
                    digit_values=DIGIT_VALUES, separators=DIGIT_SEPARATORS,
                    max_unsigned=MAX_UNSIGNED, len=len):
    '''
    Accumulate digits of the given radix starting at `pos`.  Return
    `(magnitude, end_pos)`.  Separators are allowed only between two digits.
    '''
    len_line = len(line)
    start_pos = pos
    magnitude = 0
    last_was_separator = False
    while pos < len_line:
        c = line[pos]
        if c in separators:
            if pos == start_pos:
                raise erring.ParseError('Separator is not allowed in the beginning of number', lineno, pos, source_name)
            if last_was_separator:
                raise erring.ParseError('Duplicate separator in the number', lineno, pos, source_name)
            last_was_separator = True
            pos += 1
            continue
        digit = digit_values.get(c)
        if digit is None or digit >= radix:
            break
        magnitude = magnitude * radix + digit
        if magnitude > max_unsigned:
            raise erring.ParseError('Numeric overflow', lineno, pos, source_name)
        last_was_separator = False
        pos += 1
    if last_was_separator or pos == start_pos:
        raise erring.ParseError('Bad number', lineno, pos, source_name)
    return (magnitude, pos)


def _skip_digits(line, pos, lineno, source_name,
                 separators=DIGIT_SEPARATORS, len=len):
    '''
    Skip decimal digits (with separators) in a fraction or exponent.  Return
    the position after the last digit.
    '''
    len_line = len(line)
    start_pos = pos
    last_was_separator = False
    while pos < len_line:
        c = line[pos]
        if c in separators:
            if pos == start_pos:
                raise erring.ParseError('Separator is not allowed in the beginning of number', lineno, pos, source_name)
            if last_was_separator:
                raise erring.ParseError('Duplicate separator in the number', lineno, pos, source_name)
            last_was_separator = True
        elif '0' <= c <= '9':
            last_was_separator = False
        else:
            break
        pos += 1
    if last_was_separator:
        raise erring.ParseError('Bad number', lineno, pos, source_name)
    return pos




def parse_number(line, start_pos, sign=1, lineno=None, float_overflow_to_inf=False,
                 source_name='<data>',
                 radix_prefixes=RADIX_PREFIXES, decimal_point=DECIMAL_POINT,
                 exponent_letters=DEC_EXPONENT_LETTERS, sign_chars=SIGN,
                 separators=DIGIT_SEPARATORS,
                 comment_delim=COMMENT_DELIM, assign_key_val=ASSIGN_KEY_VAL,
                 max_signed=MAX_SIGNED, float_infinities=_float_infinities,
                 len=len, float=float):
    '''
    Parse an integer or decimal float beginning at `start_pos`, which is the
    first digit (any sign has already been consumed and is given as `sign`).

    Return `(value, end_pos)`.  Integers are range checked against 64-bit
    unsigned magnitude and, when negative, 64-bit signed range.  The number
    must be followed by end of line, whitespace, a comment, or a colon.
    '''
    len_line = len(line)
    pos = start_pos
    radix = 10
    if line[pos] == '0' and pos + 1 < len_line and line[pos+1] in radix_prefixes:
        radix = radix_prefixes[line[pos+1]]
        pos += 2
    magnitude, pos = _parse_unsigned(line, pos, radix, lineno, source_name)

    is_float = False
    if pos < len_line and (line[pos] == decimal_point or line[pos] in exponent_letters):
        if radix != 10:
            raise erring.ParseError('Only decimal representation is supported for floating point numbers', lineno, pos, source_name)
        is_float = True
        if line[pos] == decimal_point:
            pos = _skip_digits(line, pos + 1, lineno, source_name)
        mantissa_end = pos
        if pos < len_line and line[pos] in exponent_letters:
            pos += 1
            if pos < len_line and line[pos] in sign_chars:
                pos += 1
            exponent_start = pos
            pos = _skip_digits(line, pos, lineno, source_name)
            if pos == exponent_start:
                raise erring.ParseError('Bad number', lineno, pos, source_name)

    if pos < len_line:
        c = line[pos]
        if not (c.isspace() or c == comment_delim or c == assign_key_val):
            raise erring.ParseError('Bad number', lineno, pos, source_name)

    if not is_float:
        if sign < 0:
            if magnitude > max_signed:
                raise erring.ParseError('Integer overflow', lineno, start_pos, source_name)
            return (-magnitude, pos)
        return (magnitude, pos)

    cleaned = line[start_pos:pos]
    for s in separators:
        cleaned = cleaned.replace(s, '')
    mantissa = line[start_pos:mantissa_end]
    value = float(cleaned)
    if value in float_infinities and not float_overflow_to_inf:
        raise erring.ParseError('Floating point overflow', lineno, start_pos, source_name)
    if value == 0.0 and mantissa.strip('0' + decimal_point + ''.join(separators)):
        # Nonzero literal below the smallest float
        raise erring.ParseError('Floating point overflow', lineno, start_pos, source_name)
    if sign < 0 and value != 0:
        value = -value
    return (value, pos)
