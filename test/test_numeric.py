# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import sys
import os
import math

if all(os.path.isdir(x) for x in ('amw', 'test')):
    sys.path.insert(0, '.')

import amw.numeric as mdl
import amw.erring as err

import pytest




def parse_error_msg(*args, **kwargs):
    with pytest.raises(err.ParseError) as e:
        mdl.parse_number(*args, **kwargs)
    return e.value.msg


def test_parse_int():
    assert(mdl.parse_number('0', 0) == (0, 1))
    assert(mdl.parse_number('012', 0) == (12, 3))
    assert(mdl.parse_number('1_000', 0) == (1000, 5))
    assert(mdl.parse_number("1'000", 0) == (1000, 5))
    assert(mdl.parse_number('x: 42', 3) == (42, 5))
    assert(mdl.parse_number('12 # c', 0) == (12, 2))
    assert(mdl.parse_number('12:', 0) == (12, 2))
    assert(mdl.parse_number('5', 0, -1) == (-5, 1))


def test_parse_int_radix():
    assert(mdl.parse_number('0xFF', 0) == (255, 4))
    assert(mdl.parse_number('0X1f', 0) == (31, 4))
    assert(mdl.parse_number('0O17', 0) == (15, 4))
    assert(mdl.parse_number('0b101', 0) == (5, 5))
    assert(mdl.parse_number('0b1_0', 0) == (2, 5))
    assert(parse_error_msg('0b12', 0) == 'Bad number')
    assert(parse_error_msg('0x', 0) == 'Bad number')
    assert(parse_error_msg('0x1.5', 0) == 'Only decimal representation is supported for floating point numbers')


def test_parse_int_separators():
    with pytest.raises(err.ParseError) as e:
        mdl.parse_number('1__000', 0, lineno=3)
    assert(e.value.msg == 'Duplicate separator in the number')
    assert(e.value.lineno == 3 and e.value.colno == 2)
    assert(parse_error_msg('0x_1', 0) == 'Separator is not allowed in the beginning of number')
    assert(parse_error_msg('1_', 0) == 'Bad number')
    assert(parse_error_msg('1_ ', 0) == 'Bad number')


def test_parse_int_overflow():
    assert(mdl.parse_number('18446744073709551615', 0) == (2**64-1, 20))
    assert(parse_error_msg('18446744073709551616', 0) == 'Numeric overflow')
    assert(mdl.parse_number('9223372036854775807', 0, -1) == (-(2**63-1), 19))
    assert(parse_error_msg('9223372036854775808', 0, -1) == 'Integer overflow')


def test_parse_float():
    assert(mdl.parse_number('0.5', 0) == (0.5, 3))
    assert(mdl.parse_number('1.5e3', 0) == (1500.0, 5))
    assert(mdl.parse_number('1e-2', 0) == (0.01, 4))
    assert(mdl.parse_number('1E+2', 0) == (100.0, 4))
    assert(mdl.parse_number('1_0.2_5', 0) == (10.25, 7))
    assert(mdl.parse_number('1.5', 0, -1) == (-1.5, 3))
    value, end_pos = mdl.parse_number('0.0', 0, -1)
    assert(value == 0.0 and math.copysign(1.0, value) == 1.0)
    assert(parse_error_msg('1e', 0) == 'Bad number')
    assert(parse_error_msg('1e+', 0) == 'Bad number')
    assert(parse_error_msg('1.5x', 0) == 'Bad number')


def test_parse_float_overflow():
    assert(parse_error_msg('1e400', 0) == 'Floating point overflow')
    assert(mdl.parse_number('1e400', 0, float_overflow_to_inf=True) == (float('inf'), 5))
    assert(mdl.parse_number('1e400', 0, -1, float_overflow_to_inf=True) == (float('-inf'), 5))
    assert(parse_error_msg('1e-400', 0) == 'Floating point overflow')
    assert(parse_error_msg('0.5e-400', 0) == 'Floating point overflow')
    assert(mdl.parse_number('0e-400', 0) == (0.0, 6))
    assert(mdl.parse_number('0.00e-400', 0) == (0.0, 9))


def test_bad_terminator():
    with pytest.raises(err.ParseError) as e:
        mdl.parse_number('12abc', 0, lineno=1)
    assert(e.value.msg == 'Bad number' and e.value.colno == 2)
    assert(parse_error_msg('2024-01-01', 0) == 'Bad number')
