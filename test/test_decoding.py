# -*- coding: utf-8 -*-
#
# Copyright (c) 2015, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import sys
import os
import io
import logging

if all(os.path.isdir(x) for x in ('amw', 'test')):
    sys.path.insert(0, '.')

import amw
import amw.decoding as mdl
import amw.erring as err

import pytest




def parse_error(s, **kwargs):
    dc = mdl.AmwDecoder(**kwargs)
    with pytest.raises(err.ParseError) as e:
        dc.decode(s)
    return e.value


def test_decoder_kwargs():
    with pytest.raises(TypeError):
        mdl.AmwDecoder(1)
    with pytest.raises(TypeError):
        mdl.AmwDecoder(max_nesting_depth='1')
    with pytest.raises(ValueError):
        mdl.AmwDecoder(max_nesting_depth=-1)
    with pytest.raises(TypeError):
        mdl.AmwDecoder(float_overflow_to_inf='yes')
    with pytest.raises(TypeError):
        mdl.AmwDecoder(foo=1)


def test_decode_scalars():
    dc = mdl.AmwDecoder()
    assert(dc.decode('42') == 42)
    assert(dc.decode('-17') == -17)
    assert(dc.decode('+5') == 5)
    assert(dc.decode('1.5') == 1.5)
    assert(dc.decode('0xFF') == 255)
    assert(dc.decode('1_000') == 1000)
    assert(dc.decode("1'000") == 1000)
    assert(dc.decode('null') is None)
    assert(dc.decode('true') is True)
    assert(dc.decode('false') is False)
    assert(dc.decode('nullable') == 'nullable')
    assert(dc.decode('true:false') == 'true:false')
    assert(dc.decode('a: true# c') == {'a': True})
    assert(dc.decode('null#') is None)
    assert(dc.decode('"hi"') == 'hi')
    assert(dc.decode("'hi'") == 'hi')
    assert(dc.decode('""') == '')
    assert(dc.decode('hello world') == 'hello world')
    assert(dc.decode('-foo') == '-foo')
    assert(dc.decode('http://x') == 'http://x')
    assert(dc.decode('  42  # answer\n# trailing comment') == 42)


def test_decode_sources():
    dc = mdl.AmwDecoder()
    assert(dc.decode('a: 1'.encode('utf8')) == {'a': 1})
    assert(dc.decode('\ufeffa: 1') == {'a': 1})
    assert(dc.decode('a: 1\r\nb: 2\r\n') == {'a': 1, 'b': 2})
    assert(dc.decode(['a: 1\n', 'b: 2\n']) == {'a': 1, 'b': 2})
    assert(amw.load(io.StringIO('- x\n- y\n')) == ['x', 'y'])
    assert(amw.loads('a: 1') == {'a': 1})
    assert(amw.parse('a: 1', max_nesting_depth=5) == {'a': 1})


def test_decode_end_of_input():
    dc = mdl.AmwDecoder()
    for s in ('', '\n\n', '# only\n  # comments\n\n'):
        with pytest.raises(err.EndOfInput) as e:
            dc.decode(s)
        assert(e.value.kind is err.ErrorKind.END_OF_INPUT)


def test_decode_maps():
    dc = mdl.AmwDecoder()
    assert(dc.decode('key: value') == {'key': 'value'})
    assert(dc.decode('a: 1\nb: 2') == {'a': 1, 'b': 2})
    assert(dc.decode('a:\n  b: 1\n  c: true\nd: null') == {'a': {'b': 1, 'c': True}, 'd': None})
    assert(dc.decode('a: b: 1\n   c: 2') == {'a': {'b': 1, 'c': 2}})
    assert(dc.decode('"a b": 1') == {'a b': 1})
    assert(dc.decode('1: one\n2.5: two') == {1: 'one', 2.5: 'two'})
    assert(dc.decode('true: yes\nnull: no') == {True: 'yes', None: 'no'})
    assert(dc.decode('url: http://x') == {'url': 'http://x'})
    assert(dc.decode('a:b: c') == {'a:b': 'c'})
    assert(dc.decode('a: 1\na: 2') == {'a': 2})
    assert(dc.decode('a: "x"\n"b": \'y\'') == {'a': 'x', 'b': 'y'})


def test_decode_comments():
    dc = mdl.AmwDecoder()
    s = '# head\n\na: 1  # note\n# between\nb: 2\n'
    assert(dc.decode(s) == {'a': 1, 'b': 2})
    s = 'a:\n  # first\n  b: 1\n\n  # between\n  c: 2\n'
    assert(dc.decode(s) == {'a': {'b': 1, 'c': 2}})
    assert(dc.decode('- # c\n  x') == ['x'])


def test_decode_lists():
    dc = mdl.AmwDecoder()
    assert(dc.decode('- a\n- b') == ['a', 'b'])
    assert(dc.decode('- - a\n  - b\n- c') == [['a', 'b'], 'c'])
    assert(dc.decode('-\n  - 1\n  - 2') == [[1, 2]])
    assert(dc.decode('- a: 1\n  b: 2\n- c: 3') == [{'a': 1, 'b': 2}, {'c': 3}])
    assert(dc.decode('a:\n  - 1\n  - 2\nb: x') == {'a': [1, 2], 'b': 'x'})
    assert(dc.decode('a: - 1\n   - 2') == {'a': [1, 2]})
    assert(dc.decode('- -1\n- +1\n- -x') == [-1, 1, '-x'])


def test_decode_literal_strings():
    dc = mdl.AmwDecoder()
    assert(dc.decode('- first line\n  continued') == ['first line\ncontinued\n'])
    assert(dc.decode('a:\n    x\n      y') == {'a': 'x\n  y\n'})
    assert(dc.decode(':unknown: x') == ':unknown: x')
    assert(dc.decode('a: hello\n   world') == {'a': 'hello\nworld\n'})
    assert(dc.decode('a:   hello\n     world\nb: 1') == {'a': 'hello\nworld\n', 'b': 1})
    e = parse_error('a: hello\n  world')
    assert(e.msg == 'Bad indentation of map key')
    assert((e.lineno, e.colno) == (2, 2))


def test_decode_quoted_strings():
    dc = mdl.AmwDecoder()
    assert(dc.decode('"\\n"') == '\n')
    assert(dc.decode('"\\x41"') == 'A')
    assert(dc.decode('"\\u0041"') == 'A')
    assert(dc.decode('"\\q"') == '\\q')
    assert(dc.decode('"a # b"  # c') == 'a # b')
    assert(dc.decode('"abc\n def"') == 'abc def')
    assert(dc.decode('a: "first\n    second"\nb: 1') == {'a': 'first second', 'b': 1})
    assert(dc.decode('a: "first\n\n    second\n   "') == {'a': 'first second'})
    assert(dc.decode("- 'it\\'s\n   fine'") == ["it's fine"])


def test_decode_quoted_string_errors():
    e = parse_error('"\\x4')
    assert(e.msg == 'Incomplete hexadecimal value')
    assert((e.lineno, e.colno) == (1, 4))
    e = parse_error('"abc\n \\xZZ"')
    assert(e.msg == 'Bad hexadecimal value')
    assert((e.lineno, e.colno) == (2, 3))
    e = parse_error('a: "abc')
    assert(e.msg == 'String contains no closing quote')
    e = parse_error('"abc\n def" x')
    assert(e.msg == 'Bad character after quoted string')
    assert((e.lineno, e.colno) == (2, 6))
    e = parse_error('a: 1\n"b\n c": 2')
    assert(e.msg == 'Map key expected and it cannot be a multi-line string')


def test_decode_conversion_specifiers():
    dc = mdl.AmwDecoder()
    assert(dc.decode('key:: raw:\n  line 1\n    line 2') == {'key': ' line 1\n   line 2\n'})
    assert(dc.decode('key:: literal:\n  a\n  b') == {'key': 'a\nb\n'})
    assert(dc.decode('key:: folded:\n  a\n\n  b') == {'key': 'a b'})
    assert(dc.decode('key: :literal: text') == {'key': 'text'})
    assert(dc.decode(':raw:\n x') == 'x')
    assert(dc.decode('- :raw:\n # not a comment') == ['# not a comment'])
    assert(dc.decode('- :raw:\n  # indented') == [' # indented'])
    assert(dc.decode('a:\n  :folded:\n    x\n    y\nb: 1') == {'a': 'x y', 'b': 1})


def test_decode_errors_with_position():
    e = parse_error('- a\n - b')
    assert(e.msg == 'Bad indentation of list item')
    assert((e.lineno, e.colno) == (2, 1))
    assert(e.kind is err.ErrorKind.PARSE_ERROR)
    e = parse_error('- a\n-b')
    assert(e.msg == 'Bad list item')
    assert((e.lineno, e.colno) == (2, 0))
    assert(parse_error('- a\nb').msg == 'Bad list item')
    e = parse_error('a: 1\n b: 2')
    assert(e.msg == 'Bad indentation of map key')
    assert((e.lineno, e.colno) == (2, 1))
    e = parse_error('a: 1\nb')
    assert(e.msg == 'Map key expected')
    assert((e.lineno, e.colno) == (2, 0))
    assert(parse_error('a: 1\n- b').msg == 'Map key expected and it cannot be a list')
    assert(parse_error('a: 1\n:b: 2').msg == 'Map key expected and it cannot start with colon')
    e = parse_error('1 2')
    assert(e.msg == 'Bad character encountered')
    assert(e.colno == 2)
    assert(parse_error('true false').colno == 5)
    assert(parse_error('"abc" x').msg == 'Bad character encountered')
    e = parse_error('1\n2')
    assert(e.msg == 'Extra data after parsed value')
    assert((e.lineno, e.colno) == (2, 0))
    e = parse_error('key:\nother: 1')
    assert(e.msg == 'Empty block')
    assert((e.lineno, e.colno) == (1, 0))
    assert('line 1:2' in str(parse_error('12abc')))


def test_decode_numeric_errors():
    assert(parse_error('12abc').msg == 'Bad number')
    assert(parse_error('18446744073709551616').msg == 'Numeric overflow')
    assert(parse_error('-9223372036854775808').msg == 'Integer overflow')
    assert(mdl.AmwDecoder().decode('-9223372036854775807') == -(2**63-1))
    assert(parse_error('1__000').msg == 'Duplicate separator in the number')
    assert(parse_error('a: 1e400').msg == 'Floating point overflow')
    assert(mdl.AmwDecoder(float_overflow_to_inf=True).decode('1e400') == float('inf'))
    assert(parse_error('a: 1e-400').msg == 'Floating point overflow')


def test_decode_nesting_depth():
    dc = mdl.AmwDecoder(max_nesting_depth=3)
    assert(dc.decode('- - - x') == [[['x']]])
    e = parse_error('- - - - x', max_nesting_depth=3)
    assert(e.msg == 'Too many nested blocks')
    assert(e.lineno == 1)
    assert(mdl.AmwDecoder(max_nesting_depth=0).decode('a') == 'a')
    assert(parse_error('- a', max_nesting_depth=0).msg == 'Too many nested blocks')
    deep = '\n'.join(' '*n + 'k:' for n in range(150)) + '\n' + ' '*150 + 'v'
    assert(parse_error(deep).msg == 'Too many nested blocks')


def test_decoder_reuse():
    dc = mdl.AmwDecoder()
    with pytest.raises(err.ParseError):
        dc.decode('- a\n - b')
    assert(dc.decode('- a\n- b') == ['a', 'b'])


def test_debug_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger='amw.decoding'):
        mdl.AmwDecoder().decode('- a')
    assert(any('Enter block' in r.getMessage() for r in caplog.records))


def test_decode_stack_exhaustion():
    dc = mdl.AmwDecoder(max_nesting_depth=5000)
    with pytest.raises(err.ResourceExhaustedError) as e:
        dc.decode('- ' * 2000 + 'x')
    assert(e.value.kind is err.ErrorKind.RESOURCE_EXHAUSTION)
    assert('stack space' in str(e.value))
    assert(dc.decode('- - x') == [['x']])
