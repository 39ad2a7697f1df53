# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Block parsers selected by conversion specifiers (`:name:`).

Every block parser is a callable taking the live decoder `State`.  It
consumes its block through `state.read_block()` (or repeated
`state.read_block_line()`), and returns a Python object.  Errors are
reported by raising `erring.ParseError`.
'''


# pylint:  disable=C0301

import datetime
import json

from . import erring
from . import tooling




class ConvSpec(object):
    '''
    Conversion specifier.

    name:    Specifier text between the colons, without surrounding
             whitespace.

    parser:  Block parser called with the decoder state.
    '''
    __slots__ = ['name', 'parser']
    def __init__(self, name=None, parser=None):
        if not isinstance(name, str):
            raise TypeError('Conversion specifier name must be a string')
        name = name.strip()
        if not name:
            raise ValueError('Conversion specifier name cannot be empty')
        if ':' in name or any(c.isspace() for c in name):
            raise ValueError('Conversion specifier name cannot contain colons or whitespace: "{0}"'.format(name))
        if not hasattr(parser, '__call__'):
            raise TypeError('Block parser for "{0}" must be callable'.format(name))
        self.name = name
        self.parser = parser

    def copy(self):
        return ConvSpec(name=self.name, parser=self.parser)




def _fold_lines(lines):
    lines = [line for line in tooling.dedent_lines(lines) if line]
    if not lines:
        return ''
    return ' '.join(lines)


def parse_raw(state):
    '''
    Block lines exactly as they are, relative to the block indent.
    '''
    lines = state.read_block()
    if len(lines) > 1:
        lines.append('')
    return '\n'.join(lines)


def parse_literal(state):
    '''
    Dedented block with trailing empty lines removed.
    '''
    lines = tooling.dedent_lines(state.read_block())
    while lines and not lines[-1]:
        lines.pop()
    if len(lines) > 1:
        lines.append('')
    return '\n'.join(lines)


def parse_folded(state):
    '''
    Dedented block with empty lines dropped, joined with single spaces.
    '''
    return _fold_lines(state.read_block())


def parse_isodate(state, date=datetime.date):
    lineno = state.line_number
    colno = state.start_position()
    text = _fold_lines(state.read_block())
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise erring.ParseError('Bad ISO-8601 date', lineno, colno, state.source_name)


def parse_timestamp(state, datetime_type=datetime.datetime):
    lineno = state.line_number
    colno = state.start_position()
    text = _fold_lines(state.read_block())
    try:
        return datetime_type.fromisoformat(text)
    except ValueError:
        raise erring.ParseError('Bad ISO-8601 timestamp', lineno, colno, state.source_name)


def parse_json(state):
    '''
    Block parsed with the standard `json` module.  Errors are reported at
    their position within the block.
    '''
    first_lineno = state.line_number
    colno_offset = state.block_indent
    text = '\n'.join(state.read_block())
    try:
        return json.loads(text)
    except ValueError as e:
        # `json.JSONDecodeError` carries 1-based line and column numbers
        # relative to the block text
        lineno = getattr(e, 'lineno', 1)
        colno = getattr(e, 'colno', 1)
        msg = getattr(e, 'msg', str(e))
        raise erring.ParseError('Invalid JSON: {0}'.format(msg),
                                first_lineno + lineno - 1, colno_offset + colno - 1,
                                state.source_name)




BUILTIN_PARSERS = {x.name: x for x in [ConvSpec(name='raw', parser=parse_raw),
                                       ConvSpec(name='literal', parser=parse_literal),
                                       ConvSpec(name='folded', parser=parse_folded),
                                       ConvSpec(name='isodate', parser=parse_isodate),
                                       ConvSpec(name='timestamp', parser=parse_timestamp),
                                       ConvSpec(name='json', parser=parse_json)]}




class ConversionRegistry(object):
    '''
    Mapping of conversion specifier names to block parsers.  Built-in
    parsers are present from construction; registering an existing name
    replaces it.
    '''
    __slots__ = ['_convspecs']
    def __init__(self, custom_parsers=None):
        self._convspecs = {k: v.copy() for k, v in BUILTIN_PARSERS.items()}
        if custom_parsers is not None:
            if not isinstance(custom_parsers, dict):
                raise TypeError('custom_parsers must be a dict mapping names to block parsers')
            for name, parser in custom_parsers.items():
                self.register(name, parser)

    def register(self, name, parser):
        convspec = ConvSpec(name=name, parser=parser)
        self._convspecs[convspec.name] = convspec

    def get(self, name):
        '''
        Return the block parser for a specifier name, or `None`.
        '''
        convspec = self._convspecs.get(name.strip())
        if convspec is None:
            return None
        return convspec.parser

    def __contains__(self, name):
        return name.strip() in self._convspecs

    def __iter__(self):
        return iter(self._convspecs)

    def __len__(self):
        return len(self._convspecs)

    def copy(self):
        registry = ConversionRegistry()
        registry._convspecs = {k: v.copy() for k, v in self._convspecs.items()}
        return registry
