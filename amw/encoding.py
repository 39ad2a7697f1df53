# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint:  disable = C0301

import math
import re
from . import escape
from . import grammar
from . import tooling


SPACE = grammar.LIT_GRAMMAR['space']
NEWLINE = grammar.LIT_GRAMMAR['newline']
START_LIST_ITEM = grammar.LIT_GRAMMAR['start_list_item']
ASSIGN_KEY_VAL = grammar.LIT_GRAMMAR['assign_key_val']
DOUBLEQUOTE = grammar.LIT_GRAMMAR['escaped_string_doublequote_delim']




class AmwEncoder(object):
    '''
    Encode Python objects as AMW.

    Supported types are `None`, `bool`, `int`, `float`, `str`, `list`, and
    `dict`.  Lists and dicts are written in block form and must not be
    empty, since AMW has no syntax for an empty collection.  Strings are
    written without quotes when they would be read back unchanged.
    '''
    def __init__(self, *args, **kwargs):
        if args:
            raise TypeError('Explicit keyword arguments are required')
        max_nesting_depth = kwargs.pop('max_nesting_depth', grammar.PARAMS['max_nesting_depth'])
        nesting_indent = kwargs.pop('nesting_indent', SPACE * 2)
        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))

        if not isinstance(max_nesting_depth, int) or isinstance(max_nesting_depth, bool):
            raise TypeError('max_nesting_depth must be an integer')
        if max_nesting_depth < 0:
            raise ValueError('max_nesting_depth must be >= 0')
        if not isinstance(nesting_indent, str):
            raise TypeError('nesting_indent must be a string')
        if not nesting_indent or nesting_indent.strip(SPACE):
            raise ValueError('nesting_indent must consist of one or more spaces')
        self.max_nesting_depth = max_nesting_depth
        self.nesting_indent = nesting_indent

        self._escape_unicode = escape.Escape().escape_unicode
        self._bare_str_re = re.compile(grammar.RE_GRAMMAR['valid_terminated_unquoted_string'])

        def unsupported_type(t):
            raise TypeError('Cannot encode objects of type {0}'.format(t))
        self._encoders = tooling.keydefaultdict(unsupported_type)
        self._encoders.update({type(None): self._encode_keyword,
                               bool: self._encode_keyword,
                               int: self._encode_int,
                               float: self._encode_float,
                               str: self._encode_str,
                               list: self._encode_list,
                               dict: self._encode_dict})
        self._collection_types = frozenset([list, dict])


    @staticmethod
    def _encode_keyword(obj, out, indent, depth,
                        keywords={None: grammar.LIT_GRAMMAR['none_type'],
                                  True: grammar.LIT_GRAMMAR['bool_true'],
                                  False: grammar.LIT_GRAMMAR['bool_false']}):
        out.append(keywords[obj])


    @staticmethod
    def _encode_int(obj, out, indent, depth,
                    max_unsigned=grammar.PARAMS['max_unsigned'],
                    max_signed=grammar.PARAMS['max_signed']):
        if not -max_signed <= obj <= max_unsigned:
            raise ValueError('Integer {0} is outside the range that can be decoded'.format(obj))
        out.append(str(obj))


    @staticmethod
    def _encode_float(obj, out, indent, depth, isfinite=math.isfinite):
        if not isfinite(obj):
            raise ValueError('Non-finite float {0!r} cannot be represented'.format(obj))
        out.append(repr(obj))


    def _encode_str(self, obj, out, indent, depth, reserved_words=grammar.RESERVED_WORDS):
        if (self._bare_str_re.match(obj) is not None and obj.strip() == obj and
                obj.split(None, 1)[0] not in reserved_words):
            out.append(obj)
        else:
            out.append(DOUBLEQUOTE + self._escape_unicode(obj) + DOUBLEQUOTE)


    def _check_collection(self, obj, depth):
        '''
        Return the nesting depth for the items of a collection.
        '''
        if not obj:
            raise ValueError('Empty {0} cannot be represented'.format(type(obj).__name__))
        depth += 1
        if depth > self.max_nesting_depth:
            raise TypeError('Max nesting depth for collections was exceeded; max depth = {0}'.format(self.max_nesting_depth))
        return depth


    def _encode_list(self, obj, out, indent, depth):
        depth = self._check_collection(obj, depth)
        item_indent = indent + SPACE * len(START_LIST_ITEM)
        encoders = self._encoders
        for n, item in enumerate(obj):
            if n:
                out.append(NEWLINE + indent)
            out.append(START_LIST_ITEM)
            encoders[type(item)](item, out, item_indent, depth)


    def _encode_dict(self, obj, out, indent, depth):
        depth = self._check_collection(obj, depth)
        value_indent = indent + self.nesting_indent
        encoders = self._encoders
        collection_types = self._collection_types
        for n, (k, v) in enumerate(obj.items()):
            if n:
                out.append(NEWLINE + indent)
            if type(k) in collection_types:
                raise TypeError('Dict keys cannot be collections')
            encoders[type(k)](k, out, indent, depth)
            out.append(ASSIGN_KEY_VAL)
            if type(v) in collection_types:
                out.append(NEWLINE + value_indent)
            else:
                out.append(SPACE)
            encoders[type(v)](v, out, value_indent, depth)


    def encode(self, obj):
        '''
        Encode an object as a string ending with a newline.
        '''
        out = []
        self._encoders[type(obj)](obj, out, '', 0)
        out.append(NEWLINE)
        return ''.join(out)
