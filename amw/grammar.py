# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint: disable=C0301, C0330

import re




# Default short backslash escapes.  Keys are the code points that follow
# the backslash.
SHORT_BACKSLASH_UNESCAPES = {'\\': '\\',
                             "'": "'",
                             '"': '"',
                             '?': '?',
                             'a': '\a',
                             'b': '\b',
                             'f': '\f',
                             'n': '\n',
                             'r': '\r',
                             't': '\t',
                             'v': '\v'}

# Escapes used by the encoder.  `?` and `'` never need escaping in
# double-quoted strings.
SHORT_BACKSLASH_ESCAPES = {v: '\\' + k for k, v in SHORT_BACKSLASH_UNESCAPES.items()
                           if k not in ('?', "'")}

# Number of hex digits required by each hex escape
HEX_ESCAPE_LENGTHS = {'x': 2, 'u': 4, 'U': 8}

MAX_OCTAL_ESCAPE_LENGTH = 3


# Non-textual general parameters
PARAMS = {'max_nesting_depth': 100,
          'max_unsigned': 2**64 - 1,
          'max_signed': 2**63 - 1,
          'max_code_point': 0x10FFFF}




# Assemble literal grammar
_RAW_LIT_GRAMMAR = [# Whitespace
                    ('space', '\x20'),
                    ('indent', '{space}'),
                    ('newline', '\n'),
                    # Keywords
                    ('none_type', 'null'),
                    ('bool_true', 'true'),
                    ('bool_false', 'false'),
                    # Math
                    ('sign', '+-'),
                    ('decimal_point', '.'),
                    ('dec_exponent_letter', 'eE'),
                    ('digit_separator', "'_"),
                    # Other
                    ('bom', '\uFEFF')]

_RAW_LIT_SPECIAL = [# Special code points
                    ('comment_delim', '#'),
                    ('assign_key_val', ':'),
                    ('convspec_delim', ':'),
                    ('open_indentation_list', '-'),
                    ('escaped_string_doublequote_delim', '"'),
                    ('escaped_string_singlequote_delim', "'"),
                    ('backslash', '\\'),
                    # Combinations
                    ('quote_delims', '{escaped_string_doublequote_delim}{escaped_string_singlequote_delim}'),
                    ('start_list_item', '{open_indentation_list}{space}')]
_RAW_LIT_GRAMMAR.extend(_RAW_LIT_SPECIAL)

LIT_GRAMMAR = {}
for k, v in _RAW_LIT_GRAMMAR:
    LIT_GRAMMAR[k] = v.format(**LIT_GRAMMAR)

# Radix for the letter that follows a leading zero
RADIX_PREFIXES = {'b': 2, 'B': 2,
                  'o': 8, 'O': 8,
                  'x': 16, 'X': 16}

RESERVED_WORDS = {LIT_GRAMMAR['none_type']: None,
                  LIT_GRAMMAR['bool_true']: True,
                  LIT_GRAMMAR['bool_false']: False}




# Assemble regex grammar
_RAW_RE_GRAMMAR = [('newline', r'\r\n|\r|\n'),
                   ('control', r'[\x00-\x1F\x7F]')]

# Strings that may be written without quotes and are guaranteed to be read
# back as the same string:  they start with a letter or underscore, contain
# no quotes, colons, comment delimiters, or control characters, and do not
# end with whitespace.
_RAW_RE_GRAMMAR.append(('unquoted_string',
                        r'[A-Za-z_\u00C0-\uFFFF](?:[^\x00-\x1F\x7F"\':#\\]*[^\x00-\x1F\x7F"\':#\\\s])?'))

RE_GRAMMAR = {}
for k, v in _RAW_RE_GRAMMAR:
    RE_GRAMMAR[k] = v

RE_GRAMMAR['valid_terminated_unquoted_string'] = r'(?:{0})\Z'.format(RE_GRAMMAR['unquoted_string'])
