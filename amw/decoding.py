# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


# pylint: disable=C0301


from .version import __version__
import contextlib
import logging

from . import erring
from . import escape
from . import grammar
from . import numeric
from . import conversions
from .conversions import ConversionRegistry
from .lines import LineCursor, skip_spaces


logger = logging.getLogger(__name__)


MAX_NESTING_DEPTH = grammar.PARAMS['max_nesting_depth']

INDENT = grammar.LIT_GRAMMAR['indent']
COMMENT_DELIM = grammar.LIT_GRAMMAR['comment_delim']
ASSIGN_KEY_VAL = grammar.LIT_GRAMMAR['assign_key_val']
CONVSPEC_DELIM = grammar.LIT_GRAMMAR['convspec_delim']
OPEN_INDENTATION_LIST = grammar.LIT_GRAMMAR['open_indentation_list']
QUOTE_DELIMS = frozenset(grammar.LIT_GRAMMAR['quote_delims'])
RESERVED_WORDS = grammar.RESERVED_WORDS
DIGITS = frozenset('0123456789')




class State(object):
    '''
    Keep track of a data source and all associated state while it is
    decoded:  the line cursor, the current line and its position, the
    active block, the nesting depth, and a snapshot of the conversion
    registry.

    A `State` is created for each decoded source and discarded afterward.
    Block parsers registered as conversion specifiers receive the state and
    consume their block with `read_block()` or `read_block_line()`.
    '''
    __slots__ = ['cursor', 'source_name',
                 'current_line', 'current_indent', 'line_number',
                 'block_indent', 'block_anchor',
                 'nesting_depth', 'max_nesting_depth',
                 'skip_comments', 'eof',
                 'parsers', 'float_overflow_to_inf']
    def __init__(self, decoder, source, source_name=None):
        self.cursor = LineCursor(source, source_name)
        self.source_name = self.cursor.source_name

        self.current_line = ''
        self.current_indent = 0
        self.line_number = 0
        self.block_indent = 0
        self.block_anchor = 0
        self.nesting_depth = 0
        self.max_nesting_depth = decoder.max_nesting_depth
        self.skip_comments = True
        self.eof = False

        self.parsers = decoder.parsers.copy()
        self.float_overflow_to_inf = decoder.float_overflow_to_inf


    def _load_cursor_line(self):
        cursor = self.cursor
        self.current_line = cursor.line
        self.current_indent = cursor.indent
        self.line_number = cursor.lineno


    def read_block_line(self, comment_delim=COMMENT_DELIM):
        '''
        Read the next line of the current block into `current_line`.

        Empty lines are always part of the block.  Comment lines indented
        less than the block are skipped.  Any other line indented less than
        the block is pushed back for the enclosing block, and `False` is
        returned.  `False` is also returned at end of input.
        '''
        if self.eof:
            return False
        cursor = self.cursor
        while True:
            if not cursor.read_line():
                self.eof = True
                self.current_line = ''
                self.current_indent = 0
                return False
            line = cursor.line
            if self.skip_comments:
                if not line or line[cursor.indent] == comment_delim:
                    continue
                self.skip_comments = False
            self._load_cursor_line()
            if not line:
                return True
            if cursor.indent >= self.block_indent:
                return True
            if line[cursor.indent] == comment_delim:
                continue
            logger.debug('Unindent at line %d (indent %d < block indent %d)',
                         cursor.lineno, cursor.indent, self.block_indent)
            cursor.unread_line()
            self.current_line = ''
            return False


    def read_block(self):
        '''
        Return the current line and all following lines of the current
        block, each starting at the block indent.
        '''
        block_indent = self.block_indent
        lines = [self.current_line[block_indent:]]
        while self.read_block_line():
            lines.append(self.current_line[block_indent:])
        return lines


    def reread_pending_line(self):
        '''
        Take back a line that was pushed back for the enclosing block.
        Return `False` if there is no such line.
        '''
        if self.cursor.pending_line is None:
            return False
        self.cursor.read_line()
        self._load_cursor_line()
        return True


    def start_position(self):
        '''
        Position of the first non-space code point of the current block in
        the current line.  The block may start within the line, after a list
        dash or a map key.
        '''
        if self.block_indent < self.current_indent:
            return self.current_indent
        return skip_spaces(self.current_line, self.block_indent)


    def comment_or_end_of_line(self, pos, comment_delim=COMMENT_DELIM, len=len):
        line = self.current_line
        pos = skip_spaces(line, pos)
        return pos >= len(line) or line[pos] == comment_delim


    def error(self, msg, colno, lineno=None):
        '''
        Create a `ParseError` positioned in the current line, or in
        `lineno` if given.
        '''
        if lineno is None:
            lineno = self.line_number
        return erring.ParseError(msg, lineno, colno, self.source_name)


    @contextlib.contextmanager
    def nested_block(self, block_indent, anchor=None):
        '''
        Enter a nested block starting at column `block_indent`.  `anchor` is
        the column of the map key or list dash that owns the block.  Nesting
        depth, block indent, and anchor are restored on exit.
        '''
        if self.nesting_depth >= self.max_nesting_depth:
            raise self.error('Too many nested blocks', self.current_indent)
        saved_block_indent = self.block_indent
        saved_block_anchor = self.block_anchor
        self.nesting_depth += 1
        self.block_indent = block_indent
        if anchor is not None:
            self.block_anchor = anchor
        logger.debug('Enter block at line %d, indent %d, depth %d',
                     self.line_number, block_indent, self.nesting_depth)
        try:
            yield
        finally:
            self.nesting_depth -= 1
            self.block_indent = saved_block_indent
            self.block_anchor = saved_block_anchor
            logger.debug('Exit block, indent %d, depth %d',
                         self.block_indent, self.nesting_depth)




class AmwDecoder(object):
    '''
    Decode AMW in a string, byte string, stream, or iterable of lines.

    A decoder is intended to be static once created, apart from registering
    custom conversion specifiers.  Each source that is decoded has a
    `State` instance created for it, and all mutability while parsing is
    confined within that object.
    '''
    __slots__ = ['max_nesting_depth', 'float_overflow_to_inf', 'parsers']
    def __init__(self, *args, **kwargs):
        if args:
            raise TypeError('Explicit keyword arguments are required')
        max_nesting_depth = kwargs.pop('max_nesting_depth', MAX_NESTING_DEPTH)
        float_overflow_to_inf = kwargs.pop('float_overflow_to_inf', False)
        custom_parsers = kwargs.pop('custom_parsers', None)
        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))
        if not isinstance(max_nesting_depth, int) or isinstance(max_nesting_depth, bool):
            raise TypeError('max_nesting_depth must be an integer')
        if max_nesting_depth < 0:
            raise ValueError('max_nesting_depth must be >= 0')
        if float_overflow_to_inf not in (True, False):
            raise TypeError('float_overflow_to_inf must be a boolean')
        self.max_nesting_depth = max_nesting_depth
        self.float_overflow_to_inf = float_overflow_to_inf
        self.parsers = ConversionRegistry(custom_parsers)


    def register_custom_parser(self, name, parser):
        '''
        Register a block parser for the conversion specifier `:name:`.  An
        existing parser with the same name is replaced.
        '''
        self.parsers.register(name, parser)


    def decode(self, markup, source_name=None):
        '''
        Decode a Unicode string, byte string, stream, or iterable of lines
        into Python objects.
        '''
        state = State(self, markup, source_name)
        try:
            if not state.read_block_line():
                raise erring.EndOfInput(state.source_name)
            value = self._parse_value(state)
            self._check_end_of_data(state)
        except MemoryError:
            raise erring.ResourceExhaustedError(state.source_name)
        except RecursionError:
            raise erring.ResourceExhaustedError(state.source_name, 'stack space')
        return value


    def decode_json(self, markup, source_name=None):
        '''
        Decode a whole source as JSON through the `json` block parser.
        '''
        state = State(self, markup, source_name)
        try:
            if not state.read_block_line():
                raise erring.EndOfInput(state.source_name)
            value = state.parsers.get('json')(state)
            self._check_end_of_data(state)
        except MemoryError:
            raise erring.ResourceExhaustedError(state.source_name)
        except RecursionError:
            raise erring.ResourceExhaustedError(state.source_name, 'stack space')
        return value


    def _check_end_of_data(self, state):
        if self._read_next_line(state):
            raise state.error('Extra data after parsed value', state.current_indent)


    @staticmethod
    def _read_next_line(state, skip_comments=True, comment_delim=COMMENT_DELIM):
        '''
        Read the next line of the current block that is neither empty nor
        (optionally) a comment.
        '''
        while state.read_block_line():
            line = state.current_line
            if not line:
                continue
            if skip_comments and line[state.current_indent] == comment_delim:
                continue
            return True
        return False


    def _parse_nested_block(self, state, block_pos, anchor, parser):
        with state.nested_block(block_pos, anchor):
            return parser(state)


    def _parse_nested_block_from_next_line(self, state, column, parser, skip_comments=True):
        '''
        Parse a block that starts on the line after the one holding `column`
        (a map key, list dash, or conversion specifier).  The block must be
        indented beyond `column`.
        '''
        lineno = state.line_number
        with state.nested_block(column + 1, column):
            if not self._read_next_line(state, skip_comments=skip_comments):
                raise state.error('Empty block', column, lineno)
            return parser(state)


    def _parse_convspec(self, state, opening_pos, len=len):
        '''
        Look for a conversion specifier `:name:` with its opening colon at
        `opening_pos`.  It must be followed by whitespace or end of line, and
        the name must be registered.  Return `(parser, closing_pos)`, or
        `None` if there is no such specifier.
        '''
        line = state.current_line
        closing_pos = line.find(CONVSPEC_DELIM, opening_pos + 1)
        if closing_pos < 0 or closing_pos == opening_pos + 1:
            return None
        if closing_pos + 1 < len(line) and not line[closing_pos+1].isspace():
            return None
        parser = state.parsers.get(line[opening_pos+1:closing_pos])
        if parser is None:
            return None
        return (parser, closing_pos)


    def _is_kv_separator(self, state, colon_pos, len=len):
        '''
        Whether the colon at `colon_pos` separates a key from its value:
        it is followed by whitespace, end of line, or a conversion specifier.
        '''
        line = state.current_line
        next_pos = colon_pos + 1
        if next_pos >= len(line) or line[next_pos].isspace():
            return True
        if line[next_pos] != CONVSPEC_DELIM:
            return False
        return self._parse_convspec(state, next_pos) is not None


    def _parse_converted(self, state, pos, parser, closing_pos, len=len):
        '''
        Run a conversion specifier's block parser, either on the rest of the
        current line and its continuation, or on the block that follows.
        '''
        line = state.current_line
        block_pos = skip_spaces(line, closing_pos + 1)
        if block_pos < len(line):
            return self._parse_nested_block(state, block_pos, None, parser)
        if pos == state.current_indent:
            column = pos
        else:
            column = state.block_anchor
        return self._parse_nested_block_from_next_line(state, column, parser, skip_comments=False)


    def _finish_value(self, state):
        '''
        A scalar has ended a line.  Nothing else may follow within its block.
        '''
        if self._read_next_line(state):
            raise state.error('Extra data after parsed value', state.current_indent)


    def _check_value_end(self, state, value, value_pos, end_pos, expect_key, len=len):
        '''
        Check what follows a scalar.  A key/value separator turns the scalar
        into a map key.  Otherwise only a comment or end of line may follow.
        '''
        line = state.current_line
        pos = skip_spaces(line, end_pos)
        if pos >= len(line) or line[pos] == COMMENT_DELIM:
            if expect_key:
                raise state.error('Map key expected', pos)
            self._finish_value(state)
            return value
        if line[pos] == ASSIGN_KEY_VAL and self._is_kv_separator(state, pos):
            if expect_key:
                return (value, pos + 1)
            return self._parse_map(state, value, value_pos, pos + 1)
        raise state.error('Bad character encountered', pos)


    def _parse_value(self, state, expect_key=False,
                     digits=DIGITS, quote_delims=QUOTE_DELIMS,
                     reserved_words=RESERVED_WORDS, len=len):
        '''
        Parse the value that starts at the first non-space code point of the
        current block.

        With `expect_key`, the value must be a map key followed by a
        key/value separator, and `(key, value_pos)` is returned, where
        `value_pos` is the position right after the separator.
        '''
        line = state.current_line
        len_line = len(line)
        pos = state.start_position()
        c = line[pos]
        next_c = line[pos+1] if pos + 1 < len_line else ''

        if c == CONVSPEC_DELIM:
            if expect_key:
                raise state.error('Map key expected and it cannot start with colon', pos)
            convspec = self._parse_convspec(state, pos)
            if convspec is not None:
                parser, closing_pos = convspec
                return self._parse_converted(state, pos, parser, closing_pos)
            return conversions.parse_literal(state)

        if c == OPEN_INDENTATION_LIST:
            if next_c in digits:
                value, end_pos = numeric.parse_number(line, pos + 1, -1, state.line_number,
                                                      state.float_overflow_to_inf, state.source_name)
                return self._check_value_end(state, value, pos, end_pos, expect_key)
            if not next_c or next_c.isspace():
                if expect_key:
                    raise state.error('Map key expected and it cannot be a list', pos)
                return self._parse_list(state, pos)
            return self._parse_literal_string_or_map(state, pos, expect_key)

        if c in quote_delims:
            return self._parse_quoted_string(state, pos, expect_key)

        for word, word_value in reserved_words.items():
            if line.startswith(word, pos):
                end_pos = pos + len(word)
                if (end_pos >= len_line or line[end_pos].isspace() or line[end_pos] == COMMENT_DELIM or
                        (line[end_pos] == ASSIGN_KEY_VAL and self._is_kv_separator(state, end_pos))):
                    return self._check_value_end(state, word_value, pos, end_pos, expect_key)

        if c == '+' and next_c in digits:
            value, end_pos = numeric.parse_number(line, pos + 1, 1, state.line_number,
                                                  state.float_overflow_to_inf, state.source_name)
            return self._check_value_end(state, value, pos, end_pos, expect_key)
        if c in digits:
            value, end_pos = numeric.parse_number(line, pos, 1, state.line_number,
                                                  state.float_overflow_to_inf, state.source_name)
            return self._check_value_end(state, value, pos, end_pos, expect_key)

        return self._parse_literal_string_or_map(state, pos, expect_key)


    def _parse_literal_string_or_map(self, state, pos, expect_key):
        '''
        Search the line for a key/value separator.  If there is one, the text
        before it is a map key.  Otherwise the block is a literal string.
        '''
        line = state.current_line
        colon_pos = line.find(ASSIGN_KEY_VAL, pos)
        while colon_pos >= 0:
            if self._is_kv_separator(state, colon_pos):
                key = line[pos:colon_pos].strip()
                if expect_key:
                    return (key, colon_pos + 1)
                return self._parse_map(state, key, pos, colon_pos + 1)
            colon_pos = line.find(ASSIGN_KEY_VAL, colon_pos + 1)
        if expect_key:
            raise state.error('Map key expected', pos)
        return conversions.parse_literal(state)


    def _parse_quoted_string(self, state, opening_pos, expect_key, len=len):
        '''
        Parse a single-line or multi-line quoted string.  Lines of a
        multi-line string must be indented beyond the opening quote.  They
        are dedented, empty lines are dropped, and the rest are joined with
        spaces.  The closing quote may also be placed at the column of the
        opening quote on the line after the string.
        '''
        quote = state.current_line[opening_pos]
        block_indent = opening_pos + 1
        line = state.current_line
        text, end_pos = escape.unescape_line(line, quote, block_indent, state.line_number,
                                             source_name=state.source_name)
        if end_pos < len(line):
            return self._check_value_end(state, text, opening_pos, end_pos + 1, expect_key)

        if expect_key:
            raise state.error('Map key expected and it cannot be a multi-line string', opening_pos)

        # (segment, lineno), with segments starting at `block_indent`
        segments = [(line[block_indent:], state.line_number)]
        closed = False
        saved_block_indent = state.block_indent
        state.block_indent = block_indent
        try:
            while state.read_block_line():
                line = state.current_line
                lineno = state.line_number
                if not line:
                    segments.append(('', lineno))
                    continue
                _, quote_pos = escape.unescape_line(line, quote, block_indent, lineno,
                                                    source_name=state.source_name)
                if quote_pos < len(line):
                    segments.append((line[block_indent:quote_pos], lineno))
                    end_pos = quote_pos + 1
                    closed = True
                    break
                segments.append((line[block_indent:], lineno))
        finally:
            state.block_indent = saved_block_indent

        if not closed:
            pending_line = state.cursor.pending_line
            if (pending_line is not None and len(pending_line) > opening_pos and
                    pending_line[opening_pos] == quote and
                    not pending_line[:opening_pos].strip(INDENT)):
                state.reread_pending_line()
                end_pos = opening_pos + 1
            else:
                raise state.error('String contains no closing quote', state.current_indent)

        segments = [(s, lineno) for s, lineno in segments if s.strip(INDENT)]
        indents = [len(s) - len(s.lstrip(INDENT)) for s, _ in segments]
        dedent = min(indents) if indents else 0
        decoded = []
        for segment, lineno in segments:
            segment_text, _ = escape.unescape_line(segment, quote, dedent, lineno,
                                                   colno_offset=block_indent,
                                                   source_name=state.source_name)
            decoded.append(segment_text)
        text = ' '.join(decoded)

        if not state.comment_or_end_of_line(end_pos):
            raise state.error('Bad character after quoted string', skip_spaces(state.current_line, end_pos))
        self._finish_value(state)
        return text


    def _parse_list(self, state, column, len=len):
        '''
        Parse a list whose first dash is at `column`.  All items must start
        at the same column.
        '''
        result = []
        while True:
            line = state.current_line
            if line[column] != OPEN_INDENTATION_LIST:
                raise state.error('Bad list item', column)
            next_pos = column + 1
            if next_pos < len(line) and not line[next_pos].isspace():
                raise state.error('Bad list item', column)
            if state.comment_or_end_of_line(next_pos):
                item = self._parse_nested_block_from_next_line(state, column, self._parse_value)
            else:
                item = self._parse_nested_block(state, column + 2, column, self._parse_value)
            result.append(item)

            if not self._read_next_line(state):
                break
            if state.current_indent != column:
                raise state.error('Bad indentation of list item', state.current_indent)
        return result


    def _parse_map(self, state, first_key, key_column, value_pos):
        '''
        Parse a map whose first key, starting at `key_column`, is already
        parsed.  The value of the first key begins at the first non-space code
        point from `value_pos` on, or in the indented block below.  All keys
        must start at the same column.  Duplicate keys overwrite.
        '''
        result = {}
        key = first_key
        while True:
            if state.comment_or_end_of_line(value_pos):
                value = self._parse_nested_block_from_next_line(state, key_column, self._parse_value)
            else:
                value = self._parse_nested_block(state, skip_spaces(state.current_line, value_pos),
                                                 key_column, self._parse_value)
            result[key] = value

            if not self._read_next_line(state):
                break
            if state.current_indent != key_column:
                raise state.error('Bad indentation of map key', state.current_indent)
            key, value_pos = self._parse_value(state, expect_key=True)
        return result
