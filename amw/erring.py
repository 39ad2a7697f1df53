# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

# pylint:  disable=C0301

import enum




class ErrorKind(enum.Enum):
    '''
    Closed set of failure kinds a parse can end with.
    '''
    PARSE_ERROR = 'parse_error'
    END_OF_INPUT = 'end_of_input'
    RESOURCE_EXHAUSTION = 'resource_exhaustion'




class AmwException(Exception):
    '''
    Base AMW exception.
    '''
    pass


class EndOfInput(AmwException):
    '''
    The data contained nothing but blank lines and comments.  This is a clean
    termination signal rather than an error in the data.
    '''
    kind = ErrorKind.END_OF_INPUT

    def __init__(self, source_name='<data>'):
        self.source_name = source_name
    def __str__(self):
        return 'No value in "{0}" (end of input)'.format(self.source_name)


class DecodingException(AmwException):
    '''
    Base decoding exception.
    '''
    kind = ErrorKind.PARSE_ERROR

    @staticmethod
    def fmt_msg_with_traceback(msg, source_name, lineno, colno):
        traceback = 'In "{0}" at line {1}:{2}:'.format(source_name, lineno, colno)
        return '\n  {0}\n    {1}'.format(traceback, msg)


class Bug(DecodingException):
    '''
    There is a bug in the program, as opposed to invalid user data.
    '''
    def __init__(self, msg, state=None):
        self.msg = msg
        self.state = state
    def __str__(self):
        if self.state is None:
            return self.msg
        return self.fmt_msg_with_traceback(self.msg, self.state.source_name,
                                           self.state.line_number, self.state.current_indent)


class SourceDecodeError(DecodingException):
    '''
    Error during decoding of binary source.
    '''
    def __init__(self, err_msg):
        self.err_msg = err_msg
    def __str__(self):
        return 'Could not decode binary source, or received an unsupported line source:\n  {0}'.format(self.err_msg)


class ParseError(DecodingException):
    '''
    General error during parsing.  `lineno` is 1-based, `colno` is 0-based.
    '''
    def __init__(self, msg, lineno, colno, source_name='<data>'):
        self.msg = msg
        self.lineno = lineno
        self.colno = colno
        self.source_name = source_name
    def __str__(self):
        return self.fmt_msg_with_traceback(self.msg, self.source_name, self.lineno, self.colno)


class ResourceExhaustedError(DecodingException):
    '''
    Memory or the interpreter's call stack ran out while building the value
    tree.  Carries no position.
    '''
    kind = ErrorKind.RESOURCE_EXHAUSTION

    def __init__(self, source_name='<data>', resource='memory'):
        self.source_name = source_name
        self.resource = resource
    def __str__(self):
        return 'Out of {0} while parsing "{1}"'.format(self.resource, self.source_name)
