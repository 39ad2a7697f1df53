# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#



from .decoding import AmwDecoder


_DEFAULT_DECODER = AmwDecoder()


def _get_decoder(cls, kwargs):
    if cls is None:
        if not kwargs:
            return _DEFAULT_DECODER
        cls = AmwDecoder
    return cls(**kwargs)


def load(fp, cls=None, **kwargs):
    '''
    Load data from a file-like object.  The file is read one line at a time.
    '''
    source_name = getattr(fp, 'name', None)
    if not isinstance(source_name, str):
        source_name = None
    return _get_decoder(cls, kwargs).decode(fp, source_name)


def loads(s, cls=None, **kwargs):
    '''
    Load data from a Unicode or byte string.
    '''
    return _get_decoder(cls, kwargs).decode(s)


def parse(markup, **kwargs):
    '''
    Parse AMW markup from a string, byte string, stream, or iterable of lines.
    '''
    return _get_decoder(None, kwargs).decode(markup)


def parse_json(markup, **kwargs):
    '''
    Parse a whole source as JSON.
    '''
    return _get_decoder(None, kwargs).decode_json(markup)
