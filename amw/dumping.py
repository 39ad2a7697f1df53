# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#



from .encoding import AmwEncoder


_DEFAULT_ENCODER = AmwEncoder()


def _get_encoder(cls, kwargs):
    if cls is None:
        if not kwargs:
            return _DEFAULT_ENCODER
        cls = AmwEncoder
    return cls(**kwargs)


def dump(obj, fp, cls=None, **kwargs):
    '''
    Write the AMW representation of `obj` to a file-like object.
    '''
    fp.write(_get_encoder(cls, kwargs).encode(obj))


def dumps(obj, cls=None, **kwargs):
    '''
    Return the AMW representation of `obj` as a Unicode string.
    '''
    return _get_encoder(cls, kwargs).encode(obj)
