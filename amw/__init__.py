# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


from .version import __version__, __version_info__


from .loading import load, loads, parse, parse_json
from .dumping import dump, dumps
from .conversions import ConversionRegistry
from .decoding import AmwDecoder
from .encoding import AmwEncoder
from .erring import ErrorKind, EndOfInput, ParseError, ResourceExhaustedError
