# -*- coding: utf-8 -*-
#
# Copyright (c) 2016, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import collections


class keydefaultdict(collections.defaultdict):
    '''
    Default dict that passes missing keys to the factory function, rather than
    calling the factory function with no arguments.
    '''
    def __missing__(self, k):
        if self.default_factory is None:
            raise KeyError(k)
        else:
            self[k] = self.default_factory(k)
            return self[k]


def leading_spaces(line, len=len):
    return len(line) - len(line.lstrip('\x20'))


def common_indent(lines):
    '''
    Minimum count of leading spaces over all non-empty lines.  Empty lines
    do not take part, so a block with a blank line in the middle still
    dedents.
    '''
    indents = [leading_spaces(line) for line in lines if line]
    if not indents:
        return 0
    return min(indents)


def dedent_lines(lines):
    '''
    Remove the common leading spaces from every line, preserving relative
    indentation.
    '''
    n = common_indent(lines)
    if n == 0:
        return list(lines)
    return [line[n:] for line in lines]
