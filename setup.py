# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import sys
import os


if sys.version_info < (3, 7):
    sys.exit('amw requires Python 3.7+')

from setuptools import setup


# Extract the version from version.py
fname = os.path.join(os.path.dirname(__file__), 'amw', 'version.py')
with open(fname, 'r', encoding='utf8') as f:
    t = ''.join([line for line in f.readlines() if line.startswith('__version__')])
    if not t:
        raise RuntimeError('Failed to extract version from "version.py"')
    c = compile(t, 'amw/version.py', 'exec')
    exec(c)
version = __version__


setup(name = 'amw',
      version = version,
      py_modules = [],
      packages = ['amw'],
      description = 'Parser for AMW, an indentation-based markup language',
      author = 'Geoffrey M. Poore',
      author_email = 'gpoore@gmail.com',
      license = 'BSD',
      keywords = ['configuration', 'serialization', 'markup'],
      python_requires = '>=3.7',
      extras_require = {'test': ['pytest']},
      # https://pypi.python.org/pypi?:action=list_classifiers
      classifiers = [
          'Development Status :: 3 - Alpha',
          'Intended Audience :: Developers',
          'License :: OSI Approved :: BSD License',
          'Operating System :: OS Independent',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          'Topic :: Utilities',
      ]
)
