#!/usr/bin/env python3

# trickle: an incremental HTTP/1.1 request decoder
# Copyright (C) 2026 The trickle authors
#
# This file is part of `trickle`.
#
# `trickle` is free software: you can redistribute it and/or modify it under
# the terms of the GNU Lesser General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# `trickle` is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE.  See the GNU Lesser General Public License for more
# details.
#
# You should have received a copy of the GNU Lesser General Public License along
# with `trickle`.  If not, see <http://www.gnu.org/licenses/>.

"""
Install `trickle`.
"""

import sys
if sys.version_info < (3, 6):
    sys.exit('ERROR: trickle requires Python 3.6 or newer')

import os
from os import path
import subprocess

from setuptools import setup, Command


TREE = path.dirname(path.abspath(__file__))


def run_under_same_interpreter(script, args):
    print('\n** running: {}...'.format(script), file=sys.stderr)
    assert isinstance(script, str)
    assert path.abspath(script) == script
    assert isinstance(args, list)
    if not os.access(script, os.R_OK | os.X_OK):
        print('WARNING: cannot read and execute: {!r}'.format(script),
            file=sys.stderr
        )
        return
    cmd = [sys.executable, script] + args
    print('check_call:', cmd, file=sys.stderr)
    subprocess.check_call(cmd)
    print('** PASSED: {}\n'.format(script), file=sys.stderr)


def run_pyflakes3():
    script = '/usr/bin/pyflakes3'
    names = [
        'trickle',
        'setup.py',
        'benchmark-decoder.py',
        'run-echo-app.py',
    ]
    args = [path.join(TREE, name) for name in names]
    run_under_same_interpreter(script, args)


class Test(Command):
    description = 'run unit tests and doc tests'

    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        from trickle.tests.run import run_tests
        if not run_tests():
            raise SystemExit('2')
        run_pyflakes3()


setup(
    name='trickle',
    description='an incremental HTTP/1.1 request decoder',
    version='0.1.0',
    license='LGPLv3+',
    python_requires='>=3.6',
    packages=[
        'trickle',
        'trickle.tests',
    ],
    install_requires=[
        'dbase32',
    ],
    scripts=[
        'run-echo-app.py',
    ],
    cmdclass={
        'test': Test,
    },
)
