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
Unit tests for the `trickle` package.
"""

from unittest import TestCase

import trickle


class TestConstants(TestCase):
    def test_version(self):
        self.assertIsInstance(trickle.__version__, str)
        parts = trickle.__version__.split('.')
        self.assertEqual(len(parts), 3)
        for part in parts:
            p = int(part)
            self.assertTrue(p >= 0)
            self.assertEqual(str(p), part)

    def test_IPv4_LOOPBACK(self):
        self.assertEqual(trickle.IPv4_LOOPBACK, ('127.0.0.1', 0))
        for name in ('IPv6_LOOPBACK', 'IPv6_ANY', 'IPv4_ANY', 'ADDRESS_CONSTANTS'):
            self.assertFalse(hasattr(trickle, name))
