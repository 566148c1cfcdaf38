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
Unit test helpers.
"""

import os
from random import SystemRandom

from dbase32 import random_id


random = SystemRandom()


def random_data():
    """
    Return random bytes between 1 and 34969 (inclusive) bytes long.

    In unit tests, this is used to simulate a random request body.
    """
    size = random.randint(1, 34969)
    return os.urandom(size)


def random_headers(count):
    """
    Return a dict of *count* random headers with distinct names.

    Dbase32 IDs only use letters and digits, so the names are valid tokens.
    """
    return dict(
        ('X-' + random_id(), random_id()) for i in range(count)
    )


def random_case(name):
    return ''.join(
        (c.upper() if random.randint(0, 1) else c.lower()) for c in name
    )


class ChunkSource:
    """
    Byte source that hands out at most *size* bytes per read.
    """

    def __init__(self, data, size):
        assert isinstance(data, bytes)
        assert size > 0
        self.data = data
        self.size = size
        self.pos = 0
        self.reads = 0

    def read(self, buf):
        self.reads += 1
        chunk = self.data[self.pos:self.pos + min(self.size, len(buf))]
        buf[0:len(chunk)] = chunk
        self.pos += len(chunk)
        return (len(chunk), self.pos >= len(self.data))


class ScriptedSource:
    """
    Byte source that replays a list of scripted reads.

    Each item is either a ``bytes`` chunk or an exception instance to raise.
    The stream ends after the last item.
    """

    def __init__(self, items):
        self.items = list(items)
        self.reads = 0

    def read(self, buf):
        self.reads += 1
        if not self.items:
            return (0, True)
        item = self.items.pop(0)
        if isinstance(item, Exception):
            raise item
        assert len(item) <= len(buf)
        buf[0:len(item)] = item
        return (len(item), False)


class DummySocket:
    def __init__(self, data=b''):
        self._calls = []
        self._data = data
        self._sent = []

    def recv_into(self, buf):
        self._calls.append(('recv_into', len(buf)))
        size = min(len(buf), len(self._data))
        buf[0:size] = self._data[:size]
        self._data = self._data[size:]
        return size

    def sendall(self, data):
        self._calls.append(('sendall', len(data)))
        self._sent.append(bytes(data))

    def shutdown(self, how):
        self._calls.append(('shutdown', how))

    def close(self):
        self._calls.append('close')
