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
Byte sources consumed by the decoder.

A byte source is any object with a ``read(buf)`` method that fills the
writable buffer *buf* and returns an ``(n, eof)`` tuple, where *n* is the
number of bytes placed at the front of *buf* and *eof* is ``True`` once the
stream has ended.  A read returning ``(0, False)`` means no progress was made
and the caller should simply try again.
"""


def _getcallable(objname, obj, name):
    attr = getattr(obj, name, None)
    if not callable(attr):
        raise TypeError('{}.{}() is not callable'.format(objname, name))
    return attr


class SocketSource:
    __slots__ = ('_recv_into',)

    def __init__(self, sock):
        self._recv_into = _getcallable('sock', sock, 'recv_into')

    def __repr__(self):
        return '{}(<sock>)'.format(self.__class__.__name__)

    def read(self, buf):
        received = self._recv_into(buf)
        return (received, received == 0)


class FileSource:
    __slots__ = ('_readinto',)

    def __init__(self, fp):
        self._readinto = _getcallable('fp', fp, 'readinto')

    def __repr__(self):
        return '{}(<fp>)'.format(self.__class__.__name__)

    def read(self, buf):
        received = self._readinto(buf)
        # Non-blocking files return None when no data is available yet:
        if received is None:
            return (0, False)
        return (received, received == 0)


def as_source(obj):
    """
    Wrap *obj* so that it honours the byte source contract.

    Sockets are wrapped with `SocketSource`, binary files with `FileSource`.
    Any other object with a callable ``read()`` is assumed to already honour
    the contract and is returned unchanged.
    """
    if callable(getattr(obj, 'recv_into', None)):
        return SocketSource(obj)
    if callable(getattr(obj, 'readinto', None)):
        return FileSource(obj)
    if callable(getattr(obj, 'read', None)):
        return obj
    raise TypeError('not a byte source: {!r}'.format(obj))
