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
Request-line and header parsing shared by the decoder and the server.
"""

from collections import namedtuple

from .errors import (
    MalformedRequestLine,
    MalformedVersion,
    UnsupportedVersion,
    MalformedHeader,
    InvalidFieldSpacing,
    InvalidToken,
    InvalidContentLength,
)


TYPE_ERROR = '{}: need a {!r}; got a {!r}: {!r}'

CRLF = b'\r\n'
SUPPORTED_VERSION = '1.1'
MAX_CONTENT_LENGTH_DIGITS = 16

################    BEGIN GENERATED TABLES    ##################################
_DIGIT = b'0123456789'
_ALPHA = b'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz'
_TCHAR = b"!#$%&'*+-.^_`|~"

TOKEN = frozenset(_DIGIT + _ALPHA + _TCHAR)
DECIMAL = frozenset(_DIGIT)
WHITESPACE = b' \t'
################    END GENERATED TABLES      ##################################


RequestLine = namedtuple('RequestLine', 'method target http_version')


def _as_bytes(src):
    if isinstance(src, str):
        return src.encode('latin_1')
    if isinstance(src, (bytes, bytearray, memoryview)):
        return bytes(src)
    raise TypeError(
        TYPE_ERROR.format('src', (bytes, str), type(src), src)
    )


def _strip_crlf(src):
    if src[-2:] == CRLF:
        return src[:-2]
    return src


def is_token(name):
    """
    Return ``True`` if *name* is a valid HTTP field-name token.

    >>> is_token('Content-Length')
    True
    >>> is_token('Content Length')
    False

    """
    src = _as_bytes(name)
    return len(src) > 0 and TOKEN.issuperset(src)


################################################################################
# Request line:

def parse_request_line(line):
    """
    Parse a request line into a `RequestLine`.

    A trailing CRLF, if present, is ignored:

    >>> parse_request_line(b'GET /coffee HTTP/1.1\\r\\n')
    RequestLine(method='GET', target='/coffee', http_version='1.1')

    """
    src = _strip_crlf(_as_bytes(line))
    parts = src.split(b' ')
    if len(parts) != 3 or not all(parts):
        raise MalformedRequestLine('bad request line: {!r}'.format(src))
    (method, target, protocol) = parts
    version = protocol.split(b'/')
    if len(version) != 2 or version[0] != b'HTTP':
        raise MalformedVersion('bad HTTP version: {!r}'.format(protocol))
    http_version = version[1].decode('latin_1')
    if http_version != SUPPORTED_VERSION:
        raise UnsupportedVersion(http_version)
    return RequestLine(
        method.decode('latin_1'), target.decode('latin_1'), http_version
    )


################################################################################
# Headers:

def parse_header_line(line):
    """
    Split a header line into a ``(name, value)`` tuple.

    The name is lower-cased and the value stripped of surrounding whitespace:

    >>> parse_header_line(b'Content-Type:  application/json ')
    ('content-type', 'application/json')

    """
    src = _strip_crlf(_as_bytes(line))
    parts = src.split(b':', 1)
    if len(parts) != 2:
        raise MalformedHeader('bad header line: {!r}'.format(src))
    (name, value) = parts
    if name[-1:] and name[-1:] in WHITESPACE:
        raise InvalidFieldSpacing(
            'whitespace between field name and colon: {!r}'.format(src)
        )
    return (
        name.decode('latin_1').lower(),
        value.strip(WHITESPACE).decode('latin_1'),
    )


def parse_content_length(value):
    src = _as_bytes(value)
    if not (1 <= len(src) <= MAX_CONTENT_LENGTH_DIGITS):
        raise InvalidContentLength(value)
    if not DECIMAL.issuperset(src):
        raise InvalidContentLength(value)
    return int(src)


class Headers:
    """
    Case-insensitive header set, filled one CRLF-terminated line at a time.

    Setting a name that is already present appends the new value after a
    comma:

    >>> headers = Headers()
    >>> headers.set('Accept', 'text/html')
    >>> headers.set('ACCEPT', 'application/json')
    >>> headers.get('accept')
    'text/html, application/json'

    Once `Headers.parse_block()` sees the empty terminator line the set is
    frozen and further calls to `Headers.set()` raise a ``ValueError``.
    """

    __slots__ = ('_map', '_frozen')

    parse_line = staticmethod(parse_header_line)

    def __init__(self, items=None):
        self._map = {}
        self._frozen = False
        if items is not None:
            for (name, value) in dict(items).items():
                self.set(name, value)

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._map)

    @property
    def frozen(self):
        return self._frozen

    def freeze(self):
        self._frozen = True

    def __len__(self):
        return len(self._map)

    def __iter__(self):
        return iter(self._map)

    def __contains__(self, name):
        return isinstance(name, str) and name.lower() in self._map

    def __getitem__(self, name):
        return self._map[name.lower()]

    def __eq__(self, other):
        if isinstance(other, Headers):
            return self._map == other._map
        if isinstance(other, dict):
            return self._map == other
        return NotImplemented

    def get(self, name, default=None):
        return self._map.get(name.lower(), default)

    def keys(self):
        return self._map.keys()

    def values(self):
        return self._map.values()

    def items(self):
        return self._map.items()

    def set(self, name, value):
        if type(name) is not str:
            raise TypeError(TYPE_ERROR.format('name', str, type(name), name))
        if type(value) is not str:
            raise TypeError(TYPE_ERROR.format('value', str, type(value), value))
        if not is_token(name):
            raise InvalidToken(name)
        if self._frozen:
            raise ValueError(
                'Headers.frozen, cannot set {!r}'.format(name)
            )
        key = name.lower()
        existing = self._map.get(key)
        if existing is None:
            self._map[key] = value
        else:
            self._map[key] = existing + ', ' + value

    def parse_block(self, data):
        """
        Consume complete header lines from the front of *data*.

        Returns a ``(consumed, done)`` tuple.  *consumed* is the number of
        bytes fully parsed; an undelimited trailing fragment is never
        consumed.  *done* is ``True`` once the empty terminator line has been
        consumed.
        """
        consumed = 0
        while True:
            index = data.find(CRLF, consumed)
            if index < 0:
                return (consumed, False)
            if index == consumed:
                self._frozen = True
                return (consumed + len(CRLF), True)
            (name, value) = parse_header_line(data[consumed:index])
            # Leading whitespace stays in the name, so ' Host' fails the
            # token check in set() rather than being taken as 'host'.
            self.set(name, value)
            consumed = index + len(CRLF)
