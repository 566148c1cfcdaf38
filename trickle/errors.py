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
Errors raised while decoding a request.

Every `DecodeError` is terminal for the request being decoded.  Only
`ContentLengthMismatch` carries the (partially filled) request along with it.
"""


class DecodeError(Exception):
    def __init__(self, reason):
        self.reason = reason
        super().__init__(reason)


class MalformedRequestLine(DecodeError):
    pass


class MalformedVersion(DecodeError):
    pass


class UnsupportedVersion(DecodeError):
    def __init__(self, version):
        self.version = version
        super().__init__(
            'unsupported HTTP version: {!r}'.format(version)
        )


class MalformedHeader(DecodeError):
    pass


class InvalidFieldSpacing(DecodeError):
    pass


class InvalidToken(DecodeError):
    def __init__(self, name):
        self.name = name
        super().__init__('field name is not a valid token: {!r}'.format(name))


class InvalidContentLength(DecodeError):
    def __init__(self, value):
        self.value = value
        super().__init__('bad content-length: {!r}'.format(value))


class ContentLengthMismatch(DecodeError):
    def __init__(self, declared, actual, request=None):
        self.declared = declared
        self.actual = actual
        self.request = request
        super().__init__(
            'content-length mismatch: declared {}, received {}'.format(
                declared, actual
            )
        )


class LineTooLong(DecodeError):
    def __init__(self, size, max_size):
        self.size = size
        self.max_size = max_size
        super().__init__(
            'line exceeds {} bytes without CRLF; got {}'.format(max_size, size)
        )


class IncompleteRequest(DecodeError):
    def __init__(self, state, received):
        self.state = state
        self.received = received
        super().__init__(
            'stream ended in {} after {} bytes'.format(state.name, received)
        )


class EmptyRequest(IncompleteRequest):
    pass


class InvalidState(DecodeError):
    def __init__(self, state):
        self.state = state
        super().__init__('invalid decoder state: {!r}'.format(state))


class TransportError(DecodeError):
    def __init__(self, cause):
        self.cause = cause
        super().__init__('failed to read chunk: {!r}'.format(cause))
