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
Incremental HTTP/1.1 request decoder.

The decoder is a four state machine::

    REQUEST_LINE --> HEADERS --> BODY --> DONE

It is driven by reads of a small, fixed size chunk, so a single read may end
in the middle of a line, or may contain the tail of the header block plus the
start of the body.  Whatever a transition does not consume (the remainder) is
carried over untouched as the accumulator of the next state.

For example, decoding from a binary file:

>>> from io import BytesIO
>>> src = BytesIO(b'GET /coffee HTTP/1.1\\r\\nHost: localhost\\r\\n\\r\\n')
>>> request = read_request(src)
>>> request.target
'/coffee'
>>> request.headers.get('HOST')
'localhost'

"""

import logging
from enum import IntEnum

from .errors import (
    ContentLengthMismatch,
    LineTooLong,
    IncompleteRequest,
    EmptyRequest,
    InvalidState,
    TransportError,
)
from .parser import (
    TYPE_ERROR,
    CRLF,
    Headers,
    parse_request_line,
    parse_content_length,
)
from .source import as_source


log = logging.getLogger()

DEFAULT_CHUNK_SIZE = 8
MAX_CHUNK_SIZE = 16777216  # 16 MiB
DEFAULT_MAX_LINE_SIZE = 8192  # 8 KiB
UNKNOWN_LENGTH = -1


class State(IntEnum):
    REQUEST_LINE = 0
    HEADERS = 1
    BODY = 2
    DONE = 3


class Request:
    __slots__ = ('line', 'headers', 'body', 'content_length')

    def __init__(self):
        self.line = None
        self.headers = Headers()
        self.body = bytearray()
        self.content_length = UNKNOWN_LENGTH

    def __repr__(self):
        return '{}({!r}, {!r}, <{} bytes>)'.format(
            self.__class__.__name__, self.line, self.headers, len(self.body)
        )

    def __str__(self):
        lines = [
            'Request line:',
            ' - Method: {}'.format(self.method),
            ' - Target: {}'.format(self.target),
            ' - Version: {}'.format(self.http_version),
            'Headers:',
        ]
        for (name, value) in self.headers.items():
            lines.append(' - {}: {}'.format(name, value))
        if self.body:
            lines.append('Body: {} bytes'.format(len(self.body)))
        return '\n'.join(lines)

    @property
    def method(self):
        if self.line is not None:
            return self.line.method

    @property
    def target(self):
        if self.line is not None:
            return self.line.target

    @property
    def http_version(self):
        if self.line is not None:
            return self.line.http_version


################################################################################
# Transitions:

def _step_request_line(request, data, eof):
    index = data.find(CRLF)
    if index < 0:
        return (State.REQUEST_LINE, 0)
    request.line = parse_request_line(data[:index])
    return (State.HEADERS, index + len(CRLF))


def _step_headers(request, data, eof):
    # An empty line right away needs no full-line check:
    if data[:len(CRLF)] == CRLF:
        request.headers.freeze()
        return (State.BODY, len(CRLF))
    if data.find(CRLF) < 0:
        return (State.HEADERS, 0)
    (consumed, done) = request.headers.parse_block(data)
    value = request.headers.get('content-length')
    if value is not None:
        request.content_length = parse_content_length(value)
    if done:
        return (State.BODY, consumed)
    return (State.HEADERS, consumed)


def _step_body(request, data, eof):
    declared = request.content_length
    if declared <= 0:
        return (State.DONE, 0)
    taken = data[:declared - len(request.body)]
    request.body.extend(taken)
    if len(request.body) == declared:
        return (State.DONE, len(taken))
    if eof:
        raise ContentLengthMismatch(declared, len(request.body), request)
    return (State.BODY, len(taken))


_TRANSITIONS = {
    State.REQUEST_LINE: _step_request_line,
    State.HEADERS: _step_headers,
    State.BODY: _step_body,
}


def step(state, request, data, eof=False):
    """
    Run a single transition of the decoder state machine.

    *data* is the current accumulator and *eof* is ``True`` when the byte
    source has reported the end of the stream.  Returns a
    ``(next_state, consumed)`` tuple, where *consumed* is the number of bytes
    at the front of *data* used by this transition.  ``(state, 0)`` means the
    transition needs more bytes before it can make progress.

    For example:

    >>> request = Request()
    >>> step(State.REQUEST_LINE, request, b'GET / HTTP/1.1\\r\\nHo')
    (<State.HEADERS: 1>, 16)
    >>> request.line
    RequestLine(method='GET', target='/', http_version='1.1')

    """
    handler = _TRANSITIONS.get(state)
    if handler is None:
        raise InvalidState(state)
    return handler(request, data, eof)


################################################################################
# Decoder:

def _validate_option(name, value, minimum, maximum):
    if type(value) is not int:
        raise TypeError(TYPE_ERROR.format(name, int, type(value), value))
    if not (minimum <= value <= maximum):
        raise ValueError(
            'need {} <= {} <= {}; got {}'.format(minimum, name, maximum, value)
        )
    return value


class Decoder:
    """
    Decode exactly one request from one byte source.

    Use `Decoder.decode()` to pull chunks from *source* until the request is
    complete, or push bytes yourself with `Decoder.feed()`.  A decoder is not
    safe to share between threads.
    """

    _allowed_options = ('chunk_size', 'max_line_size')

    def __init__(self, source=None, **options):
        if not set(options).issubset(self.__class__._allowed_options):
            cls = self.__class__
            unsupported = sorted(set(options) - set(cls._allowed_options))
            raise TypeError(
                'unsupported {} **options: {}'.format(
                    cls.__name__, ', '.join(unsupported)
                )
            )
        self.options = options
        self.chunk_size = _validate_option('chunk_size',
            options.get('chunk_size', DEFAULT_CHUNK_SIZE), 1, MAX_CHUNK_SIZE
        )
        self.max_line_size = _validate_option('max_line_size',
            options.get('max_line_size', DEFAULT_MAX_LINE_SIZE), 2, MAX_CHUNK_SIZE
        )
        self.source = (None if source is None else as_source(source))
        self.state = State.REQUEST_LINE
        self.request = Request()
        self._accumulator = bytearray()
        self._received = 0

    def __repr__(self):
        return '{}({!r}, chunk_size={})'.format(
            self.__class__.__name__, self.source, self.chunk_size
        )

    @property
    def done(self):
        return self.state is State.DONE

    @property
    def received(self):
        return self._received

    @property
    def unconsumed(self):
        """
        Bytes received after the end of the body, left undecoded.
        """
        return bytes(self._accumulator)

    def feed(self, data, eof=False):
        """
        Append *data* to the accumulator and advance as far as possible.

        Returns ``True`` once the request is complete.
        """
        if self.state is State.DONE:
            raise InvalidState(self.state)
        self._accumulator.extend(data)
        self._received += len(data)
        while self.state is not State.DONE:
            (state, consumed) = step(
                self.state, self.request, self._accumulator, eof
            )
            if state is self.state and consumed == 0:
                break
            remainder = self._accumulator[consumed:]
            if state is not self.state:
                log.debug('%s --> %s after %d bytes',
                    self.state.name, state.name, self._received
                )
            self.state = state
            self._accumulator = remainder
        if self.state is State.DONE:
            self.request.body = bytes(self.request.body)
            return True
        if self.state in (State.REQUEST_LINE, State.HEADERS):
            if eof:
                if self._received == 0:
                    raise EmptyRequest(self.state, 0)
                raise IncompleteRequest(self.state, self._received)
            if len(self._accumulator) > self.max_line_size:
                raise LineTooLong(len(self._accumulator), self.max_line_size)
        return False

    def _read(self, buf):
        try:
            (size, eof) = self.source.read(buf)
        except Exception as e:
            raise TransportError(e) from e
        if not (0 <= size <= len(buf)):
            raise TransportError(ValueError(
                'need 0 <= size <= {}; got {}'.format(len(buf), size)
            ))
        return (size, eof)

    def decode(self):
        """
        Read from the source until the request is complete, then return it.
        """
        if self.source is None:
            raise TypeError('Decoder.source is None; use Decoder.feed()')
        buf = bytearray(self.chunk_size)
        view = memoryview(buf)
        while self.state is not State.DONE:
            (size, eof) = self._read(buf)
            self.feed(view[:size], eof)
        return self.request


def read_request(source, **options):
    """
    Decode a single request from *source*.

    *source* can be a socket, a binary file, or any object honouring the byte
    source contract described in `trickle.source`.
    """
    return Decoder(as_source(source), **options).decode()
