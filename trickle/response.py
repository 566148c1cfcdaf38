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
Write HTTP/1.1 responses.
"""

from .parser import TYPE_ERROR, Headers


OK = 200
BAD_REQUEST = 400
INTERNAL_SERVER_ERROR = 500

REASONS = {
    OK: 'OK',
    BAD_REQUEST: 'Bad Request',
    INTERNAL_SERVER_ERROR: 'Internal Server Error',
}


def format_status_line(status, reason=None):
    """
    Format the status line, without its CRLF.

    >>> format_status_line(400)
    'HTTP/1.1 400 Bad Request'
    >>> format_status_line(418)
    'HTTP/1.1 418'

    """
    if type(status) is not int:
        raise TypeError(TYPE_ERROR.format('status', int, type(status), status))
    if not (100 <= status <= 599):
        raise ValueError('need 100 <= status <= 599; got {}'.format(status))
    if reason is None:
        reason = REASONS.get(status)
    if reason is None:
        return 'HTTP/1.1 {}'.format(status)
    return 'HTTP/1.1 {} {}'.format(status, reason)


def default_headers(content_length):
    headers = Headers()
    headers.set('Content-Length', str(content_length))
    headers.set('connection', 'close')
    headers.set('content-type', 'text/plain')
    return headers


def format_headers(headers):
    if not isinstance(headers, Headers):
        headers = Headers(headers)
    lines = []
    for (name, value) in headers.items():
        lines.append('{}: {}\r\n'.format(name, value))
    lines.sort()
    return ''.join(lines)


def format_response(status, reason, headers):
    return ''.join([
        format_status_line(status, reason),
        '\r\n',
        format_headers(headers),
        '\r\n',
    ]).encode('latin_1')


def write_response(wfile, status, reason, headers, body=None):
    """
    Write a complete response to *wfile*, a socket or binary file.

    When *body* is given, a ``content-length`` header is added if *headers*
    doesn't already have one.  Returns the number of bytes written.
    """
    if body is not None:
        if not isinstance(body, (bytes, bytearray)):
            raise TypeError(TYPE_ERROR.format('body', bytes, type(body), body))
        if 'content-length' not in headers:
            headers = Headers(headers)
            headers.set('content-length', str(len(body)))
    data = format_response(status, reason, headers)
    if body:
        data += body
    sendall = getattr(wfile, 'sendall', None)
    if callable(sendall):
        sendall(data)
    else:
        wfile.write(data)
        wfile.flush()
    return len(data)
