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
Some tools for unit testing and demos.
"""

import json
from hashlib import sha1

from .response import OK


def echo_app(session, request):
    obj = {
        'session': {
            'client': repr(session['client']),
            'requests': session['requests'],
        },
        'request': {
            'method': request.method,
            'target': request.target,
            'http_version': request.http_version,
            'headers': dict(request.headers.items()),
            'content_length': request.content_length,
        },
        'body': {
            'length': len(request.body),
            'sha1': sha1(request.body).hexdigest(),
        },
    }
    body = json.dumps(obj, sort_keys=True, indent=4).encode()
    headers = {
        'content-type': 'application/json',
        'content-length': str(len(body)),
        'connection': 'close',
    }
    if request.method == 'HEAD':
        return (OK, 'OK', headers, None)
    return (OK, 'OK', headers, body)


def format_request(method, target, headers=None, body=b''):
    """
    Build the bytes of a request, handy for feeding a decoder.

    For example:

    >>> format_request('GET', '/', {'host': 'localhost'})
    b'GET / HTTP/1.1\\r\\nhost: localhost\\r\\n\\r\\n'

    """
    lines = ['{} {} HTTP/1.1\r\n'.format(method, target)]
    if headers:
        lines.extend(
            '{}: {}\r\n'.format(*item) for item in headers.items()
        )
    lines.append('\r\n')
    return ''.join(lines).encode('latin_1') + body
