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
Unit tests for the `trickle.parser` module.
"""

from unittest import TestCase

from .helpers import random_headers, random_case
from trickle import parser, errors
from trickle.parser import Headers, RequestLine


class TestFunctions(TestCase):
    def test_is_token(self):
        self.assertIs(parser.is_token('Host'), True)
        self.assertIs(parser.is_token('content-length'), True)
        self.assertIs(parser.is_token("!#$%&'*+-.^_`|~09AZaz"), True)
        self.assertIs(parser.is_token(b'X-Foo'), True)
        self.assertIs(parser.is_token(''), False)
        self.assertIs(parser.is_token('Content Length'), False)
        self.assertIs(parser.is_token(' host'), False)
        self.assertIs(parser.is_token('host:'), False)
        self.assertIs(parser.is_token('Hé'), False)
        for c in '"(),/:;<=>?@[\\]{}':
            self.assertIs(parser.is_token('X' + c), False, c)
        with self.assertRaises(TypeError) as cm:
            parser.is_token(17)
        self.assertEqual(str(cm.exception),
            parser.TYPE_ERROR.format('src', (bytes, str), int, 17)
        )

    def test_parse_request_line(self):
        self.assertEqual(
            parser.parse_request_line(b'GET / HTTP/1.1\r\n'),
            RequestLine('GET', '/', '1.1')
        )
        self.assertEqual(
            parser.parse_request_line('POST /coffee HTTP/1.1'),
            ('POST', '/coffee', '1.1')
        )
        line = parser.parse_request_line(bytearray(b'OPTIONS * HTTP/1.1'))
        self.assertEqual(line.method, 'OPTIONS')
        self.assertEqual(line.target, '*')
        self.assertEqual(line.http_version, '1.1')

        # Not exactly 3 parts:
        for bad in (b'/coffee HTTP/1.1\r\n', b'GET /  HTTP/1.1',
                b'GET / HTTP/1.1 extra', b'', b'GET', b' / HTTP/1.1',
                b'GET  HTTP/1.1'):
            with self.assertRaises(errors.MalformedRequestLine):
                parser.parse_request_line(bad)

        # Bad version token:
        for bad in (b'GET / HTTP1.1', b'GET / HTTP/1/1', b'GET / http/1.1',
                b'GET / FTP/1.1'):
            with self.assertRaises(errors.MalformedVersion):
                parser.parse_request_line(bad)

        # Unsupported version:
        for (bad, version) in [
                (b'GET / HTTP/2\r\n', '2'),
                (b'GET / HTTP/1.0', '1.0'),
                (b'GET / HTTP/', '')]:
            with self.assertRaises(errors.UnsupportedVersion) as cm:
                parser.parse_request_line(bad)
            self.assertEqual(cm.exception.version, version)
            self.assertEqual(str(cm.exception),
                'unsupported HTTP version: {!r}'.format(version)
            )

    def test_parse_header_line(self):
        self.assertEqual(
            parser.parse_header_line(b'Host: localhost:42069\r\n'),
            ('host', 'localhost:42069')
        )
        self.assertEqual(
            parser.parse_header_line('Content-Type:application/json'),
            ('content-type', 'application/json')
        )
        self.assertEqual(
            parser.parse_header_line(b'X-Empty:'),
            ('x-empty', '')
        )
        self.assertEqual(
            parser.parse_header_line(b'X-Pad: \t padded \t'),
            ('x-pad', 'padded')
        )
        self.assertEqual(
            parser.parse_header_line(b'X-Colons: a:b:c'),
            ('x-colons', 'a:b:c')
        )
        self.assertIs(Headers.parse_line, parser.parse_header_line)

        with self.assertRaises(errors.MalformedHeader) as cm:
            parser.parse_header_line(b'Host localhost\r\n')
        self.assertEqual(str(cm.exception),
            "bad header line: b'Host localhost'"
        )
        for bad in (b'Host : x\r\n', b'Host\t: x', b'Host   :x'):
            with self.assertRaises(errors.InvalidFieldSpacing):
                parser.parse_header_line(bad)

    def test_parse_content_length(self):
        self.assertEqual(parser.parse_content_length('0'), 0)
        self.assertEqual(parser.parse_content_length('13'), 13)
        self.assertEqual(parser.parse_content_length(b'39'), 39)
        self.assertEqual(
            parser.parse_content_length('9999999999999999'), 9999999999999999
        )
        for bad in ('', '-1', '+1', '1.5', '0x10', 'ten', ' 1', '1 ', '5, 5',
                '99999999999999999'):
            with self.assertRaises(errors.InvalidContentLength) as cm:
                parser.parse_content_length(bad)
            self.assertEqual(cm.exception.value, bad)


class TestHeaders(TestCase):
    def test_init(self):
        headers = Headers()
        self.assertEqual(len(headers), 0)
        self.assertEqual(headers, {})
        self.assertIs(headers.frozen, False)
        headers = Headers({'Host': 'localhost', 'Accept': '*/*'})
        self.assertEqual(headers, {'host': 'localhost', 'accept': '*/*'})
        self.assertEqual(Headers(headers), headers)
        self.assertEqual(repr(Headers({'A': 'b'})), "Headers({'a': 'b'})")

    def test_set_and_get(self):
        headers = Headers()
        self.assertIsNone(headers.set('Content-Type', 'text/plain'))
        self.assertEqual(headers.get('content-type'), 'text/plain')
        self.assertEqual(headers.get('CONTENT-TYPE'), 'text/plain')
        self.assertEqual(headers['Content-type'], 'text/plain')
        self.assertIn('cOnTeNt-TyPe', headers)
        self.assertNotIn('host', headers)
        self.assertNotIn(17, headers)
        self.assertIsNone(headers.get('host'))
        self.assertEqual(headers.get('host', 'nope'), 'nope')
        with self.assertRaises(KeyError):
            headers['host']
        self.assertEqual(list(headers), ['content-type'])

        with self.assertRaises(TypeError) as cm:
            headers.set('content-length', 17)
        self.assertEqual(str(cm.exception),
            parser.TYPE_ERROR.format('value', str, int, 17)
        )
        with self.assertRaises(TypeError) as cm:
            headers.set(b'host', 'x')
        self.assertEqual(str(cm.exception),
            parser.TYPE_ERROR.format('name', str, bytes, b'host')
        )

        # Names must be tokens, whichever way they come in:
        for bad in ('Bad Name', 'a:b', '', ' host', 'hé'):
            with self.assertRaises(errors.InvalidToken) as cm:
                headers.set(bad, 'x')
            self.assertEqual(cm.exception.name, bad)
        self.assertEqual(list(headers), ['content-type'])
        with self.assertRaises(errors.InvalidToken):
            Headers({'Bad Name': 'x'})

    def test_set_folds_values(self):
        headers = Headers()
        headers.set('X', 'a')
        headers.set('X', 'b')
        self.assertEqual(headers.get('x'), 'a, b')
        headers.set('x', 'c')
        self.assertEqual(headers.get('X'), 'a, b, c')
        self.assertEqual(len(headers), 1)

    def test_case_insensitive_round_trip(self):
        expected = random_headers(25)
        headers = Headers()
        for (name, value) in expected.items():
            headers.set(name, value)
        self.assertEqual(len(headers), 25)
        for (name, value) in expected.items():
            self.assertEqual(headers.get(name), value)
            self.assertEqual(headers.get(name.lower()), value)
            self.assertEqual(headers.get(name.upper()), value)
            self.assertEqual(headers.get(random_case(name)), value)

    def test_parse_block(self):
        headers = Headers()
        data = b'Host: localhost:42069\r\nUser-Agent: curl/7.81.0\r\nAcc'
        self.assertEqual(headers.parse_block(data), (48, False))
        self.assertEqual(headers, {
            'host': 'localhost:42069',
            'user-agent': 'curl/7.81.0',
        })
        self.assertIs(headers.frozen, False)

        # Trailing fragment is left alone until its CRLF arrives:
        self.assertEqual(headers.parse_block(b'Acc'), (0, False))
        self.assertEqual(headers.parse_block(b'Accept: */*\r'), (0, False))
        self.assertEqual(
            headers.parse_block(b'Accept: */*\r\n\r\nbody'), (15, True)
        )
        self.assertEqual(headers.get('accept'), '*/*')
        self.assertIs(headers.frozen, True)
        with self.assertRaises(ValueError) as cm:
            headers.set('late', 'value')
        self.assertEqual(str(cm.exception),
            "Headers.frozen, cannot set 'late'"
        )

    def test_parse_block_terminator(self):
        headers = Headers()
        self.assertEqual(headers.parse_block(b'\r\n'), (2, True))
        self.assertEqual(headers, {})
        self.assertIs(headers.frozen, True)

        headers = Headers()
        self.assertEqual(headers.parse_block(b''), (0, False))
        self.assertEqual(headers.parse_block(b'\r'), (0, False))
        self.assertIs(headers.frozen, False)

        headers = Headers()
        self.assertEqual(headers.parse_block(bytearray(b'A: 1\r\nA: 2\r\n\r\n')),
            (14, True)
        )
        self.assertEqual(headers, {'a': '1, 2'})

    def test_parse_block_errors(self):
        with self.assertRaises(errors.MalformedHeader):
            Headers().parse_block(b'Host localhost\r\n\r\n')
        with self.assertRaises(errors.InvalidFieldSpacing):
            Headers().parse_block(b'Host : x\r\n\r\n')
        with self.assertRaises(errors.InvalidToken) as cm:
            Headers().parse_block(b'H@st: x\r\n\r\n')
        self.assertEqual(cm.exception.name, 'h@st')
        with self.assertRaises(errors.InvalidToken) as cm:
            Headers().parse_block(b': x\r\n')
        self.assertEqual(cm.exception.name, '')
        with self.assertRaises(errors.InvalidToken) as cm:
            Headers().parse_block(b' Host: x\r\n')
        self.assertEqual(cm.exception.name, ' host')
