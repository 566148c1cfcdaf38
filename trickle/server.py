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
HTTP server.

Each connection carries exactly one request: it is decoded, handed to the
application, answered, and the connection is closed.
"""

import socket
import logging
import threading
import os

from dbase32 import random_id

from .errors import DecodeError, EmptyRequest
from .parser import TYPE_ERROR
from .decoder import Decoder
from .source import SocketSource
from .response import (
    BAD_REQUEST,
    INTERNAL_SERVER_ERROR,
    REASONS,
    default_headers,
    write_response,
)


log = logging.getLogger()


def _write_error(sock, status):
    reason = REASONS[status]
    body = reason.encode()
    write_response(sock, status, reason, default_headers(len(body)), body)


def _handle_request(app, sock, session, decoder_options):
    decoder = Decoder(SocketSource(sock), **decoder_options)
    try:
        request = decoder.decode()
    except EmptyRequest:
        log.info('%s: closed without sending a request', session['id'])
        return
    except DecodeError as e:
        log.warning('%s: bad request from %r: %s',
            session['id'], session['client'], e
        )
        _write_error(sock, BAD_REQUEST)
        return
    session['requests'] += 1
    log.debug('%s: %s', session['id'], request.line)
    try:
        (status, reason, headers, body) = app(session, request)
    except Exception:
        log.exception('%s: app failed for %r', session['id'], request)
        _write_error(sock, INTERNAL_SERVER_ERROR)
        return
    write_response(sock, status, reason, headers, body)


class Server:
    _allowed_options = (
        'max_connections', 'timeout', 'chunk_size', 'max_line_size'
    )

    def __init__(self, address, app, **options):
        # address:
        if isinstance(address, tuple):
            if len(address) == 4:
                family = socket.AF_INET6
            elif len(address) == 2:
                family = socket.AF_INET
            else:
                raise ValueError(
                    'address: must have 2 or 4 items; got {!r}'.format(address)
                )
        elif isinstance(address, str):
            if os.path.abspath(address) != address:
                raise ValueError(
                    'address: bad socket filename: {!r}'.format(address)
                )
            family = socket.AF_UNIX
        elif isinstance(address, bytes):
            family = socket.AF_UNIX
        else:
            raise TypeError(
                TYPE_ERROR.format('address', (tuple, str, bytes), type(address), address)
            )

        # app:
        if not callable(app):
            raise TypeError('app: not callable: {!r}'.format(app))
        self.app = app

        # options:
        if not set(options).issubset(self.__class__._allowed_options):
            cls = self.__class__
            unsupported = sorted(set(options) - set(cls._allowed_options))
            raise TypeError(
                'unsupported {} **options: {}'.format(
                    cls.__name__, ', '.join(unsupported)
                )
            )
        self.options = options
        self.max_connections = options.get('max_connections', 25)
        self.timeout = options.get('timeout', 30)
        assert isinstance(self.max_connections, int) and self.max_connections > 0
        assert isinstance(self.timeout, (int, float)) and self.timeout > 0
        self.decoder_options = dict(
            (key, options[key]) for key in Decoder._allowed_options
            if key in options
        )
        # Fail early on bad decoder options rather than on the first request:
        Decoder(**self.decoder_options)

        # Listen...
        self._closed = threading.Event()
        self.sock = socket.socket(family, socket.SOCK_STREAM)
        self.sock.bind(address)
        self.address = self.sock.getsockname()
        self.sock.listen(5)

    def __repr__(self):
        return '{}({!r}, {!r})'.format(
            self.__class__.__name__, self.address, self.app
        )

    @property
    def closed(self):
        return self._closed.is_set()

    def close(self):
        self._closed.set()
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.sock.close()

    def serve_forever(self):
        semaphore = threading.BoundedSemaphore(self.max_connections)
        timeout = self.timeout
        listensock = self.sock
        worker = self._worker
        log.info('Listening on %r', self.address)
        while not self._closed.is_set():
            try:
                (sock, address) = listensock.accept()
            except OSError:
                if self._closed.is_set():
                    break
                raise
            if semaphore.acquire(timeout=2) is True:
                sock.settimeout(timeout)
                thread = threading.Thread(
                    target=worker,
                    args=(semaphore, sock, address),
                    daemon=True
                )
                thread.start()
            else:
                log.warning('Rejecting connection from %r', address)
                try:
                    sock.shutdown(socket.SHUT_RDWR)
                except OSError:
                    pass
                sock.close()

    def _worker(self, semaphore, sock, address):
        session = {'id': random_id(), 'client': address, 'requests': 0}
        log.info('%s: connection from %r', session['id'], address)
        try:
            _handle_request(self.app, sock, session, self.decoder_options)
        except OSError as e:
            log.info('%s: handled %d requests from %r: %r',
                session['id'], session['requests'], address, e
            )
        except Exception:
            log.exception('%s: client %r', session['id'], address)
        finally:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
            semaphore.release()
