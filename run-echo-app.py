#!/usr/bin/python3

"""
Serve `trickle.misc.echo_app` until interrupted.

For example::

    ./run-echo-app.py --port 42069 --chunk-size 3 &
    curl -d 'hello world!' http://127.0.0.1:42069/coffee

"""

import argparse
import logging

from trickle.server import Server
from trickle.misc import echo_app
from trickle.decoder import DEFAULT_CHUNK_SIZE


parser = argparse.ArgumentParser()
parser.add_argument('--address', default='127.0.0.1',
    help='IPv4 address to bind to',
)
parser.add_argument('--port', type=int, default=42069,
    help='TCP port to listen on',
)
parser.add_argument('--chunk-size', type=int, default=DEFAULT_CHUNK_SIZE,
    help='bytes requested per read while decoding',
)
parser.add_argument('--timeout', type=float, default=30,
    help='per-connection socket timeout in seconds',
)
parser.add_argument('--debug', action='store_true', default=False,
    help='log decoder state transitions',
)
args = parser.parse_args()

logging.basicConfig(
    level=(logging.DEBUG if args.debug else logging.INFO),
    format='\t'.join([
        '%(levelname)s',
        '%(threadName)s',
        '%(message)s',
    ]),
)

httpd = Server((args.address, args.port), echo_app,
    chunk_size=args.chunk_size,
    timeout=args.timeout,
)
try:
    httpd.serve_forever()
except KeyboardInterrupt:
    httpd.close()
