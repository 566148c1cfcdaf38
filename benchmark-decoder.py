#!/usr/bin/python3

import timeit

setup = """
import io
from trickle.decoder import Decoder, read_request
from trickle.parser import Headers, parse_request_line, parse_header_line
from trickle.misc import format_request

headers = {
    'content-type': 'application/json',
    'accept': 'application/json',
    'content-length': '39',
    'user-agent': 'curl/8.4.0',
    'x-token': 'VVI5KPPRN5VOG9DITDLEOEIB',
    'extra': 'Super',
    'hello': 'World',
    'k': 'V',
}
body = b'{"type": "dark mode", "size": "medium"}'
request = format_request('POST', '/coffee', headers, body)
header_block = request.split(b'\\r\\n', 1)[1]
"""


def run_iter(statement, n):
    for i in range(10):
        t = timeit.Timer(statement, setup)
        yield t.timeit(n)


def run(statement, K=25):
    n = K * 1000
    # Choose fastest of 10 runs:
    elapsed = min(run_iter(statement, n))
    rate = int(n / elapsed)
    print('{:>11,}: {}'.format(rate, statement))
    return rate


print('-' * 80)

print('\nRequest line parsing:')
run("parse_request_line(b'GET / HTTP/1.1')")
run("parse_request_line(b'POST /foo/bar?stuff=junk HTTP/1.1')")

print('\nHeader parsing:')
run("parse_header_line(b'Content-Length: 123456')")
run('Headers().parse_block(header_block)')

print('\nDecoding:')
run('Decoder().feed(request)')
for size in (1, 8, 64, 4096):
    run('read_request(io.BytesIO(request), chunk_size={})'.format(size), K=5)

print('-' * 80)
