import pytest

from m2handler.errors import FormatError
from m2handler.protocol import netstring


def test_span():

    buffer = b'xx 3:abc,0:,'

    start, end = netstring.span(buffer, 3)
    assert buffer[start:end] == b'abc'
    assert buffer[end:end + 1] == b','

    start, end = netstring.span(buffer, end + 1)
    assert start == end
    assert end == len(buffer) - 1


def test_span_errors():

    for buffer in (b'', b'3abc,', b'x:abc,', b':abc,', b'-1:abc,', b'3:ab', b'3:abc', b'3:abc;',
                   b'9' * 5000 + b':abc,', b'12:abc,'):
        with pytest.raises(FormatError):
            netstring.span(buffer, 0)


def test_encode():

    assert netstring.encode(b'abc') == b'3:abc,'
    assert netstring.encode(b'') == b'0:,'
    assert netstring.encode('hello') == b'5:hello,'
    assert netstring.encode(bytearray(b'\x00,:')) == b'3:\x00,:,'


def test_encode_then_span():

    data = bytes(range(256))
    encoded = netstring.encode(data)

    start, end = netstring.span(encoded, 0)
    assert encoded[start:end] == data


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
