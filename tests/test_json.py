import json
import m2handler
import pytest


def test_library():

    assert m2handler.json.library() in ('msgspec', 'orjson', 'json')


def test_encode_and_decode():

    input_dictionary = dict()
    input_dictionary['list'] = [1, 2, 3, 'a', 'b', None, 'c', 'z']
    input_dictionary['dict'] = {'one': 1, 'two': 2}
    input_dictionary['none'] = None
    input_dictionary['true'] = True
    input_dictionary['false'] = False
    input_dictionary['float'] = 35.5

    encoded = m2handler.json.dumps(input_dictionary)
    assert isinstance(encoded, bytes)

    # There is variance in whitespace handling between the different
    # libraries; compare decoded results, not the encoded text.

    assert json.loads(encoded) == input_dictionary
    assert m2handler.json.loads(encoded) == input_dictionary
    assert m2handler.json.loads(encoded.decode()) == input_dictionary


def test_compact_scalars():

    # Header values rely on these exact encodings.

    assert m2handler.json.dumps(True) == b'true'
    assert m2handler.json.dumps(None) == b'null'
    assert m2handler.json.dumps(12) == b'12'
    assert m2handler.json.dumps(['a', 'b']) == b'["a","b"]'


def test_encode_error():

    with pytest.raises(m2handler.json.EncodeError):
        m2handler.json.dumps({'key': object()})


def test_decode_error():

    for malformed in (b'', b'{', b'{"a":}', b'nope'):
        with pytest.raises(m2handler.json.DecodeError):
            m2handler.json.loads(malformed)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
