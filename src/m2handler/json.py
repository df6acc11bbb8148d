''' JSON encoding and decoding for Mongrel2 headers, JSON request bodies,
    and JSON reply payloads. The first library found among msgspec, orjson,
    and the standard :mod:`json` module does the work; the rest of the
    package only uses :func:`dumps`, :func:`loads`, and the two error tuples
    defined here.
'''

msgspec = None
orjson = None
json = None

# Preference order is msgspec, orjson, json. Later candidates are not
# imported at all once an earlier one is found.

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


def json_dumps(value):
    """ Encode *value* with the standard library, compactly, as bytes; this
        matches the output type and spacing of the other two libraries.
    """

    return json.dumps(value, separators=(',', ':')).encode()


# DecodeError and EncodeError collect whatever the selected library raises
# on malformed input, or on input nested deeper than it is willing to go.

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = (msgspec.DecodeError, ValueError, RecursionError)
    EncodeError = (msgspec.EncodeError, TypeError, ValueError, RecursionError)
elif orjson is not None:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = (orjson.JSONDecodeError, ValueError, RecursionError)
    EncodeError = (orjson.JSONEncodeError, TypeError, ValueError, RecursionError)
else:
    dumps = json_dumps
    loads = json.loads
    DecodeError = (ValueError, RecursionError)
    EncodeError = (TypeError, ValueError, RecursionError)


def library():
    """ Return the name of the library selected to handle JSON.
    """

    if msgspec is not None:
        return 'msgspec'
    elif orjson is not None:
        return 'orjson'
    else:
        return 'json'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
