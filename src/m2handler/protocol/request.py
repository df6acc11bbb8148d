""" Parsing of Mongrel2 request frames. Mongrel2 pushes one frame per
    request to its handlers, in the format::

        SENDER CONN_ID PATH HLEN:HEADERS,BLEN:BODY,

    where HEADERS is a JSON object and BODY is an arbitrary byte sequence,
    both encoded as netstrings. Bodies can be large binary uploads; the
    parser only tracks offsets into the buffer and never copies or
    re-encodes the body while parsing.
"""

import types

from .. import json
from ..errors import FormatError, ValidationError
from . import netstring
from .value import Value


_SPACE = b' '

# Request.__repr__ truncates the body beyond this many bytes.
repr_limit = 5000


class Request:
    """ The :class:`Request` is the parsed representation of one Mongrel2
        request frame. Instances are immutable: the frame buffer is held as
        :class:`bytes`, and the header and data mappings are read-only views.
        Two requests are equal if and only if their frames are
        byte-identical.

        Instances are normally created with :func:`parse` or
        :func:`parse_json`, rather than directly.

        :ivar sender: The UUID of the originating Mongrel2 server.
        :ivar connection_id: The client connection within that server.
        :ivar path: The matched route.
        :ivar headers: Header names mapped to string values; possibly empty.
        :ivar data: The decoded JSON body, if any; possibly empty.
    """

    __slots__ = ('_sender', '_connection_id', '_path', '_headers', '_data',
                 '_raw', '_headers_from', '_headers_to', '_body_from',
                 '_body_to')

    def __init__(self, sender, connection_id, path, headers, raw,
                 headers_from, headers_to, body_from, body_to,
                 force_json=False):

        _check(sender, 'invalid request, no sender')
        _check(connection_id, 'invalid request, no connection id')
        _check(path, 'invalid request, no path')

        raw = bytes(raw)

        if 0 <= body_from <= body_to <= len(raw):
            pass
        else:
            raise FormatError('body range %d:%d is outside the frame' % (body_from, body_to))

        setter = object.__setattr__
        setter(self, '_sender', sender)
        setter(self, '_connection_id', connection_id)
        setter(self, '_path', path)
        setter(self, '_headers', types.MappingProxyType(dict(headers)))
        setter(self, '_raw', raw)
        setter(self, '_headers_from', headers_from)
        setter(self, '_headers_to', headers_to)
        setter(self, '_body_from', body_from)
        setter(self, '_body_to', body_to)

        if force_json or self._headers.get('METHOD') == 'JSON':
            data = _parse_data(raw[body_from:body_to])
        else:
            data = dict()

        setter(self, '_data', types.MappingProxyType(data))


    def __setattr__(self, name, value):
        raise AttributeError('Request instances are immutable')


    def __delattr__(self, name):
        raise AttributeError('Request instances are immutable')


    def __eq__(self, other):
        if isinstance(other, Request):
            return self._raw == other._raw
        return NotImplemented


    def __hash__(self):
        return hash(self._raw)


    def __repr__(self):
        body = self.body_text
        if len(body) > repr_limit:
            body = body[:repr_limit]

        headers = dict(self._headers)

        return 'Request(sender=%r, connection_id=%r, path=%r, headers=%r, body=%r)' % (
            self._sender, self._connection_id, self._path, headers, body)


    @property
    def sender(self):
        return self._sender

    @property
    def connection_id(self):
        return self._connection_id

    @property
    def path(self):
        return self._path

    @property
    def headers(self):
        """ Header mapping; never None, but may be empty.
        """
        return self._headers

    @property
    def data(self):
        """ The JSON body as plain Python values; never None, but empty
            unless the frame was JSON-typed or parsed with *force_json*.
            Only scalar top-level entries are present, see :func:`parse`.
        """
        return types.MappingProxyType({key: value.unwrap() for key, value in self._data.items()})

    @property
    def raw(self):
        """ The complete frame as received.
        """
        return self._raw

    @property
    def raw_headers(self):
        """ The header JSON exactly as received.
        """
        return self._raw[self._headers_from:self._headers_to]

    @property
    def body(self):
        """ A copy of the body bytes.
        """
        return self._raw[self._body_from:self._body_to]

    @property
    def body_view(self):
        """ A read-only :class:`memoryview` of the body; no bytes are copied.
        """
        return memoryview(self._raw)[self._body_from:self._body_to]

    @property
    def body_text(self):
        return self._raw[self._body_from:self._body_to].decode('ascii', errors='replace')


    def value(self, key):
        """ Return the :class:`m2handler.protocol.value.Value` for *key* in
            the JSON body. Raises KeyError if there is no such entry.
        """

        return self._data[key]


    def is_disconnect(self):
        """ True if this is the JSON message Mongrel2 sends when a client
            connection goes away.
        """

        headers = self._headers
        return headers.get('METHOD') == 'JSON' and headers.get('type') == 'disconnect'


    def should_close(self):
        """ True if the client asked for the connection to be closed after
            the response, either explicitly or by speaking HTTP/1.0.
        """

        headers = self._headers
        return headers.get('connection') == 'close' or headers.get('VERSION') == 'HTTP/1.0'


# end of class Request



def parse(buffer, force_json=False):
    """ Parse one Mongrel2 request frame and return a :class:`Request`.
        The JSON body is decoded if the METHOD header is 'JSON', or if
        *force_json* is True.

        Any malformed frame raises :class:`m2handler.errors.FormatError`;
        an empty sender, connection id, or path raises
        :class:`m2handler.errors.ValidationError`. There is no partial
        result.

        The JSON body is flattened: only top-level entries holding a
        string, number, boolean, or null are kept. Entries holding a
        nested object or array are dropped. Existing handlers depend on
        this, so it is kept as-is for now.
    """

    buffer = bytes(buffer)

    sender, offset = _token(buffer, 0)
    connection_id, offset = _token(buffer, offset)
    path, offset = _token(buffer, offset)

    headers_from, headers_to = netstring.span(buffer, offset)
    body_from, body_to = netstring.span(buffer, headers_to + 1)

    headers = _parse_headers(buffer[headers_from:headers_to])

    return Request(sender, connection_id, path, headers, buffer,
                   headers_from, headers_to, body_from, body_to, force_json)


def parse_json(buffer):
    """ Same as :func:`parse`, but always decode the body as JSON. Use this
        for handlers that receive JSON over plain HTTP requests.
    """

    return parse(buffer, force_json=True)


def encode(sender, connection_id, path, headers, body):
    """ Build a request frame, the way Mongrel2 would. *headers* may be a
        mapping, or the header JSON as bytes; *body* is bytes or a string.
        This is the inverse of :func:`parse`, mostly useful for testing
        handlers without a running Mongrel2 server.
    """

    if isinstance(headers, (bytes, bytearray, memoryview)):
        headers = bytes(headers)
    else:
        headers = json.dumps(dict(headers))

    prefix = ' '.join((sender, connection_id, path, ''))
    prefix = prefix.encode('ascii')

    return prefix + netstring.encode(headers) + netstring.encode(body)


def _check(token, message):

    if token is None or token == '':
        raise ValidationError(message)


def _token(buffer, offset):
    """ Return the space-terminated token starting at *offset*, and the
        offset just past the space.
    """

    space = buffer.find(_SPACE, offset)

    if space == -1:
        raise FormatError('message was not in the format: SENDER CONN_ID PATH SIZE:HEADERS,SIZE:BODY,')

    try:
        token = buffer[offset:space].decode('ascii')
    except UnicodeDecodeError as e:
        raise FormatError('non-ASCII bytes in request prefix') from e

    return token, space + 1


def _parse_headers(raw):

    try:
        decoded = json.loads(raw)
    except json.DecodeError as e:
        raise FormatError('invalid JSON for headers') from e

    if isinstance(decoded, dict):
        pass
    else:
        raise FormatError('headers are not a JSON object')

    headers = dict()

    for key,value in decoded.items():
        if isinstance(value, str):
            headers[key] = value
            continue

        try:
            headers[key] = json.dumps(value).decode()
        except json.EncodeError as e:
            raise FormatError('header %r cannot be represented as a string' % (key)) from e

    return headers


def _parse_data(raw):

    try:
        decoded = json.loads(raw)
    except json.DecodeError as e:
        raise FormatError('body is not valid JSON') from e

    if isinstance(decoded, dict):
        pass
    else:
        raise FormatError('body is not a JSON object')

    data = dict()

    # Nested objects and arrays were already decoded by the JSON library;
    # they are dropped here without being wrapped.

    for key,value in decoded.items():
        if isinstance(value, (dict, list)):
            continue
        data[key] = Value.wrap(value)

    return data


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
