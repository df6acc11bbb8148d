""" Encoding of handler replies. Mongrel2 subscribes to the handler's
    PUB socket and routes each frame by its leading sender UUID::

        SENDER LEN:CONN_ID CONN_ID ..., PAYLOAD

    The connection id list is written as a netstring followed by a single
    space, whether it names one recipient or many; each listed connection
    receives the payload once. These functions only build bytes, sending
    them is the job of :class:`m2handler.transport.Connection`.
"""

from collections.abc import Mapping

from .. import json
from ..errors import ValidationError


def frame(sender, connection_ids, payload):
    """ Build a reply frame addressed to one or more connections of the
        Mongrel2 server identified by *sender*. *connection_ids* is either a
        single connection id string or an iterable of them; an empty
        iterable is permitted. There is a limit to how many recipients
        Mongrel2 will accept in one frame; callers with large recipient
        lists are expected to chunk them.

        The *payload* can be bytes, an ASCII string, or None for an empty
        payload.
    """

    if sender is None or sender == '':
        raise ValidationError('a reply must specify a sender')

    if isinstance(connection_ids, str):
        recipients = connection_ids
    else:
        recipients = ' '.join(str(connection_id) for connection_id in connection_ids)

    recipients = recipients.encode('ascii')
    header = b'%s %d:%s, ' % (sender.encode('ascii'), len(recipients), recipients)

    return header + _as_bytes(payload)


def deliver(sender, connection_ids, payload):
    """ Same as :func:`frame`, for a sequence of recipients.
    """

    if isinstance(connection_ids, str):
        connection_ids = (connection_ids,)

    return frame(sender, connection_ids, payload)


def json_payload(data):
    """ Encode *data*, a mapping, as a JSON object suitable for use as a
        reply payload.
    """

    if isinstance(data, Mapping):
        pass
    else:
        raise TypeError('JSON payloads must be a mapping, not ' + type(data).__name__)

    return json.dumps(dict(data))


def http_response(body, code=200, status='OK', headers=None):
    """ Frame *body* as a complete HTTP/1.1 response. The *headers* are
        written in the order supplied, followed by a Content-Length header
        computed from the body; a Content-Length supplied by the caller is
        discarded. No other headers are added.
    """

    body = _as_bytes(body)

    lines = list()
    lines.append('HTTP/1.1 %d %s' % (code, status))

    if headers:
        for name,value in headers.items():
            if name.lower() == 'content-length':
                continue
            lines.append('%s: %s' % (name, value))

    lines.append('Content-Length: %d' % (len(body)))
    lines.append('')
    lines.append('')

    head = '\r\n'.join(lines)
    return head.encode('ascii') + body


def close_signal():
    """ The empty payload; sending it tells Mongrel2 to close the connection.
    """

    return b''


def _as_bytes(payload):

    if payload is None:
        return b''

    if isinstance(payload, str):
        return payload.encode('ascii')

    return bytes(payload)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
