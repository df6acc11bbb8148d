""" ZeroMQ connection between a handler and one or more Mongrel2 servers.

Mongrel2 binds a PUSH socket for requests and a SUB socket for replies;
the handler connects a PULL socket to the former and a PUB socket to the
latter. The identity of the PUB socket is the handler's sender id.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Mapping, Optional, Union

import zmq

from ..errors import TransportError, TransportTimeout, ValidationError
from ..protocol import request as request_module
from ..protocol import response
from ..protocol.request import Request
from . import context as shared_context


LOG = logging.getLogger(__name__)

Payload = Union[bytes, bytearray, memoryview, str, None]


class Connection:
    """ A :class:`Connection` manages the sockets between a handler and
        Mongrel2. It receives raw or JSON-decoded requests, and sends
        individual or batch replies, raw, as JSON, or framed as HTTP
        responses.

        Addresses are in ZeroMQ format, for example ``tcp://127.0.0.1:9997``.
        The *sender_id* may be bytes or an ASCII string. A ZeroMQ *context*
        may be supplied; the process-wide context from
        :mod:`m2handler.transport.context` is used otherwise.

        The descriptor fields are fixed at construction. Sends and receives
        are each serialized with a lock, so a single instance can be shared
        between threads.
    """

    def __init__(self, sender_id: Union[bytes, str], sub_address: str,
                 pub_address: str, context: Optional[zmq.Context] = None):

        if isinstance(sender_id, str):
            sender_id = sender_id.encode('ascii')

        if not sender_id:
            raise ValidationError('must specify a sender_id')
        if not sub_address:
            raise ValidationError('must specify a sub_address')
        if not pub_address:
            raise ValidationError('must specify a pub_address')

        self._sender_id = bytes(sender_id)
        self._sub_address = sub_address
        self._pub_address = pub_address

        if context is None:
            context = shared_context.get()

        self._recv_lock = threading.Lock()
        self._send_lock = threading.Lock()

        self._requests = None
        self._responses = None

        try:
            self._requests = context.socket(zmq.PULL)
            self._requests.setsockopt(zmq.LINGER, 0)
            self._requests.connect(sub_address)

            # The identity has to be set before connecting for Mongrel2 to see it.

            self._responses = context.socket(zmq.PUB)
            self._responses.setsockopt(zmq.LINGER, 0)
            self._responses.setsockopt(zmq.IDENTITY, self._sender_id)
            self._responses.connect(pub_address)
        except zmq.ZMQError as e:
            for socket in (self._requests, self._responses):
                if socket is not None:
                    socket.close(linger=0)
            raise TransportError('cannot connect %s to %s / %s: %s' % (
                self._sender_id, sub_address, pub_address, e)) from e

        LOG.debug('connected %r: requests from %s, responses to %s',
                  self._sender_id, sub_address, pub_address)


    @property
    def sender_id(self) -> bytes:
        return self._sender_id

    @property
    def sender_id_text(self) -> str:
        return self._sender_id.decode('ascii')

    @property
    def sub_address(self) -> str:
        return self._sub_address

    @property
    def pub_address(self) -> str:
        return self._pub_address

    @property
    def closed(self) -> bool:
        return self._requests.closed and self._responses.closed


    def __repr__(self) -> str:
        return 'Connection(sender_id=%r, sub_address=%r, pub_address=%r)' % (
            self._sender_id, self._sub_address, self._pub_address)

    def __eq__(self, other) -> bool:
        if isinstance(other, Connection):
            return self._key() == other._key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self):
        return (self._sender_id, self._sub_address, self._pub_address)


    # Receiving

    def recv(self, timeout: Optional[float] = None) -> Request:
        """ Block until the next request arrives and return it parsed. If a
            *timeout* in seconds is given and nothing arrives in time,
            :class:`m2handler.errors.TransportTimeout` is raised.
        """

        return request_module.parse(self._recv_bytes(timeout))

    def recv_json(self, timeout: Optional[float] = None) -> Request:
        """ Same as :func:`recv`, but always decode the body as JSON, not
            only for JSON-typed requests.
        """

        return request_module.parse_json(self._recv_bytes(timeout))

    def _recv_bytes(self, timeout: Optional[float]) -> bytes:

        with self._recv_lock:
            if timeout is not None:
                ready = self._requests.poll(int(timeout * 1000), zmq.POLLIN)
                if not ready:
                    raise TransportTimeout('no request within %s seconds' % (timeout))

            return self._requests.recv()


    # Sending

    def send(self, sender: str, connection_id: str, payload: Payload) -> None:
        """ Raw send to the given connection id at the given server.
        """

        self._send(response.frame(sender, connection_id, payload))

    def _send(self, frame: bytes) -> None:
        with self._send_lock:
            self._responses.send(frame)

    def reply(self, request: Request, payload: Payload) -> None:
        """ Reply to the connection that sent *request*.
        """

        self.send(request.sender, request.connection_id, payload)

    def reply_json(self, request: Request, data: Mapping) -> None:
        self.reply(request, response.json_payload(data))

    def reply_http(self, request: Request, body: Payload, code: int = 200,
                   status: str = 'OK', headers: Optional[Mapping[str, str]] = None) -> None:
        """ Reply with *body* framed as an HTTP response, so that the browser
            receives it as-is.
        """

        self.reply(request, response.http_response(body, code, status, headers))

    def deliver(self, sender: str, connection_ids: Iterable[str], payload: Payload) -> None:
        """ Send one payload to many connected clients with a single frame.
            Mongrel2 limits how many connection ids a frame may carry; chunk
            the recipients as needed.
        """

        self._send(response.deliver(sender, connection_ids, payload))

    def deliver_json(self, sender: str, connection_ids: Iterable[str], data: Mapping) -> None:
        self.deliver(sender, connection_ids, response.json_payload(data))

    def deliver_http(self, sender: str, connection_ids: Iterable[str], body: Payload,
                     code: int = 200, status: str = 'OK',
                     headers: Optional[Mapping[str, str]] = None) -> None:
        """ Same as :func:`deliver`, but framed as an HTTP response, for
            answering several clients waiting on the same resource.
        """

        self.deliver(sender, connection_ids, response.http_response(body, code, status, headers))

    def close(self, request: Request) -> None:
        """ Ask Mongrel2 to close the client connection behind *request*.
        """

        self.reply(request, response.close_signal())

    def deliver_close(self, sender: str, connection_ids: Iterable[str]) -> None:
        self.deliver(sender, connection_ids, response.close_signal())


    def shutdown(self) -> None:
        """ Close both sockets. No thread may be blocked in :func:`recv` at
            the time. The shared context is left alone; see
            :func:`m2handler.transport.context.term`.
        """

        self._requests.close(linger=0)

        with self._send_lock:
            self._responses.close(linger=0)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
