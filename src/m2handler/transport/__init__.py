"""Transport layer: ZeroMQ sockets between the handler and Mongrel2."""

from . import context
from .connection import Connection

from ..errors import TransportError, TransportTimeout
