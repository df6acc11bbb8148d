""" Python implementation of a Mongrel2 handler. This includes the frame
    codec, which parses requests pushed by Mongrel2 and encodes replies,
    and a thin ZeroMQ transport and handler loop built on top of it.
"""

# Utility components.

from . import errors
from . import json

# The frame codec; no transport dependencies.

from . import protocol
parse = protocol.parse
parse_json = protocol.parse_json

# Primary public-facing interfaces.

from . import transport
from . import config
from . import handler

from .errors import FormatError, ValidationError
from .protocol import Request
from .transport import Connection
from .handler import Handler


def connection(sender_id, sub_address, pub_address, context=None):
    """ Return a new :class:`Connection`; see that class for arguments.
    """

    return Connection(sender_id, sub_address, pub_address, context)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
