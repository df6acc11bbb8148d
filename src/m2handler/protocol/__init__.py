from . import netstring
from . import value
from . import request
from . import response

from .request import Request, parse, parse_json
from .response import frame, deliver, json_payload, http_response, close_signal
from .value import Kind, Value


"""
m2handler Protocol Layer
========================

This package implements the Mongrel2 handler wire format: parsing request
frames pushed by Mongrel2, and encoding the reply frames Mongrel2 reads
back from the handler.

The protocol layer MUST NOT depend on the transport (ZeroMQ). Everything
here is a pure function over in-memory buffers and is safe to call from
any number of threads.

---------------------------------------------------------------------

Layer Overview
--------------

Handler Code
    │
    ▼
Request (request.py)
    Immutable parsed request frame
    - parse(), parse_json()
    - headers, body, data
    - is_disconnect(), should_close()

Reply Encoding (response.py)
    - frame(), deliver()
    - json_payload(), http_response()
    - close_signal()

    │
    ▼
Netstrings (netstring.py)
    Offset-based LEN:DATA, field handling

JSON Values (value.py)
    Tagged representation of decoded JSON bodies

---------------------------------------------------------------------

Below the Protocol Layer
------------------------

Transport (m2handler.transport)
    Moves bytes between Mongrel2 and the handler
    - PULL socket for requests
    - PUB socket for replies

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
