""" Process-wide ZeroMQ context. ZeroMQ expects one context per process;
    every :class:`m2handler.transport.Connection` uses the context returned
    by :func:`get` unless another one is supplied explicitly.

    The context is created on first use and terminated exactly once, either
    by an explicit call to :func:`term` or at interpreter exit.
"""

import atexit
import logging
import threading

import zmq


LOG = logging.getLogger(__name__)

_context = None
_lock = threading.Lock()


def get():
    """ Return the shared :class:`zmq.Context`, creating it if necessary.
        A context that was terminated via :func:`term` is replaced with a
        new one.
    """

    global _context

    with _lock:
        if _context is None or _context.closed:
            _context = zmq.Context()
            LOG.debug('created ZeroMQ context')

        return _context


def term():
    """ Terminate the shared context, if there is one. Any sockets still
        open on the context are closed without lingering. Calling this more
        than once is harmless.
    """

    global _context

    with _lock:
        context = _context
        _context = None

    if context is None or context.closed:
        return

    context.destroy(linger=0)
    LOG.debug('terminated ZeroMQ context')


atexit.register(term)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
