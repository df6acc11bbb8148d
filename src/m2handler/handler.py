""" The receive-and-dispatch loop run by a Mongrel2 handler process. A
    subclass of :class:`Handler` supplies the per-request behavior.
"""

import logging
import threading

from .errors import FormatError, TransportTimeout, ValidationError


LOG = logging.getLogger(__name__)


class Handler:
    """ The :class:`Handler` is a facilitator for the common handler loop:
        receive a request from Mongrel2, dispatch it, repeat.

        The developer is expected to subclass :class:`Handler` and implement
        a :func:`handle` method, and optionally a :func:`disconnected`
        method. The *connection* is a :class:`m2handler.transport.Connection`
        (or any object with the same ``recv`` and ``recv_json`` methods);
        if *force_json* is True every request body is decoded as JSON.

        Malformed frames are logged and dropped. An exception raised by
        :func:`handle` is logged with its traceback, and the loop continues
        with the next request; a handler that needs to answer the client
        in that case should catch the exception itself.
    """

    # Seconds between checks for a stop request while idle.
    interval = 0.5

    def __init__(self, connection, force_json=False):

        self.connection = connection
        self.force_json = force_json
        self.shutdown = threading.Event()


    def handle(self, request):
        """ Respond to one *request*. Subclasses must implement this.
        """

        raise NotImplementedError('Handler subclasses must implement handle()')


    def disconnected(self, request):
        """ Invoked when Mongrel2 reports that a client connection went
            away. The default is to ignore the notice.
        """

        LOG.debug('client %s disconnected from %s', request.connection_id, request.sender)


    def receive(self):
        """ Wait up to :attr:`interval` seconds for the next request. Returns
            None if nothing arrived, or if the frame was malformed.
        """

        if self.force_json:
            recv = self.connection.recv_json
        else:
            recv = self.connection.recv

        try:
            request = recv(timeout=self.interval)
        except TransportTimeout:
            return None
        except (FormatError, ValidationError) as e:
            LOG.warning('dropping malformed frame: %s', e)
            return None

        return request


    def dispatch(self, request):

        try:
            if request.is_disconnect():
                self.disconnected(request)
            else:
                self.handle(request)
        except Exception:
            LOG.exception('error handling %s %s', request.connection_id, request.path)


    def run(self):
        """ Receive and dispatch requests until :func:`stop` is called.
        """

        while not self.shutdown.is_set():
            request = self.receive()

            if request is None:
                continue

            self.dispatch(request)


    def stop(self):
        self.shutdown.set()


# end of class Handler


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
