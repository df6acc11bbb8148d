import itertools
import pytest
import zmq

import m2handler


_sequence = itertools.count()


class Mongrel2:
    """ Stand-in for the Mongrel2 side of a handler connection: a bound
        PUSH socket for requests, and a bound SUB socket for replies. Both
        use inproc addresses on the shared m2handler context.
    """

    def __init__(self):

        context = m2handler.transport.context.get()
        number = next(_sequence)

        self.sub_address = 'inproc://m2handler-test-requests-%d' % (number)
        self.pub_address = 'inproc://m2handler-test-responses-%d' % (number)

        self.push = context.socket(zmq.PUSH)
        self.push.setsockopt(zmq.LINGER, 0)
        self.push.bind(self.sub_address)

        self.sub = context.socket(zmq.SUB)
        self.sub.setsockopt(zmq.LINGER, 0)
        self.sub.setsockopt(zmq.SUBSCRIBE, b'')
        self.sub.bind(self.pub_address)


    def receive(self, send, attempts=50):
        """ PUB/SUB drops anything sent before the subscription reaches the
            publisher. Invoke *send* until something arrives, and return
            the first frame received.
        """

        for attempt in range(attempts):
            send()
            if self.sub.poll(100, zmq.POLLIN):
                return self.sub.recv()

        raise AssertionError('no reply received')


    def close(self):
        self.push.close(linger=0)
        self.sub.close(linger=0)


@pytest.fixture
def mongrel2():

    server = Mongrel2()
    yield server
    server.close()


@pytest.fixture
def connection(mongrel2):

    connection = m2handler.connection('handler-test', mongrel2.sub_address, mongrel2.pub_address)
    yield connection
    connection.shutdown()


def make_frame(sender, connection_id, path, headers, body):
    """ Build a request frame by hand, independently of
        m2handler.protocol.request.encode().
    """

    if isinstance(headers, str):
        headers = headers.encode()
    if isinstance(body, str):
        body = body.encode()

    prefix = ('%s %s %s ' % (sender, connection_id, path)).encode()
    return prefix + b'%d:%s,' % (len(headers), headers) + b'%d:%s,' % (len(body), body)


@pytest.fixture
def frame():
    return make_frame


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
