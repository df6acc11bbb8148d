""" Command-line echo handler. Useful for checking a Mongrel2 route end to
    end: every request is answered with a plain-text description of what
    the handler received.

    Example::

        python -m m2handler --sender-id 34f9ceee-cd52-4b7f-b197-88bf2f0ec378 \\
            --sub tcp://127.0.0.1:9997 --pub tcp://127.0.0.1:9996
"""

import argparse
import logging
import os

from . import config
from .errors import ValidationError
from .handler import Handler
from .transport import context


LOG = logging.getLogger(__name__)


class EchoHandler(Handler):
    """ Answer every request with an HTTP 200 describing the request.
    """

    def handle(self, request):

        lines = list()
        lines.append('sender: ' + request.sender)
        lines.append('connection: ' + request.connection_id)
        lines.append('path: ' + request.path)

        for name in sorted(request.headers):
            lines.append('header %s: %s' % (name, request.headers[name]))

        for key in sorted(request.data):
            lines.append('data %s: %r' % (key, request.data[key]))

        lines.append('body: %d bytes' % (len(request.body_view)))
        lines.append('')

        body = '\n'.join(lines)
        headers = {'Content-Type': 'text/plain'}

        self.connection.reply_http(request, body.encode('ascii', errors='replace'), headers=headers)

        if request.should_close():
            self.connection.close(request)


# end of class EchoHandler



def arguments(argv=None):

    parser = argparse.ArgumentParser(prog='m2handler', description='Mongrel2 echo handler')
    parser.add_argument('--sender-id', default=None,
                        help='identity of this handler (default: $%s)' % (config.environment['sender_id']))
    parser.add_argument('--sub', dest='sub_address', default=None,
                        help='address Mongrel2 pushes requests to (default: $%s)' % (config.environment['sub_address']))
    parser.add_argument('--pub', dest='pub_address', default=None,
                        help='address Mongrel2 reads replies from (default: $%s)' % (config.environment['pub_address']))
    parser.add_argument('--force-json', action='store_true',
                        help='decode every request body as JSON')
    parser.add_argument('--log-level', default=os.environ.get('M2_LOG_LEVEL', 'INFO'))

    return parser.parse_args(argv)


def main(argv=None):

    args = arguments(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        settings = config.get(args.sender_id, args.sub_address, args.pub_address)
    except ValidationError as e:
        LOG.error('%s', e)
        return 2

    connection = settings.connect()
    handler = EchoHandler(connection, force_json=args.force_json)

    LOG.info('echo handler %s listening on %s', settings.sender_id, settings.sub_address)

    try:
        handler.run()
    except KeyboardInterrupt:
        LOG.info('echo handler shutting down')
    finally:
        connection.shutdown()
        context.term()

    return 0


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
