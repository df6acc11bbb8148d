""" Connection settings for a handler: its sender id, and the two ZeroMQ
    addresses Mongrel2 uses for requests and replies.
"""

import collections
import os

from .errors import ValidationError
from .transport import Connection


# Environment variables consulted when an explicit value is not provided.

environment = {
    'sender_id': 'M2_SENDER_ID',
    'sub_address': 'M2_SUB_ADDRESS',
    'pub_address': 'M2_PUB_ADDRESS',
}


class Settings(collections.namedtuple('Settings', ('sender_id', 'sub_address', 'pub_address'))):
    """ The three values needed to connect a handler to Mongrel2: the
        handler's *sender_id*, the address Mongrel2 pushes requests to
        (*sub_address*), and the address Mongrel2 subscribes to for replies
        (*pub_address*).
    """

    __slots__ = ()

    def connect(self, context=None):
        """ Return a :class:`m2handler.transport.Connection` for these
            settings.
        """

        return Connection(self.sender_id, self.sub_address, self.pub_address, context)


# end of class Settings



def get(sender_id=None, sub_address=None, pub_address=None):
    """ Return a :class:`Settings` instance. Any argument left as None is
        taken from the corresponding environment variable, as listed in
        the module-level *environment* dictionary. A value that is missing
        or empty after that raises :class:`m2handler.errors.ValidationError`;
        there are no defaults.
    """

    supplied = dict()
    supplied['sender_id'] = sender_id
    supplied['sub_address'] = sub_address
    supplied['pub_address'] = pub_address

    for field,value in supplied.items():
        if value is None:
            variable = environment[field]
            value = os.environ.get(variable)

        if value is None or value == '':
            raise ValidationError('%s is not set; pass it explicitly or set %s' % (field, environment[field]))

        supplied[field] = value

    return Settings(**supplied)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
