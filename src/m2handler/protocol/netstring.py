""" Netstring handling for Mongrel2 frames. A netstring is a length-prefixed,
    comma-terminated byte field::

        LEN ':' DATA ','

    where LEN is the ASCII decimal length of DATA in bytes. The functions
    here work on offsets into a larger buffer, so that locating a field
    never copies it.
"""

from ..errors import FormatError


_COMMA = ord(',')


def span(buffer, offset):
    """ Locate the netstring starting at *offset* within *buffer*. The
        return value is a (start, end) tuple such that buffer[start:end] is
        the netstring data; the terminating comma is at buffer[end], and
        the next field, if any, begins at end + 1.

        A :class:`m2handler.errors.FormatError` is raised if the length
        prefix is missing or not decimal, if the buffer is too short, or if
        the byte after the data is anything other than a comma.
    """

    colon = buffer.find(b':', offset)

    if colon == -1:
        raise FormatError('netstring at offset %d has no length delimiter' % (offset))

    length = buffer[offset:colon]

    if length.isdigit():
        pass
    else:
        raise FormatError('netstring length is not a decimal number: %r' % (bytes(length[:20])))

    # A length with more digits than the buffer size cannot fit, and
    # int() refuses very long digit strings.

    if len(length) > len(str(len(buffer))):
        raise FormatError('netstring at offset %d is truncated' % (offset))

    length = int(length)

    start = colon + 1
    end = start + length

    if end >= len(buffer):
        raise FormatError('netstring at offset %d is truncated' % (offset))

    if buffer[end] != _COMMA:
        raise FormatError("netstring did not end in ','")

    return start, end


def encode(data):
    """ Wrap the supplied bytes as a netstring.
    """

    if isinstance(data, str):
        data = data.encode('ascii')

    data = bytes(data)
    return b'%d:%s,' % (len(data), data)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
