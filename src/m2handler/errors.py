""" Exception hierarchy for m2handler.

Codec errors are also :class:`ValueError` subclasses, so callers that
already guard frame handling with ``except ValueError`` keep working.
"""

from __future__ import annotations


class Mongrel2Error(Exception):
    """Base class for all m2handler errors."""


class FormatError(Mongrel2Error, ValueError):
    """A frame, netstring, or required JSON document is malformed."""


class ValidationError(Mongrel2Error, ValueError):
    """A required field or configuration value is missing or empty."""


# Transport errors

class TransportError(Mongrel2Error):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A receive did not complete before its deadline."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
