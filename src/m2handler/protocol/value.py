""" Tagged representation of a decoded JSON value. The kind of a value is
    determined once, when the value is wrapped, so that code consuming a
    :class:`Value` can switch on :attr:`Value.kind` instead of inspecting
    Python types.
"""

from __future__ import annotations

import enum
import types
from dataclasses import dataclass
from typing import Any


class Kind(enum.Enum):
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    NULL = 'null'
    MAP = 'map'
    SEQUENCE = 'sequence'

    @property
    def scalar(self) -> bool:
        return self not in (Kind.MAP, Kind.SEQUENCE)


@dataclass(frozen=True)
class Value:
    """ One JSON value and its :class:`Kind`. Nested maps and sequences are
        stored as read-only containers of further :class:`Value` instances.
    """

    kind: Kind
    data: Any

    @classmethod
    def wrap(cls, value: Any) -> 'Value':
        """ Classify a value as returned by :func:`m2handler.json.loads`.
        """

        # bool is a subclass of int; check it first.

        if value is None:
            return cls(Kind.NULL, None)
        if isinstance(value, bool):
            return cls(Kind.BOOLEAN, value)
        if isinstance(value, (int, float)):
            return cls(Kind.NUMBER, value)
        if isinstance(value, str):
            return cls(Kind.STRING, value)
        if isinstance(value, dict):
            wrapped = {key: cls.wrap(item) for key, item in value.items()}
            return cls(Kind.MAP, types.MappingProxyType(wrapped))
        if isinstance(value, (list, tuple)):
            return cls(Kind.SEQUENCE, tuple(cls.wrap(item) for item in value))

        raise TypeError('not a JSON value: %r' % (value,))

    def unwrap(self) -> Any:
        """ Return the plain Python equivalent: dict for a map, list for a
            sequence, and the scalar itself otherwise.
        """

        if self.kind is Kind.MAP:
            return {key: item.unwrap() for key, item in self.data.items()}
        if self.kind is Kind.SEQUENCE:
            return [item.unwrap() for item in self.data]
        return self.data


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
