"""Runtime value types produced by evaluating compiled programs."""

__all__ = ["Tagged", "Ref", "Record", "Symbol", "UNDEFINED", "is_composite"]

from collections.abc import Mapping
from numbers import Number


class Tagged:
    """Tagged variant value, a discriminant with an associated payload.

    Args:
        tag: (str) Variant name, as written in source (`Some)
        payload: Any runtime value

    Attributes:
        tag: (str) Variant name
        payload: Associated value
    """
    __slots__ = ("tag", "payload")

    def __init__(self, tag, payload=None):
        self.tag = tag
        self.payload = payload

    def __repr__(self):
        return f"Tagged({self.tag!r})"


class Ref:
    """Mutable reference cell pointing at a single target value."""
    __slots__ = ("target",)

    def __init__(self, target=None):
        self.target = target

    def __repr__(self):
        return "Ref(...)"


class Record:
    """Record of named fields.

    Field order is the order the fields were defined in. Records are
    compared by identity, like every other composite value, which lets
    them take part in cyclic structures.

    Args:
        fields: (Mapping | None) Initial fields
    """
    __slots__ = ("fields",)

    def __init__(self, fields=None):
        self.fields = dict(fields) if fields else {}

    def __getitem__(self, name):
        return self.fields[name]

    def __setitem__(self, name, value):
        self.fields[name] = value

    def __contains__(self, name):
        return name in self.fields

    def __len__(self):
        return len(self.fields)

    def __repr__(self):
        return f"Record({list(self.fields)})"


class Symbol:
    """Opaque atom that is only equal to itself."""
    __slots__ = ("name",)

    def __init__(self, name=""):
        self.name = name

    def __repr__(self):
        return f"Symbol({self.name!r})"


class _Undefined:
    __slots__ = ()

    def __repr__(self):
        return "UNDEFINED"

    def __bool__(self):
        return False


UNDEFINED = _Undefined()
"""Sentinel for an absent value, distinct from None (null)."""


_atoms = (str, bytes, Number, Symbol, _Undefined)


def is_composite(value):
    """True if value has identity and structure worth recursing into."""
    if value is None or isinstance(value, _atoms):
        return False
    if isinstance(value, (Tagged, Ref, Record, Mapping, list, tuple)):
        return True
    if callable(value):
        return False
    return hasattr(value, "__dict__")
