"""Helpers referenced by compiled programs.

Compiled code is a plain Python expression. It refers to the value
constructors by name and calls the functions in this module through the
`_rt` name for operations with no direct Python spelling. `namespace()`
builds the globals dict that provides those names.
"""

__all__ = ["namespace"]

import math
import sys

from ._error import MatchError
from ._value import Tagged, Ref, Record


def field(value, name):
    """Read a record field."""
    if not isinstance(value, Record):
        raise TypeError(f"cannot read field {name!r} of a non-record value")
    try:
        return value.fields[name]
    except KeyError:
        raise TypeError(f"record has no field {name!r}") from None


def extend(value, fields):
    """Copy of a record with some fields replaced or added."""
    if not isinstance(value, Record):
        raise TypeError("record update of a non-record value")
    updated = Record(value.fields)
    updated.fields.update(fields)
    return updated


def deref(value):
    """Read the target of a reference."""
    if not isinstance(value, Ref):
        raise TypeError("dereference of a non-reference value")
    return value.target


def assign(value, target):
    """Point a reference at a new target and return that target."""
    if not isinstance(value, Ref):
        raise TypeError("assignment to a non-reference value")
    value.target = target
    return target


def match(value, arms, default=None):
    """Dispatch a tagged value to the arm handling its tag.

    Args:
        value: Value being matched
        arms: (dict[str, callable]) Handlers called with the payload
        default: (callable | None) Handler called with the whole value
    """
    if isinstance(value, Tagged):
        arm = arms.get(value.tag)
        if arm is not None:
            return arm(value.payload)
    if default is not None:
        return default(value)
    if isinstance(value, Tagged):
        raise MatchError(f"no match arm for tag {value.tag}")
    raise MatchError("match on a non-variant value")


def mod(left, right):
    """Remainder with the sign of the dividend."""
    return math.fmod(left, right)


def namespace(**extra):
    """Fresh globals dict for evaluating compiled programs.

    Builtins are left out, compiled code only reaches what is named here.
    Top-level definitions are stored back into the same dict through
    `_define`, so later programs and earlier closures both see them.
    """
    def define(name, value):
        names[name] = value
        return value

    names = {
        "_define": define,
        "__builtins__": {},
        "_rt": sys.modules[__name__],
        "_inf": math.inf,
        "_nan": math.nan,
        "Tagged": Tagged,
        "Ref": Ref,
        "Record": Record,
    }
    names.update(extra)
    return names
