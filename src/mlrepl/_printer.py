"""Convert runtime values into display text for the REPL.

Output is stable and readable for every value an evaluation can produce,
including values that contain themselves. Each top-level call uses a fresh
`Printer`, so separate calls never share cycle tracking.

    >>> format_value(Tagged("Foo", 5))
    'Foo 5'
    >>> format_value(Tagged("Foo", Record({"a": 1})))
    'Foo{a=1}'
"""

__all__ = ["Printer", "format_value"]

import json
import re
from collections.abc import Mapping
from numbers import Number

from ._value import Tagged, Ref, Record, Symbol, UNDEFINED, is_composite


# Decimal text that would read back as an integer literal
_INTEGRAL_RE = re.compile(r"-?\d+")


class _Emit:
    """Literal text queued on the work stack."""
    __slots__ = ("text",)

    def __init__(self, text):
        self.text = text


class Printer:
    """Single-use serializer for one value graph.

    Visiting is driven by an explicit work stack instead of recursion so
    that long chains of nested values cannot hit the recursion limit.

    Attributes:
        parts: (list[str]) Text fragments emitted so far
        seen: (set[int]) Identities of composites already visited
    """

    def __init__(self):
        self.parts = []
        self.seen = set()
        self._keep = []

    def print(self, value):
        """Render value and everything reachable from it.

        Args:
            value: Any runtime value
        Returns:
            (str) Display text
        """
        stack = [value]
        while stack:
            item = stack.pop()
            if isinstance(item, _Emit):
                self.parts.append(item.text)
            else:
                self._visit(item, stack)
        return "".join(self.parts)

    def _visit(self, value, stack):
        parts = self.parts
        if isinstance(value, bool):
            parts.append("true" if value else "false")
            return
        if isinstance(value, int):
            parts.append(str(value))
            return
        if isinstance(value, str):
            parts.append(json.dumps(value, ensure_ascii=False))
            return
        if isinstance(value, Number):
            parts.append(_number_text(value))
            return
        if isinstance(value, Symbol):
            parts.append("<sym>")
            return
        if value is None:
            parts.append("null")
            return
        if value is UNDEFINED:
            parts.append("<undefined>")
            return
        if not is_composite(value):
            parts.append("<fun>" if callable(value) else f"<{type(value).__name__}>")
            return

        if id(value) in self.seen:
            parts.append("...")
            return
        self.seen.add(id(value))
        # Ids stay unique only while their objects are alive
        self._keep.append(value)

        # Work items are pushed in reverse so they pop in output order
        if isinstance(value, Tagged):
            stack.append(value.payload)
            if not is_composite(value.payload):
                stack.append(_Emit(" "))
            parts.append(value.tag)
        elif isinstance(value, Ref):
            parts.append("ref ")
            stack.append(value.target)
        else:
            parts.append("{")
            stack.append(_Emit("}"))
            items = list(_fields(value))
            for index in range(len(items) - 1, -1, -1):
                key, field = items[index]
                stack.append(field)
                prefix = "; " if index else ""
                stack.append(_Emit(f"{prefix}{_key_text(key)}="))


def _number_text(value):
    """Decimal text for a non-integer number, keeping a float-looking form."""
    text = str(value)
    if _INTEGRAL_RE.fullmatch(text):
        text += ".0"
    return text


def _fields(value):
    """Iterate (key, value) pairs for anything printed as a record."""
    if isinstance(value, Record):
        return value.fields.items()
    if isinstance(value, Mapping):
        return value.items()
    if isinstance(value, (list, tuple)):
        return enumerate(value)
    return vars(value).items()


def _key_text(key):
    if isinstance(key, str):
        return key
    return Printer().print(key)


def format_value(value):
    """Render a runtime value as display text with a fresh Printer."""
    return Printer().print(value)
