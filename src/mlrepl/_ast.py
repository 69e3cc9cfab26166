"""Syntax tree for the language compiled by `mlrepl.Session`.

Nodes are plain attribute holders built by the parser. Every expression
node may carry a `position`, the (line, column) of the source it came
from, used for compile error messages.
"""

__all__ = [
    "AstNode",
    "Program",
    "Let",
    "Number",
    "String",
    "Bool",
    "Var",
    "Func",
    "Apply",
    "LetIn",
    "If",
    "Match",
    "Arm",
    "BinaryOp",
    "Neg",
    "Deref",
    "Assign",
    "Record",
    "RecordUpdate",
    "Field",
    "Tag",
    "NewRef",
]


class AstNode:
    """Base class for all syntax nodes.

    Stores keyword arguments as attributes and provides the standard
    __repr__ and __eq__ implementations.
    """

    position = None

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __repr__(self):
        attrs = []
        for key, value in self.__dict__.items():
            if key != "position":
                attrs.append(f"{key}={value!r}")
        return f"{self.__class__.__name__}({', '.join(attrs)})"

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        mine = {k: v for k, v in self.__dict__.items() if k != "position"}
        theirs = {k: v for k, v in other.__dict__.items() if k != "position"}
        return mine == theirs


class Program(AstNode):
    """Sequence of statements, the value is that of the last one."""

    def __init__(self, statements):
        super().__init__(statements=list(statements))


class Let(AstNode):
    """Top level definition, `let name = value` or `let rec name = value`."""

    def __init__(self, name, value, rec=False):
        super().__init__(name=name, value=value, rec=rec)


class Number(AstNode):
    def __init__(self, value):
        super().__init__(value=float(value))


class String(AstNode):
    def __init__(self, value):
        super().__init__(value=value)


class Bool(AstNode):
    def __init__(self, value):
        super().__init__(value=bool(value))


class Var(AstNode):
    def __init__(self, name):
        super().__init__(name=name)


class Func(AstNode):
    """Single argument function, `fun param -> body`."""

    def __init__(self, param, body):
        super().__init__(param=param, body=body)


class Apply(AstNode):
    def __init__(self, func, arg):
        super().__init__(func=func, arg=arg)


class LetIn(AstNode):
    def __init__(self, name, value, body):
        super().__init__(name=name, value=value, body=body)


class If(AstNode):
    def __init__(self, cond, then, otherwise):
        super().__init__(cond=cond, then=then, otherwise=otherwise)


class Match(AstNode):
    def __init__(self, subject, arms):
        super().__init__(subject=subject, arms=list(arms))


class Arm(AstNode):
    """Match arm. A `tag` of None accepts any value, bound whole to `name`."""

    def __init__(self, tag, name, body):
        super().__init__(tag=tag, name=name, body=body)


class BinaryOp(AstNode):
    def __init__(self, op, left, right):
        super().__init__(op=op, left=left, right=right)


class Neg(AstNode):
    def __init__(self, operand):
        super().__init__(operand=operand)


class Deref(AstNode):
    def __init__(self, operand):
        super().__init__(operand=operand)


class Assign(AstNode):
    """Reference assignment, `target := value`.

    Evaluates to the newly assigned value, not to the reference.
    """

    def __init__(self, target, value):
        super().__init__(target=target, value=value)


class Record(AstNode):
    """Record literal. `fields` is a list of (name, expr) pairs in order."""

    def __init__(self, fields):
        super().__init__(fields=list(fields))


class RecordUpdate(AstNode):
    def __init__(self, base, fields):
        super().__init__(base=base, fields=list(fields))


class Field(AstNode):
    def __init__(self, base, name):
        super().__init__(base=base, name=name)


class Tag(AstNode):
    def __init__(self, tag, payload):
        super().__init__(tag=tag, payload=payload)


class NewRef(AstNode):
    def __init__(self, value):
        super().__init__(value=value)
