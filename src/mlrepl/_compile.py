"""Reference compiler session producing Python expressions.

A `Session` compiles one program at a time into a single Python expression
meant for `PythonHost`. Top-level definitions accumulate across calls:
each successful `process` makes its `let` names visible to later programs.
A failed `process` leaves the accumulated definitions untouched.

Every binding is given a unique Python name, so redefining a name does not
change the meaning of functions compiled against the earlier definition.
"""

__all__ = ["Session", "compile_program"]

import logging
import math

from . import _ast as ast
from ._error import CompileError
from ._parse import parse


logger = logging.getLogger(__name__)


# Operators whose Python spelling differs or that need a runtime helper
_OPERATORS = {
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "^": "+",
    "<": "<",
    "<=": "<=",
    ">": ">",
    ">=": ">=",
    "==": "==",
    "!=": "!=",
}


class Session:
    """Compiler session with accumulated top-level definitions.

    Attributes:
        bindings: (dict[str, str]) Source name to generated global name
    """

    def __init__(self):
        self.bindings = {}
        self._counter = 0
        self._output = None
        self._error = None

    def process(self, source):
        """Compile source. Returns True on success."""
        self._output = None
        self._error = None
        gen = _CodeGen(self.bindings, self._counter)
        try:
            code = gen.program(parse(source))
        except CompileError as e:
            self._error = str(e)
            logger.debug("Rejected source: %s", self._error.splitlines()[0])
            return False

        self.bindings = gen.bindings
        self._counter = gen.counter
        self._output = code
        return True

    def get_output(self):
        if self._output is None:
            raise ValueError("No compiled output, last process() did not succeed")
        return self._output

    def get_error(self):
        if self._error is None:
            raise ValueError("No compile error, last process() did not fail")
        return self._error

    def reset(self):
        self.bindings = {}
        self._counter = 0
        self._output = None
        self._error = None


def compile_program(source):
    """Compile a standalone program with no earlier definitions.

    Raises:
        CompileError: Source does not compile
    """
    return _CodeGen({}, 0).program(parse(source))


class _CodeGen:
    """Generates Python expression text for one program.

    Local names are passed down as a frozenset; globals live in a copy of
    the session bindings so nothing is committed until the whole program
    compiles.
    """

    def __init__(self, bindings, counter):
        self.bindings = dict(bindings)
        self.counter = counter

    def program(self, node):
        parts = [self.statement(stmt) for stmt in node.statements]
        if len(parts) == 1:
            return parts[0]
        return "(" + ", ".join(parts) + ")[-1]"

    def statement(self, node):
        if not isinstance(node, ast.Let):
            return self.expr(node, frozenset())

        target = self._new_global(node.name)
        if node.rec:
            self.bindings[node.name] = target
            value = self.expr(node.value, frozenset())
        else:
            value = self.expr(node.value, frozenset())
            self.bindings[node.name] = target
        return f"_define({target!r}, {value})"

    def expr(self, node, scope):
        match node:
            case ast.Number():
                return _number(node.value)
            case ast.String():
                return repr(node.value)
            case ast.Bool():
                return "True" if node.value else "False"
            case ast.Var():
                return self._lookup(node, scope)
            case ast.Func():
                body = self.expr(node.body, scope | {node.param})
                return f"(lambda {_local(node.param)}: {body})"
            case ast.Apply():
                func = self.expr(node.func, scope)
                arg = self.expr(node.arg, scope)
                return f"{func}({arg})"
            case ast.LetIn():
                value = self.expr(node.value, scope)
                body = self.expr(node.body, scope | {node.name})
                return f"(lambda {_local(node.name)}: {body})({value})"
            case ast.If():
                cond = self.expr(node.cond, scope)
                then = self.expr(node.then, scope)
                otherwise = self.expr(node.otherwise, scope)
                return f"({then} if {cond} else {otherwise})"
            case ast.Match():
                return self._match(node, scope)
            case ast.BinaryOp():
                left = self.expr(node.left, scope)
                right = self.expr(node.right, scope)
                if node.op == "%":
                    return f"_rt.mod({left}, {right})"
                return f"({left} {_OPERATORS[node.op]} {right})"
            case ast.Neg():
                return f"(-{self.expr(node.operand, scope)})"
            case ast.Deref():
                return f"_rt.deref({self.expr(node.operand, scope)})"
            case ast.Assign():
                target = self.expr(node.target, scope)
                value = self.expr(node.value, scope)
                return f"_rt.assign({target}, {value})"
            case ast.Record():
                return f"Record({self._fields(node.fields, scope)})"
            case ast.RecordUpdate():
                base = self.expr(node.base, scope)
                return f"_rt.extend({base}, {self._fields(node.fields, scope)})"
            case ast.Field():
                return f"_rt.field({self.expr(node.base, scope)}, {node.name!r})"
            case ast.Tag():
                return f"Tagged({node.tag!r}, {self.expr(node.payload, scope)})"
            case ast.NewRef():
                return f"Ref({self.expr(node.value, scope)})"
            case _:
                raise CompileError(f"Cannot compile {type(node).__name__} node")

    def _lookup(self, node, scope):
        if node.name in scope:
            return _local(node.name)
        target = self.bindings.get(node.name)
        if target is None:
            raise CompileError(f"Unbound variable {node.name}{_where(node)}")
        return target

    def _fields(self, fields, scope):
        names = set()
        items = []
        for name, value in fields:
            if name in names:
                raise CompileError(f"Repeated field name {name}")
            names.add(name)
            items.append(f"{name!r}: {self.expr(value, scope)}")
        return "{" + ", ".join(items) + "}"

    def _match(self, node, scope):
        subject = self.expr(node.subject, scope)
        arms = []
        tags = set()
        default = None
        for arm in node.arms:
            if default is not None:
                raise CompileError("Match arm after a catch-all arm can never be reached")
            body = self.expr(arm.body, scope | {arm.name})
            handler = f"(lambda {_local(arm.name)}: {body})"
            if arm.tag is None:
                default = handler
                continue
            if arm.tag in tags:
                raise CompileError(f"Repeated match arm for tag {arm.tag}")
            tags.add(arm.tag)
            arms.append(f"{arm.tag!r}: {handler}")

        text = f"_rt.match({subject}, {{{', '.join(arms)}}}"
        if default is not None:
            text += f", {default}"
        return text + ")"

    def _new_global(self, name):
        self.counter += 1
        return f"g{self.counter}_{name}"


def _local(name):
    return f"v_{name}"


def _number(value):
    if math.isnan(value):
        return "_nan"
    if math.isinf(value):
        return "_inf" if value > 0 else "(-_inf)"
    return repr(value)


def _where(node):
    if node.position is None:
        return ""
    line, column = node.position
    return f" at line {line}, column {column}"
