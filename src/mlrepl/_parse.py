"""Parse source text into syntax tree nodes."""

__all__ = ["parse", "parse_tree"]

import json

import lark
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, VisitError

from . import _ast as ast
from ._error import ParseError


def parse(source):
    """Parse a program into an `ast.Program`.

    Args:
        source: (str) Program text
    Returns:
        (ast.Program) Parsed statements
    Raises:
        ParseError: Source is not valid syntax
    """
    tree = parse_tree(source)
    try:
        return _Builder().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise


def parse_tree(source):
    """Parse a program into the raw lark tree, mainly for diagnostics."""
    try:
        return _lark_parser("mlrepl").parse(source)
    except UnexpectedInput as e:
        raise ParseError(_describe(e, source), e.line, e.column) from None


def _describe(error, source):
    """Message for a lark syntax error, with a caret under the location."""
    if isinstance(error, UnexpectedEOF):
        problem = "unexpected end of input"
    elif isinstance(error, UnexpectedCharacters):
        problem = f"unexpected character {error.char!r}"
    elif error.token.type == "$END":
        problem = "unexpected end of input"
    else:
        problem = f"unexpected token {str(error.token)!r}"

    if error.line is None or error.line < 0:
        return f"Syntax error: {problem}"
    context = error.get_context(source).rstrip("\n")
    return f"Syntax error at line {error.line}, column {error.column}: {problem}\n{context}"


def _position(token):
    return (token.line, token.column)


class _Builder(lark.Transformer):
    """Routes lark trees to syntax nodes."""

    def start(self, children):
        return ast.Program(children)

    def let_def(self, children):
        name, value = children
        return ast.Let(str(name), value)

    def let_rec_def(self, children):
        name, value = children
        return ast.Let(str(name), value, rec=True)

    def func(self, children):
        param, body = children
        return ast.Func(str(param), body)

    def let_in(self, children):
        name, value, body = children
        return ast.LetIn(str(name), value, body)

    def if_expr(self, children):
        return ast.If(*children)

    def match_expr(self, children):
        subject, *arms = children
        return ast.Match(subject, arms)

    def arm(self, children):
        (tag, name), body = children
        return ast.Arm(tag, name, body)

    def tag_pattern(self, children):
        tag, name = children
        return (str(tag), str(name))

    def any_pattern(self, children):
        return (None, str(children[0]))

    def assign(self, children):
        return ast.Assign(*children)

    def binary_op(self, children):
        left, op, right = children
        node = ast.BinaryOp(str(op), left, right)
        node.position = _position(op)
        return node

    def neg(self, children):
        return ast.Neg(children[1])

    def deref(self, children):
        return ast.Deref(children[0])

    def apply(self, children):
        return ast.Apply(*children)

    def tagged(self, children):
        tag, payload = children
        return ast.Tag(str(tag), payload)

    def new_ref(self, children):
        return ast.NewRef(children[0])

    def field_access(self, children):
        base, name = children
        return ast.Field(base, str(name))

    def number(self, children):
        return ast.Number(children[0])

    def string(self, children):
        token = children[0]
        try:
            value = json.loads(token, strict=False)
        except ValueError:
            raise ParseError(
                f"Syntax error at line {token.line}, column {token.column}: "
                f"invalid escape in string {str(token)}",
                token.line, token.column) from None
        return ast.String(value)

    def true(self, children):
        return ast.Bool(True)

    def false(self, children):
        return ast.Bool(False)

    def var(self, children):
        token = children[0]
        node = ast.Var(str(token))
        node.position = _position(token)
        return node

    def record(self, children):
        return ast.Record(c for c in children if c is not None)

    def record_update(self, children):
        base, *fields = children
        return ast.RecordUpdate(base, fields)

    def field_def(self, children):
        name, value = children
        return (str(name), value)


_parsers = {}


def _lark_parser(name):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(
        path, rel_to=__file__, parser="lalr", propagate_positions=True
    )
    _parsers[name] = parser
    return parser
