"""Error classes and helpers"""

__all__ = [
    "ReplError",
    "CompileError",
    "ParseError",
    "InternalCompilerError",
    "EvaluationError",
    "MatchError",
    "describe",
]


class ReplError(Exception):
    """Base for failures reported through an ExecutionResult."""


class CompileError(ReplError):
    """Compiler rejected the source text."""


class ParseError(CompileError):
    """Exception raised for syntax errors.

    Args:
        message: (str) Error description
        line: (int | None) Optional 1-based line where error occurred
        column: (int | None) Optional 1-based column where error occurred

    Attributes:
        message: (str) Error description
        line: (int | None) Line where error occurred
        column: (int | None) Column where error occurred
    """

    def __init__(self, message, line=None, column=None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(message)


class InternalCompilerError(ReplError):
    """Compile step raised instead of returning a result."""


class EvaluationError(ReplError):
    """Compiled program raised while being evaluated."""


class MatchError(Exception):
    """No match arm accepted the value."""


def describe(exc):
    """Short "Type: message" text for an exception."""
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name
