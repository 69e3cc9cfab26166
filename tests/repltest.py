"""Unit testing quality of life and readability helpers for REPL tests."""

import pytest

import mlrepl


def params(names, **cases):
    """Simplified parametrize decorator for test cases.

    Args:
        names: Space or comma-separated string of parameter names
        **cases: Named test cases where key is the test ID and value is
                either a single argument or tuple of arguments

    Returns:
        pytest.mark.parametrize decorator with 'key' as first parameter

    Example:
        @params("value expected", int=(4, "4"))
        def test_print(key, value, expected):
            assert mlrepl.format_value(value) == expected
    """
    keys = list(cases)
    params = []
    for k, v in cases.items():
        if isinstance(v, tuple):
            params.append((k, *v))
        else:
            params.append((k, v))

    columns = names.replace(",", " ").split()
    columns.insert(0, "key")
    return pytest.mark.parametrize(columns, params, ids=keys)


class FakeSession:
    """Scripted compiler session.

    `programs` maps source text to compiled output; any other source fails
    to compile with a fixed diagnostic. A source mapped to an exception
    instance makes `process` raise it.
    """

    def __init__(self, programs=None, error="Syntax error: bad input"):
        self.programs = dict(programs or {})
        self.error = error
        self.calls = []
        self.resets = 0
        self._last = None

    def process(self, source):
        self.calls.append(source)
        compiled = self.programs.get(source)
        if isinstance(compiled, BaseException):
            raise compiled
        self._last = compiled
        return compiled is not None

    def get_output(self):
        return self._last

    def get_error(self):
        return self.error

    def reset(self):
        self.resets += 1


class FakeHost:
    """Evaluation host returning canned values or raising canned errors."""

    def __init__(self, values=None):
        self.values = dict(values or {})
        self.evaluated = []

    def evaluate(self, code):
        self.evaluated.append(code)
        value = self.values[code]
        if isinstance(value, BaseException):
            raise value
        return value


def driver(source_values=None, **kwargs):
    """Driver with fakes where each source compiles to itself.

    Args:
        source_values: (dict) Source text mapped to the evaluated value
    """
    source_values = source_values or {}
    session = FakeSession({src: src for src in source_values})
    host = FakeHost({f"({src})": value for src, value in source_values.items()})
    return mlrepl.ReplDriver(session, host=host, **kwargs)


def run(*lines):
    """Submit lines to a driver using the reference compiler.

    Returns:
        (ReplDriver) Driver after every line ran
    """
    drv = mlrepl.ReplDriver(mlrepl.Session())
    for line in lines:
        drv.submit(line)
    return drv


def eval_text(source):
    """Evaluate a program with a fresh session and return the printed result.

    Fails the test if the program does not run successfully.
    """
    result = mlrepl.ReplDriver(mlrepl.Session()).execute(source)
    assert result.success, result.message
    return result.message
