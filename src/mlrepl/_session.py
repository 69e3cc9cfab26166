"""Collaborator contracts consumed by the REPL driver.

The driver never looks inside either collaborator. A `CompilerSession`
turns source text into code for the evaluation host, an `EvaluationHost`
runs that code and hands back a value.
"""

__all__ = ["CompilerSession", "EvaluationHost", "PythonHost"]

import logging
import warnings
from typing import Any, Protocol, runtime_checkable

from . import _runtime


logger = logging.getLogger(__name__)


@runtime_checkable
class CompilerSession(Protocol):
    """Stateful compiler that accumulates definitions across calls."""

    def process(self, source: str) -> bool:
        """Compile source against the accumulated state.

        On success the new definitions become visible to later calls.
        """

    def get_output(self) -> str:
        """Compiled code from the last successful `process`."""

    def get_error(self) -> str:
        """Diagnostic from the last failed `process`."""

    def reset(self) -> None:
        """Forget every accumulated definition."""


@runtime_checkable
class EvaluationHost(Protocol):
    """Runs compiled code, raising whatever the program raises."""

    def evaluate(self, code: str) -> Any:
        ...


class PythonHost:
    """Evaluation host for compiled Python expressions.

    All evaluations share one globals namespace, so definitions made by
    one submission are visible to the next.

    Args:
        namespace: (dict | None) Globals to evaluate in, a fresh
            runtime namespace if not given
    """

    def __init__(self, namespace=None):
        self.namespace = namespace if namespace is not None else _runtime.namespace()

    def evaluate(self, code):
        logger.debug("Evaluating %d characters of compiled code", len(code))
        with warnings.catch_warnings():
            # Calls on literals are reported at runtime as TypeError instead
            warnings.simplefilter("ignore", SyntaxWarning)
            code_obj = compile(code, "<repl>", "eval")
        return eval(code_obj, self.namespace)
