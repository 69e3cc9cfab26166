"""Compile, evaluate and print cycle for interactive sessions."""

__all__ = ["ExecutionResult", "ReplDriver", "INPUT_PREFIX"]

import logging
from dataclasses import dataclass

from ._error import CompileError, InternalCompilerError, EvaluationError, describe
from ._history import HistoryLog
from ._output import OutputSink, Style
from ._printer import Printer
from ._session import PythonHost


logger = logging.getLogger(__name__)

INPUT_PREFIX = ">> "


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one compile and evaluate cycle.

    Attributes:
        success: (bool) True if a value was produced
        message: (str) Printed value, or the error text
        error: (ReplError | None) Classified failure when not successful
    """
    success: bool
    message: str
    error: Exception | None = None

    @property
    def style(self):
        return Style.SUCCESS if self.success else Style.ERROR


class ReplDriver:
    """State for one interactive REPL instance.

    Owns the command history and holds references to the collaborators.
    `submit` accumulates definitions in the compiler session from call to
    call, `recompile_all` starts the session over from nothing.

    Args:
        session: (CompilerSession) Compiler used for every cycle
        host: (EvaluationHost | None) Runs compiled code, a PythonHost
            if not given
        output: (OutputSink | None) Receives rendered lines
        history: (HistoryLog | None) Command history

    Attributes:
        session: Compiler session, shared and never copied
        host: Evaluation host
        output: (OutputSink) Rendered lines
        history: (HistoryLog) Submitted commands
    """

    def __init__(self, session, host=None, output=None, history=None):
        self.session = session
        self.host = host if host is not None else PythonHost()
        self.output = output if output is not None else OutputSink()
        self.history = history if history is not None else HistoryLog()

    def submit(self, text):
        """Run one line typed at the prompt.

        Blank input does nothing at all. Otherwise the line is recorded
        in the history (whether or not it compiles), echoed to the output,
        and followed by its result.

        Returns:
            (ExecutionResult | None) Result, None for blank input
        """
        line = text.strip()
        if not line:
            return None

        self.history.record(line)
        self.output.append(INPUT_PREFIX + line, Style.INPUT)
        return self._emit(self.execute(line))

    def recompile_all(self, text):
        """Compile and run a whole program in a freshly reset session.

        Earlier output is cleared first. The program is neither echoed nor
        recorded in the history.

        Returns:
            (ExecutionResult | None) Result, None for a blank program
        """
        source = text.strip()
        if not source:
            return None

        self.output.clear()
        self.session.reset()
        logger.debug("Compiler session reset for full recompile")
        return self._emit(self.execute(source))

    def execute(self, code):
        """Compile and evaluate code, converting every failure to a result.

        Args:
            code: (str) Source text
        Returns:
            (ExecutionResult) Never raises for ordinary exceptions
        """
        try:
            if not self.session.process(code):
                err = CompileError(self.session.get_error())
                logger.debug("Compile failed: %s", err)
                return ExecutionResult(False, str(err), err)
            compiled = "(" + self.session.get_output() + ")"
        except Exception as e:
            err = InternalCompilerError(f"internal compiler error: {describe(e)}")
            err.__cause__ = e
            logger.debug("Compiler raised while processing input", exc_info=True)
            return ExecutionResult(False, str(err), err)

        try:
            value = self.host.evaluate(compiled)
            message = Printer().print(value)
        except Exception as e:
            err = EvaluationError(f"evaluation error: {describe(e)}")
            err.__cause__ = e
            logger.debug("Evaluation failed: %s", err)
            return ExecutionResult(False, str(err), err)

        return ExecutionResult(True, message)

    def older(self):
        """Step back through history.

        Returns:
            (str | None) Entry to show in the input field, None if empty
        """
        return self.history.older()

    def newer(self):
        """Step forward through history.

        Returns:
            (str | None) Entry to show in the input field, None if empty
        """
        return self.history.newer()

    def _emit(self, result):
        self.output.append(result.message, result.style)
        return result
