"""Test the compile, evaluate and print cycle with scripted collaborators."""

import pytest

import mlrepl
import repltest
from mlrepl import Style


def test_submit_success():
    drv = repltest.driver({"answer": 42.0})
    result = drv.submit("answer")
    assert result == mlrepl.ExecutionResult(True, "42.0")
    assert drv.output.lines == [
        mlrepl.Line(">> answer", Style.INPUT),
        mlrepl.Line("42.0", Style.SUCCESS),
    ]
    assert drv.host.evaluated == ["(answer)"]


def test_submit_trims_input():
    drv = repltest.driver({"x": 1})
    result = drv.submit("   x \n")
    assert result.success
    assert drv.history.entries == ["x"]
    assert drv.output.texts(Style.INPUT) == [">> x"]
    assert drv.session.calls == ["x"]


@pytest.mark.parametrize("text", ["", "   ", "\n\t  \n"])
def test_blank_submit_is_noop(text):
    drv = repltest.driver({"x": 1})
    assert drv.submit(text) is None
    assert drv.history.entries == []
    assert drv.output.lines == []
    assert drv.session.calls == []


def test_submit_records_history_without_duplicates():
    drv = repltest.driver({"x": 1, "y": 2})
    drv.submit("x")
    drv.submit("x")
    drv.submit("y")
    assert drv.history.entries == ["x", "y"]
    # Output still shows both runs of x
    assert drv.output.texts(Style.INPUT) == [">> x", ">> x", ">> y"]


def test_submit_resets_history_cursor():
    drv = repltest.driver({"x": 1, "y": 2})
    drv.submit("x")
    drv.submit("y")
    assert drv.older() == "y"
    assert drv.older() == "x"
    drv.newer()
    drv.submit("x")
    assert drv.history.offset == -1


def test_compile_failure():
    drv = repltest.driver({})
    drv.session.error = "Syntax error at line 1, column 3: unexpected token ')'"
    result = drv.submit("1 +)")
    assert not result.success
    assert result.message == "Syntax error at line 1, column 3: unexpected token ')'"
    assert isinstance(result.error, mlrepl.CompileError)
    assert drv.output.lines[-1] == mlrepl.Line(result.message, Style.ERROR)
    # Failed lines are still recorded
    assert drv.history.entries == ["1 +)"]
    assert drv.host.evaluated == []


def test_compiler_raising_is_internal_error():
    session = repltest.FakeSession({"boom": RuntimeError("codegen exploded")})
    drv = mlrepl.ReplDriver(session, host=repltest.FakeHost())
    result = drv.execute("boom")
    assert not result.success
    assert result.message == "internal compiler error: RuntimeError: codegen exploded"
    assert isinstance(result.error, mlrepl.InternalCompilerError)
    assert isinstance(result.error.__cause__, RuntimeError)


def test_get_output_raising_is_internal_error():
    class BrokenOutput(repltest.FakeSession):
        def get_output(self):
            raise ValueError("no output")

    drv = mlrepl.ReplDriver(BrokenOutput({"x": "x"}), host=repltest.FakeHost())
    result = drv.execute("x")
    assert result.message == "internal compiler error: ValueError: no output"
    assert isinstance(result.error, mlrepl.InternalCompilerError)


def test_evaluation_error():
    drv = repltest.driver({"bad": ZeroDivisionError("float division by zero")})
    result = drv.submit("bad")
    assert not result.success
    assert result.message == "evaluation error: ZeroDivisionError: float division by zero"
    assert isinstance(result.error, mlrepl.EvaluationError)
    assert drv.output.lines[-1].style == Style.ERROR


def test_evaluation_error_without_message():
    drv = repltest.driver({"bad": KeyError()})
    assert drv.execute("bad").message == "evaluation error: KeyError"


def test_execute_does_not_touch_history_or_output():
    drv = repltest.driver({"x": 1})
    drv.execute("x")
    assert drv.history.entries == []
    assert drv.output.lines == []


def test_printed_value_is_cycle_safe():
    rec = mlrepl.Record({"n": 1.0})
    rec["me"] = rec
    drv = repltest.driver({"rec": rec})
    assert drv.execute("rec").message == "{n=1.0; me=...}"


def test_recompile_all_resets_and_clears():
    drv = repltest.driver({"a": 1, "b": 2, "prog": "done"})
    drv.submit("a")
    drv.submit("b")
    assert len(drv.output.lines) == 4

    result = drv.recompile_all("prog\n")
    assert result.success
    assert drv.session.resets == 1
    assert drv.output.lines == [mlrepl.Line('"done"', Style.SUCCESS)]
    # Not echoed, not recorded
    assert drv.history.entries == ["a", "b"]


def test_recompile_all_failure_still_clears():
    drv = repltest.driver({"a": 1})
    drv.submit("a")
    result = drv.recompile_all("nonsense")
    assert not result.success
    assert drv.output.lines == [mlrepl.Line(result.message, Style.ERROR)]


def test_recompile_all_blank_is_noop():
    drv = repltest.driver({"a": 1})
    drv.submit("a")
    assert drv.recompile_all("  \n ") is None
    assert drv.session.resets == 0
    assert len(drv.output.lines) == 2


def test_navigation_with_empty_history():
    drv = repltest.driver({})
    assert drv.older() is None
    assert drv.newer() is None


def test_result_style():
    assert mlrepl.ExecutionResult(True, "1").style == Style.SUCCESS
    assert mlrepl.ExecutionResult(False, "no").style == Style.ERROR


def test_default_collaborators():
    drv = mlrepl.ReplDriver(mlrepl.Session())
    assert isinstance(drv.host, mlrepl.PythonHost)
    assert isinstance(drv.output, mlrepl.OutputSink)
    assert isinstance(drv.history, mlrepl.HistoryLog)
    assert isinstance(drv.session, mlrepl.CompilerSession)
    assert isinstance(drv.host, mlrepl.EvaluationHost)


def test_console_sink_renders_lines():
    import io
    from rich.console import Console

    buffer = io.StringIO()
    console = Console(file=buffer, theme=mlrepl.create_theme(), no_color=True, width=80)
    drv = repltest.driver({"[bold]x[/]": 1}, output=mlrepl.ConsoleSink(console))
    drv.submit("[bold]x[/]")
    text = buffer.getvalue()
    # Markup-looking text is printed literally
    assert ">> [bold]x[/]" in text
    assert "1" in text.splitlines()[1]
