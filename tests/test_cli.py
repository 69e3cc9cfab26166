"""Test the command-line interface."""

import subprocess
import sys
from pathlib import Path

import mlrepl
import mlrepl.__main__ as cli


EXAMPLES = Path(__file__).parent.parent / "examples"


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "mlrepl", *args],
        capture_output=True,
        text=True,
    )


def test_cli_eval_example():
    """Test evaluating the counter example."""
    result = run_cli(str(EXAMPLES / "counter.ml"), "--eval")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert result.stdout.strip() == "{value=`1`1`End{}; steps=3.0}"


def test_cli_eval_text():
    result = run_cli("let x = 20 in x + 1", "--text", "--eval")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert result.stdout.strip() == "21.0"


def test_cli_eval_error():
    result = run_cli("1 +", "--text", "--eval")
    assert result.returncode == 1
    assert result.stdout == ""
    assert "Syntax error" in result.stderr


def test_cli_compile():
    result = run_cli("`Some 1", "--text", "--compile")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert result.stdout.strip() == "Tagged('`Some', 1.0)"


def test_cli_compile_error():
    result = run_cli("missing", "--text", "--compile")
    assert result.returncode == 1
    assert "Unbound variable missing" in result.stderr


def test_cli_lark_tree(tmp_path):
    source = tmp_path / "prog.ml"
    source.write_text("f 1")
    result = run_cli(str(source), "--lark", "--pos")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "apply @1:1" in result.stdout


def test_cli_missing_file():
    result = run_cli("does_not_exist.ml", "--eval")
    assert result.returncode == 1
    assert "File not found" in result.stderr


def test_cli_modes_cannot_combine():
    result = run_cli("1", "--text", "--eval", "--compile")
    assert result.returncode == 2
    assert "cannot be combined" in result.stderr


def test_main_in_process(capsys):
    assert cli.main(["{a = \"x\"}", "--text", "--eval"]) == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == '{a="x"}'


def test_cli_eval_fibonacci_example():
    result = run_cli(str(EXAMPLES / "fibonacci.ml"), "--eval")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert result.stdout.strip() == "{}"


def test_tree_lines_outline():
    tree = mlrepl.parse_tree("f `A {}")
    assert list(cli.tree_lines(tree)) == [
        "start",
        "  apply",
        "    var",
        "      NAME 'f'",
        "    tagged",
        "      TAG '`A'",
        "      record",
    ]
