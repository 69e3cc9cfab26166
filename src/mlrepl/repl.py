"""Interactive REPL for the mlrepl language.

Reads lines with prompt_toolkit and renders the driver's output through a
rich console. Up and Down walk the driver's command history.
"""

import logging
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.key_binding import KeyBindings

import mlrepl


logger = logging.getLogger(__name__)

HELP = """\
Type an expression or definition to evaluate it, for example
    let inc = fun x -> x + 1
    inc 41
Definitions accumulate from line to line.
Commands:
    :load <file>   Reset the session and run a whole program
    :help          Show this text
    exit, quit, :q Leave the REPL"""

EXIT_COMMANDS = ("exit", "quit", ":q")


def create_driver(console=None):
    """Driver with the reference compiler that prints to a rich console."""
    return mlrepl.ReplDriver(mlrepl.Session(), output=mlrepl.ConsoleSink(console))


def history_bindings(driver):
    """Key bindings mapping Up/Down to history navigation."""
    kb = KeyBindings()

    @kb.add("up")
    def _older(event):
        _show(event.current_buffer, driver.older())

    @kb.add("down")
    def _newer(event):
        _show(event.current_buffer, driver.newer())

    return kb


def _show(buffer, text):
    if text is None:
        return
    buffer.text = text
    buffer.cursor_position = len(text)


def load_file(driver, path):
    """Run a program file through a full recompile.

    Returns:
        (ExecutionResult | None) Result, None if nothing ran
    """
    filepath = Path(path).expanduser()
    try:
        source = filepath.read_text(encoding="utf-8")
    except OSError as e:
        driver.output.append(f"Cannot read {filepath}: {e.strerror or e}", mlrepl.Style.ERROR)
        return None
    logger.debug("Loading %s", filepath)
    return driver.recompile_all(source)


def handle_command(driver, line):
    """Run a `:` command typed at the prompt.

    Returns:
        (bool) True if the line was a recognized command
    """
    name, _, arg = line.partition(" ")
    arg = arg.strip()
    if name == ":help":
        for text in HELP.splitlines():
            driver.output.append(text, mlrepl.Style.SUCCESS)
        return True
    if name == ":load":
        if not arg:
            driver.output.append("Usage: :load <file>", mlrepl.Style.ERROR)
        else:
            load_file(driver, arg)
        return True
    return False


def repl(driver=None, prompt_session=None):
    """Run the interactive REPL until end of input or an exit command."""
    if driver is None:
        driver = create_driver()
    if prompt_session is None:
        prompt_session = PromptSession(
            key_bindings=history_bindings(driver),
            # The driver echoes each line itself
            erase_when_done=True,
        )

    console = getattr(driver.output, "console", None)
    if console is not None:
        console.print(f"mlrepl v{mlrepl.__version__}", style="bold")
        console.print("Type :help for help, exit or Ctrl-D to quit.\n", style="dim")
    logger.debug("Initialized REPL")

    while True:
        try:
            line = prompt_session.prompt(mlrepl.INPUT_PREFIX)
        except EOFError:
            break
        except KeyboardInterrupt:
            continue

        stripped = line.strip()
        if stripped.lower() in EXIT_COMMANDS:
            break
        if stripped.startswith(":") and handle_command(driver, stripped):
            continue

        try:
            driver.submit(line)
        except KeyboardInterrupt:
            driver.output.append("Interrupted", mlrepl.Style.ERROR)
