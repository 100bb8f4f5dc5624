import io
import logging
from pathlib import Path
from typing import Optional, Union

from brainfuck import BrainfuckInterpreter
from bfcore.errors import ConfigurationError
from bfcore.options import InterpreterOptions, apply_option

logger = logging.getLogger("bfinterp.runner")

HEADER_PREFIX = "[options:"


def run_program(code: str, input_text: str = "", options: Optional[InterpreterOptions] = None) -> str:
    """Execute BF code against an in-memory input stream, return everything it printed.
    Faults propagate unchanged.
    """
    out = io.StringIO()
    itp = BrainfuckInterpreter(options, stdin=io.StringIO(input_text), stdout=out)
    itp.run(code)
    return out.getvalue()


def read_source(path: Union[str, Path]) -> str:
    """Read a program file. Only *.bf files are accepted."""
    path = Path(path)
    if not str(path).endswith("bf"):
        raise ConfigurationError("Only *.bf files can be read by this interpreter")
    with open(path, 'r') as f:
        return f.read()


def apply_header_options(options: InterpreterOptions, source: str) -> InterpreterOptions:
    """Apply an inline ``[options: -w -s=100]`` header found at the start of a program.

    The header stays in the program text; since the tape starts zeroed it
    runs as a skipped loop.
    """
    if not source.startswith(HEADER_PREFIX):
        return options
    end = source.find("]")
    if end < 0:
        return options
    header = source[len(HEADER_PREFIX):end].replace("\n", " ").replace("\t", " ").replace("\r", "")
    for arg in header.split():
        if not arg.startswith("-"):
            continue
        name, _, value = arg.lstrip("-").partition("=")
        if not apply_option(options, name, value or None):
            logger.warning("Ignoring unknown header option %r", arg)
    return options


def run_file(path: Union[str, Path], options: Optional[InterpreterOptions] = None, stdin=None, stdout=None) -> int:
    """Load a .bf file, apply its header options and execute it."""
    source = read_source(path)
    options = apply_header_options(options if options is not None else InterpreterOptions(), source)
    logger.info("Running %s", path)
    return BrainfuckInterpreter(options, stdin=stdin, stdout=stdout).run(source)
