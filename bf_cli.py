#!/usr/bin/env python3
"""
Command line front end for the Brainfuck interpreter.

    bf-interp [options] input

input is a *.bf file, or the program text itself with -i/--interpret.
"""

import argparse
import logging
import sys
from typing import List, Optional

from brainfuck import BrainfuckInterpreter
from bfcore.bf_runner import run_file
from bfcore.errors import BrainfuckError
from bfcore.logging_config import setup_logging
from bfcore.options import InterpreterOptions, load_options

logger = logging.getLogger("bfinterp.cli")


class Colors:
    FAIL = '\033[91m'
    ENDC = '\033[0m'


def print_error(msg: str) -> None:
    print(f"{Colors.FAIL}{msg}{Colors.ENDC}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bf-interp", description="Run Brainfuck programs")
    ap.add_argument("-r", "--realtime", action="count", default=0, help="Realtime input mode")
    ap.add_argument("-b", "--binary-input", action="count", default=0, help="Binary input mode")
    ap.add_argument("-w", "--wrap-buffer", action="count", default=0, help="Wrap buffer instead of overflow exception")
    ap.add_argument("-s", "--buffer-size", type=int, default=None, help="Sets the buffer size. Default 30000")
    ap.add_argument("-i", "--interpret", action="store_true", help="Parse the CLI input")
    ap.add_argument("--raw", action="count", default=0, help="Process input raw without scrubbing")
    ap.add_argument("-c", "--config", default=None, help="YAML file with interpreter options")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    ap.add_argument("--log-file", default=None, help="Also write logs to this file")
    ap.add_argument("input", help="The *.bf file, or the program text in interpret mode")
    return ap


def options_from_args(args: argparse.Namespace) -> InterpreterOptions:
    """Start from the YAML options (if any), then toggle once per flag occurrence."""
    options = load_options(args.config) if args.config else InterpreterOptions()
    for _ in range(args.realtime):
        options.toggle_realtime_input()
    for _ in range(args.binary_input):
        options.toggle_binary_input()
    for _ in range(args.wrap_buffer):
        options.toggle_wrap_buffer()
    for _ in range(args.raw):
        options.toggle_raw_input()
    if args.buffer_size is not None:
        options.set_tape_size(args.buffer_size)
    return options


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    ap = build_parser()
    if not argv:
        ap.print_help()
        return 0
    args = ap.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(level, args.log_file)

    try:
        options = options_from_args(args)
        logger.info("Options: %s", options.to_dict())
        if args.interpret:
            BrainfuckInterpreter(options).run(args.input)
        else:
            run_file(args.input, options)
    except (BrainfuckError, OSError) as e:
        print_error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
