#!/usr/bin/env python3
"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the character signified by the cell at the pointer
    ,   Input a character and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments. They are stripped before
execution unless the interpreter runs in raw mode, where they stay in
place as no-ops.
"""

import logging
import re
import sys
from typing import Dict, Optional

import numpy as np

from bfcore import keyboard
from bfcore.errors import (
    BrainfuckError,
    ConfigurationError,
    InvalidInputEncodingError,
    MalformedProgramError,
    PointerOverflowError,
    PointerUnderflowError,
)
from bfcore.options import InterpreterOptions

__all__ = [
    'BrainfuckInterpreter', 'INSTRUCTIONS', 'filter_tokens',
    'BrainfuckError', 'ConfigurationError', 'InvalidInputEncodingError',
    'MalformedProgramError', 'PointerOverflowError', 'PointerUnderflowError',
]

logger = logging.getLogger("bfinterp.interpreter")

PTR_LEFT = '<'
PTR_RIGHT = '>'
STD_IN = ','
STD_OUT = '.'
BGN_LOOP = '['
END_LOOP = ']'
INCREMENT = '+'
DECREMENT = '-'

INSTRUCTIONS = PTR_LEFT + PTR_RIGHT + STD_IN + STD_OUT + BGN_LOOP + END_LOOP + INCREMENT + DECREMENT

HEX_BYTE = re.compile(r'[0-9a-fA-F]{1,2}')


def filter_tokens(code: str) -> str:
    """Remove comments (keep only valid BF commands)."""
    return ''.join(c for c in code if c in INSTRUCTIONS)


class BrainfuckInterpreter:
    def __init__(self, options: Optional[InterpreterOptions] = None, stdin=None, stdout=None):
        self.options = options if options is not None else InterpreterOptions()
        self.memory = self._allocate_tape(self.options.tape_size)
        self.pointer = 0
        self.running = False
        # None means "whatever sys.stdin/sys.stdout is at call time"
        self._stdin = stdin
        self._stdout = stdout
        self._matches: Dict[int, int] = {}

    @staticmethod
    def _allocate_tape(size) -> np.ndarray:
        if isinstance(size, bool) or not isinstance(size, int):
            raise ConfigurationError(f"Tape size must be an integer, got {size!r}")
        if size < 1:
            raise ConfigurationError(f"Tape size must be at least 1, got {size}")
        try:
            return np.zeros(size, dtype=np.uint8)
        except (MemoryError, ValueError) as e:
            raise ConfigurationError(f"Cannot allocate a tape of {size} cells: {e}") from e

    @property
    def tape(self) -> np.ndarray:
        return self.memory

    @property
    def stdin(self):
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self):
        return self._stdout if self._stdout is not None else sys.stdout

    def run(self, code: str) -> int:
        """Execute Brainfuck code and return the number of tokens processed.

        The tape and pointer are cleared before returning, whether the
        program finished or raised, so the interpreter can be reused.
        """
        if self.options.filter_tokens:
            code = filter_tokens(code)

        tape_size = self.options.tape_size
        memory = self.memory
        self._matches = {}
        self.running = True
        logger.debug("Running %d tokens on a %d cell tape", len(code), tape_size)

        i = 0
        step_count = 0
        try:
            while i < len(code):
                cmd = code[i]

                if cmd == PTR_LEFT:
                    if self.pointer > 0:
                        self.pointer -= 1
                    elif self.options.wrap_buffer:
                        self.pointer = tape_size - 1
                    else:
                        raise PointerUnderflowError(0)

                elif cmd == PTR_RIGHT:
                    if self.pointer < tape_size - 1:
                        self.pointer += 1
                    elif self.options.wrap_buffer:
                        self.pointer = 0
                    else:
                        raise PointerOverflowError(tape_size)

                elif cmd == INCREMENT:
                    memory[self.pointer] = (int(memory[self.pointer]) + 1) & 0xFF

                elif cmd == DECREMENT:
                    memory[self.pointer] = (int(memory[self.pointer]) - 1) & 0xFF

                elif cmd == STD_OUT:
                    # One character per cell; the stream's encoding decides the bytes
                    self.stdout.write(chr(memory[self.pointer]))
                    self.stdout.flush()

                elif cmd == STD_IN:
                    memory[self.pointer] = self._read_byte()

                elif cmd == BGN_LOOP:
                    if memory[self.pointer] == 0:
                        i = self._find_closing_bracket(code, i)

                elif cmd == END_LOOP:
                    if memory[self.pointer] != 0:
                        i = self._find_opening_bracket(code, i)

                i += 1
                step_count += 1
        except BrainfuckError as e:
            logger.warning("Run aborted at token %d: %s", i, e)
            raise
        finally:
            self.reset()
            self.running = False

        logger.debug("Run finished after %d instructions", step_count)
        return step_count

    execute = run

    def reset(self) -> None:
        """Clear every cell and move the pointer back to 0."""
        self.memory.fill(0)
        self.pointer = 0

    def _read_byte(self) -> int:
        """Read one byte for ',' according to the input mode."""
        if self.options.realtime_input:
            key = keyboard.read_keypress(self.stdin)
            return ord(key) & 0xFF if key else 0

        line = self.stdin.readline()
        if self.options.binary_input:
            token = line.strip()
            if not HEX_BYTE.fullmatch(token):
                raise InvalidInputEncodingError(token)
            return int(token, 16)

        # End of stream stores 0
        return ord(line[0]) & 0xFF if line else 0

    def _find_closing_bracket(self, code: str, open_idx: int) -> int:
        """Scan right from a '[' for its partner."""
        if open_idx in self._matches:
            return self._matches[open_idx]
        close_idx = open_idx
        depth = 1
        while depth > 0:
            close_idx += 1
            if close_idx >= len(code):
                raise MalformedProgramError(BGN_LOOP, open_idx)
            c = code[close_idx]
            if c == BGN_LOOP:
                depth += 1
            elif c == END_LOOP:
                depth -= 1
        self._matches[open_idx] = close_idx
        self._matches[close_idx] = open_idx
        return close_idx

    def _find_opening_bracket(self, code: str, close_idx: int) -> int:
        """Scan left from a ']' for its partner."""
        if close_idx in self._matches:
            return self._matches[close_idx]
        open_idx = close_idx
        depth = 1
        while depth > 0:
            open_idx -= 1
            if open_idx < 0:
                raise MalformedProgramError(END_LOOP, close_idx)
            c = code[open_idx]
            if c == END_LOOP:
                depth += 1
            elif c == BGN_LOOP:
                depth -= 1
        self._matches[open_idx] = close_idx
        self._matches[close_idx] = open_idx
        return open_idx
