"""Faults raised by the interpreter. All of them derive from BrainfuckError."""


class BrainfuckError(Exception):
    """Base class for every interpreter fault."""


class PointerUnderflowError(BrainfuckError, IndexError):
    def __init__(self, boundary: int = 0):
        super().__init__(f"Pointer fell below the minimum ({boundary})")
        self.boundary = boundary


class PointerOverflowError(BrainfuckError, IndexError):
    def __init__(self, boundary: int):
        super().__init__(f"Pointer is above the tape size ({boundary})")
        self.boundary = boundary


class MalformedProgramError(BrainfuckError, SyntaxError):
    """Raised when a bracket has no partner in the instruction sequence."""

    def __init__(self, bracket: str, position: int):
        super().__init__(f"Unmatched '{bracket}' at position {position}")
        self.bracket = bracket
        self.position = position


class InvalidInputEncodingError(BrainfuckError, ValueError):
    def __init__(self, token: str):
        super().__init__(f"Expected a hexadecimal byte, got {token!r}")
        self.token = token


class ConfigurationError(BrainfuckError, ValueError):
    pass
