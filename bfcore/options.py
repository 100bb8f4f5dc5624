"""
Interpreter options.

The front end builds one InterpreterOptions per run (from command line flags,
a YAML file or a program's ``[options: ...]`` header) and hands it to the
interpreter together with the program text.
"""

import os
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from bfcore.errors import ConfigurationError

DEFAULT_TAPE_SIZE = 30000


def default_tape_size() -> int:
    """Tape size from the BF_TAPE_SIZE environment variable, else 30000."""
    value = os.environ.get("BF_TAPE_SIZE")
    if value is None:
        return DEFAULT_TAPE_SIZE
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid BF_TAPE_SIZE: {value!r}") from None


@dataclass
class InterpreterOptions:
    """Execution policy for a single interpreter."""
    tape_size: int = field(default_factory=default_tape_size)
    wrap_buffer: bool = False
    binary_input: bool = False
    raw_input: bool = False
    realtime_input: bool = False

    @property
    def filter_tokens(self) -> bool:
        """Whether non-instruction characters are stripped before running."""
        return not self.raw_input

    def toggle_wrap_buffer(self) -> 'InterpreterOptions':
        self.wrap_buffer = not self.wrap_buffer
        return self

    def toggle_binary_input(self) -> 'InterpreterOptions':
        self.binary_input = not self.binary_input
        return self

    def toggle_raw_input(self) -> 'InterpreterOptions':
        self.raw_input = not self.raw_input
        return self

    def toggle_realtime_input(self) -> 'InterpreterOptions':
        self.realtime_input = not self.realtime_input
        return self

    def set_tape_size(self, size: int) -> 'InterpreterOptions':
        # Checked by the interpreter when it allocates the tape
        self.tape_size = size
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InterpreterOptions':
        """Create from a mapping of field names (e.g. a parsed YAML document)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")
        return cls(**data)


def load_options(path: Union[str, Path]) -> InterpreterOptions:
    """Load interpreter options from a YAML mapping such as::

        tape_size: 512
        wrap_buffer: true
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Options file not found: {path}")
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    if data is None:
        return InterpreterOptions()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Options file must contain a mapping: {path}")
    return InterpreterOptions.from_dict(data)


def apply_option(options: InterpreterOptions, name: str, value: Optional[str] = None) -> bool:
    """Apply one front-end flag by short or long name.

    Boolean flags toggle, so naming a flag twice cancels it out.
    Returns False for names that are not interpreter options.
    """
    if name in ('r', 'realtime'):
        options.toggle_realtime_input()
    elif name in ('b', 'binaryInput', 'binary-input'):
        options.toggle_binary_input()
    elif name in ('w', 'wrapBuffer', 'wrap-buffer'):
        options.toggle_wrap_buffer()
    elif name == 'raw':
        options.toggle_raw_input()
    elif name in ('s', 'bufferSize', 'buffer-size'):
        try:
            options.set_tape_size(int(value))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid buffer size: {value!r}") from None
    else:
        return False
    return True
