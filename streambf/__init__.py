"""
streambf - a streaming Brainfuck interpreter

The program is read lazily from a byte stream, one instruction at a time.
Loop targets are discovered on the fly and cached in a jump map, so a
program never has to be parsed up front.

    >   Move the data pointer right
    <   Move the data pointer left
    +   Increment the cell at the data pointer
    -   Decrement the cell at the data pointer
    .   Output the cell as a character
    ,   Read one byte of input into the cell
    [   Jump to the matching ] if the cell is 0
    ]   Jump back to the matching [ if the cell is nonzero

Everything else in the source is a comment.
"""

import logging

from .config import InterpreterConfig, load_config
from .dispatch import BUILTIN_COMMANDS, DispatchTable
from .errors import (
    ConfigError,
    EndOfProgram,
    InterpreterError,
    MissingInputError,
    StackUnderflowError,
    StepLimitExceeded,
    TapeBoundsError,
    UnbalancedLoopError,
)
from .interpreter import Interpreter
from .stack import Stack
from .tape import DataTape

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "BUILTIN_COMMANDS",
    "ConfigError",
    "DataTape",
    "DispatchTable",
    "EndOfProgram",
    "Interpreter",
    "InterpreterConfig",
    "InterpreterError",
    "MissingInputError",
    "Stack",
    "StackUnderflowError",
    "StepLimitExceeded",
    "TapeBoundsError",
    "UnbalancedLoopError",
    "load_config",
]
