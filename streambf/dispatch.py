"""
Command dispatch for the interpreter.

Each command is a plain function taking the running Interpreter and mutating
it. The DispatchTable maps a symbol byte to its command; hosts can add,
replace or remove commands at any time to extend the language:

    def double(interp):
        interp.tape[interp.dp] = interp.tape.value(interp.dp) * 2
        interp.pc += 1

    interp.commands.set("*", double)
"""

import logging
from typing import Callable, Dict, Iterator, Optional, Union

from .errors import MissingInputError

logger = logging.getLogger(__name__)

Command = Callable[["Interpreter"], None]  # noqa: F821
Symbol = Union[str, bytes, int]

REPLACEMENT_CHARACTER = "\ufffd"


def to_symbol(symbol: Symbol) -> int:
    """Normalize a one character str, one byte bytes or an int to a byte value."""
    if isinstance(symbol, int):
        value = symbol
    elif isinstance(symbol, (bytes, bytearray)) and len(symbol) == 1:
        value = symbol[0]
    elif isinstance(symbol, str) and len(symbol) == 1:
        value = ord(symbol)
    else:
        raise ValueError(f"a symbol must be a single byte, got {symbol!r}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"a symbol must be a single byte, got {symbol!r}")
    return value


def encode_cell(value: int) -> bytes:
    """UTF-8 bytes for the code point in a cell; U+FFFD when it is not a valid one."""
    if 0 <= value <= 0x10FFFF and not 0xD800 <= value <= 0xDFFF:
        return chr(value).encode("utf-8")
    return REPLACEMENT_CHARACTER.encode("utf-8")


def move_right(interp):
    interp.tape.check(interp.dp + 1)
    interp.dp += 1
    interp.pc += 1


def move_left(interp):
    interp.tape.check(interp.dp - 1)
    interp.dp -= 1
    interp.pc += 1


def increment(interp):
    interp.tape.add(interp.dp, 1)
    interp.pc += 1


def decrement(interp):
    interp.tape.sub(interp.dp, 1)
    interp.pc += 1


def output(interp):
    """Write the current cell as a character. Write errors are logged, not raised."""
    data = encode_cell(interp.tape.value(interp.dp))
    try:
        interp.writer.write(data)
    except OSError as e:
        if interp.config.strict_io:
            raise
        logger.warning("%s while writing output at pc=%d", e, interp.pc)
    interp.pc += 1


def read_input(interp):
    """Read one byte of input into the current cell.

    End of input and read errors leave 0 in the cell and are logged.
    """
    if interp.input_reader is None:
        raise MissingInputError(f"',' at pc={interp.pc} but no input stream was given")

    value = 0
    try:
        data = interp.input_reader.read(1)
    except OSError as e:
        if interp.config.strict_io:
            raise
        logger.warning("%s while reading input at pc=%d", e, interp.pc)
    else:
        if data:
            value = data[0] if isinstance(data, (bytes, bytearray)) else ord(data[0])
        else:
            if interp.config.strict_io:
                raise EOFError(f"end of input at pc={interp.pc}")
            logger.warning("end of input at pc=%d, storing 0", interp.pc)
    interp.tape[interp.dp] = value
    interp.pc += 1


def loop_open(interp):
    interp.loop_stack.push(interp.pc)
    if interp.tape.is_zero(interp.dp):
        # Jump to the matching ']', which pops the stack and steps past itself
        target = interp.jump_map.get(interp.pc)
        if target is None:
            interp.find_closing_brace()
            target = interp.jump_map[interp.pc]
        interp.pc = target
    else:
        interp.pc += 1


def loop_close(interp):
    start = interp.loop_stack.pop()
    interp.jump_map[start] = interp.pc
    if interp.tape.is_zero(interp.dp):
        interp.pc += 1
    else:
        interp.pc = start


BUILTIN_COMMANDS: Dict[str, Command] = {
    ">": move_right,
    "<": move_left,
    "+": increment,
    "-": decrement,
    ".": output,
    ",": read_input,
    "[": loop_open,
    "]": loop_close,
}


class DispatchTable:
    """Mutable mapping from symbol byte to command."""

    def __init__(self, commands: Optional[Dict[Symbol, Command]] = None):
        self._commands: Dict[int, Command] = {}
        for symbol, command in (BUILTIN_COMMANDS if commands is None else commands).items():
            self.set(symbol, command)

    def set(self, symbol: Symbol, command: Command) -> None:
        """Add a command, or replace the one already bound to ``symbol``."""
        if not callable(command):
            raise TypeError(f"command for {symbol!r} is not callable")
        self._commands[to_symbol(symbol)] = command

    def remove(self, symbol: Symbol) -> None:
        """Remove a command. Removing an unknown symbol is a no-op."""
        self._commands.pop(to_symbol(symbol), None)

    def get(self, symbol: Symbol) -> Optional[Command]:
        return self._commands.get(to_symbol(symbol))

    def __contains__(self, symbol) -> bool:
        try:
            return to_symbol(symbol) in self._commands
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[int]:
        return iter(self._commands)

    def symbols(self) -> str:
        return "".join(chr(s) for s in sorted(self._commands))
