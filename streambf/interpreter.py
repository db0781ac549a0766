#!/usr/bin/env python3
"""
Streaming Brainfuck interpreter.

The program is never parsed up front. Instructions are pulled from the source
stream only when the program counter reaches them, comments are dropped on the
way, and the accepted instructions are kept in ``program`` so loops can jump
back without touching the stream again.

Jump targets are cached in ``jump_map`` (loop open pc -> loop close pc). A
backward jump always finds its target on ``loop_stack``. A forward jump over a
loop that has never been read is resolved by ``find_closing_brace``, which
reads ahead to the matching ']' and records every nested pair it passes.
"""

import io
import logging
from typing import Dict, Optional, Union

from .config import InterpreterConfig
from .dispatch import Command, DispatchTable, Symbol
from .errors import EndOfProgram, StepLimitExceeded, UnbalancedLoopError
from .stack import Stack
from .tape import DataTape

logger = logging.getLogger(__name__)

LOOP_OPEN = ord("[")
LOOP_CLOSE = ord("]")


class Interpreter:
    """Interpreter state plus the fetch/dispatch loop that drives it.

    ``reader`` supplies the program, ``writer`` receives output and
    ``input_reader`` feeds ','. All three are binary file-like objects owned by
    the caller; the interpreter never closes them.
    """

    def __init__(self, reader, writer, input_reader=None, config: Optional[InterpreterConfig] = None):
        self.reader = reader
        self.writer = writer
        self.input_reader = input_reader
        self.config = (config or InterpreterConfig()).validate()

        self.program = bytearray()
        self.tape = DataTape(self.config.dtype, self.config.initial_length, self.config.capacity)
        self.pc = 0
        self.dp = 0
        self.steps = 0
        self.commands = DispatchTable()
        self.loop_stack: Stack[int] = Stack()
        self.jump_map: Dict[int, int] = {}

    # Command table access

    def add_or_replace_command(self, symbol: Symbol, command: Command) -> None:
        self.commands.set(symbol, command)

    def delete_command(self, symbol: Symbol) -> None:
        self.commands.remove(symbol)

    def get_command(self, symbol: Symbol) -> Optional[Command]:
        return self.commands.get(symbol)

    # Streaming

    def _read_byte(self) -> Optional[int]:
        """Next raw byte of the source, or None once it is exhausted."""
        data = self.reader.read(1)
        if not data:
            return None
        if isinstance(data, str):
            return ord(data)
        return data[0]

    def next_symbol(self) -> int:
        """Return the instruction at the program counter, reading more source if needed.

        Raises EndOfProgram when the source runs out first.
        """
        while self.pc >= len(self.program):
            op = self._read_byte()
            if op is None:
                raise EndOfProgram(f"source exhausted at pc={self.pc}")
            if op in self.commands:
                self.program.append(op)
        return self.program[self.pc]

    def find_closing_brace(self) -> None:
        """Record the ']' matching the '[' at the program counter.

        Scans forward from the '[' (already read instructions first, then the
        stream), keeping its own stack so nested loops found on the way get
        their jump map entries too. Running out of source here leaves the loop
        unmatched and raises UnbalancedLoopError.
        """
        pending: Stack[int] = Stack()
        pending.push(self.pc)
        i = self.pc + 1
        while True:
            if i < len(self.program):
                op = self.program[i]
            else:
                op = self._read_byte()
                if op is None:
                    raise UnbalancedLoopError(
                        f"no matching ']' for '[' at pc={pending.peek()} before end of source"
                    )
                if op not in self.commands:
                    continue
                self.program.append(op)

            if op == LOOP_OPEN:
                pending.push(i)
            elif op == LOOP_CLOSE:
                start = pending.pop()
                self.jump_map[start] = i
                if pending.is_empty():
                    break
            i += 1
        logger.debug("resolved loop at pc=%d -> %d", self.pc, self.jump_map[self.pc])

    # Driver

    def step(self) -> int:
        """Fetch and dispatch one instruction. Returns the symbol executed."""
        symbol = self.next_symbol()
        limit = self.config.step_limit
        if limit is not None and self.steps >= limit:
            raise StepLimitExceeded(f"step limit of {limit} reached at pc={self.pc}")

        command = self.commands.get(symbol)
        if command is None:
            # Removed from the table after it was read; treat it as a comment now
            logger.debug("no command for %r at pc=%d, skipping", chr(symbol), self.pc)
            self.pc += 1
        else:
            command(self)
        self.steps += 1
        return symbol

    def run(self) -> int:
        """Run until the source is exhausted. Returns the number of steps taken."""
        try:
            while True:
                self.step()
        except EndOfProgram:
            logger.debug("program finished after %d steps", self.steps)
        return self.steps

    def __repr__(self):
        return (
            f"Interpreter(pc={self.pc}, dp={self.dp}, steps={self.steps}, "
            f"program_length={len(self.program)}, loop_depth={len(self.loop_stack)})"
        )


def execute(code: Union[str, bytes], input_data: Union[str, bytes, None] = None, config: Optional[InterpreterConfig] = None) -> str:
    """Run ``code`` with in-memory streams and return the decoded output."""
    if isinstance(code, str):
        code = code.encode("utf-8")
    if isinstance(input_data, str):
        input_data = input_data.encode("latin-1")

    writer = io.BytesIO()
    input_reader = None if input_data is None else io.BytesIO(input_data)
    Interpreter(io.BytesIO(code), writer, input_reader, config).run()
    return writer.getvalue().decode("utf-8", errors="replace")
