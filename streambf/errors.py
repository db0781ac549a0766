"""Exceptions raised by the interpreter."""


class InterpreterError(Exception):
    """Base exception for interpreter errors."""


class StackUnderflowError(InterpreterError, IndexError):
    """Pop or peek on an empty stack. Means the loop nesting is broken."""


class EndOfProgram(InterpreterError, EOFError):
    """The source stream ran out while fetching the next instruction."""


class UnbalancedLoopError(InterpreterError):
    """The source stream ran out while looking for a matching ']'."""


class TapeBoundsError(InterpreterError, IndexError):
    """The data pointer left the tape."""


class MissingInputError(InterpreterError):
    """',' was executed but no input stream was configured."""


class StepLimitExceeded(InterpreterError):
    """The configured step limit was reached."""


class ConfigError(InterpreterError, ValueError):
    """Invalid interpreter configuration."""
