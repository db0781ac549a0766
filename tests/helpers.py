import io

from streambf import Interpreter, InterpreterConfig

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def make_interpreter(code, input_data=None, **config):
    """Interpreter over in-memory streams; returns (interp, writer)."""
    if isinstance(code, str):
        code = code.encode("utf-8")
    writer = io.BytesIO()
    input_reader = None if input_data is None else io.BytesIO(input_data)
    interp = Interpreter(io.BytesIO(code), writer, input_reader, InterpreterConfig(**config))
    return interp, writer
