"""Command line entry point: ``streambf program.bf``."""

import argparse
import contextlib
import logging
import sys

from .config import CELL_TYPES, InterpreterConfig, read_config_file
from .debugger import format_state, trace
from .errors import InterpreterError
from .interpreter import Interpreter

logger = logging.getLogger("streambf")


def setup_logging(verbose=False):
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.addHandler(h)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return h


def build_parser():
    ap = argparse.ArgumentParser(prog="streambf", description="Run a Brainfuck program, streaming it from a file.")
    ap.add_argument("program", help="Path to the program file, or '-' to read it from stdin")
    ap.add_argument("--input", default=None, help="File to feed to ','; defaults to stdin unless the program comes from stdin")
    ap.add_argument("--cell-type", choices=sorted(CELL_TYPES), default=None, help="Cell width of the data tape")
    ap.add_argument("--config", default=None, help="YAML file with interpreter settings")
    ap.add_argument("--strict-io", action="store_true", default=None, help="Stop on output/input errors instead of logging them")
    ap.add_argument("--step-limit", type=int, default=None, help="Abort after this many instructions")
    ap.add_argument("--trace", action="store_true", help="Write one line per executed instruction to stderr")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def resolve_config(args) -> InterpreterConfig:
    """Defaults, then BF_* environment variables, then --config, then flags."""
    config = InterpreterConfig.from_env()
    if args.config:
        config = config.replace(**read_config_file(args.config))
    return config.replace(cell_type=args.cell_type, strict_io=args.strict_io, step_limit=args.step_limit)


def main(argv=None):
    args = build_parser().parse_args(argv)
    handler = setup_logging(args.verbose)
    try:
        return run(args)
    finally:
        logger.removeHandler(handler)


def run(args):
    try:
        config = resolve_config(args)
    except InterpreterError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("cannot read config: %s", e)
        return 1

    with contextlib.ExitStack() as stack:
        try:
            if args.program == "-":
                source = sys.stdin.buffer
            else:
                source = stack.enter_context(open(args.program, "rb"))
            if args.input is not None:
                input_reader = stack.enter_context(open(args.input, "rb"))
            elif args.program != "-":
                input_reader = sys.stdin.buffer
            else:
                input_reader = None
        except OSError as e:
            logger.error("%s", e)
            return 1

        writer = sys.stdout.buffer
        interp = Interpreter(source, writer, input_reader, config)
        try:
            if args.trace:
                trace(interp, sys.stderr)
            else:
                interp.run()
        except (InterpreterError, OSError, EOFError) as e:
            logger.error("%s: %s", type(e).__name__, e)
            logger.error("%s", format_state(interp, label="STATE AT ERROR"))
            return 1
        finally:
            writer.flush()

    logger.debug("finished: %r", interp)
    return 0
