"""
State dumps and step tracing for the streaming interpreter.

Shows the part of the program read so far with the current instruction
marked, and the memory tape around the data pointer.
"""

from .errors import EndOfProgram


def memory_window(interp, window):
    """Addresses ``(start, end)`` of ``window`` cells around the data pointer, clamped to the tape."""
    end = min(len(interp.tape), max(0, interp.dp - window // 2) + window)
    return max(0, end - window), end


def format_state(interp, window=10, label="STATE"):
    """Render the current state of an interpreter as a multi-line string."""
    lines = [f"{label}: pc={interp.pc} dp={interp.dp} steps={interp.steps} loop_depth={len(interp.loop_stack)}"]

    marked = "".join(f"[{chr(op)}]" if i == interp.pc else chr(op) for i, op in enumerate(interp.program))
    if interp.pc >= len(interp.program):
        marked += "[...]"
    lines.append(f"Program:  {marked}")

    start, end = memory_window(interp, window)
    cells = list(zip(range(start, end), interp.tape.window(start, end)))
    width = max([3] + [len(str(v)) for _, v in cells])
    pointer = "^".rjust(width)
    lines.append("Memory:   [" + "|".join(f"{v:{width}d}" for _, v in cells) + "]")
    lines.append("Pointer:   " + " ".join(pointer if i == interp.dp else " " * width for i, _ in cells))
    lines.append("Address:   " + " ".join(f"{i:{width}d}" for i, _ in cells))
    return "\n".join(lines)


def trace(interp, sink, window=0):
    """Run ``interp`` to completion, writing one line per executed instruction to ``sink``.

    ``sink`` is a text stream. With ``window`` set, each line also lists that
    many cells around the data pointer. Returns the number of steps taken.
    """
    while True:
        pc, dp = interp.pc, interp.dp
        try:
            symbol = interp.step()
        except EndOfProgram:
            break
        line = f"step {interp.steps}: pc={pc} cmd='{chr(symbol)}' dp={dp}->{interp.dp} cell={interp.tape.value(interp.dp)}"
        if window:
            start, end = memory_window(interp, window)
            line += f" mem[{start}:{end}]={interp.tape.window(start, end)}"
        sink.write(line + "\n")
    return interp.steps
