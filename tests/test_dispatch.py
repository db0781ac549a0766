import pytest

from streambf import BUILTIN_COMMANDS, DispatchTable
from streambf.dispatch import encode_cell, to_symbol

from helpers import make_interpreter


def test_seeded_with_builtins():
    table = DispatchTable()
    assert table.symbols() == "+,-.<>[]"
    assert len(table) == 8
    for symbol, command in BUILTIN_COMMANDS.items():
        assert table.get(symbol) is command


def test_symbol_forms_are_equivalent():
    table = DispatchTable()
    assert table.get("+") is table.get(b"+") is table.get(ord("+"))
    assert "+" in table and b"+" in table and ord("+") in table


def test_get_missing_returns_none():
    assert DispatchTable().get("x") is None
    assert "x" not in DispatchTable()


def test_remove_and_set():
    table = DispatchTable()
    table.remove(".")
    assert "." not in table
    table.remove(".")  # unknown symbol is fine

    def noop(interp):
        interp.pc += 1

    table.set("#", noop)
    assert table.get("#") is noop


def test_set_rejects_non_callable():
    with pytest.raises(TypeError):
        DispatchTable().set("#", 42)


@pytest.mark.parametrize("bad", ["ab", b"", 256, -1, "Ā"])
def test_to_symbol_rejects_non_bytes(bad):
    with pytest.raises(ValueError):
        to_symbol(bad)


def test_encode_cell():
    assert encode_cell(65) == b"A"
    assert encode_cell(0x263A) == "☺".encode("utf-8")
    assert encode_cell(-1) == "�".encode("utf-8")
    assert encode_cell(0xD800) == "�".encode("utf-8")
    assert encode_cell(0x110000) == "�".encode("utf-8")


def test_custom_command_extends_language():
    def double(interp):
        interp.tape[interp.dp] = interp.tape.value(interp.dp) * 2
        interp.pc += 1

    interp, writer = make_interpreter("+++**" + ".")
    interp.add_or_replace_command("*", double)
    interp.run()
    assert writer.getvalue() == b"\x0c"


def test_replaced_command_is_used():
    def shout(interp):
        interp.writer.write(b"!")
        interp.pc += 1

    interp, writer = make_interpreter("+.+.")
    interp.add_or_replace_command(".", shout)
    interp.run()
    assert writer.getvalue() == b"!!"


def test_deleted_command_becomes_comment():
    interp, writer = make_interpreter("+.+.")
    interp.delete_command(".")
    assert interp.get_command(".") is None
    interp.run()
    assert writer.getvalue() == b""
    assert bytes(interp.program) == b"++"
    assert interp.tape.value(0) == 2


def test_command_removed_after_streaming_is_skipped():
    interp, writer = make_interpreter("+.")
    interp.step()
    interp.next_symbol()  # '.' is now on the instruction tape
    interp.delete_command(".")
    interp.run()
    assert writer.getvalue() == b""
    assert interp.pc == 2
