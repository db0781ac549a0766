import pytest

from streambf import Stack, StackUnderflowError


def test_new_stack_is_empty():
    stack = Stack()
    assert stack.is_empty()
    assert len(stack) == 0


def test_pop_empty_raises():
    with pytest.raises(StackUnderflowError):
        Stack().pop()


def test_peek_empty_raises():
    with pytest.raises(StackUnderflowError):
        Stack().peek()


def test_underflow_is_an_index_error():
    with pytest.raises(IndexError):
        Stack().pop()


def test_push_then_peek_gives_top():
    stack = Stack()
    for i in range(100000):
        stack.push(i)
        assert stack.peek() == i
    assert len(stack) == 100000


def test_push_then_pop_gives_pushed_value():
    stack = Stack()
    for i in range(100000):
        stack.push(i)
        assert stack.pop() == i
    assert stack.is_empty()


def test_lifo_order():
    stack = Stack()
    for value in ("a", "b", "c"):
        stack.push(value)
    assert [stack.pop(), stack.pop(), stack.pop()] == ["c", "b", "a"]
    assert stack.is_empty()
