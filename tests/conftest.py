import pytest

from helpers import make_interpreter


@pytest.fixture
def run_program():
    def _run(code, input_data=None, **config):
        interp, writer = make_interpreter(code, input_data, **config)
        interp.run()
        return interp, writer.getvalue()

    return _run
