import io

import pytest

from reckon import Context, Interpreter


@pytest.fixture
def output():
    """Capture buffer used as the print sink."""
    return io.StringIO()


@pytest.fixture
def ctx(output):
    """Fresh, empty context printing into `output`."""
    return Context(output)


@pytest.fixture
def interp(output):
    return Interpreter(output=output)
