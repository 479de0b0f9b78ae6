import pytest

from reggie_values import truths


@pytest.fixture(autouse=True)
def default_truthy_values():
    """Every test starts and ends with the default truthy list."""
    truths.reset_to_default()
    yield
    truths.reset_to_default()
