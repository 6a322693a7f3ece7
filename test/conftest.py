from collections.abc import Iterator

from pytest import fixture

from jsonshape import reset_config


@fixture(autouse=True)
def default_config() -> Iterator[None]:
    """
    Restore the process-wide configuration around each test.
    """
    reset_config()
    yield
    reset_config()
