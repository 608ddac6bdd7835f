from collections.abc import Iterator

import pytest

from cqrs_ddd_validation.validation.configuration import reset_configuration


@pytest.fixture(autouse=True)
def _reset_global_configuration() -> Iterator[None]:
    reset_configuration()
    yield
    reset_configuration()
