import pytest

from tests.stubs import StubGenerator


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()
