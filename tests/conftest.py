import pytest

from tests.fakes import FakeOpenAI


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()
