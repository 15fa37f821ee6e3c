import pytest

from fakes import FakeAccount

@pytest.fixture
def account():
    return FakeAccount()
