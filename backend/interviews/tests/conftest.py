import pytest

from .doubles import InMemoryStore, make_interview


@pytest.fixture
def memory_store():
    return InMemoryStore(make_interview())


@pytest.fixture
def interview(db):
    interview = make_interview()
    interview.save()
    return interview
