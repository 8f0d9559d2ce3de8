"""Root conftest: shared repository/service fixtures with a deterministic clock and ids."""

import os

import pytest

from docfactory.infrastructure.repository import InMemoryTemplateRepository
from docfactory.services.template_service import TemplateService
from tests.factories import SequentialIds, TickingClock

# Keep tests independent of a developer's .env
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def repository(ids, clock):
    return InMemoryTemplateRepository(id_factory=ids, clock=clock)


@pytest.fixture
def service(repository, ids, clock):
    return TemplateService(repository, id_factory=ids, clock=clock)
