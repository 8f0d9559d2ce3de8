"""Route test fixtures: FastAPI test client over a fresh in-memory repository.

Invariants:
    - Every test gets its own InMemoryTemplateRepository
    - get_repository and get_template_service overridden with a ticking clock;
      the process singleton is never touched

Design Decisions:
    - ASGITransport does not run the lifespan, so storage is injected via override
"""

import pytest
from httpx import ASGITransport, AsyncClient

from docfactory.api.dependencies import get_template_service
from docfactory.infrastructure.repository import InMemoryTemplateRepository
from docfactory.infrastructure.storage import get_repository
from docfactory.main import app
from docfactory.services.template_service import TemplateService
from tests.factories import SequentialIds, TickingClock


@pytest.fixture
def api_clock():
    return TickingClock()


@pytest.fixture
def api_repository(api_clock):
    return InMemoryTemplateRepository(id_factory=SequentialIds("api"), clock=api_clock)


@pytest.fixture
async def client(api_repository, api_clock):
    """FastAPI test client with storage and service dependencies overridden."""
    ids = SequentialIds("tpl")
    app.dependency_overrides[get_repository] = lambda: api_repository
    app.dependency_overrides[get_template_service] = (
        lambda: TemplateService(api_repository, id_factory=ids, clock=api_clock)
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
