"""Storage Wiring: process-wide repository singleton and its FastAPI dependency.

Invariants:
    - Exactly one repository per process once init_storage() has run
    - get_repository() raises until init_storage() is called

Design Decisions:
    - Singleton initialized from the FastAPI lifespan, not at import time
    - Tests override the dependency instead of touching the singleton
"""

import logging

from docfactory.core.domain_types import Clock, IdFactory, new_id, utc_now
from docfactory.infrastructure.repository import InMemoryTemplateRepository

logger = logging.getLogger(__name__)

# Singleton (initialized on startup)
repository: InMemoryTemplateRepository | None = None


def init_storage(
    id_factory: IdFactory = new_id, clock: Clock = utc_now,
) -> InMemoryTemplateRepository:
    global repository
    repository = InMemoryTemplateRepository(id_factory=id_factory, clock=clock)
    logger.info("In-memory template storage initialized")
    return repository


def get_repository() -> InMemoryTemplateRepository:
    if repository is None:
        raise RuntimeError("Storage not initialized")
    return repository
