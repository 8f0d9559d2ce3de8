"""Request Dependencies: tenant/user extraction and service construction.

Invariants:
    - Tenant header is mandatory; blank counts as missing (InvalidInputError -> 400)
    - User header is optional; absent or blank falls back to settings.fallback_user_id
    - Query integers are parsed leniently: junk falls back to the default
"""

from fastapi import Depends, Request

from docfactory.config import get_settings
from docfactory.core.errors import InvalidInputError
from docfactory.infrastructure.repository import InMemoryTemplateRepository
from docfactory.infrastructure.storage import get_repository
from docfactory.services.template_service import TemplateService


def get_tenant_id(request: Request) -> str:
    header = get_settings().tenant_header
    tenant_id = request.headers.get(header, "").strip()
    if not tenant_id:
        raise InvalidInputError(f"{header} header is required")
    return tenant_id


def get_user_id(request: Request) -> str:
    settings = get_settings()
    user_id = request.headers.get(settings.user_header, "").strip()
    return user_id or settings.fallback_user_id


def get_template_service(
    repository: InMemoryTemplateRepository = Depends(get_repository),
) -> TemplateService:
    return TemplateService(repository)


def parse_int(raw: str | None, default: int, minimum: int) -> int:
    """Lenient integer query parsing used for pagination."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def require_int(raw: str | None, name: str) -> int:
    """Strict integer parsing; failure is the caller's input error."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} is required integer")
