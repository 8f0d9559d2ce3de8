"""Template Routes: CRUD, soft delete/restore and duplicate for one tenant's templates.

Invariants:
    - Every handler is tenant-scoped via the X-Tenant-ID dependency
    - Handlers are sync (threadpool): the repository lock is a threading lock
    - Core errors propagate to the global handlers; no status mapping here
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from docfactory.api.dependencies import (
    get_template_service, get_tenant_id, get_user_id, parse_int,
)
from docfactory.config import get_settings
from docfactory.core.records import ListOptions
from docfactory.schemas.template import (
    DuplicateRequest, TemplateCreate, TemplateListResponse, TemplateResponse,
    TemplateUpdate,
)
from docfactory.services.template_service import TemplateService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListResponse)
def list_templates(
    search: str = Query(""),
    document_type: str = Query(""),
    include_deleted: str = Query(""),
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    tenant_id: str = Depends(get_tenant_id),
    service: TemplateService = Depends(get_template_service),
):
    """List templates, most recently updated first."""
    page_limit = parse_int(limit, get_settings().default_page_limit, minimum=1)
    page_offset = parse_int(offset, 0, minimum=0)
    page = service.list_templates(ListOptions(
        tenant_id=tenant_id,
        search=search,
        document_type=document_type or None,
        include_deleted=include_deleted == "true",
        limit=page_limit,
        offset=page_offset,
    ))
    return TemplateListResponse(
        items=[TemplateResponse.model_validate(t) for t in page.items],
        total=page.total,
        limit=page_limit,
        offset=page_offset,
    )


@router.post(
    "", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED,
)
def create_template(
    body: TemplateCreate,
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service),
):
    created = service.create_template(body.to_draft(tenant_id, user_id))
    return TemplateResponse.model_validate(created)


@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(
    template_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: TemplateService = Depends(get_template_service),
):
    return TemplateResponse.model_validate(
        service.get_template(tenant_id, template_id),
    )


@router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: str,
    body: TemplateUpdate,
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service),
):
    """Apply the supplied fields and append a history entry."""
    updated = service.update_template(
        tenant_id, template_id, body.to_patch(), user_id, body.change_summary,
    )
    return TemplateResponse.model_validate(updated)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: TemplateService = Depends(get_template_service),
):
    """Soft delete: the record and its history stay restorable."""
    service.delete_template(tenant_id, template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{template_id}/restore", response_model=TemplateResponse)
def restore_template(
    template_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: TemplateService = Depends(get_template_service),
):
    return TemplateResponse.model_validate(
        service.restore_template(tenant_id, template_id),
    )


@router.post(
    "/{template_id}/duplicate",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_template(
    template_id: str,
    body: DuplicateRequest,
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service),
):
    clone = service.duplicate_template(
        tenant_id, template_id, body.to_options(user_id),
    )
    return TemplateResponse.model_validate(clone)
