"""Template Version Routes: history listing, comparison and restore points.

Invariants:
    - compare requires integer left/right query params (else 400)
    - restore is forward-moving: the response is the new, higher-numbered entry
"""

from fastapi import APIRouter, Depends, Query

from docfactory.api.dependencies import (
    get_template_service, get_tenant_id, get_user_id, require_int,
)
from docfactory.schemas.template import (
    TemplateVersionResponse, VersionComparisonResponse,
)
from docfactory.services.template_service import TemplateService

router = APIRouter(prefix="/templates/{template_id}/versions", tags=["versions"])


@router.get("", response_model=list[TemplateVersionResponse])
def list_versions(
    template_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: TemplateService = Depends(get_template_service),
):
    """Full history, oldest first."""
    return [
        TemplateVersionResponse.model_validate(v)
        for v in service.list_versions(tenant_id, template_id)
    ]


@router.get("/compare", response_model=VersionComparisonResponse)
def compare_versions(
    template_id: str,
    left: str | None = Query(None),
    right: str | None = Query(None),
    tenant_id: str = Depends(get_tenant_id),
    service: TemplateService = Depends(get_template_service),
):
    comparison = service.compare_versions(
        tenant_id, template_id,
        require_int(left, "left"), require_int(right, "right"),
    )
    return VersionComparisonResponse.model_validate(comparison)


@router.post("/{version}/restore", response_model=TemplateVersionResponse)
def restore_version(
    template_id: str,
    version: str,
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service),
):
    entry = service.restore_version(
        tenant_id, template_id, require_int(version, "version"), user_id,
    )
    return TemplateVersionResponse.model_validate(entry)
