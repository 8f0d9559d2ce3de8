"""Bulk Template Routes: thin loops over single-item service operations.

Invariants:
    - Each id is processed independently; one failure never aborts the rest
    - Failures are reported per id with the error message, status 207
    - Bulk export only schedules: it returns an export id and does no work

Design Decisions:
    - Registered before the templates router so "bulk" is never read as a template id
"""

import logging
import time

from fastapi import APIRouter, Depends, status

from docfactory.api.dependencies import (
    get_template_service, get_tenant_id, get_user_id,
)
from docfactory.core.errors import DocFactoryError
from docfactory.core.records import DuplicateOptions
from docfactory.schemas.template import (
    BulkDuplicateRequest, BulkExportResponse, BulkIdsRequest, BulkResult,
)
from docfactory.services.template_service import TemplateService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/templates/bulk", tags=["bulk"])


@router.post(
    "/delete", response_model=BulkResult, status_code=status.HTTP_207_MULTI_STATUS,
)
def bulk_delete(
    body: BulkIdsRequest,
    tenant_id: str = Depends(get_tenant_id),
    service: TemplateService = Depends(get_template_service),
):
    result = BulkResult()
    for template_id in body.template_ids:
        try:
            service.delete_template(tenant_id, template_id)
        except DocFactoryError as e:
            result.failed[template_id] = e.message
            continue
        result.succeeded.append(template_id)
    return result


@router.post(
    "/duplicate", response_model=BulkResult, status_code=status.HTTP_207_MULTI_STATUS,
)
def bulk_duplicate(
    body: BulkDuplicateRequest,
    tenant_id: str = Depends(get_tenant_id),
    user_id: str = Depends(get_user_id),
    service: TemplateService = Depends(get_template_service),
):
    """Succeeded lists the ids of the new clones."""
    result = BulkResult()
    options = DuplicateOptions(
        created_by=user_id, updated_by=user_id, copy_versions=body.copy_versions,
    )
    for template_id in body.template_ids:
        try:
            clone = service.duplicate_template(tenant_id, template_id, options)
        except DocFactoryError as e:
            result.failed[template_id] = e.message
            continue
        result.succeeded.append(clone.template_id)
    return result


@router.post(
    "/export", response_model=BulkExportResponse, status_code=status.HTTP_202_ACCEPTED,
)
def bulk_export(
    body: BulkIdsRequest,
    tenant_id: str = Depends(get_tenant_id),
):
    export_id = f"export-{int(time.time())}"
    logger.info(
        f"Bulk export {export_id} scheduled for {len(body.template_ids)} template(s)",
        extra={"tenant_id": tenant_id},
    )
    return BulkExportResponse(export_id=export_id, template_ids=body.template_ids)
