"""Template Schemas: payload decoding and response shapes for template endpoints.

Invariants:
    - Incoming strings are stripped; enum fields arrive as plain strings so the
      core reports "<field> is invalid" instead of a framework error
    - TemplateUpdate maps empty strings to "unchanged", except description,
      which may be cleared explicitly
    - Duplicate created_by/updated_by default to the acting user
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docfactory.core.domain_types import (
    DocumentType, Orientation, PageSize, TemplateStatus,
)
from docfactory.core.records import (
    DuplicateOptions, TemplateDraft, TemplatePatch,
)


def _strip(v: str | None) -> str | None:
    return v.strip() if isinstance(v, str) else v


class TemplateCreate(BaseModel):
    """POST /templates body."""
    name: str = ""
    description: str = ""
    document_type: str = ""
    page_size: str = ""
    orientation: str = ""
    json_schema_url: str = ""
    thumbnail_url: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v):
        return _strip(v)

    def to_draft(self, tenant_id: str, user_id: str) -> TemplateDraft:
        return TemplateDraft(
            tenant_id=tenant_id,
            name=self.name,
            description=self.description,
            document_type=self.document_type,
            page_size=self.page_size,
            orientation=self.orientation,
            json_schema_url=self.json_schema_url,
            thumbnail_url=self.thumbnail_url,
            created_by=user_id,
            updated_by=user_id,
        )


class TemplateUpdate(BaseModel):
    """PUT /templates/{id} body. Omitted fields are left unchanged."""
    name: str | None = None
    description: str | None = None
    document_type: str | None = None
    page_size: str | None = None
    orientation: str | None = None
    json_schema_url: str | None = None
    thumbnail_url: str | None = None
    change_summary: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v):
        return _strip(v)

    def to_patch(self) -> TemplatePatch:
        return TemplatePatch(
            name=self.name or None,
            description=self.description,
            document_type=self.document_type or None,
            page_size=self.page_size or None,
            orientation=self.orientation or None,
            json_schema_url=self.json_schema_url or None,
            thumbnail_url=self.thumbnail_url or None,
        )


class DuplicateRequest(BaseModel):
    """POST /templates/{id}/duplicate body."""
    copy_versions: bool = False
    name_override: str = ""
    description_override: str = ""
    created_by: str = ""
    updated_by: str = ""

    @field_validator(
        "name_override", "description_override", "created_by", "updated_by",
        mode="before",
    )
    @classmethod
    def strip_strings(cls, v):
        return _strip(v)

    def to_options(self, user_id: str) -> DuplicateOptions:
        return DuplicateOptions(
            created_by=self.created_by or user_id,
            updated_by=self.updated_by or user_id,
            copy_versions=self.copy_versions,
            name_override=self.name_override,
            description_override=self.description_override,
        )


class BulkIdsRequest(BaseModel):
    template_ids: list[str] = Field(default_factory=list)


class BulkDuplicateRequest(BaseModel):
    template_ids: list[str] = Field(default_factory=list)
    copy_versions: bool = False


# --- Responses -----------------------------------------------------------------

class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    template_id: str
    tenant_id: str
    name: str
    description: str
    document_type: DocumentType
    page_size: PageSize
    orientation: Orientation
    json_schema_url: str
    thumbnail_url: str
    version: int
    status: TemplateStatus
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    documents_count: int = 0
    last_used_at: datetime | None = None


class TemplateVersionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    version_id: str
    template_id: str
    version_number: int
    change_summary: str
    json_schema_url: str
    created_by: str
    created_at: datetime
    is_current: bool


class VersionComparisonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    template_id: str
    left: TemplateVersionResponse
    right: TemplateVersionResponse
    summary: str
    schema_changed: bool


class TemplateListResponse(BaseModel):
    items: list[TemplateResponse]
    total: int
    limit: int
    offset: int


class BulkResult(BaseModel):
    """Per-id outcome of a bulk operation."""
    succeeded: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)


class BulkExportResponse(BaseModel):
    export_id: str
    template_ids: list[str]
    status: str = "scheduled"
