"""Template Records: immutable value objects for templates, history entries and options.

Invariants:
    - Records are frozen; every change produces a new instance (stores hold no aliases)
    - Template.version starts at 1 and only grows
    - tenant_id never changes after creation (no operation replaces it)
    - status == DELETED if and only if deleted_at is set
    - TemplatePatch fields set to None are left unchanged; a patched name is stored trimmed

Design Decisions:
    - Frozen dataclasses: a record handed to a caller cannot be mutated in place
    - Lifecycle modelled as TemplateStatus next to deleted_at so call sites test
      is_deleted instead of null-checking timestamps
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime

from docfactory.core.domain_types import (
    DocumentType, Orientation, PageSize, TemplateId, TemplateStatus, TenantId,
    VersionId,
)


@dataclass(frozen=True, kw_only=True)
class Template:
    """Current, editable state of a document template."""
    template_id: TemplateId
    tenant_id: TenantId
    name: str
    description: str = ""
    document_type: DocumentType
    page_size: PageSize
    orientation: Orientation
    json_schema_url: str
    thumbnail_url: str = ""
    version: int = 1
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime
    status: TemplateStatus = TemplateStatus.ACTIVE
    deleted_at: datetime | None = None
    documents_count: int = 0
    last_used_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.status is TemplateStatus.DELETED

    def mark_deleted(self, at: datetime) -> "Template":
        """Transition ACTIVE -> DELETED. Already deleted records keep their timestamp."""
        if self.is_deleted:
            return self
        return replace(self, status=TemplateStatus.DELETED, deleted_at=at)

    def mark_restored(self) -> "Template":
        """Transition DELETED -> ACTIVE. Idempotent on active records."""
        if not self.is_deleted:
            return self
        return replace(self, status=TemplateStatus.ACTIVE, deleted_at=None)


@dataclass(frozen=True, kw_only=True)
class TemplateVersion:
    """Immutable snapshot entry in a template's history."""
    version_id: VersionId
    template_id: TemplateId
    version_number: int
    change_summary: str = ""
    json_schema_url: str
    created_by: str
    created_at: datetime
    is_current: bool = False


@dataclass(frozen=True)
class VersionComparison:
    """Derived, never persisted: two history entries side by side."""
    template_id: TemplateId
    left: TemplateVersion
    right: TemplateVersion
    summary: str

    @property
    def schema_changed(self) -> bool:
        return self.left.json_schema_url != self.right.json_schema_url


@dataclass(frozen=True, kw_only=True)
class TemplateDraft:
    """Caller-supplied fields for a new template. Ids, timestamps and version are assigned."""
    tenant_id: TenantId
    name: str
    description: str = ""
    document_type: DocumentType
    page_size: PageSize
    orientation: Orientation
    json_schema_url: str
    thumbnail_url: str = ""
    created_by: str
    updated_by: str = ""


@dataclass(frozen=True, kw_only=True)
class TemplatePatch:
    """Enumerated field-level update. None leaves the field untouched."""
    name: str | None = None
    description: str | None = None
    document_type: DocumentType | None = None
    page_size: PageSize | None = None
    orientation: Orientation | None = None
    json_schema_url: str | None = None
    thumbnail_url: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def changes(self) -> dict[str, object]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def apply_to(self, template: Template) -> Template:
        changes = self.changes()
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        return replace(template, **changes)


@dataclass(frozen=True, kw_only=True)
class ListOptions:
    """Tenant-scoped filter and page. limit <= 0 means everything from offset."""
    tenant_id: TenantId
    search: str = ""
    document_type: DocumentType | None = None
    include_deleted: bool = False
    limit: int = 0
    offset: int = 0


@dataclass(frozen=True, kw_only=True)
class DuplicateOptions:
    created_by: str
    updated_by: str
    copy_versions: bool = False
    name_override: str = ""
    description_override: str = ""


@dataclass
class TemplatePage:
    """One page of a listing plus the unpaginated total."""
    items: list[Template] = field(default_factory=list)
    total: int = 0
