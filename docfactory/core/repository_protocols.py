"""Boundary Protocols: storage contracts between the service and any backend.

Invariants:
    - Service depends on TemplateRepository only, never on a concrete store
    - snapshot() holds shared mode; transaction() holds exclusive mode for its whole body
    - A transaction that raises leaves both collections exactly as it found them
    - Tenant mismatch surfaces as NotFoundError on every tenant-scoped operation

Design Decisions:
    - Protocol over ABC: structural subtyping, backends need no common base class
    - Two capability sets (TemplateStore, VersionStore) plus a scoped-acquisition
      primitive on the repository; a durable backend maps transaction() onto a
      real database transaction
    - reset() hooks exist only for transaction rollback
"""

from contextlib import AbstractContextManager
from typing import Protocol

from docfactory.core.domain_types import TemplateId, TenantId

from docfactory.core.records import (
    DuplicateOptions, ListOptions, Template, TemplateVersion, VersionComparison,
)


class TemplateStore(Protocol):
    """Tenant-scoped map of mutable template records."""
    def insert(self, template: Template) -> Template: ...
    def get(self, tenant_id: TenantId, template_id: TemplateId) -> Template: ...
    def replace(self, template: Template) -> Template: ...
    def soft_delete(self, tenant_id: TenantId, template_id: TemplateId) -> Template: ...
    def restore(self, tenant_id: TenantId, template_id: TemplateId) -> Template: ...
    def query(self, options: ListOptions) -> list[Template]: ...
    def count(self, options: ListOptions) -> int: ...
    def contains(self, template_id: TemplateId) -> bool: ...
    def peek(self, template_id: TemplateId) -> Template | None: ...
    def reset(self, template_id: TemplateId, record: Template | None) -> None: ...


class VersionStore(Protocol):
    """Per-template append-only history. Callers perform the tenant check."""
    def append(self, version: TemplateVersion) -> TemplateVersion: ...
    def history(self, template_id: TemplateId) -> list[TemplateVersion]: ...
    def find(self, template_id: TemplateId, version_number: int) -> TemplateVersion: ...
    def reset(self, template_id: TemplateId, entries: list[TemplateVersion]) -> None: ...


class TemplateReader(Protocol):
    """Read operations available under shared mode."""
    def get_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template: ...
    def list_templates(self, options: ListOptions) -> list[Template]: ...
    def count_templates(self, options: ListOptions) -> int: ...
    def list_versions(
        self, tenant_id: TenantId, template_id: TemplateId,
    ) -> list[TemplateVersion]: ...
    def compare_versions(
        self, tenant_id: TenantId, template_id: TemplateId, left: int, right: int,
    ) -> VersionComparison: ...


class TemplateUnitOfWork(TemplateReader, Protocol):
    """Read and write operations available under exclusive mode."""
    def create_template(self, template: Template) -> Template: ...
    def update_template(self, template: Template) -> Template: ...
    def soft_delete_template(self, tenant_id: TenantId, template_id: TemplateId) -> None: ...
    def restore_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template: ...
    def duplicate_template(
        self, tenant_id: TenantId, template_id: TemplateId, options: DuplicateOptions,
    ) -> Template: ...
    def create_version(
        self, tenant_id: TenantId, version: TemplateVersion,
    ) -> TemplateVersion: ...
    def restore_version(
        self, tenant_id: TenantId, template_id: TemplateId, version_number: int,
        restored_by: str | None = None,
    ) -> TemplateVersion: ...


class TemplateRepository(TemplateUnitOfWork, Protocol):
    """Single concurrency boundary over both stores."""
    def snapshot(self) -> AbstractContextManager[TemplateReader]: ...
    def transaction(self) -> AbstractContextManager[TemplateUnitOfWork]: ...
