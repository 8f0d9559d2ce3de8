"""In-Memory Repository: composes both stores behind one readers-writer lock.

Invariants:
    - Every read runs under shared mode, every write under exclusive mode for its whole body
    - A transaction that raises is rolled back before the lock is released
    - Readers never observe a clone without its history, or a version bump
      without its history entry
    - Version operations check the owning template's tenant first

Design Decisions:
    - One lock for both collections, no per-template locking: all writers across
      all tenants are serialized (known scalability limit)
    - Rollback is an undo journal of pre-images captured before each store call,
      replayed in reverse
    - Cancellation is not checked mid-operation; every operation is short and in-memory
"""

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, Iterator

from docfactory.core.domain_types import (
    Clock, IdFactory, TemplateId, TenantId, VersionId, new_id, utc_now,
)
from docfactory.core.errors import ConflictError, ErrorContext, InvalidInputError
from docfactory.core.records import (
    DuplicateOptions, ListOptions, Template, TemplateVersion, VersionComparison,
)
from docfactory.core.repository_protocols import TemplateStore, VersionStore
from docfactory.core.validation import ensure_valid, validate_template
from docfactory.core.versioning import (
    build_clone, bump_version, compare_entries, copy_history,
    duplicated_entry, restored_entry,
)
from docfactory.infrastructure.memory_stores import (
    InMemoryTemplateStore, InMemoryVersionStore,
)
from docfactory.infrastructure.rw_lock import ReadWriteLock

logger = logging.getLogger(__name__)


class InMemoryReader:
    """Read view over both stores. Valid only inside its snapshot/transaction block."""

    def __init__(
        self, templates: TemplateStore, versions: VersionStore,
    ):
        self._templates = templates
        self._versions = versions

    def get_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        return self._templates.get(tenant_id, template_id)

    def list_templates(self, options: ListOptions) -> list[Template]:
        return self._templates.query(options)

    def count_templates(self, options: ListOptions) -> int:
        return self._templates.count(options)

    def list_versions(
        self, tenant_id: TenantId, template_id: TemplateId,
    ) -> list[TemplateVersion]:
        self._templates.get(tenant_id, template_id)
        return self._versions.history(template_id)

    def compare_versions(
        self, tenant_id: TenantId, template_id: TemplateId, left: int, right: int,
    ) -> VersionComparison:
        template = self._templates.get(tenant_id, template_id)
        left_entry = self._versions.find(template_id, left)
        right_entry = self._versions.find(template_id, right)
        return compare_entries(template.template_id, left_entry, right_entry)


class InMemoryUnitOfWork(InMemoryReader):
    """Write access for one transaction, journaling pre-images for rollback."""

    def __init__(
        self,
        templates: TemplateStore,
        versions: VersionStore,
        id_factory: IdFactory,
        clock: Clock,
    ):
        super().__init__(templates, versions)
        self._new_id = id_factory
        self._clock = clock
        self._journal: list[Callable[[], None]] = []

    # --- single-store writes ---------------------------------------------------

    def create_template(self, template: Template) -> Template:
        ensure_valid(validate_template(template))
        self._remember_template(template.template_id)
        return self._templates.insert(template)

    def update_template(self, template: Template) -> Template:
        ensure_valid(validate_template(template))
        self._templates.get(template.tenant_id, template.template_id)
        self._remember_template(template.template_id)
        return self._templates.replace(template)

    def soft_delete_template(self, tenant_id: TenantId, template_id: TemplateId) -> None:
        self._templates.get(tenant_id, template_id)
        self._remember_template(template_id)
        self._templates.soft_delete(tenant_id, template_id)

    def restore_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        self._templates.get(tenant_id, template_id)
        self._remember_template(template_id)
        return self._templates.restore(tenant_id, template_id)

    def create_version(
        self, tenant_id: TenantId, version: TemplateVersion,
    ) -> TemplateVersion:
        self._templates.get(tenant_id, version.template_id)
        self._remember_history(version.template_id)
        return self._versions.append(version)

    # --- compound operations ---------------------------------------------------

    def duplicate_template(
        self, tenant_id: TenantId, template_id: TemplateId, options: DuplicateOptions,
    ) -> Template:
        source = self._templates.get(tenant_id, template_id)
        clone = build_clone(source, TemplateId(self._new_id()), options, self._clock())
        source_history = (
            self._versions.history(template_id) if options.copy_versions else []
        )
        if source_history:
            clone = replace(clone, version=source.version)
        ensure_valid(validate_template(clone))
        if self._templates.contains(clone.template_id):
            raise ConflictError(
                "Template", clone.template_id,
                ErrorContext(tenant_id=tenant_id, template_id=clone.template_id),
            )

        self._remember_template(clone.template_id)
        self._templates.insert(clone)
        self._remember_history(clone.template_id)
        if source_history:
            copies = copy_history(
                source_history, clone.template_id, clone.version, self._new_id,
            )
            for copy in copies:
                self._versions.append(copy)
        else:
            self._versions.append(
                duplicated_entry(clone, template_id, VersionId(self._new_id())),
            )
        return clone

    def restore_version(
        self, tenant_id: TenantId, template_id: TemplateId, version_number: int,
        restored_by: str | None = None,
    ) -> TemplateVersion:
        template = self._templates.get(tenant_id, template_id)
        if template.is_deleted:
            raise InvalidInputError(
                "template is deleted",
                ErrorContext(tenant_id=tenant_id, template_id=template_id),
            )
        target = self._versions.find(template_id, version_number)
        restored = bump_version(
            replace(template, json_schema_url=target.json_schema_url),
            restored_by or target.created_by,
            self._clock(),
        )
        ensure_valid(validate_template(restored))

        self._remember_template(template_id)
        self._templates.replace(restored)
        self._remember_history(template_id)
        return self._versions.append(
            restored_entry(restored, target, VersionId(self._new_id())),
        )

    # --- journal -------------------------------------------------------------

    def rollback(self) -> int:
        """Undo every change made in this unit of work. Returns undo steps applied."""
        steps = len(self._journal)
        while self._journal:
            self._journal.pop()()
        return steps

    def _remember_template(self, template_id: TemplateId) -> None:
        before = self._templates.peek(template_id)
        self._journal.append(lambda: self._templates.reset(template_id, before))

    def _remember_history(self, template_id: TemplateId) -> None:
        before = self._versions.history(template_id)
        self._journal.append(lambda: self._versions.reset(template_id, before))


class InMemoryTemplateRepository:
    """Lock and rollback discipline over any TemplateStore/VersionStore pair.

    Defaults to the process-local dict stores; not durable.
    """

    def __init__(
        self,
        id_factory: IdFactory = new_id,
        clock: Clock = utc_now,
        templates: TemplateStore | None = None,
        versions: VersionStore | None = None,
    ):
        self._lock = ReadWriteLock()
        self._templates = templates if templates is not None else InMemoryTemplateStore(clock)
        self._versions = versions if versions is not None else InMemoryVersionStore()
        self._new_id = id_factory
        self._clock = clock

    @contextmanager
    def snapshot(self) -> Iterator[InMemoryReader]:
        with self._lock.read():
            yield InMemoryReader(self._templates, self._versions)

    @contextmanager
    def transaction(self) -> Iterator[InMemoryUnitOfWork]:
        with self._lock.write():
            uow = InMemoryUnitOfWork(
                self._templates, self._versions, self._new_id, self._clock,
            )
            try:
                yield uow
            except BaseException as e:
                steps = uow.rollback()
                if steps:
                    logger.warning(
                        f"Transaction rolled back ({steps} step(s)): {e}",
                        extra={"error_code": getattr(e, "code", None)},
                    )
                raise

    # --- reads ---------------------------------------------------------------

    def get_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        with self.snapshot() as view:
            return view.get_template(tenant_id, template_id)

    def list_templates(self, options: ListOptions) -> list[Template]:
        with self.snapshot() as view:
            return view.list_templates(options)

    def count_templates(self, options: ListOptions) -> int:
        with self.snapshot() as view:
            return view.count_templates(options)

    def list_versions(
        self, tenant_id: TenantId, template_id: TemplateId,
    ) -> list[TemplateVersion]:
        with self.snapshot() as view:
            return view.list_versions(tenant_id, template_id)

    def compare_versions(
        self, tenant_id: TenantId, template_id: TemplateId, left: int, right: int,
    ) -> VersionComparison:
        with self.snapshot() as view:
            return view.compare_versions(tenant_id, template_id, left, right)

    # --- writes --------------------------------------------------------------

    def create_template(self, template: Template) -> Template:
        with self.transaction() as uow:
            return uow.create_template(template)

    def update_template(self, template: Template) -> Template:
        with self.transaction() as uow:
            return uow.update_template(template)

    def soft_delete_template(self, tenant_id: TenantId, template_id: TemplateId) -> None:
        with self.transaction() as uow:
            uow.soft_delete_template(tenant_id, template_id)

    def restore_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        with self.transaction() as uow:
            return uow.restore_template(tenant_id, template_id)

    def duplicate_template(
        self, tenant_id: TenantId, template_id: TemplateId, options: DuplicateOptions,
    ) -> Template:
        with self.transaction() as uow:
            return uow.duplicate_template(tenant_id, template_id, options)

    def create_version(
        self, tenant_id: TenantId, version: TemplateVersion,
    ) -> TemplateVersion:
        with self.transaction() as uow:
            return uow.create_version(tenant_id, version)

    def restore_version(
        self, tenant_id: TenantId, template_id: TemplateId, version_number: int,
        restored_by: str | None = None,
    ) -> TemplateVersion:
        with self.transaction() as uow:
            return uow.restore_version(
                tenant_id, template_id, version_number, restored_by,
            )
